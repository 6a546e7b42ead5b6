"""Fetch, filter and match pipeline producing cross-bias story groups."""

import asyncio
import logging
from typing import Dict, List, Optional

from ..config import Config, ConfigModel
from ..db.categories import PostgresCategoryProvider
from ..errors import FeedsUnavailableError
from ..ingestion import BiasFetchResult, RSSFetcher, SourceRegistry
from ..matching import (
    CategoryProvider,
    KeywordRelevanceFilter,
    RelevanceFilter,
    SpecialCategoryTagger,
    StaticCategoryProvider,
    StoryMatcher,
    prepare_articles,
)
from ..models import BIAS_ORDER, Article, Bias, MatchResult
from .stages import PipelineStage

logger = logging.getLogger(__name__)


def all_sources_down(fetched: Dict[Bias, BiasFetchResult]) -> bool:
    """True when sources are configured but not one of them could be fetched."""
    results = fetched.values()
    return sum(r.total_sources for r in results) > 0 and sum(r.succeeded for r in results) == 0


class MatchPipeline:
    """Orchestrates one matching cycle from the source registry to story groups."""

    def __init__(
        self,
        registry: SourceRegistry,
        fetcher: RSSFetcher,
        settings: Optional[ConfigModel] = None,
        relevance: Optional[RelevanceFilter] = None,
        categories: Optional[CategoryProvider] = None,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.settings = settings or ConfigModel()
        self.relevance = relevance or KeywordRelevanceFilter(self.settings.politics_keywords)
        self.matcher = StoryMatcher(self.settings.matching)
        self.tagger = SpecialCategoryTagger(
            categories or StaticCategoryProvider(self.settings.special_categories)
        )

    @classmethod
    def from_config(cls, config: Config) -> "MatchPipeline":
        """Build a pipeline from the config and sources files."""
        settings = config.config
        registry = SourceRegistry(config.load_sources())
        fetcher = RSSFetcher(
            timeout=settings.fetch.timeout_seconds,
            max_concurrent=settings.fetch.max_concurrent,
            user_agent=settings.fetch.user_agent,
            verbose_errors=settings.fetch.verbose_errors,
        )

        categories: Optional[CategoryProvider] = None
        if settings.snapshot.backend == "postgres":
            categories = PostgresCategoryProvider(config.get_db_config())

        return cls(registry, fetcher, settings=settings, categories=categories)

    async def fetch_all(self) -> Dict[Bias, BiasFetchResult]:
        """Fetch every bias column concurrently; each settles independently."""
        results = await asyncio.gather(
            *(self.fetcher.fetch_bias(bias, self.registry.sources_for_bias(bias)) for bias in BIAS_ORDER)
        )
        return {result.bias: result for result in results}

    async def compute_matched_stories(self, limit_groups: Optional[int] = None) -> MatchResult:
        """
        Run a full matching cycle.

        Args:
            limit_groups: Maximum groups to return (defaults to config)

        Returns:
            Matched groups plus per-stage stats
        """
        matching = self.settings.matching
        if limit_groups is None:
            limit_groups = matching.limit_groups

        with PipelineStage("fetch", "Fetching RSS feeds") as fetch_stage:
            fetched = await self.fetch_all()
            fetch_stage.record(
                **{
                    bias.value: {
                        "sources": fetched[bias].total_sources,
                        "failed": fetched[bias].failed,
                        "articles": len(fetched[bias].articles),
                    }
                    for bias in BIAS_ORDER
                }
            )
            if all_sources_down(fetched):
                raise FeedsUnavailableError("All configured feeds are unreachable")

        with PipelineStage("prepare", "Filtering and sorting articles") as prepare_stage:
            columns: Dict[Bias, List[Article]] = {}
            malformed = 0
            for bias in BIAS_ORDER:
                raw = fetched[bias].articles
                malformed += sum(1 for a in raw if not a.is_matchable)
                columns[bias] = prepare_articles(
                    raw,
                    self.relevance,
                    min_filtered=matching.min_filtered,
                    cap=matching.per_bias_cap,
                )
                prepare_stage.record(**{bias.value: len(columns[bias])})
            prepare_stage.record(malformed=malformed)

        with PipelineStage("match", "Matching stories") as match_stage:
            groups = self.matcher.match(
                columns[Bias.PROGRESSIVE],
                columns[Bias.CENTRIST],
                columns[Bias.CONSERVATIVE],
                limit_groups=limit_groups,
            )
            groups = await asyncio.to_thread(self.tagger.tag, groups)
            match_stage.record(groups=len(groups))

        logger.info("Matching cycle produced %d groups", len(groups))
        return MatchResult(
            groups=groups,
            stats={stage.name: stage.summary() for stage in (fetch_stage, prepare_stage, match_stage)},
        )

    async def fetch_news_by_bias(self, limit_per_bias: int = 15) -> Dict[Bias, List[Article]]:
        """Newest articles of each bias column, unfiltered and unmatched."""
        fetched = await self.fetch_all()
        return {
            bias: sorted(fetched[bias].articles, key=lambda a: a.sort_key, reverse=True)[:limit_per_bias]
            for bias in BIAS_ORDER
        }
