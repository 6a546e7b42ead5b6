"""Greedy cross-bias story matcher.

For each progressive article, newest first, the best unused centrist and
conservative headlines are looked up independently. A group is emitted only
when both sides clear the similarity threshold; its three anchors are then
consumed so no article anchors two groups. The pass is single and greedy: a
skipped progressive article is never revisited.
"""

import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from ..config import MatchingConfig
from ..models import Article, StoryGroup
from .filters import KeepAllFilter, RelevanceFilter, filter_with_fallback
from .similarity import title_similarity

logger = logging.getLogger(__name__)

SimilarityFn = Callable[[str, str], float]


def prepare_articles(
    articles: Sequence[Article],
    relevance: Optional[RelevanceFilter] = None,
    min_filtered: int = 5,
    cap: Optional[int] = 80,
) -> List[Article]:
    """Drop malformed articles, filter, sort newest first and cap one bias column."""
    valid = [a for a in articles if a.is_matchable]
    filtered = filter_with_fallback(valid, relevance or KeepAllFilter(), min_filtered)
    ordered = sorted(filtered, key=lambda a: a.sort_key, reverse=True)
    if cap is not None:
        ordered = ordered[:cap]
    return ordered


class MatchingSession:
    """State of one matching cycle: the links already used as anchors."""

    def __init__(self, config: MatchingConfig, similarity: SimilarityFn) -> None:
        self.config = config
        self.similarity = similarity
        self.used_links: Set[str] = set()

    def best_match(self, title: str, candidates: Sequence[Article]) -> Optional[Article]:
        """Most similar unused candidate strictly above the threshold; first wins ties."""
        best: Optional[Article] = None
        best_score = self.config.min_similarity
        for candidate in candidates:
            if candidate.link in self.used_links:
                continue
            score = self.similarity(title, candidate.title)
            if score > best_score:
                best_score = score
                best = candidate
        return best

    def consume(self, *articles: Article) -> None:
        for article in articles:
            self.used_links.add(article.link)

    def other_sources(
        self,
        anchors: Tuple[Article, Article, Article],
        columns: Tuple[Sequence[Article], Sequence[Article], Sequence[Article]],
    ) -> List[Article]:
        """Further coverage of the progressive anchor's story, in column order."""
        title = anchors[0].title
        anchor_links = {a.link for a in anchors}
        found: List[Article] = []
        for column in columns:
            for article in column:
                if article.link in anchor_links:
                    continue
                if self.similarity(title, article.title) > self.config.other_similarity:
                    found.append(article)
        return found[: self.config.max_other_sources]


class StoryMatcher:
    """Build story groups from three prepared bias columns."""

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        similarity: Optional[SimilarityFn] = None,
    ) -> None:
        self.config = config or MatchingConfig()
        if similarity is None:
            min_length = self.config.min_token_length

            def similarity(a: str, b: str) -> float:
                return title_similarity(a, b, min_length)

        self.similarity = similarity

    def match(
        self,
        progressive: Sequence[Article],
        centrist: Sequence[Article],
        conservative: Sequence[Article],
        limit_groups: Optional[int] = None,
    ) -> List[StoryGroup]:
        """
        Greedily form complete progressive/centrist/conservative triples.

        Args:
            progressive: Progressive column, newest first
            centrist: Centrist column, newest first
            conservative: Conservative column, newest first
            limit_groups: Stop after this many groups (defaults to config)

        Returns:
            Story groups in the order their progressive anchors were visited
        """
        if limit_groups is None:
            limit_groups = self.config.limit_groups

        session = MatchingSession(self.config, self.similarity)
        groups: List[StoryGroup] = []

        if not centrist or not conservative:
            return groups

        columns = (progressive, centrist, conservative)
        for prog in progressive:
            if len(groups) >= limit_groups:
                break
            if prog.link in session.used_links:
                continue

            best_centrist = session.best_match(prog.title, centrist)
            best_conservative = session.best_match(prog.title, conservative)
            if best_centrist is None or best_conservative is None:
                continue

            anchors = (prog, best_centrist, best_conservative)
            session.consume(*anchors)
            groups.append(
                StoryGroup(
                    progressive=prog,
                    centrist=best_centrist,
                    conservative=best_conservative,
                    other_sources=session.other_sources(anchors, columns),
                )
            )

        logger.debug(
            "Matched %d groups from %d/%d/%d articles",
            len(groups),
            len(progressive),
            len(centrist),
            len(conservative),
        )
        return groups
