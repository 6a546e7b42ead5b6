"""Relevance filters applied to each bias column before matching."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

from ..models import Article

logger = logging.getLogger(__name__)


class RelevanceFilter(ABC):
    """Predicate deciding whether an article is worth matching."""

    @abstractmethod
    def is_relevant(self, article: Article) -> bool:
        """Return True if the article should take part in matching."""


class KeepAllFilter(RelevanceFilter):
    """Accept everything."""

    def is_relevant(self, article: Article) -> bool:
        return True


class KeywordRelevanceFilter(RelevanceFilter):
    """Political-content heuristic: any keyword in the tags, title or description.

    Matching is plain case-insensitive substring containment, so "nacional"
    also hits "internacional". False positives are acceptable here.
    """

    def __init__(self, keywords: Iterable[str]) -> None:
        self.keywords = [k.lower() for k in keywords if k and k.strip()]

    def is_relevant(self, article: Article) -> bool:
        parts = [c.lower() for c in article.categories if c]
        parts.append((article.title or "").lower())
        parts.append((article.description or "").lower())
        text = " ".join(parts)
        return any(keyword in text for keyword in self.keywords)


def filter_with_fallback(
    articles: Sequence[Article],
    relevance: RelevanceFilter,
    min_kept: int = 5,
) -> List[Article]:
    """Apply `relevance`, falling back to the unfiltered list when fewer than `min_kept` survive."""
    kept = [a for a in articles if relevance.is_relevant(a)]
    if len(kept) < min_kept:
        logger.debug(
            "Only %d/%d articles passed the relevance filter; using all of them",
            len(kept),
            len(articles),
        )
        return list(articles)
    return kept
