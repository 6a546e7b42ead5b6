"""Story matching: relevance filtering, headline similarity and grouping."""

from .filters import KeepAllFilter, KeywordRelevanceFilter, RelevanceFilter, filter_with_fallback
from .matcher import MatchingSession, StoryMatcher, prepare_articles
from .similarity import normalize_headline, title_similarity
from .tagging import CategoryProvider, SpecialCategoryTagger, StaticCategoryProvider

__all__ = [
    "CategoryProvider",
    "KeepAllFilter",
    "KeywordRelevanceFilter",
    "MatchingSession",
    "RelevanceFilter",
    "SpecialCategoryTagger",
    "StaticCategoryProvider",
    "StoryMatcher",
    "filter_with_fallback",
    "normalize_headline",
    "prepare_articles",
    "title_similarity",
]
