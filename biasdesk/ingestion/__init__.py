"""RSS ingestion and the source registry."""

from .models import BiasFetchResult, FeedResult
from .registry import SourceRegistry
from .rss_fetcher import RSSFetcher, entry_to_article

__all__ = [
    "BiasFetchResult",
    "FeedResult",
    "RSSFetcher",
    "SourceRegistry",
    "entry_to_article",
]
