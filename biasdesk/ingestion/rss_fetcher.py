"""RSS feed fetcher with concurrent processing."""

import asyncio
import logging
from calendar import timegm
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

import feedparser
import httpx
import pendulum

from ..models import Article, Bias, Source
from .models import BiasFetchResult, FeedResult

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/rss+xml, application/xml, text/xml, */*"


def parse_published(entry: Any) -> Optional[datetime]:
    """Best-effort publication time of a feed entry, in UTC."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime.fromtimestamp(timegm(parsed), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError):
                continue

    for key in ("published", "updated"):
        raw = entry.get(key)
        if raw:
            try:
                parsed = pendulum.parse(raw, strict=False)
            except ValueError:
                continue
            if isinstance(parsed, datetime):
                return parsed.in_timezone("UTC")
    return None


def extract_image(entry: Any) -> Optional[str]:
    """Image URL from an enclosure or media:content element."""
    for enclosure in entry.get("enclosures") or []:
        url = enclosure.get("href") or enclosure.get("url")
        if url:
            return url
    for media in entry.get("media_content") or []:
        if media.get("url"):
            return media["url"]
    return None


def extract_description(entry: Any) -> str:
    if entry.get("summary"):
        return entry["summary"]
    content = entry.get("content") or []
    if content and content[0].get("value"):
        return content[0]["value"]
    return entry.get("description") or ""


def entry_to_article(entry: Any, source_name: str, bias: Bias) -> Article:
    """Normalize a feedparser entry into an Article."""
    return Article(
        title=(entry.get("title") or "").strip(),
        link=(entry.get("link") or "").strip(),
        description=extract_description(entry),
        published_at=parse_published(entry),
        image=extract_image(entry),
        source_name=source_name,
        source_bias=bias,
        categories=[t.get("term") for t in entry.get("tags") or [] if t.get("term")],
    )


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(
        self,
        timeout: float = 12.0,
        max_concurrent: int = 10,
        user_agent: Optional[str] = None,
        verbose_errors: bool = False,
    ) -> None:
        """Initialize RSS fetcher."""
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self.headers = {"Accept": ACCEPT_HEADER}
        if user_agent:
            self.headers["User-Agent"] = user_agent
        self.verbose_errors = verbose_errors

    async def fetch_feed(self, source: Source) -> FeedResult:
        """Fetch and parse a single RSS feed. Never raises on network or parse errors."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers, follow_redirects=True
            ) as client:
                response = await client.get(source.feed_url)
                response.raise_for_status()

                feed = feedparser.parse(response.content)

                if feed.bozo and not feed.entries:
                    return self._failure(source, f"Invalid RSS feed: {feed.bozo_exception}")

                articles = self._map_entries(source, feed.entries)

                return FeedResult(
                    source_name=source.name,
                    feed_url=source.feed_url,
                    success=True,
                    articles=articles,
                )

        except httpx.TimeoutException as e:
            return self._failure(source, f"Timeout: {e}")
        except httpx.HTTPError as e:
            return self._failure(source, f"HTTP error: {e}")
        except Exception as e:
            return self._failure(source, f"Unexpected error: {e}")

    def _map_entries(self, source: Source, entries: Sequence[Any]) -> List[Article]:
        """Map feed entries to articles, skipping any entry that cannot be mapped."""
        articles: List[Article] = []
        for entry in entries:
            try:
                articles.append(entry_to_article(entry, source.name, source.bias))
            except Exception as e:
                logger.debug("%s: skipping unmappable entry: %s", source.name, e)
        return articles

    def _failure(self, source: Source, error: str) -> FeedResult:
        level = logging.WARNING if self.verbose_errors else logging.DEBUG
        logger.log(level, "%s (%s): %s", source.name, source.feed_url, error)
        return FeedResult(
            source_name=source.name,
            feed_url=source.feed_url,
            success=False,
            error=error,
        )

    async def fetch_articles_for_source(self, source: Source) -> List[Article]:
        """Articles from one source; empty on any failure."""
        result = await self.fetch_feed(source)
        return result.articles

    async def fetch_bias(self, bias: Bias, sources: Sequence[Source]) -> BiasFetchResult:
        """Fetch every source of one bias concurrently, tolerating individual failures."""
        if not sources:
            return BiasFetchResult(bias=bias)

        # Create semaphore for concurrency control
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def fetch_with_semaphore(source: Source) -> FeedResult:
            async with semaphore:
                return await self.fetch_feed(source)

        results = await asyncio.gather(
            *(fetch_with_semaphore(source) for source in sources),
            return_exceptions=True,
        )

        articles: List[Article] = []
        failed = 0
        for result in results:
            if isinstance(result, FeedResult) and result.success:
                articles.extend(result.articles)
            else:
                failed += 1

        if failed:
            logger.info("%s: %d/%d sources unavailable", bias.value, failed, len(sources))

        return BiasFetchResult(
            bias=bias,
            articles=articles,
            succeeded=len(sources) - failed,
            failed=failed,
        )
