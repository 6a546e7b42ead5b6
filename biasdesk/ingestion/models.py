"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Article, Bias


class FeedResult(BaseModel):
    """Result of fetching one source's feed."""

    source_name: str = Field(..., description="Source name")
    feed_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    articles: List[Article] = Field(default_factory=list, description="Normalized articles")
    error: Optional[str] = Field(None, description="Error message if failed")

    @property
    def article_count(self) -> int:
        return len(self.articles)


class BiasFetchResult(BaseModel):
    """All articles fetched for one bias category."""

    bias: Bias = Field(..., description="Bias category")
    articles: List[Article] = Field(default_factory=list, description="Concatenated articles")
    succeeded: int = Field(0, description="Sources fetched successfully")
    failed: int = Field(0, description="Sources that failed or timed out")

    @property
    def total_sources(self) -> int:
        return self.succeeded + self.failed
