"""Normalized article records produced by the feed fetcher."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from .source import Bias

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Article(BaseModel):
    """One feed entry, tagged with the bias of the source that published it."""

    title: str = Field("", description="Headline")
    link: str = Field("", description="Article URL, unique within a fetch cycle")
    description: str = Field("", description="Summary or snippet")
    published_at: Optional[datetime] = Field(None, description="Publication timestamp")
    image: Optional[str] = Field(None, description="Image URL")
    source_name: str = Field(..., description="Originating source display name")
    source_bias: Bias = Field(..., description="Bias of the originating source")
    categories: List[str] = Field(default_factory=list, description="Feed tags")

    class Config:
        """Pydantic config."""

        frozen = True

    @property
    def sort_key(self) -> datetime:
        """Publication time, with missing dates sorting as the epoch."""
        if self.published_at is None:
            return EPOCH
        if self.published_at.tzinfo is None:
            return self.published_at.replace(tzinfo=timezone.utc)
        return self.published_at

    @property
    def is_matchable(self) -> bool:
        """Whether the article has the fields matching relies on."""
        return bool(self.title and self.title.strip() and self.link and self.link.strip())
