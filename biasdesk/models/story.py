"""Matched story groups."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .article import Article


class StoryGroup(BaseModel):
    """Three anchor articles, one per bias, covering the same event."""

    progressive: Optional[Article] = Field(None, description="Progressive anchor")
    centrist: Optional[Article] = Field(None, description="Centrist anchor")
    conservative: Optional[Article] = Field(None, description="Conservative anchor")
    other_sources: List[Article] = Field(
        default_factory=list,
        description="Additional coverage similar to the progressive anchor",
    )
    tags: Optional[List[str]] = Field(None, description="Special category labels")

    @property
    def anchors(self) -> List[Article]:
        return [a for a in (self.progressive, self.centrist, self.conservative) if a is not None]


class MatchResult(BaseModel):
    """Output of one matching cycle."""

    groups: List[StoryGroup] = Field(default_factory=list)
    stats: Dict[str, Any] = Field(default_factory=dict, description="Per-stage counters")

    def to_payload(self) -> Dict[str, Any]:
        """Serialisable `{groups: [...]}` payload stored in snapshots."""
        return {"groups": [g.model_dump(mode="json") for g in self.groups]}
