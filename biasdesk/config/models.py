"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import Bias, Source

DEFAULT_POLITICS_KEYWORDS = [
    "politica",
    "política",
    "politicas",
    "políticas",
    "espana",
    "españa",
    "nacional",
    "gobierno",
    "congreso",
    "elecciones",
]

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; biasdesk/0.1; +https://github.com/biasdesk)"


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("biasdesk", description="Database name")
    user: str = Field("biasdesk", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class FetchConfig(BaseModel):
    """Feed fetching parameters."""

    timeout_seconds: float = Field(12.0, description="Per-feed timeout", gt=0)
    max_concurrent: int = Field(10, description="Concurrent fetches per bias", ge=1, le=100)
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header")
    verbose_errors: bool = Field(False, description="Log every failed feed at WARNING")


class MatchingConfig(BaseModel):
    """Story matching thresholds."""

    limit_groups: int = Field(15, description="Groups to build per cycle", ge=1, le=100)
    per_bias_cap: int = Field(80, description="Most recent articles kept per bias", ge=1)
    min_similarity: float = Field(0.3, description="Anchor match threshold (strict)", ge=0.0, le=1.0)
    other_similarity: float = Field(
        0.25, description="Other-sources threshold (strict)", ge=0.0, le=1.0
    )
    max_other_sources: int = Field(15, description="Other sources per group", ge=0)
    min_filtered: int = Field(
        5, description="Below this many political articles the filter is bypassed", ge=0
    )
    min_token_length: int = Field(3, description="Shortest headline token kept", ge=1)


class SnapshotConfig(BaseModel):
    """Snapshot cache settings."""

    backend: str = Field("postgres", description="Snapshot store (postgres, memory)")
    refresh_minutes: int = Field(30, description="Scheduled refresh interval", ge=1)
    read_limit: int = Field(15, description="Groups served per read", ge=1, le=25)

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v not in ("postgres", "memory"):
            raise ValueError(f"Unknown snapshot backend: {v}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    politics_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_POLITICS_KEYWORDS),
        description="Keywords marking an article as political",
    )
    special_categories: List[str] = Field(
        default_factory=list,
        description="Special topic names used when no database is configured",
    )


class SourceConfig(BaseModel):
    """Source configuration from sources.yaml."""

    id: str = Field(..., description="Source identifier")
    name: str = Field(..., description="Source name")
    url: str = Field("", description="Homepage URL")
    feed_url: str = Field(..., description="RSS feed URL")
    bias: Bias = Field(..., description="Bias category")
    enabled: bool = Field(True, description="Whether source is enabled")

    def to_source(self) -> Source:
        return Source(id=self.id, name=self.name, url=self.url, feed_url=self.feed_url, bias=self.bias)
