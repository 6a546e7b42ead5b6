"""Bias categories and news sources."""

from enum import Enum

from pydantic import BaseModel, Field


class Bias(str, Enum):
    """Editorial bias category assigned to a source."""

    PROGRESSIVE = "progressive"
    CENTRIST = "centrist"
    CONSERVATIVE = "conservative"


BIAS_ORDER = (Bias.PROGRESSIVE, Bias.CENTRIST, Bias.CONSERVATIVE)


class Source(BaseModel):
    """A news outlet with a feed and a fixed bias category."""

    id: str = Field(..., description="Stable source identifier")
    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Homepage URL")
    feed_url: str = Field(..., description="RSS/Atom feed URL")
    bias: Bias = Field(..., description="Bias category")
