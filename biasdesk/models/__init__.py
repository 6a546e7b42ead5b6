"""Data models."""

from .article import Article
from .snapshot import Snapshot
from .source import BIAS_ORDER, Bias, Source
from .story import MatchResult, StoryGroup

__all__ = ["Article", "BIAS_ORDER", "Bias", "MatchResult", "Snapshot", "Source", "StoryGroup"]
