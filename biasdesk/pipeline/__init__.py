"""Matching pipeline orchestration."""

from .orchestrator import MatchPipeline
from .stages import PipelineStage

__all__ = ["MatchPipeline", "PipelineStage"]
