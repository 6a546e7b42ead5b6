"""Timing and counters for pipeline stages."""

import time
from typing import Any, Dict, Optional


class PipelineStage:
    """A timed pipeline step. Use as a context manager; exceptions mark it failed."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict[str, Any] = {}

    def __enter__(self) -> "PipelineStage":
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.end_time = time.monotonic()
        if exc is not None:
            self.error = f"{exc_type.__name__}: {exc}"
        else:
            self.success = True
        return False

    def record(self, **stats: Any) -> None:
        self.stats.update(stats)

    @property
    def duration(self) -> float:
        """Stage duration in seconds."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0.0

    def summary(self) -> Dict[str, Any]:
        return {
            "duration": round(self.duration, 3),
            "success": self.success,
            "error": self.error,
            **self.stats,
        }
