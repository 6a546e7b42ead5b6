"""Stored snapshot of a matching cycle."""

from typing import Any, Dict

from pydantic import Field

from .base import DBModel


class Snapshot(DBModel):
    """A timestamped `{groups: [...]}` payload."""

    payload: Dict[str, Any] = Field(default_factory=lambda: {"groups": []})
