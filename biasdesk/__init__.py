"""Cross-bias news story comparator."""

__version__ = "0.1.0"
