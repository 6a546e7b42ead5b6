"""Exception hierarchy."""


class BiasdeskError(Exception):
    """Base class for all biasdesk errors."""


class ConfigError(BiasdeskError, ValueError):
    """Configuration or sources file could not be loaded."""


class SnapshotStoreError(BiasdeskError):
    """The snapshot store could not be read or written."""


class SnapshotUnavailableError(BiasdeskError):
    """No snapshot exists and a fresh one could not be computed."""


class FeedsUnavailableError(BiasdeskError):
    """Sources are configured but none of their feeds could be fetched."""
