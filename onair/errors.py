"""Exception hierarchy for the onair broadcast simulator."""

from typing import Optional


class OnAirError(Exception):
    """Base class for all onair errors."""


class ConfigError(OnAirError):
    """Configuration document is missing, unreadable or malformed."""


class DegenerateCatalogError(ConfigError):
    """
    A segment category is too small to schedule without repeats.

    The non-repeating selector needs at least two entries per category,
    otherwise there is no "other" index to move to.
    """

    def __init__(self, category: str, size: int) -> None:
        self.category = category
        self.size = size
        super().__init__(
            f"Category '{category}' has {size} entries; at least 2 are required"
        )


class PlaybackError(OnAirError):
    """A scheduled segment could not be played."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        message = f"Failed to play {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
