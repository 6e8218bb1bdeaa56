"""onair - a simulated live radio broadcast with a non-repeating DJ scheduler."""

from .catalog import Catalog
from .driver import run, schedule_steps
from .errors import ConfigError, DegenerateCatalogError, OnAirError, PlaybackError
from .null_player import NullPlayer
from .scheduler import Scheduler, SchedulerState
from .segment import Segment
from .selection import pick_next

__version__ = "0.1.0"

__all__ = [
    'Catalog',
    'ConfigError',
    'DegenerateCatalogError',
    'NullPlayer',
    'OnAirError',
    'PlaybackError',
    'Scheduler',
    'SchedulerState',
    'Segment',
    'pick_next',
    'run',
    'schedule_steps',
]
