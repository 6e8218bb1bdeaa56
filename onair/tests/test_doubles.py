"""
Test doubles (fakes and scripted sources) for onair tests.

These stand in for the audio device and the random source so schedules
can be checked without sound hardware or luck.
"""

import random
from typing import Any, Dict, Iterable, List, Optional, Set

from onair.catalog import Catalog
from onair.config import parse_config

AUDIO_DIR = "/fake/audio"


class FakePlayer:
    """Records every path it is asked to play; optionally fails on some of them."""

    def __init__(self, failing: Optional[Set[str]] = None):
        self.played: List[str] = []
        self.failing: Set[str] = set(failing or ())
        self.stopped = 0
        self.closed = False

    def play(self, path: str) -> bool:
        self.played.append(path)
        return path not in self.failing

    def stop(self) -> None:
        self.stopped += 1

    def close(self) -> None:
        self.closed = True

    @property
    def filenames(self) -> List[str]:
        return [p.rsplit("/", 1)[-1] for p in self.played]


class ScriptedRandom(random.Random):
    """
    Random source that replays scripted values.

    ``randint`` and ``random`` pop from their own queues and check that
    each scripted value lies in the requested range. Running out of
    values raises IndexError so an unexpected draw fails the test.
    """

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()):
        super().__init__(0)
        self.ints: List[int] = list(ints)
        self.floats: List[float] = list(floats)
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        value = self.ints.pop(0)
        if not a <= value <= b:
            raise AssertionError(f"scripted randint value {value} outside [{a}, {b}]")
        self.calls.append(("randint", a, b, value))
        return value

    def random(self) -> float:
        value = self.floats.pop(0)
        self.calls.append(("random", value))
        return value


def station_doc(
    songs_combo: Optional[List[list]] = None,
    trans: Optional[List[str]] = None,
    intros: Optional[List[str]] = None,
    min_b1_songs: int = 1,
    max_b1_songs: int = 1,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a station document with small defaults."""
    doc: Dict[str, Any] = {
        "trans": trans if trans is not None else ["t1.mp3", "t2.mp3"],
        "songs_combo": songs_combo if songs_combo is not None else [
            ["a.mp3", "a_c.mp3"],
            ["b.mp3", "b_c.mp3"],
            ["c.mp3", None],
        ],
        "intros": intros if intros is not None else ["i1.mp3", "i2.mp3"],
        "min_b1_songs": min_b1_songs,
        "max_b1_songs": max_b1_songs,
    }
    doc.update(extra)
    return doc


def make_catalog(**kwargs: Any) -> Catalog:
    """Build a validated Catalog from ``station_doc`` keyword arguments."""
    return Catalog.from_config(parse_config(station_doc(**kwargs)))
