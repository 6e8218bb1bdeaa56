"""
Shared pytest fixtures for onair tests.

No audio device is opened; playback goes through FakePlayer.
"""

import json
import random

import pytest

from onair.scheduler import Scheduler
from onair.tests.test_doubles import AUDIO_DIR, FakePlayer, make_catalog, station_doc


@pytest.fixture
def catalog():
    """Three songs (two with combos), two transitions, two intros, one-song runs."""
    return make_catalog()


@pytest.fixture
def player():
    return FakePlayer()


@pytest.fixture
def scheduler(catalog, player):
    """Scheduler with a seeded random source."""
    return Scheduler(catalog, player, rng=random.Random(1234), audio_dir=AUDIO_DIR)


@pytest.fixture
def config_file(tmp_path):
    """Write a station document to disk and return its path."""
    def _write(doc=None, name="station.json"):
        path = tmp_path / name
        path.write_text(json.dumps(doc if doc is not None else station_doc()), encoding="utf-8")
        return str(path)
    return _write
