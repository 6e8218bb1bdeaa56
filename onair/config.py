"""
Configuration loading for the broadcast simulator.

Reads the JSON station document and checks its shape:

    {
      "trans": ["chat.mp3", "comment.mp3"],
      "songs_combo": [["t.mp3", "t_c.mp3"], ["a.mp3", null]],
      "intros": ["hi.mp3", "hola.mp3"],
      "min_b1_songs": 1,
      "max_b1_songs": 3,
      "audio_dir": "audio"            (optional)
    }

Only structure and types are checked here. Category sizes and the
song-run bounds are validated when the Catalog is built.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from onair.errors import ConfigError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("trans", "songs_combo", "intros", "min_b1_songs", "max_b1_songs")


@dataclass(frozen=True)
class StationConfig:
    """Parsed (but not yet validated for scheduling) station document."""
    trans: Tuple[str, ...]
    songs_combo: Tuple[Tuple[str, Optional[str]], ...]
    intros: Tuple[str, ...]
    min_b1_songs: int
    max_b1_songs: int
    audio_dir: Optional[str] = None


def _filename_list(doc: dict, key: str) -> Tuple[str, ...]:
    value = doc[key]
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list of filenames, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item:
            raise ConfigError(f"'{key}[{i}]' must be a non-empty filename string")
    return tuple(value)


def _songs_combo(doc: dict) -> Tuple[Tuple[str, Optional[str]], ...]:
    value = doc["songs_combo"]
    if not isinstance(value, list):
        raise ConfigError("'songs_combo' must be a list of [song, combo-or-null] pairs")
    pairs: List[Tuple[str, Optional[str]]] = []
    for i, item in enumerate(value):
        if not isinstance(item, list) or len(item) != 2:
            raise ConfigError(f"'songs_combo[{i}]' must be a [song, combo-or-null] pair")
        song, combo = item
        if not isinstance(song, str) or not song:
            raise ConfigError(f"'songs_combo[{i}][0]' must be a non-empty filename string")
        if combo is not None and (not isinstance(combo, str) or not combo):
            raise ConfigError(f"'songs_combo[{i}][1]' must be a filename string or null")
        pairs.append((song, combo))
    return tuple(pairs)


def _count(doc: dict, key: str) -> int:
    value = doc[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def parse_config(doc: Any) -> StationConfig:
    """
    Check the shape of an already-decoded station document.

    Args:
        doc: Decoded JSON value

    Returns:
        StationConfig with tuples in place of lists

    Raises:
        ConfigError: If a key is missing or has the wrong type
    """
    if not isinstance(doc, dict):
        raise ConfigError("Configuration document must be a JSON object")

    missing = [key for key in REQUIRED_KEYS if key not in doc]
    if missing:
        raise ConfigError(f"Configuration is missing required keys: {', '.join(missing)}")

    audio_dir = doc.get("audio_dir")
    if audio_dir is not None and (not isinstance(audio_dir, str) or not audio_dir):
        raise ConfigError("'audio_dir' must be a non-empty string when given")

    return StationConfig(
        trans=_filename_list(doc, "trans"),
        songs_combo=_songs_combo(doc),
        intros=_filename_list(doc, "intros"),
        min_b1_songs=_count(doc, "min_b1_songs"),
        max_b1_songs=_count(doc, "max_b1_songs"),
        audio_dir=audio_dir,
    )


def load_config(path: str) -> StationConfig:
    """
    Read and parse a station document from disk.

    Raises:
        ConfigError: If the file cannot be read or is not valid JSON
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Configuration read error for {path}: {e}") from e

    config = parse_config(doc)
    logger.info(f"[CONFIG] Loaded {path}: {len(config.songs_combo)} songs, "
                f"{len(config.trans)} transitions, {len(config.intros)} intros")
    return config
