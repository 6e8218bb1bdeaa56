"""Configuration constants for the broadcast simulator."""

import os
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv


def _load_env_file() -> None:
    """Load variables from the .env file if it exists, without overriding the environment."""
    env_path = Path(os.getenv('ONAIR_ENV_FILE', '.env'))
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_file()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, '').strip().lower()
    if not value:
        return default
    return value in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int, low: int, high: int) -> int:
    try:
        value = int(os.environ.get(name, str(default)))
    except (ValueError, TypeError):
        return default
    if value < low or value > high:
        import logging
        logging.getLogger(__name__).warning(f"Unusual {name}: {value}, using {default}")
        return default
    return value


# Directory the catalog filenames are resolved against
AUDIO_DIR: Final[str] = os.path.expanduser(os.environ.get('ONAIR_AUDIO_DIR', 'audio').strip() or 'audio')

# Playback failures abort the broadcast unless this is set
SKIP_ON_ERROR: Final[bool] = _env_flag('ONAIR_SKIP_ON_ERROR')

# Optional log file (rotated at LOG_MAX_BYTES, LOG_BACKUP_COUNT backups kept)
_log_file = os.environ.get('ONAIR_LOG_FILE', '').strip()
LOG_FILE: Final[Optional[str]] = os.path.expanduser(_log_file) if _log_file else None
LOG_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 5

# pygame mixer settings
# SDL audio driver; empty leaves the choice to SDL ('alsa', 'pulse', 'dummy', ...)
AUDIO_DRIVER: Final[str] = os.environ.get('ONAIR_AUDIO_DRIVER', '').strip().lower()
MIXER_FREQUENCY: Final[int] = _env_int('ONAIR_MIXER_FREQUENCY', 48000, 8000, 192000)
MIXER_BUFFER_SIZE: Final[int] = _env_int('ONAIR_MIXER_BUFFER', 2048, 256, 65536)
MAX_SEGMENT_SECONDS: Final[int] = 3600  # Safety limit for a single blocking play

# Extended M3U header written before the first scheduled segment
M3U_HEADER: Final[str] = '#EXTM3U'
