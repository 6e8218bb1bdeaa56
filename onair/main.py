"""
Command-line entry point for the onair broadcast simulator.

Loads a station document, then plays a simulated live broadcast through
pygame, printing the schedule as an extended M3U playlist on stdout.

Example:
    ```bash
    # Play forever
    onair station.json

    # Play 10 steps (each step is one chatty block and one variable block)
    onair station.json 10

    # Print a 5-step playlist without touching the audio device
    onair station.json 5 --dry-run --seed 7
    ```
"""

import argparse
import logging
import logging.handlers
import random
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from onair.catalog import Catalog
from onair.constants import AUDIO_DIR, LOG_BACKUP_COUNT, LOG_FILE, LOG_MAX_BYTES, M3U_HEADER, SKIP_ON_ERROR
from onair.driver import run
from onair.errors import ConfigError, PlaybackError
from onair.null_player import NullPlayer
from onair.scheduler import Scheduler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Console output goes to stderr so stdout carries only the playlist.
    If ``log_file`` is given, a rotating file handler is added as well
    (LOG_MAX_BYTES per file, LOG_BACKUP_COUNT backups).

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional path to a log file
    """
    fmt = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handlers: List[logging.Handler] = []

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(fmt)
    handlers.append(console_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=handlers
    )


def _play_len(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"play length must be an integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"play length must be non-negative, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='onair',
        description='Simulated live radio broadcast with a chatty-then-quiet host'
    )
    parser.add_argument('config', help='Path to the JSON station document')
    parser.add_argument(
        'play_len', nargs='?', type=_play_len, default=None,
        help='Number of steps to play (default: play forever)'
    )
    parser.add_argument(
        '--dry-run', action='store_true',
        help='Print the playlist without playing any audio'
    )
    parser.add_argument(
        '--skip-errors', action=argparse.BooleanOptionalAction, default=SKIP_ON_ERROR,
        help='Skip segments that fail to play instead of stopping (env: ONAIR_SKIP_ON_ERROR)'
    )
    parser.add_argument(
        '--audio-dir', default=None,
        help=f'Directory holding the audio files (default: station document, then {AUDIO_DIR!r})'
    )
    parser.add_argument('--seed', type=int, default=None, help='Seed for a reproducible schedule')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log every scheduled segment')
    parser.add_argument('--log-file', default=LOG_FILE, help='Also log to this file (env: ONAIR_LOG_FILE)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the broadcast.

    Returns:
        Process exit status: 0 on a clean finish or interrupt, 1 on
        configuration or playback errors.
    """
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        catalog = Catalog.from_file(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.dry_run:
        player = NullPlayer()
    else:
        # Imported here so dry runs never touch the audio device
        from onair.audio_player import AudioPlayer
        try:
            player = AudioPlayer()
        except Exception as e:
            logger.error(f"Audio error: {e}", exc_info=True)
            return 1

    stop = threading.Event()
    scheduler = Scheduler(
        catalog,
        player,
        rng=random.Random(args.seed),
        audio_dir=args.audio_dir,
        skip_on_error=args.skip_errors,
        playlist=sys.stdout,
        stop_event=stop,
    )

    def shutdown_handler(signo, _stack_frame) -> None:
        if stop.is_set():
            logger.debug("Shutdown already in progress, ignoring duplicate signal")
            return
        logger.info(f"Received {signal.Signals(signo).name}, finishing the current segment and shutting down")
        stop.set()
        player.stop()

    previous_handlers = {
        signum: signal.signal(signum, shutdown_handler)
        for signum in (signal.SIGTERM, signal.SIGINT)
    }

    print(M3U_HEADER, flush=True)
    try:
        steps = run(scheduler, play_len=args.play_len, stop_event=stop)
    except PlaybackError as e:
        logger.error(f"Playback error: {e}")
        return 1
    finally:
        player.close()
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)
    logger.info(f"Broadcast ended after {steps} steps ({scheduler.segments_played} segments played)")
    return 0
