"""
Blocking audio playback using pygame mixer.

The scheduler hands one path at a time to ``AudioPlayer.play`` and waits
for it to return, which models broadcast pacing: nothing is queued ahead.

Example:
    ```python
    from onair.audio_player import AudioPlayer

    player = AudioPlayer()
    if not player.play("audio/chat.mp3"):
        print("could not play segment")
    ```
"""

import logging
import os
import time
from typing import Optional

import pygame

from onair.constants import AUDIO_DRIVER, MAX_SEGMENT_SECONDS, MIXER_BUFFER_SIZE, MIXER_FREQUENCY

logger = logging.getLogger(__name__)


class AudioPlayer:
    """
    Plays audio segments to completion through pygame mixer.

    Attributes:
        TICK_RATE (int): Polls per second while waiting for a segment to end
    """

    TICK_RATE = 10

    def __init__(
        self,
        frequency: int = MIXER_FREQUENCY,
        buffer_size: int = MIXER_BUFFER_SIZE,
        audio_driver: Optional[str] = None,
        max_retries: int = 3,
    ) -> None:
        """
        Initialize pygame mixer.

        Headless hosts (no DISPLAY) get SDL's dummy video driver. A busy
        audio device is retried with backoff.

        Args:
            frequency: Mixer sample rate in Hz
            buffer_size: Mixer buffer size in samples
            audio_driver: SDL audio driver name (default: ONAIR_AUDIO_DRIVER, else SDL's choice)
            max_retries: Attempts before giving up on a busy device

        Raises:
            pygame.error: If the mixer cannot be initialized
        """
        if 'DISPLAY' not in os.environ:
            os.environ['SDL_VIDEODRIVER'] = 'dummy'

        driver = audio_driver if audio_driver is not None else AUDIO_DRIVER
        if driver:
            os.environ['SDL_AUDIODRIVER'] = driver
            logger.debug(f"Using SDL audio driver: {driver}")

        retry_delay = 1.0
        for attempt in range(1, max_retries + 1):
            try:
                pygame.mixer.pre_init(frequency=frequency, buffer=buffer_size)
                pygame.mixer.init()
                logger.info(f"Audio player initialized ({frequency} Hz, buffer {buffer_size})")
                return
            except pygame.error as e:
                is_device_busy = 'busy' in str(e).lower() or 'resource' in str(e).lower()
                if attempt < max_retries and is_device_busy:
                    logger.warning(f"Audio device busy (attempt {attempt}/{max_retries}), retrying in {retry_delay}s...")
                    time.sleep(retry_delay)
                    retry_delay *= 1.5
                else:
                    logger.error(f"Failed to initialize audio player: {e}")
                    raise

    def _check_file(self, path: str) -> bool:
        if not path:
            logger.error("Audio file path is empty")
            return False
        if not os.path.isfile(path):
            logger.error(f"Audio file not found: {path}")
            return False
        if not os.access(path, os.R_OK):
            logger.error(f"Audio file is not readable: {path}")
            return False
        if os.path.getsize(path) == 0:
            logger.error(f"Audio file is empty: {path}")
            return False
        return True

    def play(self, path: str) -> bool:
        """
        Play a file and block until it finishes.

        Args:
            path: Audio file to play

        Returns:
            True if the segment played to the end, False if it could not be
            opened, decoded, or exceeded MAX_SEGMENT_SECONDS.
        """
        if not self._check_file(path):
            return False

        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.play()
        except pygame.error as e:
            logger.error(f"Error decoding {path}: {e}")
            return False

        logger.info(f"Playing: {os.path.basename(path)}")
        clock = pygame.time.Clock()
        start_time = time.monotonic()
        while pygame.mixer.music.get_busy():
            if time.monotonic() - start_time > MAX_SEGMENT_SECONDS:
                logger.warning(f"Segment exceeded maximum time ({MAX_SEGMENT_SECONDS}s), stopping: {path}")
                pygame.mixer.music.stop()
                return False
            clock.tick(self.TICK_RATE)

        logger.debug(f"Finished playing: {os.path.basename(path)}")
        return True

    def stop(self) -> None:
        """Stop the current segment; the blocked ``play`` call then returns."""
        if not self.is_playing():
            logger.debug("Stop requested while idle")
            return
        try:
            pygame.mixer.music.stop()
            logger.info("Playback stopped")
        except pygame.error as e:
            logger.error(f"Error stopping playback: {e}")

    def is_playing(self) -> bool:
        """True while a segment is loaded and playing."""
        try:
            return pygame.mixer.music.get_busy()
        except pygame.error:
            return False

    def close(self) -> None:
        """Release the audio device."""
        if pygame.mixer.get_init():
            pygame.mixer.quit()
