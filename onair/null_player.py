import logging
import os

logger = logging.getLogger(__name__)


class NullPlayer:
    """A player that plays nothing. Used for dry runs that only print the playlist."""

    def play(self, path: str) -> bool:
        logger.debug(f"[DRY RUN] {os.path.basename(path)}")
        return True

    def stop(self) -> None:
        return

    def close(self) -> None:
        return
