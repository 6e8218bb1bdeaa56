"""
Broadcast scheduling for the onair simulator.

The scheduler strings catalog segments together the way a live host
would: a transition, then a combo or an intro, then a run of songs.
No segment repeats back-to-back, and a combo and its song count as the
same item for repeat avoidance:

- playing a combo marks its song as the last song played
- playing a song that has a combo marks that combo as the last combo played

Every play request blocks until the player finishes the segment.
"""

import logging
import os
import random
import threading
from dataclasses import dataclass, replace
from typing import Optional, Protocol, TextIO

from onair.catalog import Catalog
from onair.constants import AUDIO_DIR
from onair.errors import PlaybackError
from onair.segment import Segment, SegmentCategory
from onair.selection import pick_next

logger = logging.getLogger(__name__)


class Player(Protocol):
    """Blocking playback collaborator."""

    def play(self, path: str) -> bool: ...

    def stop(self) -> None: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class SchedulerState:
    """
    Last-played index per category.

    All pointers start at 0. That is a starting point for the selector,
    not a claim that index 0 was played.
    """
    last_song: int = 0
    last_combo: int = 0
    last_trans: int = 0
    last_intro: int = 0


class Scheduler:
    """
    Owns the scheduler state and the random source.

    Every appender and composer returns the new SchedulerState and also
    stores it as ``self.state``; nothing else holds a reference to the
    pointers.
    """

    def __init__(
        self,
        catalog: Catalog,
        player: Player,
        rng: Optional[random.Random] = None,
        audio_dir: Optional[str] = None,
        skip_on_error: bool = False,
        playlist: Optional[TextIO] = None,
        state: Optional[SchedulerState] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            catalog: Validated segment catalog
            player: Blocking player; ``play`` returns False on failure
            rng: Random source (default: fresh unseeded ``random.Random``)
            audio_dir: Directory filenames are resolved against
                       (default: catalog.audio_dir, then AUDIO_DIR)
            skip_on_error: Log playback failures and keep going instead of raising
            playlist: Optional stream receiving one M3U line per segment
            state: Starting pointers (default: all zero)
            stop_event: Once set, remaining segments of the current block are
                        not played; the driver ends at the next step boundary
        """
        self.catalog = catalog
        self.player = player
        self.rng = rng if rng is not None else random.Random()
        self.audio_dir = audio_dir or catalog.audio_dir or AUDIO_DIR
        self.skip_on_error = skip_on_error
        self.playlist = playlist
        self.state = state if state is not None else SchedulerState()
        self.segments_played = 0
        self.segments_failed = 0
        self.stop_event = stop_event

    def _emit(self, category: SegmentCategory, index: int, filename: str) -> None:
        """Issue one blocking play request."""
        if self.stop_event is not None and self.stop_event.is_set():
            logger.debug(f"[SCHED] Stop requested, not playing {category} #{index}")
            return

        segment = Segment(
            category=category,
            index=index,
            filename=filename,
            path=os.path.join(self.audio_dir, filename),
        )
        if self.playlist is not None:
            print(segment.path, file=self.playlist, flush=True)

        logger.debug(f"[SCHED] {category} #{index}: {filename}")
        if self.player.play(segment.path):
            self.segments_played += 1
            return

        self.segments_failed += 1
        if not self.skip_on_error:
            raise PlaybackError(segment.path)
        logger.warning(f"[SCHED] Skipping unplayable {category}: {segment.path}")

    def _commit(self, state: SchedulerState) -> SchedulerState:
        self.state = state
        return state

    # Segment appenders

    def add_intro(self) -> SchedulerState:
        """Play an intro other than the last one."""
        idx = pick_next(self.rng, self.catalog.num_intros, self.state.last_intro, "intros")
        self._emit("intro", idx, self.catalog.intros[idx])
        return self._commit(replace(self.state, last_intro=idx))

    def add_trans(self) -> SchedulerState:
        """Play a transition other than the last one."""
        idx = pick_next(self.rng, self.catalog.num_trans, self.state.last_trans, "transitions")
        self._emit("transition", idx, self.catalog.transitions[idx])
        return self._commit(replace(self.state, last_trans=idx))

    def add_combo(self) -> SchedulerState:
        """Play a combo and mark its song as the last song played."""
        idx = pick_next(self.rng, self.catalog.num_combos, self.state.last_combo, "combos")
        self._emit("combo", idx, self.catalog.combos[idx])
        return self._commit(replace(
            self.state,
            last_combo=idx,
            last_song=self.catalog.combo_to_song[idx],
        ))

    def add_song(self) -> SchedulerState:
        """Play a song; if it has a combo, mark that combo as the last combo played."""
        idx = pick_next(self.rng, self.catalog.num_songs, self.state.last_song, "songs")
        self._emit("song", idx, self.catalog.songs[idx])
        combo_idx = self.catalog.song_to_combo[idx]
        if combo_idx is None:
            return self._commit(replace(self.state, last_song=idx))
        return self._commit(replace(self.state, last_song=idx, last_combo=combo_idx))

    # Block composers

    def _song_run_length(self) -> int:
        return self.rng.randint(self.catalog.min_b1_songs, self.catalog.max_b1_songs)

    def _play_songs(self, count: int) -> SchedulerState:
        for _ in range(count):
            self.add_song()
        return self.state

    def play_b1a(self) -> SchedulerState:
        """Chatty block led by a combo: transition, combo, then a run of songs."""
        count = self._song_run_length()
        logger.info(f"[SCHED] Block b1a: transition, combo, {count} songs")
        self.add_trans()
        self.add_combo()
        return self._play_songs(count)

    def play_b1b(self) -> SchedulerState:
        """Chatty block led by an intro: transition, intro, then a run of songs."""
        count = self._song_run_length()
        logger.info(f"[SCHED] Block b1b: transition, intro, {count} songs")
        self.add_trans()
        self.add_intro()
        return self._play_songs(count)

    def play_b1(self) -> SchedulerState:
        """Either chatty block, with equal probability."""
        if self.rng.random() < 0.5:
            return self.play_b1a()
        return self.play_b1b()

    def _play_combo_song(self) -> SchedulerState:
        logger.info("[SCHED] Block b2: combo, 1 song")
        self.add_combo()
        return self.add_song()

    def _play_intro_song(self) -> SchedulerState:
        logger.info("[SCHED] Block b2: intro, 1 song")
        self.add_intro()
        return self.add_song()

    def play_b2(self) -> SchedulerState:
        """Variable energy block: one of two chatty blocks or two quiet ones."""
        branches = (self.play_b1a, self.play_b1b, self._play_combo_song, self._play_intro_song)
        return branches[self.rng.randint(0, 3)]()
