"""
Top-level broadcast driver.

One coin at startup fixes the alternation pattern for the whole run:
either every step plays a chatty block then a variable block, or the
other way round. Steps repeat for a bounded count or until cancelled.
"""

import itertools
import logging
import threading
from typing import Callable, Iterator, Optional

from onair.scheduler import Scheduler, SchedulerState

logger = logging.getLogger(__name__)

PATTERN_B1_THEN_B2 = "b1_then_b2"
PATTERN_B2_THEN_B1 = "b2_then_b1"


def choose_pattern(scheduler: Scheduler) -> str:
    """Flip the session coin deciding which block style leads each step."""
    if scheduler.rng.random() < 0.5:
        return PATTERN_B1_THEN_B2
    return PATTERN_B2_THEN_B1


def composed_step(scheduler: Scheduler, pattern: str) -> Callable[[], SchedulerState]:
    """Return the function that plays one step of the given pattern."""
    if pattern == PATTERN_B1_THEN_B2:
        first, second = scheduler.play_b1, scheduler.play_b2
    elif pattern == PATTERN_B2_THEN_B1:
        first, second = scheduler.play_b2, scheduler.play_b1
    else:
        raise ValueError(f"Unknown alternation pattern: {pattern!r}")

    def step() -> SchedulerState:
        first()
        return second()

    return step


def schedule_steps(scheduler: Scheduler, play_len: Optional[int] = None) -> Iterator[SchedulerState]:
    """
    Lazily play composed steps, yielding the state after each one.

    Args:
        scheduler: Scheduler owning the state and random source
        play_len: Number of steps to play, or None to play forever

    Yields:
        SchedulerState after each completed step
    """
    if play_len is not None and play_len < 0:
        raise ValueError(f"play_len must be non-negative, got {play_len}")

    pattern = choose_pattern(scheduler)
    logger.info(f"[DRIVER] Alternation pattern for this session: {pattern}")
    step = composed_step(scheduler, pattern)

    counter = itertools.count() if play_len is None else range(play_len)
    for n in counter:
        state = step()
        logger.debug(f"[DRIVER] Step {n + 1} complete: {state}")
        yield state


def run(
    scheduler: Scheduler,
    play_len: Optional[int] = None,
    stop_event: Optional[threading.Event] = None,
) -> int:
    """
    Play the broadcast.

    Blocks until ``play_len`` steps have played, or, when unbounded, until
    ``stop_event`` is set. The event is checked between steps.

    Args:
        scheduler: Scheduler to drive
        play_len: Number of steps, or None for an endless broadcast
        stop_event: Optional cancellation hook

    Returns:
        Number of completed steps

    Raises:
        PlaybackError: If a segment fails and the scheduler does not skip errors
    """
    if play_len is None:
        logger.info("[DRIVER] Starting unbounded broadcast")
    else:
        logger.info(f"[DRIVER] Starting broadcast of {play_len} steps")

    completed = 0
    if stop_event is not None and stop_event.is_set():
        logger.info("[DRIVER] Stop requested before the first step")
        return completed

    for _ in schedule_steps(scheduler, play_len):
        completed += 1
        if stop_event is not None and stop_event.is_set():
            logger.info(f"[DRIVER] Stop requested after {completed} steps")
            break

    logger.info(f"[DRIVER] Broadcast ended after {completed} steps "
                f"({scheduler.segments_played} segments played, "
                f"{scheduler.segments_failed} failed)")
    return completed
