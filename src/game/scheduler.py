# src/game/scheduler.py
from __future__ import annotations
import logging
from typing import Callable, Optional

from .config import SPAWN_BANDS, SPAWN_INTERVAL_MIN_MS

log = logging.getLogger(__name__)


def spawn_interval_ms(score: int) -> int:
    """Delay before the next pair, from the score at re-arm time."""
    for upper, interval in SPAWN_BANDS:
        if score < upper:
            return interval
    return SPAWN_INTERVAL_MIN_MS


class SpawnScheduler:
    """
    One-shot spawn timer driven by simulated time instead of a host event loop.

    The owner calls advance(ms) once per tick. When the countdown reaches zero
    `on_fire(session_id)` runs; it returns the next delay to re-arm with, or
    None to leave the timer disarmed. Every arm is tagged with the session it
    belongs to, so a firing left over from an earlier session is dropped.
    """
    def __init__(self, on_fire: Callable[[int], Optional[float]]):
        self._on_fire = on_fire
        self._remaining_ms: Optional[float] = None
        self._session_id: Optional[int] = None
        self.current_session_id: Optional[int] = None
        self.fired = 0

    @property
    def armed(self) -> bool:
        return self._remaining_ms is not None

    @property
    def remaining_ms(self) -> Optional[float]:
        return self._remaining_ms

    def schedule_spawn(self, after_ms: float, session_id: int):
        if after_ms < 0:
            raise ValueError(f"after_ms must be >= 0, got {after_ms!r}")
        self._remaining_ms = float(after_ms)
        self._session_id = session_id
        self.current_session_id = session_id

    def cancel(self):
        self._remaining_ms = None
        self._session_id = None

    def reset(self, session_id: int):
        """Drop any in-flight timer and adopt a new owning session."""
        self.cancel()
        self.current_session_id = session_id
        self.fired = 0

    def advance(self, elapsed_ms: float):
        """Count down; run every firing that falls due, carrying leftover time."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms!r}")
        if self._remaining_ms is None:
            return

        self._remaining_ms -= elapsed_ms
        while self._remaining_ms is not None and self._remaining_ms <= 0.0:
            overshoot = -self._remaining_ms
            owner = self._session_id
            self._remaining_ms = None
            self._session_id = None

            if owner != self.current_session_id:
                log.debug("dropping stale spawn timer from session %s", owner)
                return

            self.fired += 1
            next_ms = self._on_fire(owner)
            if next_ms is None:
                return
            # the callback may have re-armed or cancelled through us
            if self._remaining_ms is None and self.current_session_id == owner:
                self._remaining_ms = float(next_ms) - overshoot
                self._session_id = owner
