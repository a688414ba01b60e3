# src/game/events.py
"""
Fire-and-forget notifications for the audio / HUD collaborators.

Listeners run synchronously inside jump()/tick(); a listener that raises is
logged and skipped so it can never stall the simulation.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

log = logging.getLogger(__name__)


class GameEvent(str, Enum):
    JUMP = "jump"
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"
    SCORED = "scored"


@dataclass(frozen=True)
class EventPayload:
    event: GameEvent
    session_id: int
    score: int


Listener = Callable[[EventPayload], None]


class EventDispatcher:
    def __init__(self):
        self._subscribers: Dict[GameEvent, List[Listener]] = {}

    def subscribe(self, event: GameEvent, callback: Listener) -> None:
        subs = self._subscribers.setdefault(event, [])
        if callback not in subs:
            subs.append(callback)

    def unsubscribe(self, event: GameEvent, callback: Listener) -> None:
        subs = self._subscribers.get(event, [])
        if callback in subs:
            subs.remove(callback)

    def emit(self, payload: EventPayload) -> None:
        for callback in list(self._subscribers.get(payload.event, ())):
            try:
                callback(payload)
            except Exception:
                name = getattr(callback, "__name__", repr(callback))
                log.exception("listener %s failed on %s", name, payload.event.value)
