# src/game/session.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import EngineConfig
from .events import EventDispatcher, EventPayload, GameEvent
from .level import Box, Pillar, PillarGen, advance_pillars, first_hit
from .player import Flyer
from .scheduler import SpawnScheduler, spawn_interval_ms

log = logging.getLogger(__name__)


class GamePhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PillarView:
    x: float
    y: float
    w: float
    h: float
    side: str


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only state handed to the renderer once per frame."""
    phase: GamePhase
    score: int
    speed: float
    flyer: Box
    pillars: Tuple[PillarView, ...]
    session_id: int
    ticks: int
    end_cause: Optional[str]


class GameSession:
    """
    One game: owns the flyer, the live pillars, the spawn timer and the score.

    Inbound commands are jump() and tick(). Lifecycle:
        IDLE --jump--> RUNNING --terminal--> GAME_OVER --jump--> RUNNING
    A restart is the same reset as the first start.
    """
    def __init__(self,
                 cfg: Optional[EngineConfig] = None,
                 seed: Optional[int] = None,
                 events: Optional[EventDispatcher] = None):
        self.cfg = cfg if cfg is not None else EngineConfig()
        self.events = events if events is not None else EventDispatcher()
        self.gen = PillarGen(self.cfg, seed)
        self.scheduler = SpawnScheduler(self._on_spawn_timer)

        self.phase = GamePhase.IDLE
        self.flyer = self._fresh_flyer()
        self.pillars: List[Pillar] = []
        self.score = 0
        self.ticks = 0
        self.elapsed_ms = 0.0
        self.session_id = 0
        self.end_cause: Optional[str] = None

    @property
    def seed(self) -> int:
        return self.gen.seed

    @property
    def running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def speed(self) -> float:
        """Scroll speed, always derived from the current score."""
        return self.cfg.base_speed + self.score * self.cfg.speed_increase_rate

    # -------------------- Commands --------------------

    def jump(self):
        if self.phase is not GamePhase.RUNNING:
            self._start()
            return
        self.flyer.jump(self.cfg.jump_strength)
        self._emit(GameEvent.JUMP)

    def tick(self):
        if self.phase is not GamePhase.RUNNING:
            return
        cfg = self.cfg
        self.ticks += 1
        self.elapsed_ms += cfg.frame_ms

        self.scheduler.advance(cfg.frame_ms)

        self.flyer.update_physics(cfg.gravity)

        self.pillars, scored = advance_pillars(self.pillars, self.speed, self.flyer.x)
        if scored:
            self.score += scored
            self._emit(GameEvent.SCORED)

        if first_hit(self.flyer.bounds(), self.pillars) is not None:
            self.end_session("obstacle")
            return

        f = self.flyer
        if f.y + f.h >= cfg.ground_y:
            self.end_session("ground")
        elif f.y <= cfg.ceiling_y:
            self.end_session("ceiling")

    def end_session(self, cause: str):
        """Running -> GameOver. Repeated calls are no-ops."""
        if self.phase is not GamePhase.RUNNING:
            return
        self.phase = GamePhase.GAME_OVER
        self.end_cause = cause
        self.scheduler.cancel()
        log.info("session %d ended (%s) score=%d ticks=%d", self.session_id, cause, self.score, self.ticks)
        self._emit(GameEvent.SESSION_ENDED)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            score=self.score,
            speed=self.speed,
            flyer=self.flyer.bounds(),
            pillars=tuple(PillarView(p.x, p.y, p.w, p.h, p.side) for p in self.pillars),
            session_id=self.session_id,
            ticks=self.ticks,
            end_cause=self.end_cause,
        )

    # -------------------- Internals --------------------

    def _fresh_flyer(self) -> Flyer:
        cfg = self.cfg
        return Flyer(x=cfg.flyer_x, y=cfg.field_h / 2, w=cfg.flyer_w, h=cfg.flyer_h, vy=0.0)

    def _start(self):
        # everything below is swapped in one call; no tick can see a partial reset
        self.session_id += 1
        self.scheduler.reset(self.session_id)
        self.flyer = self._fresh_flyer()
        self.pillars = []
        self.score = 0
        self.ticks = 0
        self.elapsed_ms = 0.0
        self.end_cause = None
        self.phase = GamePhase.RUNNING
        self.scheduler.schedule_spawn(self.cfg.first_spawn_delay_ms, self.session_id)
        log.info("session %d started (seed=%s)", self.session_id, self.seed)
        self._emit(GameEvent.SESSION_STARTED)

    def _on_spawn_timer(self, session_id: int) -> Optional[float]:
        if self.phase is not GamePhase.RUNNING or session_id != self.session_id:
            return None
        top, bottom = self.gen.spawn_pair()
        self.pillars.extend((top, bottom))
        interval = spawn_interval_ms(self.score)
        log.debug("pair %d gap_y=%.1f next in %d ms", top.pair_id, top.h, interval)
        return interval

    def _emit(self, event: GameEvent):
        self.events.emit(EventPayload(event=event, session_id=self.session_id, score=self.score))
