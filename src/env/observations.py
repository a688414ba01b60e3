# src/env/observations.py
from __future__ import annotations
from typing import Optional, Tuple
import numpy as np

from src.game.level import Pillar
from src.game.session import GameSession

OBS_SIZE = 7
VY_NORM = 20.0      # |vy| at which vy_norm saturates (px/tick)
SPEED_NORM = 30.0   # scroll speed at which speed_norm saturates (px/tick)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _clamp11(x: float) -> float:
    return -1.0 if x < -1.0 else (1.0 if x > 1.0 else x)

def next_pair(session: GameSession) -> Optional[Pillar]:
    """Top member of the first pair still ahead of (or under) the flyer."""
    fx = session.flyer.x
    for p in session.pillars:
        if p.side == "top" and not p.passed and p.trailing_edge >= fx:
            return p
    return None

def _gap_span(session: GameSession, top: Optional[Pillar]) -> Tuple[float, float]:
    cfg = session.cfg
    if top is None:
        return cfg.ceiling_y, cfg.ground_y   # no pair ahead: whole playable band is open
    return top.h, top.h + cfg.gap_h


def build_observation(session: GameSession) -> np.ndarray:
    """
    Returns a fixed (7,) float32 vector:
      [ y_norm, vy_norm, next_dx_norm, gap_top_norm, gap_bottom_norm, speed_norm, has_next ]
    - y_norm in [0,1] over [0, field_h - flyer_h] (top-based y)
    - vy_norm in [-1,1]
    - next_dx_norm: distance from flyer x to the next pair's trailing edge / field_w;
      sentinel 1.0 when nothing is ahead
    - gap_top/bottom_norm: the opening of the next pair in screen space
    - has_next: 0.0 / 1.0
    """
    cfg = session.cfg
    f = session.flyer

    y_norm = _clamp01(f.y / max(1.0, cfg.field_h - f.h))
    vy_norm = _clamp11(f.vy / VY_NORM)

    top = next_pair(session)
    if top is None:
        dx_norm = 1.0
    else:
        dx_norm = _clamp01((top.trailing_edge - f.x) / cfg.field_w)
    gap_top, gap_bot = _gap_span(session, top)

    feats = [
        y_norm,
        vy_norm,
        dx_norm,
        _clamp01(gap_top / cfg.field_h),
        _clamp01(gap_bot / cfg.field_h),
        _clamp01(session.speed / SPEED_NORM),
        0.0 if top is None else 1.0,
    ]
    return np.asarray(feats, dtype=np.float32)
