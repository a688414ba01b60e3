# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Flyer:
    """
    The falling actor. x never changes during a session; y is free and only
    watched by the collision checks (never clamped).
    """
    x: float
    y: float
    w: float
    h: float
    vy: float = 0.0

    def bounds(self):
        return self.x, self.y, self.w, self.h

    def jump(self, strength: float):
        """Overwrite vertical velocity with the (negative) impulse."""
        self.vy = strength

    def update_physics(self, gravity: float):
        """Semi-implicit Euler: velocity first, then position. One step per tick."""
        self.vy += gravity
        self.y += self.vy
