# src/game/player.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Optional
from .config import (
    PLAYER_X, PLAYER_W, PLAYER_H, GRAVITY, FLIP_VELOCITY, ROTATION_EASE, ROTATION_SNAP
)
from .entities import Platform

@dataclass
class Player:
    """
    Player with gravity flip, advanced once per frame:
    - gravity > 0 pulls down, gravity < 0 pulls up; |gravity| never changes
    - target_rotation gains pi on every flip, visual_rotation eases toward it
    """
    x: float
    y: float                 # TOP-based
    vy: float = 0.0
    gravity: float = GRAVITY
    visual_rotation: float = 0.0
    target_rotation: float = 0.0
    width: float = PLAYER_W
    height: float = PLAYER_H

    @classmethod
    def spawn(cls, viewport_height: float) -> "Player":
        return cls(x=float(PLAYER_X), y=viewport_height / 2)

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    def flip(self):
        """Invert gravity and push off toward the new "down"."""
        self.vy = FLIP_VELOCITY if self.gravity > 0 else -FLIP_VELOCITY
        self.gravity = -self.gravity
        self.target_rotation += math.pi

    def update_rotation(self):
        diff = self.target_rotation - self.visual_rotation
        if abs(diff) > ROTATION_SNAP:
            self.visual_rotation += diff * ROTATION_EASE
        else:
            self.visual_rotation = self.target_rotation

    def update_physics(self):
        """Symplectic Euler, one frame."""
        self.vy += self.gravity
        self.y += self.vy

    def resolve_collisions_with_platforms(self, platforms: List[Platform]) -> Optional[Platform]:
        """
        One-way vertical resolution. Platforms are tested in list order and the
        first contact wins. Returns the platform touched, if any.
        """
        for p in platforms:
            if not (self.x < p.right and self.right > p.x):
                continue
            if self.vy > 0 and p.y <= self.bottom <= p.bottom:
                # landing on top
                self.y = p.y - self.height
                self.vy = 0.0
                return p
            if self.vy < 0 and p.y <= self.y <= p.bottom:
                # ceiling contact from below
                self.y = p.bottom
                self.vy = 0.0
                return p
        return None
