# src/game/entities.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import pygame
from .config import PLATFORM_HEIGHT, COIN_RADIUS


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """Accepts a Difficulty or a case-insensitive name ("Easy", "hard", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {names})") from None


class GameState(str, Enum):
    START_SCREEN = "start_screen"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"


class ObstacleKind(str, Enum):
    STATIC = "static"
    MOVING_VERTICAL = "moving_vertical"
    MOVING_HORIZONTAL = "moving_horizontal"


def bounce_step(pos: float, speed: float, direction: int, lo: float, hi: float) -> Tuple[float, int]:
    """
    One step of reflective motion inside [lo, hi] (inclusive).
    Bounce-then-move: if the next position would leave the range, the direction
    is reversed first and the move is taken in the new direction. The result is
    clamped, so a range narrower than one step still holds the mover.
    """
    candidate = pos + speed * direction
    if candidate > hi:
        direction = -1
    elif candidate < lo:
        direction = 1
    return min(max(pos + speed * direction, lo), hi), direction


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float = PLATFORM_HEIGHT

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_ceiling(self) -> bool:
        return self.y == 0

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


@dataclass
class Coin:
    x: float   # centre
    y: float
    radius: float = COIN_RADIUS


@dataclass
class Obstacle:
    x: float
    y: float
    width: float
    height: float

    kind = ObstacleKind.STATIC

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def scroll(self, dx: float):
        self.x -= dx

    def update_movement(self):
        """Static obstacles only travel with the world."""


@dataclass
class StaticObstacle(Obstacle):
    pass


@dataclass
class VerticalMover(Obstacle):
    speed: float = 0.0
    direction: int = 1
    min_y: float = 0.0   # travel range of the top edge, fixed for the obstacle's life
    max_y: float = 0.0

    kind = ObstacleKind.MOVING_VERTICAL

    def update_movement(self):
        self.y, self.direction = bounce_step(self.y, self.speed, self.direction, self.min_y, self.max_y)


@dataclass
class HorizontalMover(Obstacle):
    speed: float = 0.0
    direction: int = 1
    min_x: float = 0.0   # travel range of the left edge, world coordinates
    max_x: float = 0.0

    kind = ObstacleKind.MOVING_HORIZONTAL

    def scroll(self, dx: float):
        # the range is anchored to the platform, so it travels with the world
        self.x -= dx
        self.min_x -= dx
        self.max_x -= dx

    def update_movement(self):
        self.x, self.direction = bounce_step(self.x, self.speed, self.direction, self.min_x, self.max_x)
