# src/game/world.py
"""
World state and the per-frame simulation step.

`step` never mutates the world it receives: it advances a copy and hands it
back together with the outcome, so the caller decides whether to commit it.
"""
from __future__ import annotations
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple
from .config import WIDTH, HEIGHT, SCROLL_SPEED
from .chunks import Chunk, chunks_for
from .collision import collect_coins, hits_obstacle, out_of_bounds
from .entities import Coin, Difficulty, Obstacle, Platform
from .level import SpawnCursor, initial_platforms, scroll, spawn_next_chunk, update_obstacles
from .player import Player


class StepOutcome(Enum):
    CONTINUE = "continue"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"


@dataclass
class World:
    player: Player
    platforms: List[Platform]
    coins: List[Coin]
    obstacles: List[Obstacle]
    cursor: SpawnCursor
    difficulty: Difficulty
    chunks: Tuple[Chunk, ...]
    width: float = WIDTH
    height: float = HEIGHT
    score: int = 0
    frames: int = 0
    distance_px: float = 0.0
    death_cause: Optional[str] = None   # "obstacle" | "oob" | None

    @classmethod
    def fresh(cls, difficulty=Difficulty.MEDIUM, width: float = WIDTH, height: float = HEIGHT,
              chunks: Optional[Tuple[Chunk, ...]] = None) -> "World":
        """A brand new run: player at the start, two rails, nothing else."""
        difficulty = Difficulty.parse(difficulty)
        platforms = initial_platforms(width, height)
        return cls(
            player=Player.spawn(height),
            platforms=platforms,
            coins=[],
            obstacles=[],
            cursor=SpawnCursor(frontier=platforms[-1].right),
            difficulty=difficulty,
            chunks=chunks_for(difficulty) if chunks is None else tuple(chunks),
            width=width,
            height=height,
        )

    @property
    def scroll_speed(self) -> float:
        return SCROLL_SPEED[self.difficulty.value]

    def copy(self) -> "World":
        return replace(
            self,
            player=replace(self.player),
            platforms=[replace(p) for p in self.platforms],
            coins=[replace(c) for c in self.coins],
            obstacles=[replace(o) for o in self.obstacles],
            cursor=replace(self.cursor),
        )

    def level_cleared(self) -> bool:
        """Every chunk consumed and nothing left ahead of the player."""
        return self.cursor.exhausted and not any(p.x > self.player.x for p in self.platforms)


def step(world: World, rng: random.Random) -> Tuple[StepOutcome, World]:
    """Advance one frame. Returns the outcome and the next world."""
    w = world.copy()
    speed = w.scroll_speed

    w.platforms, w.obstacles = scroll(w.platforms, w.coins, w.obstacles, w.cursor, speed)
    update_obstacles(w.obstacles)

    new_platforms, new_coins, new_obstacles = spawn_next_chunk(
        w.chunks, w.cursor, rng, w.width, w.height
    )
    w.platforms.extend(new_platforms)
    w.coins.extend(new_coins)
    w.obstacles.extend(new_obstacles)

    p = w.player
    p.update_rotation()
    p.update_physics()
    p.resolve_collisions_with_platforms(w.platforms)

    if out_of_bounds(p, w.height):
        w.death_cause = "oob"
    elif hits_obstacle(p, w.obstacles):
        w.death_cause = "obstacle"

    w.coins, collected = collect_coins(p, w.coins)
    w.score += collected
    w.frames += 1
    w.distance_px += speed

    if w.level_cleared():
        w.death_cause = None
        return StepOutcome.LEVEL_COMPLETE, w
    if w.death_cause is not None:
        return StepOutcome.GAME_OVER, w
    return StepOutcome.CONTINUE, w
