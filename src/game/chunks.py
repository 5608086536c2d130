# src/game/chunks.py
"""
Authored level content.

A level is an ordered tuple of chunks; a chunk is an ordered tuple of platform
specs that the spawner materializes together in a single step. Positions are
relative: each platform starts `gap` px after the previous one ended, and
obstacles are placed `offset_x` px from the start of their platform.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from .entities import Difficulty, ObstacleKind

S = ObstacleKind.STATIC
V = ObstacleKind.MOVING_VERTICAL
H = ObstacleKind.MOVING_HORIZONTAL


@dataclass(frozen=True)
class ObstacleSpec:
    offset_x: float
    width: float
    height: float
    kind: ObstacleKind = ObstacleKind.STATIC
    speed: Optional[float] = None


@dataclass(frozen=True)
class PlatformSpec:
    gap: float
    width: float
    y: Optional[float] = None          # None -> random rail (ceiling or floor)
    obstacles: Tuple[ObstacleSpec, ...] = ()


Chunk = Tuple[PlatformSpec, ...]


EASY_CHUNKS: Tuple[Chunk, ...] = (
    (
        PlatformSpec(200, 300),
        PlatformSpec(150, 250, y=300),
        PlatformSpec(150, 350, obstacles=(ObstacleSpec(150, 40, 40, S),)),
        PlatformSpec(200, 400, obstacles=(ObstacleSpec(20, 60, 20, H, 1.5),)),
    ),
    (
        PlatformSpec(250, 450, obstacles=(ObstacleSpec(200, 50, 60, V, 1.5),)),
        PlatformSpec(280, 500),
    ),
    (
        PlatformSpec(180, 250, y=350),
        PlatformSpec(180, 250, y=250),
        PlatformSpec(200, 300, obstacles=(ObstacleSpec(100, 30, 30, S),)),
        PlatformSpec(180, 350, obstacles=(ObstacleSpec(20, 80, 20, H, 2),)),
    ),
)

MEDIUM_CHUNKS: Tuple[Chunk, ...] = (
    (
        PlatformSpec(150, 200, obstacles=(ObstacleSpec(80, 40, 40, S),)),
        PlatformSpec(160, 280, obstacles=(ObstacleSpec(10, 50, 20, H, 2.5),)),
        PlatformSpec(150, 220, y=300, obstacles=(ObstacleSpec(110, 50, 80, V, 2),)),
        PlatformSpec(160, 200),
    ),
    (
        PlatformSpec(200, 350),
        PlatformSpec(150, 150, obstacles=(ObstacleSpec(50, 50, 50, S),)),
        PlatformSpec(150, 150, y=400),
        PlatformSpec(220, 400, obstacles=(ObstacleSpec(180, 60, 90, V, 2.5),)),
    ),
    (
        PlatformSpec(120, 150, y=200),
        PlatformSpec(120, 150, y=400),
        PlatformSpec(120, 400, obstacles=(
            ObstacleSpec(150, 40, 40, S),
            ObstacleSpec(20, 70, 20, H, 3),
        )),
    ),
)

HARD_CHUNKS: Tuple[Chunk, ...] = (
    (
        PlatformSpec(120, 100, obstacles=(ObstacleSpec(30, 40, 60, V, 3),)),
        PlatformSpec(130, 220, y=300, obstacles=(ObstacleSpec(10, 40, 20, H, 4),)),
        PlatformSpec(120, 100, obstacles=(ObstacleSpec(30, 40, 40, S),)),
        PlatformSpec(130, 120),
        PlatformSpec(120, 100),
    ),
    (
        PlatformSpec(100, 150, y=450),
        PlatformSpec(100, 150, y=150),
        PlatformSpec(100, 250, obstacles=(
            ObstacleSpec(50, 50, 100, V, 3.5),
            ObstacleSpec(150, 50, 20, H, 3),
        )),
    ),
    (
        PlatformSpec(150, 250),
        PlatformSpec(100, 100, obstacles=(ObstacleSpec(20, 60, 60, S),)),
        PlatformSpec(100, 220, y=300, obstacles=(ObstacleSpec(10, 60, 20, H, 4.5),)),
        PlatformSpec(180, 120, obstacles=(ObstacleSpec(40, 40, 40, S),)),
    ),
    (
        PlatformSpec(80, 80, obstacles=(ObstacleSpec(20, 40, 40, V, 4),)),
        PlatformSpec(80, 80, y=200),
        PlatformSpec(80, 180, obstacles=(ObstacleSpec(10, 50, 20, H, 5),)),
        PlatformSpec(80, 80, y=400),
        PlatformSpec(80, 80),
    ),
)

LEVEL_CHUNKS: Dict[Difficulty, Tuple[Chunk, ...]] = {
    Difficulty.EASY: EASY_CHUNKS,
    Difficulty.MEDIUM: MEDIUM_CHUNKS,
    Difficulty.HARD: HARD_CHUNKS,
}


def chunks_for(difficulty) -> Tuple[Chunk, ...]:
    return LEVEL_CHUNKS[Difficulty.parse(difficulty)]
