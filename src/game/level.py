# src/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple
from .config import (
    PLATFORM_HEIGHT, COIN_RADIUS, COIN_SPACING, COIN_SAFE_MARGIN,
    SPAWN_LOOKAHEAD, START_PLATFORM_OVERHANG
)
from .chunks import Chunk, ObstacleSpec
from .entities import (
    Coin, Obstacle, ObstacleKind, Platform,
    StaticObstacle, VerticalMover, HorizontalMover
)

logger = logging.getLogger(__name__)


@dataclass
class SpawnCursor:
    chunk_index: int = 0
    frontier: float = 0.0      # right edge of the last materialized platform
    exhausted: bool = False    # set once every chunk has been consumed


def initial_platforms(viewport_width: float, viewport_height: float) -> List[Platform]:
    """Floor and ceiling rails spanning the whole starting viewport."""
    x = -START_PLATFORM_OVERHANG
    w = viewport_width + 2 * START_PLATFORM_OVERHANG
    return [
        Platform(x, viewport_height - PLATFORM_HEIGHT, w),
        Platform(x, 0, w),
    ]


def scroll(platforms: List[Platform], coins: List[Coin], obstacles: List[Obstacle],
           cursor: SpawnCursor, dx: float) -> Tuple[List[Platform], List[Obstacle]]:
    """
    Move everything left by dx. Returns the platforms and obstacles still on
    screen; coins are pruned later, together with collection.
    """
    for p in platforms:
        p.x -= dx
    for c in coins:
        c.x -= dx
    for o in obstacles:
        o.scroll(dx)
    cursor.frontier -= dx
    return ([p for p in platforms if p.right > 0],
            [o for o in obstacles if o.right > 0])


def update_obstacles(obstacles: List[Obstacle]):
    for o in obstacles:
        o.update_movement()


def _coins_for_gap(platform: Platform, gap: float, rng: random.Random,
                   viewport_height: float) -> List[Coin]:
    """Evenly spaced coins across the gap leading up to `platform`."""
    n = int(gap // COIN_SPACING)
    safe_top = PLATFORM_HEIGHT + COIN_SAFE_MARGIN
    safe_bottom = viewport_height - PLATFORM_HEIGHT - COIN_SAFE_MARGIN
    start = platform.x - gap
    return [
        Coin(start + i * (gap / (n + 1)), rng.uniform(safe_top, safe_bottom), COIN_RADIUS)
        for i in range(1, n + 1)
    ]


def _obstacle_on(platform: Platform, spec: ObstacleSpec, viewport_height: float) -> Obstacle:
    if platform.is_ceiling:
        y = platform.bottom              # hanging below the ceiling
    else:
        y = platform.y - spec.height     # resting on top
    x = platform.x + spec.offset_x

    if spec.kind is ObstacleKind.MOVING_VERTICAL:
        if platform.is_ceiling:
            lo, hi = platform.bottom, viewport_height - PLATFORM_HEIGHT - spec.height
        else:
            lo, hi = PLATFORM_HEIGHT, platform.y - spec.height
        return VerticalMover(x, y, spec.width, spec.height,
                             speed=spec.speed or 0.0, direction=1, min_y=lo, max_y=hi)
    if spec.kind is ObstacleKind.MOVING_HORIZONTAL:
        return HorizontalMover(x, y, spec.width, spec.height,
                               speed=spec.speed or 0.0, direction=1,
                               min_x=platform.x, max_x=platform.right - spec.width)
    return StaticObstacle(x, y, spec.width, spec.height)


def materialize_chunk(chunk: Chunk, cursor: SpawnCursor, rng: random.Random,
                      viewport_height: float) -> Tuple[List[Platform], List[Coin], List[Obstacle]]:
    """Turn one chunk into live entities, advancing the cursor frontier."""
    platforms: List[Platform] = []
    coins: List[Coin] = []
    obstacles: List[Obstacle] = []
    floor_y = viewport_height - PLATFORM_HEIGHT

    for spec in chunk:
        cursor.frontier += spec.gap
        if spec.y is not None:
            y = spec.y
        else:
            y = 0 if rng.random() > 0.5 else floor_y
        plat = Platform(cursor.frontier, y, spec.width)
        platforms.append(plat)
        coins.extend(_coins_for_gap(plat, spec.gap, rng, viewport_height))
        obstacles.extend(_obstacle_on(plat, o, viewport_height) for o in spec.obstacles)
        cursor.frontier += spec.width

    return platforms, coins, obstacles


def spawn_next_chunk(chunks: Sequence[Chunk], cursor: SpawnCursor, rng: random.Random,
                     viewport_width: float, viewport_height: float
                     ) -> Tuple[List[Platform], List[Coin], List[Obstacle]]:
    """
    At most one chunk per call, and only once the frontier is within the
    lookahead margin. Flags the cursor as exhausted when nothing is left.
    """
    if cursor.chunk_index < len(chunks):
        if cursor.frontier >= viewport_width + SPAWN_LOOKAHEAD:
            return [], [], []
        chunk = chunks[cursor.chunk_index]
        cursor.chunk_index += 1
        logger.debug("spawning chunk %d/%d at x=%.1f", cursor.chunk_index, len(chunks), cursor.frontier)
        return materialize_chunk(chunk, cursor, rng, viewport_height)

    if not cursor.exhausted:
        cursor.exhausted = True
        logger.debug("level exhausted after %d chunks", len(chunks))
    return [], [], []
