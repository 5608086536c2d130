# src/env/observations.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np

from src.game.config import HEIGHT, PLAYER_H, MAX_VY, OBS_PROBE_OFFSETS
from src.game.entities import Obstacle, Platform

OBS_SIZE = 3 + 4 * len(OBS_PROBE_OFFSETS)
# Horizontal window around a probe x within which an obstacle counts as "near"
DANGER_WINDOW_PX: int = 30

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_top_y(y_top: float, height: float = HEIGHT) -> float:
    """Normalize a top coordinate into [0,1] using [0, height-PLAYER_H]."""
    denom = max(1.0, height - PLAYER_H)
    return _clamp01(y_top / denom)

def _norm_vy(vy: float, vy_max: float = MAX_VY) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max

def surfaces_at_x(platforms: Sequence[Platform], x: float,
                  height: float = HEIGHT) -> Tuple[Optional[float], Optional[float]]:
    """
    Returns (ceiling_y, floor_y) at vertical ray x.
    - ceiling_y: lowest underside among platforms in the upper half covering x.
    - floor_y  : highest top among platforms in the lower half covering x.
    None if absent.
    """
    ceil_y: Optional[float] = None
    floor_y: Optional[float] = None
    mid = height * 0.5

    for p in platforms:
        # strict left<=x<right to avoid double-counting vertical edges
        if p.x <= x < p.right:
            if p.y + p.height / 2 < mid:
                ceil_y = p.bottom if ceil_y is None else max(ceil_y, p.bottom)
            else:
                floor_y = p.y if floor_y is None else min(floor_y, p.y)
    return ceil_y, floor_y

def danger_near_x(obstacles: Iterable[Obstacle], x: float,
                  window_px: float = DANGER_WINDOW_PX,
                  height: float = HEIGHT) -> Tuple[int, int]:
    """(has_top, has_bot) as 0/1: obstacles whose x-span comes within window_px of x, by half."""
    has_top = 0
    has_bot = 0
    mid = height * 0.5
    for o in obstacles:
        if o.x - window_px <= x <= o.right + window_px:
            if o.y + o.height / 2 < mid:
                has_top = 1
            else:
                has_bot = 1
        if has_top and has_bot:
            break
    return has_top, has_bot

def build_observation(player, platforms: Sequence[Platform], obstacles: Sequence[Obstacle],
                      height: float = HEIGHT,
                      probe_offsets: Tuple[int, ...] = OBS_PROBE_OFFSETS) -> np.ndarray:
    """
    Returns a fixed (15,) float32 vector:
      [ y_top_norm, vy_norm, grav,
        ceil@120, floor@120, dangerTop@120, dangerBot@120,
        ceil@240, floor@240, dangerTop@240, dangerBot@240,
        ceil@360, floor@360, dangerTop@360, dangerBot@360 ]
    - ceil/floor normalized to [0,1] in screen space;
      sentinel: ceil=0.0 if no ceiling, floor=1.0 if no floor.
    """
    grav = 1.0 if player.gravity > 0 else -1.0
    feats: List[float] = [_norm_top_y(float(player.y), height), _norm_vy(float(player.vy)), grav]

    base_x = player.x + player.width / 2
    for dx in probe_offsets:
        px = base_x + dx
        ceil_y, floor_y = surfaces_at_x(platforms, px, height)
        ceil_norm = 0.0 if ceil_y is None else _clamp01(ceil_y / float(height))
        floor_norm = 1.0 if floor_y is None else _clamp01(floor_y / float(height))
        dt, db = danger_near_x(obstacles, px, height=height)
        feats.extend([ceil_norm, floor_norm, float(dt), float(db)])

    return np.asarray(feats, dtype=np.float32)
