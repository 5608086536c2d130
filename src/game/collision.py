# src/game/collision.py
from __future__ import annotations
import math
from typing import Iterable, List, Tuple
from .entities import Coin, Obstacle
from .player import Player


def aabb_overlap(ax: float, ay: float, aw: float, ah: float,
                 bx: float, by: float, bw: float, bh: float) -> bool:
    """Strict AABB test: boxes that only share an edge do not overlap."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def hits_obstacle(player: Player, obstacles: Iterable[Obstacle]) -> bool:
    for o in obstacles:
        if aabb_overlap(player.x, player.y, player.width, player.height,
                        o.x, o.y, o.width, o.height):
            return True
    return False


def out_of_bounds(player: Player, viewport_height: float) -> bool:
    """Fully past the top or bottom edge of the viewport."""
    return player.bottom < 0 or player.y > viewport_height


def collect_coins(player: Player, coins: Iterable[Coin]) -> Tuple[List[Coin], int]:
    """
    Splits coins into (still live, number collected this frame).
    Uncollected coins survive only while part of them is still on screen.
    """
    cx, cy = player.center
    reach = player.width / 2
    remaining: List[Coin] = []
    collected = 0
    for coin in coins:
        if math.hypot(cx - coin.x, cy - coin.y) < reach + coin.radius:
            collected += 1
        elif coin.x + coin.radius > 0:
            remaining.append(coin)
    return remaining, collected
