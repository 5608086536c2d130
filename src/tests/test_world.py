# src/tests/test_world.py
"""
Simulation step: ordering, terminal outcomes and scoring.

Usage (from repo root):
  python -m pytest src/tests/test_world.py
  python -m src.tests.test_world
"""
from __future__ import annotations
import random

import pytest

from src.game.chunks import PlatformSpec
from src.game.config import HEIGHT, WIDTH, PLATFORM_HEIGHT, PLAYER_H
from src.game.entities import Coin, Difficulty, Platform, StaticObstacle, HorizontalMover
from src.game.world import StepOutcome, World, step


def test_first_frame_of_free_fall_on_easy():
    world = World.fresh(Difficulty.EASY)
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.CONTINUE
    assert (nxt.player.x, nxt.player.vy) == (100, pytest.approx(0.4))
    assert nxt.player.y == pytest.approx(HEIGHT / 2 + 0.4)
    # the input world is left untouched
    assert world.player.y == HEIGHT / 2 and world.player.vy == 0
    assert world.platforms[0].x == -50
    assert nxt.platforms[0].x == -53.5

def test_first_frame_spawns_first_chunk():
    world = World.fresh(Difficulty.MEDIUM)
    _, nxt = step(world, random.Random(0))
    assert nxt.cursor.chunk_index == 1
    assert len(nxt.platforms) == 2 + len(world.chunks[0])

def test_scroll_speed_per_difficulty():
    speeds = {d: World.fresh(d).scroll_speed for d in Difficulty}
    assert speeds == {Difficulty.EASY: 3.5, Difficulty.MEDIUM: 5.0, Difficulty.HARD: 6.5}

def test_uncollected_coin_is_pruned_offscreen():
    world = World.fresh(Difficulty.EASY)
    world.coins.append(Coin(50, 100))
    rng = random.Random(0)
    for _ in range(17):
        outcome, world = step(world, rng)
        assert outcome is StepOutcome.CONTINUE
    assert any(c.y == 100 for c in world.coins)      # x = -9.5, still partly visible
    outcome, world = step(world, rng)
    assert outcome is StepOutcome.CONTINUE
    assert not any(c.y == 100 for c in world.coins)

def test_coins_score_on_contact():
    world = World.fresh(Difficulty.EASY)
    cx, cy = 115 + 3.5, HEIGHT / 2 + 0.4 + PLAYER_H / 2
    world.coins.extend([Coin(cx, cy), Coin(cx, cy + 5)])
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.CONTINUE
    assert nxt.score == 2
    assert world.score == 0

def test_empty_level_completes_on_first_frame():
    world = World.fresh(Difficulty.EASY, chunks=())
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.LEVEL_COMPLETE
    assert nxt.cursor.exhausted

def test_level_complete_beats_simultaneous_death():
    world = World.fresh(Difficulty.EASY, chunks=())
    world.player.y = HEIGHT + 100
    world.obstacles.append(StaticObstacle(100, HEIGHT + 100, 40, 40))
    outcome, _ = step(world, random.Random(0))
    assert outcome is StepOutcome.LEVEL_COMPLETE

def test_no_completion_while_platforms_ahead():
    world = World.fresh(Difficulty.EASY, chunks=())
    world.platforms.append(Platform(500, HEIGHT - PLATFORM_HEIGHT, 200))
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.CONTINUE
    assert nxt.cursor.exhausted

def test_no_completion_while_chunks_remain():
    world = World.fresh(Difficulty.EASY)
    world.platforms.clear()
    world.cursor.frontier = WIDTH + 10000
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.CONTINUE
    assert nxt.cursor.chunk_index == 0 and not nxt.cursor.exhausted

def test_exhausted_one_frame_after_last_chunk():
    floor_y = HEIGHT - PLATFORM_HEIGHT
    world = World.fresh(Difficulty.EASY, chunks=((PlatformSpec(0, 100, y=floor_y),),))
    rng = random.Random(0)
    outcome, world = step(world, rng)
    assert outcome is StepOutcome.CONTINUE
    assert world.cursor.chunk_index == 1 and not world.cursor.exhausted
    outcome, world = step(world, rng)
    assert outcome is StepOutcome.CONTINUE
    assert world.cursor.exhausted

def _run_to_completion(difficulty, max_frames=10000):
    world = World.fresh(difficulty)
    rng = random.Random(1)
    for frame in range(max_frames):
        world.obstacles.clear()
        world.player.y = HEIGHT / 2
        world.player.vy = 0.0
        outcome, nxt = step(world, rng)
        if outcome is not StepOutcome.CONTINUE:
            return outcome, nxt, frame
        world = nxt
    return StepOutcome.CONTINUE, world, max_frames

def test_every_difficulty_can_be_completed():
    for difficulty in Difficulty:
        outcome, final, frames = _run_to_completion(difficulty)
        assert outcome is StepOutcome.LEVEL_COMPLETE, f"{difficulty.value} stuck after {frames} frames"
        assert final.cursor.chunk_index == len(final.chunks)

def test_obstacle_overlap_is_game_over():
    world = World.fresh(Difficulty.EASY)
    world.obstacles.append(StaticObstacle(110, HEIGHT / 2, 40, 40))
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.GAME_OVER
    assert nxt.death_cause == "obstacle"

def test_moving_obstacle_overlap_is_game_over():
    world = World.fresh(Difficulty.EASY)
    world.obstacles.append(HorizontalMover(110, HEIGHT / 2, 40, 20, speed=1, direction=1,
                                           min_x=0, max_x=WIDTH))
    outcome, _ = step(world, random.Random(0))
    assert outcome is StepOutcome.GAME_OVER

def test_leaving_the_screen_is_game_over():
    world = World.fresh(Difficulty.HARD)
    world.player.y = HEIGHT + 50
    outcome, nxt = step(world, random.Random(0))
    assert outcome is StepOutcome.GAME_OVER
    assert nxt.death_cause == "oob"

def test_grounded_player_without_obstacles_survives():
    floor_y = HEIGHT - PLATFORM_HEIGHT
    world = World.fresh(Difficulty.EASY, chunks=((PlatformSpec(0, 5000, y=floor_y),),))
    rng = random.Random(0)
    for _ in range(300):
        outcome, world = step(world, rng)
        assert outcome is StepOutcome.CONTINUE
    assert world.player.y == floor_y - PLAYER_H
    assert world.player.vy == 0

def test_flip_carries_player_to_the_ceiling():
    world = World.fresh(Difficulty.EASY, chunks=((PlatformSpec(0, 5000, y=0),),))
    world.player.flip()
    rng = random.Random(0)
    for _ in range(120):
        outcome, world = step(world, rng)
        assert outcome is StepOutcome.CONTINUE
    assert world.player.y == PLATFORM_HEIGHT
    assert world.player.visual_rotation == world.player.target_rotation

def test_offscreen_platforms_are_dropped():
    world = World.fresh(Difficulty.HARD)
    world.platforms.append(Platform(-100, 300, 104))
    _, nxt = step(world, random.Random(0))
    assert all(p.right > 0 for p in nxt.platforms)
    assert not any(p.y == 300 and p.width == 104 for p in nxt.platforms)

def test_same_seed_same_world():
    def run(seed):
        world = World.fresh(Difficulty.MEDIUM)
        rng = random.Random(seed)
        for _ in range(60):
            _, world = step(world, rng)
        return world
    a, b = run(42), run(42)
    assert a.platforms == b.platforms and a.coins == b.coins and a.obstacles == b.obstacles


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✓ world tests passed")


if __name__ == "__main__":
    main()
