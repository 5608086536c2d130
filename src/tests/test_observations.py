# src/tests/test_observations.py
import numpy as np

from src.env.observations import build_observation, surfaces_at_x, OBS_SIZE
from src.game.config import HEIGHT, WIDTH, PLATFORM_HEIGHT, PLAYER_H
from src.game.entities import Platform, StaticObstacle
from src.game.player import Player


def make_platforms():
    # Full-width ceiling and floor rails
    return [Platform(0, 0, WIDTH), Platform(0, HEIGHT - PLATFORM_HEIGHT, WIDTH)]

def make_obstacles(player):
    # One obstacle on the floor around +120, one hanging from the ceiling around +360
    cx = player.x + player.width / 2
    return [
        StaticObstacle(cx + 120 - 10, HEIGHT - PLATFORM_HEIGHT - 40, 20, 40),
        StaticObstacle(cx + 360, PLATFORM_HEIGHT, 20, 40),
    ]

def test_shape_ranges_and_flags():
    player = Player(x=100, y=HEIGHT / 2 - PLAYER_H / 2)
    obs = build_observation(player, make_platforms(), make_obstacles(player))
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)

    assert 0.0 <= obs[0] <= 1.0, "y_top_norm out of range"
    assert -1.0 <= obs[1] <= 1.0, "vy_norm out of range"
    assert obs[2] == 1.0, "gravity points down at spawn"

    # probe blocks: [ceil, floor, dangerTop, dangerBot] x 3
    for i in range(3):
        b = 3 + 4 * i
        ceil, floor, dt, db = obs[b:b + 4]
        assert np.isclose(ceil, PLATFORM_HEIGHT / HEIGHT)
        assert np.isclose(floor, (HEIGHT - PLATFORM_HEIGHT) / HEIGHT)
        assert dt in (0.0, 1.0) and db in (0.0, 1.0)

    assert obs[3 + 3] == 1.0, "expected floor obstacle at +120"
    assert obs[3 + 4 + 2] == 0.0 and obs[3 + 4 + 3] == 0.0, "+240 should be clear"
    assert obs[3 + 8 + 2] == 1.0, "expected ceiling obstacle at +360"
    assert obs[3 + 8 + 3] == 0.0

def test_sentinels_without_platforms():
    player = Player(x=100, y=200, vy=-50.0, gravity=-0.4)
    obs = build_observation(player, [], [])
    assert obs[1] == -1.0 and obs[2] == -1.0
    for i in range(3):
        b = 3 + 4 * i
        assert obs[b] == 0.0 and obs[b + 1] == 1.0

def test_surfaces_pick_nearest_faces():
    plats = [Platform(0, 0, 500), Platform(0, 150, 500), Platform(0, HEIGHT - PLATFORM_HEIGHT, 500),
             Platform(0, 450, 500)]
    ceil_y, floor_y = surfaces_at_x(plats, 250)
    assert ceil_y == 170 and floor_y == 450
    assert surfaces_at_x(plats, 500) == (None, None)


def main():
    test_shape_ranges_and_flags()
    test_sentinels_without_platforms()
    test_surfaces_pick_nearest_faces()
    print("✓ observation unit sanity passed")

if __name__ == "__main__":
    main()
