# src/game/session.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple
from .config import WIDTH, HEIGHT
from .entities import Coin, Difficulty, GameState, Obstacle, Platform
from .player import Player
from .world import StepOutcome, World, step

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame. Do not mutate the entities."""
    state: GameState
    player: Player
    platforms: Tuple[Platform, ...]
    coins: Tuple[Coin, ...]
    obstacles: Tuple[Obstacle, ...]
    score: int
    difficulty: Difficulty


class Session:
    """
    Menu / playing / game over / level complete.

    The host loop calls `tick()` once per rendered frame. A frame is only
    pending while PLAYING; leaving PLAYING cancels it, so a late `tick()`
    never touches a stale world.
    """

    def __init__(self, width: float = WIDTH, height: float = HEIGHT,
                 seed: Optional[int] = None, chunks=None):
        self.width = width
        self.height = height
        self.rng = random.Random(seed)
        self._chunks = chunks       # override of the chunk library (tests, tools)
        self.state = GameState.START_SCREEN
        self.difficulty = Difficulty.MEDIUM
        self.world = self._fresh_world(self.difficulty)
        self.frame_pending = False

    def _fresh_world(self, difficulty: Difficulty) -> World:
        return World.fresh(difficulty, self.width, self.height, chunks=self._chunks)

    @property
    def score(self) -> int:
        return self.world.score

    # -------------------- Transitions --------------------

    def start_game(self, difficulty=None):
        """Full reset, then PLAYING. None keeps the current difficulty."""
        if difficulty is not None:
            self.difficulty = Difficulty.parse(difficulty)
        self.world = self._fresh_world(self.difficulty)
        self.state = GameState.PLAYING
        self.frame_pending = True
        logger.info("start %s", self.difficulty.value)

    def retry(self):
        if self.state in (GameState.GAME_OVER, GameState.LEVEL_COMPLETE):
            self.start_game(self.difficulty)

    def go_to_menu(self):
        self.frame_pending = False
        self.state = GameState.START_SCREEN
        logger.info("back to menu")

    def flip(self):
        if self.state is GameState.PLAYING:
            self.world.player.flip()

    # -------------------- Frame --------------------

    def tick(self) -> Optional[StepOutcome]:
        """Run the pending frame, if any. Returns the step outcome or None."""
        if not self.frame_pending or self.state is not GameState.PLAYING:
            return None

        outcome, nxt = step(self.world, self.rng)
        if outcome is StepOutcome.CONTINUE:
            self.world = nxt
            return outcome

        # terminal frame: the world stays as last drawn, the score still counts
        self.world.score = nxt.score
        self.world.death_cause = nxt.death_cause
        self.frame_pending = False
        if outcome is StepOutcome.LEVEL_COMPLETE:
            self.state = GameState.LEVEL_COMPLETE
            logger.info("level complete (%s), score=%d", self.difficulty.value, self.score)
        else:
            self.state = GameState.GAME_OVER
            logger.info("game over (%s), score=%d", nxt.death_cause, self.score)
        return outcome

    def snapshot(self) -> Snapshot:
        w = self.world
        return Snapshot(
            state=self.state,
            player=w.player,
            platforms=tuple(w.platforms),
            coins=tuple(w.coins),
            obstacles=tuple(w.obstacles),
            score=w.score,
            difficulty=self.difficulty,
        )
