# src/game/render.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
import pygame
from .config import (
    COLOR_BG, COLOR_FG, COLOR_MUTED, COLOR_PLAYER, COLOR_PLAT, COLOR_COIN,
    COLOR_OBSTACLE, COLOR_MOVER_V, COLOR_MOVER_H, COLOR_DANGER, COLOR_MENU
)
from .entities import Difficulty, GameState, ObstacleKind
from .player import Player

BTN_W, BTN_H, BTN_GAP = 160, 60, 20

OBSTACLE_COLORS = {
    ObstacleKind.STATIC: COLOR_OBSTACLE,
    ObstacleKind.MOVING_VERTICAL: COLOR_MOVER_V,
    ObstacleKind.MOVING_HORIZONTAL: COLOR_MOVER_H,
}


@dataclass(frozen=True)
class Button:
    rect: pygame.Rect
    text: str
    color: Tuple[int, int, int]
    action: str                          # "start" | "retry" | "menu"
    difficulty: Optional[Difficulty] = None


def buttons_for(state: GameState, width: int) -> List[Button]:
    """Clickable buttons for a given screen. Empty while playing."""
    if state is GameState.START_SCREEN:
        x0 = (width - BTN_W * 3 - BTN_GAP * 2) // 2
        specs = [
            ("Easy", Difficulty.EASY, COLOR_PLAT),
            ("MID", Difficulty.MEDIUM, COLOR_OBSTACLE),
            ("Hard", Difficulty.HARD, COLOR_DANGER),
        ]
        return [
            Button(pygame.Rect(x0 + i * (BTN_W + BTN_GAP), 300, BTN_W, BTN_H), text, color, "start", diff)
            for i, (text, diff, color) in enumerate(specs)
        ]
    if state in (GameState.GAME_OVER, GameState.LEVEL_COMPLETE):
        again = "Try Again" if state is GameState.GAME_OVER else "Play Again"
        again_color = COLOR_DANGER if state is GameState.GAME_OVER else COLOR_PLAT
        return [
            Button(pygame.Rect(width // 2 - BTN_W - BTN_GAP // 2, 350, BTN_W, BTN_H), again, again_color, "retry"),
            Button(pygame.Rect(width // 2 + BTN_GAP // 2, 350, BTN_W, BTN_H), "Main Menu", COLOR_MENU, "menu"),
        ]
    return []


def draw_player(surf: pygame.Surface, player: Player):
    body = pygame.Surface((int(player.width), int(player.height)), pygame.SRCALPHA)
    body.fill(COLOR_PLAYER)
    # pygame rotates counter-clockwise in degrees
    rotated = pygame.transform.rotate(body, -math.degrees(player.visual_rotation))
    cx, cy = player.center
    surf.blit(rotated, rotated.get_rect(center=(int(cx), int(cy))))


def draw_world(surf: pygame.Surface, snap):
    for p in snap.platforms:
        pygame.draw.rect(surf, COLOR_PLAT, p.rect)
    for c in snap.coins:
        pygame.draw.circle(surf, COLOR_COIN, (int(c.x), int(c.y)), int(c.radius))
    for o in snap.obstacles:
        pygame.draw.rect(surf, OBSTACLE_COLORS[o.kind], o.rect)
    draw_player(surf, snap.player)


def _text(surf, font, msg, color, center):
    img = font.render(msg, True, color)
    surf.blit(img, img.get_rect(center=center))


def _overlay(surf, alpha: int):
    shade = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    shade.fill((0, 0, 0, alpha))
    surf.blit(shade, (0, 0))


def draw_button(surf, font, btn: Button, hovered: bool):
    pygame.draw.rect(surf, COLOR_FG if hovered else btn.color, btn.rect)
    _text(surf, font, btn.text, btn.color if hovered else COLOR_FG, btn.rect.center)


def draw_frame(surf: pygame.Surface, snap, fonts, mouse_pos=(0, 0)):
    """fonts: dict with "small", "body", "title" pygame fonts."""
    width, _ = surf.get_size()
    surf.fill(COLOR_BG)
    if snap.state is not GameState.START_SCREEN:
        draw_world(surf, snap)

    if snap.state is GameState.PLAYING:
        img = fonts["body"].render(f"Score: {snap.score}", True, COLOR_COIN)
        surf.blit(img, img.get_rect(topright=(width - 20, 20)))
        return

    if snap.state is GameState.START_SCREEN:
        _text(surf, fonts["body"], "Select a difficulty to begin", COLOR_MUTED, (width // 2, 250))
        _text(surf, fonts["small"], "Controls: Click or Space to flip gravity", COLOR_MUTED, (width // 2, 450))
    else:
        _overlay(surf, 180)
        if snap.state is GameState.GAME_OVER:
            _text(surf, fonts["title"], "Game Over", COLOR_DANGER, (width // 2, 200))
        else:
            _text(surf, fonts["title"], "Level Complete", COLOR_PLAT, (width // 2, 200))
        _text(surf, fonts["body"], f"Final Score: {snap.score}", COLOR_FG, (width // 2, 280))

    for btn in buttons_for(snap.state, width):
        draw_button(surf, fonts["small"], btn, btn.rect.collidepoint(mouse_pos))


def make_fonts():
    return {
        "small": pygame.font.SysFont("helveticaneue,arial", 18, bold=True),
        "body": pygame.font.SysFont("helveticaneue,arial", 30),
        "title": pygame.font.SysFont("helveticaneue,arial", 50),
    }
