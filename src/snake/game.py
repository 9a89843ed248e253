# game.py
from __future__ import annotations

from typing import Optional, Tuple

import pygame # type: ignore

from .config import CELL_SIZE, HUD_HEIGHT, BG, GREEN, HEAD, RED, TEXT
from .state import GameSnapshot, InputEvent, Outcome, Phase

KEY_EVENTS = {
    pygame.K_UP: InputEvent.MOVE_UP,
    pygame.K_w: InputEvent.MOVE_UP,
    pygame.K_DOWN: InputEvent.MOVE_DOWN,
    pygame.K_s: InputEvent.MOVE_DOWN,
    pygame.K_LEFT: InputEvent.MOVE_LEFT,
    pygame.K_a: InputEvent.MOVE_LEFT,
    pygame.K_RIGHT: InputEvent.MOVE_RIGHT,
    pygame.K_d: InputEvent.MOVE_RIGHT,
    pygame.K_p: InputEvent.TOGGLE_PAUSE,
    pygame.K_ESCAPE: InputEvent.TOGGLE_PAUSE,
    pygame.K_SPACE: InputEvent.RESTART,
    pygame.K_r: InputEvent.RESTART,
}

OUTCOME_TEXT = {
    Outcome.WALL: "You hit the wall",
    Outcome.SELF: "You bit yourself",
    Outcome.BOARD_FULL: "Board full - you win!",
}


# ---------- Helpers ----------
def window_size(grid_w: int, grid_h: int) -> Tuple[int, int]:
    return grid_w * CELL_SIZE, grid_h * CELL_SIZE + HUD_HEIGHT

def key_to_event(key: int) -> Optional[InputEvent]:
    return KEY_EVENTS.get(key)

def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(gx * CELL_SIZE, HUD_HEIGHT + gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)

# ---------- Draw ----------
def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: GameSnapshot) -> None:
    screen.fill(BG)
    pygame.draw.line(screen, TEXT, (0, HUD_HEIGHT - 1), (screen.get_width(), HUD_HEIGHT - 1))
    if snap.food is not None:
        draw_cell(screen, snap.food[0], snap.food[1], RED)
    for i, (x, y) in enumerate(snap.snake):
        draw_cell(screen, x, y, HEAD if i == 0 else GREEN)
    txt = font.render(f"Score: {snap.score}", True, TEXT)
    screen.blit(txt, (8, 6))
    if snap.phase is Phase.PAUSED:
        draw_banner(screen, font, ["PAUSED", "Press P to resume"])
    elif snap.phase is Phase.GAME_OVER:
        draw_game_over(screen, font, snap)

def draw_banner(screen: pygame.Surface, font: pygame.font.Font, lines) -> None:
    # Dim with translucent overlay
    w, h = screen.get_size()
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    top = h // 2 - 16 * len(lines)
    for i, line in enumerate(lines):
        surf = font.render(line, True, (240, 240, 250) if i == 0 else TEXT)
        screen.blit(surf, surf.get_rect(center=(w // 2, top + 30 * i)))

def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, snap: GameSnapshot) -> None:
    title = "YOU WIN" if snap.outcome is Outcome.BOARD_FULL else "GAME OVER"
    reason = OUTCOME_TEXT.get(snap.outcome, "")
    draw_banner(screen, font, [title, reason, f"Score: {snap.score}", "Press SPACE or R to restart"])
