from __future__ import annotations

import pygame

from src.snake.config import CELL_SIZE, HUD_HEIGHT, Config
from src.snake.food import FoodSpawner
from src.snake.game import draw_game, key_to_event, window_size
from src.snake.state import GameStateMachine, InputEvent, Phase


def test_keys_map_to_input_events() -> None:
    assert key_to_event(pygame.K_UP) is InputEvent.MOVE_UP
    assert key_to_event(pygame.K_a) is InputEvent.MOVE_LEFT
    assert key_to_event(pygame.K_p) is InputEvent.TOGGLE_PAUSE
    assert key_to_event(pygame.K_SPACE) is InputEvent.RESTART
    assert key_to_event(pygame.K_F1) is None


def test_window_leaves_room_for_hud() -> None:
    assert window_size(10, 8) == (10 * CELL_SIZE, 8 * CELL_SIZE + HUD_HEIGHT)


def test_draw_every_phase_smoke() -> None:
    pygame.font.init()
    font = pygame.font.SysFont(None, 24)
    m = GameStateMachine(
        Config(grid_w=6, grid_h=4, initial_length=2),
        lambda: FoodSpawner(0, queue=[(5, 0)]),
    )
    screen = pygame.Surface(window_size(6, 4))

    draw_game(screen, font, m.snapshot())
    head_px = (3 * CELL_SIZE + 1, HUD_HEIGHT + 2 * CELL_SIZE + 1)
    assert screen.get_at(head_px)[:3] != screen.get_at((1, HUD_HEIGHT + 1))[:3]

    m.on_input(InputEvent.TOGGLE_PAUSE)
    draw_game(screen, font, m.snapshot())

    m.on_input(InputEvent.TOGGLE_PAUSE)
    while m.phase is Phase.RUNNING:
        m.on_tick()
    draw_game(screen, font, m.snapshot())
    pygame.font.quit()
