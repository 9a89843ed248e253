# main.py
import argparse
import logging

import pygame # type: ignore
from .config import Config
from .game import window_size, key_to_event, draw_game
from .state import GameStateMachine

MAX_CATCH_UP = 2  # ticks per frame after a stall


def parse_args(argv=None) -> argparse.Namespace:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Play snake.")
    parser.add_argument("--width", type=int, default=defaults.grid_w, help="grid width in cells")
    parser.add_argument("--height", type=int, default=defaults.grid_h, help="grid height in cells")
    parser.add_argument("--length", type=int, default=defaults.initial_length, help="initial snake length")
    parser.add_argument("--tick-rate", type=float, default=defaults.tick_rate, help="steps per second")
    parser.add_argument("--seed", type=int, default=None, help="food RNG seed (default: random)")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def catch_up(machine: GameStateMachine, lag_ms: float, step_ms: float, max_ticks: int = MAX_CATCH_UP) -> float:
    """
    Fire the ticks owed for `lag_ms` of elapsed time and return the leftover.
    A long stall (window drag, suspend) pays back at most `max_ticks` steps;
    the rest of the stalled time is dropped.
    """
    lag_ms = min(lag_ms, max_ticks * step_ms)
    while lag_ms >= step_ms:
        machine.on_tick()
        lag_ms -= step_ms
    return lag_ms


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = Config(
        grid_w=args.width,
        grid_h=args.height,
        initial_length=args.length,
        tick_rate=args.tick_rate,
        seed=args.seed,
    )
    machine = GameStateMachine(cfg)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode(window_size(cfg.grid_w, cfg.grid_h))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    step_ms = cfg.move_every_ms
    lag_ms = 0.0
    running = True

    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                ev = key_to_event(event.key)
                if ev is not None:
                    machine.on_input(ev)

        # 2) update: fixed-rate ticks, independent of frame rate
        lag_ms = catch_up(machine, lag_ms + clock.tick(60), step_ms)

        # 3) render
        draw_game(screen, font, machine.snapshot())
        pygame.display.flip()

    pygame.quit()

if __name__ == "__main__":
    main()
