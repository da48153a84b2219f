from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from tetris_core.game import Command, GameConfig, GameEngine, GameState
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
}

FPS = 60
GAME_OVER_TEXT = "Game Over - R to restart, ESC to quit"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Tetris with the keyboard")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--gravity", type=int, default=36, help="Frames per gravity drop (60 frames per second)")
    p.add_argument("--policy", choices=["bag", "random"], default="bag")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--preview", type=int, default=3)
    p.add_argument("--cell_size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig(
        board_width=args.width,
        board_height=args.height,
        gravity_interval=args.gravity,
        spawn_policy=args.policy,
        random_seed=args.seed,
        preview_size=args.preview,
    )
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = GameEngine(config)
        renderer = Renderer(cell_size=args.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(config.board_width, config.board_height))
        pygame.display.set_caption("Tetris")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key == pygame.K_r and game.state is GameState.GAME_OVER:
                        game.reset()
                    elif not game.game_over:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.on_input(command)

            # One logical tick per rendered frame
            if not game.game_over:
                game.on_tick()

            snap = game.snapshot()
            renderer.draw(screen, snap, GAME_OVER_TEXT if snap.game_over else None)

            clock.tick(FPS)
        print(f"Lines: {game.lines_cleared_total}  Pieces: {game.pieces_locked}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
