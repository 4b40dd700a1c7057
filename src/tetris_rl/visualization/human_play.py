from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from tetris_rl.game import Command, GameConfig, GameDriver, GravityClock, TetrisGame
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_r: Command.RESTART,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Tetris in a pygame window")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer")
    p.add_argument("--interval-ms", type=int, default=500, help="Gravity interval in milliseconds")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60, help="Display refresh rate")
    p.add_argument("--log-level", default="WARNING")
    return p


def run(seed: Optional[int] = None, interval_ms: int = 500, cell_size: int = 30, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Tetris")
        renderer.screen = screen
        driver = GameDriver(game, GravityClock(interval_ms), sinks=[renderer])
        logger.info("starting window loop, gravity every %d ms", interval_ms)

        running = True
        while running:
            elapsed = clock.tick(fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            driver.submit(command)
            driver.update(elapsed)
            # Steady refresh between state changes
            renderer.render(game.snapshot())
    finally:
        pygame.quit()


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(seed=args.seed, interval_ms=args.interval_ms, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
