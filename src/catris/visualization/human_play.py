from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from catris.game import Command, FallingBlockGame, GameConfig, ScoreChanged, StateChanged
from .audio import AudioNotifier
from .renderer import Renderer
from .scheduler import PygameScheduler

logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play catris.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=1000)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--sounds", type=Path, default=None, help="directory holding the sound files")
    p.add_argument("--mute", action="store_true")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    try:
        clock = pygame.time.Clock()
        scheduler = PygameScheduler()
        game = FallingBlockGame(GameConfig(tick_ms=args.tick_ms, random_seed=args.seed), scheduler=scheduler)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("catris")

        if not args.mute:
            AudioNotifier(args.sounds).attach(game.events)

        dirty = True

        def mark_dirty(_event) -> None:
            nonlocal dirty
            dirty = True

        game.events.subscribe(mark_dirty, StateChanged)
        game.events.subscribe(lambda e: logger.info("score %d", e.score), ScoreChanged)
        game.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.handle_command(command)
                else:
                    scheduler.dispatch(event)

            if dirty:
                renderer.draw(screen, game)
                dirty = False

            clock.tick(60)
        game.stop()
    finally:
        pygame.quit()


def main() -> None:
    run()


if __name__ == "__main__":  # pragma: no cover
    main()
