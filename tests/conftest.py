import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from catris.game import FallingBlockGame, GameConfig, ManualScheduler


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def game(scheduler):
    g = FallingBlockGame(GameConfig(random_seed=7), scheduler=scheduler)
    g.start()
    return g


@pytest.fixture
def recorded(game):
    events = []
    game.events.subscribe(events.append)
    return events
