import os
import random

# Must be set before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from pong_game import PongGame


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value"""
    def __init__(self, value=0.5):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def game(notifications):
    return PongGame(headless=True, rng=random.Random(1234), on_game_over=notifications.append)


@pytest.fixture
def fixed_rng():
    return FixedRandom()
