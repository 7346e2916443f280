import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = []

    def randrange(self, stop):
        assert self.draws, f"ran out of scripted draws (randrange({stop}))"
        value = self.draws.pop(0)
        assert 0 <= value < stop, f"scripted draw {value} not in [0, {stop})"
        self.calls.append(stop)
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def rng():
    return random.Random(1234)
