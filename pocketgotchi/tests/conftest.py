import random

import pytest

from pocketgotchi.constants import TICK_MS
from pocketgotchi.game import Game
from pocketgotchi.models import CreatureState
from pocketgotchi.persistence import MemoryStore

T0 = 1_700_000_000_000


class SequenceRandom:
    """Plays back fixed draws, then repeats `default` (0.99 never fires an event)."""
    def __init__(self, values=(), default=0.99):
        self.values = list(values)
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default


class FakeClock:
    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms

    def advance_ticks(self, n):
        self.advance(n * TICK_MS)


@pytest.fixture
def quiet_rng():
    return SequenceRandom()


@pytest.fixture
def rng_factory():
    return SequenceRandom


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pet():
    return CreatureState.new("Mochi", "\U0001F431", T0)


@pytest.fixture
def game(clock, quiet_rng):
    return Game(store=MemoryStore(), rng=quiet_rng, clock=clock)


@pytest.fixture
def seeded_game(clock):
    return Game(store=MemoryStore(), rng=random.Random(1234), clock=clock)
