"""Shared fixtures for simulator tests."""

import random

import pytest


class ScriptedRandom(random.Random):
    """
    Random source that replays scripted values first.

    ``draws`` feed ``random()``, ``ints`` feed ``randint()`` and
    ``choices`` feed ``choice()``. Once a script runs out the seeded
    generator takes over.
    """

    def __init__(self, draws=(), ints=(), choices=(), seed=0):
        super().__init__(seed)
        self.draws = list(draws)
        self.ints = list(ints)
        self.choices = list(choices)

    def getrandbits(self, k):
        # Keeps choice/randrange off the scripted random() stream
        return super().getrandbits(k)

    def random(self):
        if self.draws:
            return self.draws.pop(0)
        return super().random()

    def randint(self, a, b):
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)

    def choice(self, seq):
        if self.choices:
            value = self.choices.pop(0)
            assert value in seq
            return value
        return super().choice(seq)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def seeded_rng():
    return random.Random(42)
