import random

import pytest

from dropfour.game.grid import Grid
from dropfour.game.match import Match


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def match():
    return Match()


@pytest.fixture
def events(match):
    received = []
    match.subscribe(received.append)
    return received
