import pytest

from splode.boards import grid
from splode.core import Player


@pytest.fixture
def alice() -> Player:
    return Player("Alice", "#e6194b")


@pytest.fixture
def bob() -> Player:
    return Player("Bob", "#4363d8")


@pytest.fixture
def players(alice: Player, bob: Player):
    return [alice, bob]


@pytest.fixture
def square2(players):
    """2x2 grid: ids 0=(0,0), 1=(0,1), 2=(1,0), 3=(1,1); every node has degree 2."""
    return grid(players, 2, 2)
