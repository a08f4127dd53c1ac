import pytest

from splode.boards import path
from splode.core import Player, PreconditionViolation
from splode.turns import TurnManager


def test_turns_rotate_during_opening(alice, bob):
    carol = Player("Carol", "#3cb44b")
    graph = path([alice, bob, carol], 5)
    turns = TurnManager(graph)

    assert turns.current_player() == alice
    assert turns.advance() == bob
    assert turns.advance() == carol
    assert turns.advance() == alice


def test_zero_tally_players_are_not_skipped_before_board_is_full(alice, bob):
    graph = path([alice, bob], 3)
    graph.claim(0, alice)
    turns = TurnManager(graph)

    assert not turns.is_eliminated(bob)
    assert turns.advance() == bob


def test_eliminated_players_are_skipped(alice, bob):
    carol = Player("Carol", "#3cb44b")
    graph = path([alice, bob, carol], 3)
    graph.claim(0, alice)
    graph.claim(1, carol)
    graph.claim(2, alice)
    turns = TurnManager(graph)

    assert turns.is_eliminated(bob)
    assert turns.advance() == carol
    assert turns.advance() == alice


def test_advance_after_win_is_rejected(alice, bob):
    graph = path([alice, bob], 2)
    graph.claim(0, alice)
    graph.claim(1, alice)
    with pytest.raises(PreconditionViolation):
        TurnManager(graph).advance()


def test_advance_on_snapshot_is_rejected(alice, bob):
    graph = path([alice, bob], 2)
    graph.freeze()
    with pytest.raises(PreconditionViolation):
        TurnManager(graph).advance()


def test_turns_rotate_on_empty_board(alice, bob):
    graph = path([alice, bob], 1)
    graph.remove_node(0)
    turns = TurnManager(graph)

    assert graph.total_nodes() == 0
    assert not turns.is_eliminated(alice)
    assert turns.advance() == bob
    assert turns.advance() == alice
