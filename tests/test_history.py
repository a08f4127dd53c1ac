import dataclasses

import pytest

from splode.engine import CascadeEngine
from splode.history import SnapshotStore
from splode.turns import TurnManager
from splode.core import Node, PreconditionViolation
from splode.session import GameSession


def _play(store, engine, graph, node_id):
    live = store.commit(graph)
    engine.apply_move(live, node_id, TurnManager(live).current_player())
    TurnManager(live).advance()
    return live


def test_commit_links_and_freezes(square2):
    store = SnapshotStore()
    live = store.commit(square2)

    assert live is not square2
    assert live.previous is square2
    assert square2.frozen
    assert not live.frozen
    assert live.same_state(square2)


def test_commit_during_cascade_is_rejected(square2):
    square2.resolving = True
    with pytest.raises(PreconditionViolation):
        SnapshotStore().commit(square2)


def test_undo_unavailable_on_fresh_board(square2):
    assert SnapshotStore().undo(square2) is None


def test_undo_round_trip(square2):
    store = SnapshotStore()
    engine = CascadeEngine()

    states = [square2.clone()]
    live = square2
    for node_id in (0, 3, 0):
        live = _play(store, engine, live, node_id)
        states.append(live.clone())

    assert store.depth(live) == 3
    for expected in reversed(states[:-1]):
        live = store.undo(live)
        assert live.same_state(expected)

    assert live is square2
    assert store.undo(live) is None


def test_snapshots_survive_later_moves(square2):
    store = SnapshotStore()
    engine = CascadeEngine()
    first = _play(store, engine, square2, 0)
    second = _play(store, engine, first, 3)

    assert square2.nodes[0].count == 0
    assert first.nodes[3].owner is None
    assert second.nodes[3].count == 1
    assert list(store.history(second)) == [first, square2]


def test_play_continues_after_undo(square2):
    store = SnapshotStore()
    engine = CascadeEngine()
    live = _play(store, engine, square2, 0)
    live = store.undo(live)

    # The restored board is a snapshot; the next commit branches from it
    branched = _play(store, engine, live, 3)
    assert branched.previous is square2
    assert branched.nodes[3].count == 1
    assert branched.nodes[0].count == 0
    assert store.depth(branched) == 1


def test_restored_snapshot_cannot_be_edited_by_readers(players):
    session = GameSession.new("square", players, 2)
    session.place(0)
    assert session.undo()
    snapshot = session.graph
    before = snapshot.clone()

    neighbors = snapshot.neighbors(0)
    with pytest.raises(AttributeError):
        neighbors.append(3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.nodes[1].count = 7
    with pytest.raises(TypeError):
        snapshot.nodes[1] = Node(1, count=7)

    assert snapshot.frozen
    assert snapshot.same_state(before)
    assert snapshot.neighbors(0) == (1, 2)
