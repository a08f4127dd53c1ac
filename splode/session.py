"""
Game session: one live board plus its undo history.
"""

import logging
from typing import Dict, Optional, Sequence

from .boards import generate
from .core import BoardGraph, Player
from .engine import CascadeEngine, MoveResult, MoveStatus
from .history import SnapshotStore
from .turns import TurnManager

logger = logging.getLogger(__name__)


class GameSession:
    """
    Drives a hot-seat game.

    Every accepted move snapshots the live board first, then places the token
    and resolves the cascade on a fresh copy, then hands the turn on.
    """

    def __init__(self, graph: BoardGraph, engine: Optional[CascadeEngine] = None,
                 store: Optional[SnapshotStore] = None):
        """
        Initialize a session around an already built board.

        Args:
            graph: Initial board
            engine: Cascade engine to use (a default one if None)
            store: Snapshot store to use (a default one if None)
        """
        self.graph = graph
        self.engine = engine or CascadeEngine()
        self.store = store or SnapshotStore()

    @classmethod
    def new(cls, topology: str, players: Sequence[Player], size: int,
            height: Optional[int] = None, engine: Optional[CascadeEngine] = None) -> "GameSession":
        """Start a session on a freshly generated board."""
        return cls(generate(topology, players, size, height), engine)

    @property
    def current_player(self) -> Player:
        return TurnManager(self.graph).current_player()

    @property
    def winner(self) -> Optional[Player]:
        return self.graph.winner()

    @property
    def is_over(self) -> bool:
        return self.graph.has_winner()

    @property
    def history_depth(self) -> int:
        return self.store.depth(self.graph)

    def place(self, node_id: int) -> MoveResult:
        """
        Play a token for the current player.

        Args:
            node_id: Target node

        Returns:
            MoveResult; invalid moves leave the board and history untouched
        """
        player = self.current_player
        if not self.engine.is_valid_move(self.graph, node_id, player):
            logger.debug(f"Ignoring move by {player.name} on node {node_id}")
            return MoveResult(MoveStatus.INVALID, player, node_id)

        self.graph = self.store.commit(self.graph)
        result = self.engine.apply_move(self.graph, node_id, player)

        if result.winner is None:
            TurnManager(self.graph).advance()
        else:
            logger.info(f"Game over: {result.winner.name} wins")
        return result

    def click(self, x: float, y: float) -> MoveResult:
        """Place on whichever node contains the board-space point."""
        node = self.graph.node_at(x, y)
        if node is None:
            return MoveResult(MoveStatus.INVALID, self.current_player, -1)
        return self.place(node.id)

    def undo(self) -> bool:
        """
        Revert the last committed move.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        previous = self.store.undo(self.graph)
        if previous is None:
            return False

        self.graph = previous
        logger.info(f"Undo; {self.current_player.name} to play")
        return True

    def to_dict(self) -> Dict:
        """
        Convert the session to dictionary format for JSON serialization.
        """
        state = self.graph.to_dict()
        state["type"] = "game_state"
        state["history_depth"] = self.history_depth
        state["game_over"] = self.is_over
        return state
