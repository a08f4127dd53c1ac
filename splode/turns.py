"""Turn order for hot-seat play."""

import logging

from .core import BoardGraph, Player, PreconditionViolation

logger = logging.getLogger(__name__)


class TurnManager:
    """
    Tracks whose turn it is on a board.

    The turn pointer lives on the board itself so that it is copied with every
    snapshot and restored by undo.
    """

    def __init__(self, graph: BoardGraph):
        self.graph = graph

    def current_player(self) -> Player:
        return self.graph.players[self.graph.current_index]

    def is_eliminated(self, player: Player) -> bool:
        """
        A player is out once every node is claimed and they own none of them.
        During the opening, while unclaimed nodes remain, nobody is out, and
        nobody is out on a board with no nodes at all.
        """
        graph = self.graph
        return graph.total_nodes() > 0 and graph.tally_for(player) == 0 and graph.is_full()

    def advance(self) -> Player:
        """
        Pass the turn to the next player still in the game.

        Returns:
            The player whose turn it now is

        Raises:
            PreconditionViolation: If the board is a snapshot or the game already
                has a winner
        """
        graph = self.graph
        if graph.frozen:
            raise PreconditionViolation("Cannot change turns on a board snapshot")
        if graph.has_winner():
            raise PreconditionViolation("Game is over; no further turns")

        # Without a winner, a non-empty full board has at least two owners,
        # so this stops within one lap.
        player_count = len(graph.players)
        while True:
            graph.current_index = (graph.current_index + 1) % player_count
            if not self.is_eliminated(self.current_player()):
                break

        logger.debug(f"Turn passes to {self.current_player().name}")
        return self.current_player()
