"""Snapshot chain used for undo."""

import logging
from typing import Iterator, Optional

from .core import BoardGraph, PreconditionViolation

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Keeps prior boards as a backward linked chain.

    Moves work copy-on-write at move granularity: before a move is played the
    live board is frozen and kept as a snapshot, and play continues on a clone
    whose ``previous`` points at it.
    """

    def commit(self, graph: BoardGraph) -> BoardGraph:
        """
        Snapshot the live board and return the board to play the next move on.

        Args:
            graph: Current live board

        Returns:
            A fresh mutable copy linked back to the snapshot

        Raises:
            PreconditionViolation: If a cascade is still resolving on the board
        """
        if graph.resolving:
            raise PreconditionViolation("Cannot snapshot a board while a cascade is resolving")

        live = graph.clone()
        graph.freeze()
        live.previous = graph
        logger.debug(f"Committed snapshot; history depth {self.depth(live)}")
        return live

    def undo(self, live: BoardGraph) -> Optional[BoardGraph]:
        """
        Step back to the board before the last committed move.

        Returns:
            The previous board, or None when there is nothing to undo
        """
        if live.previous is None:
            logger.debug("Nothing to undo")
            return None
        return live.previous

    def depth(self, live: BoardGraph) -> int:
        """Number of snapshots reachable from the live board."""
        return sum(1 for _ in self.history(live))

    def history(self, live: BoardGraph) -> Iterator[BoardGraph]:
        """Iterate snapshots from newest to oldest."""
        snapshot = live.previous
        while snapshot is not None:
            yield snapshot
            snapshot = snapshot.previous
