"""
Cascade resolution for token placement.

A move puts one token on a node. Any node whose token count reaches its degree
fires: it loses one token per neighbor and each neighbor gains a token and is
captured by the mover. Captured neighbors are evaluated in turn, so a single
placement can sweep across the board.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import CascadeConfig
from .core import BoardGraph, Player, PreconditionViolation

logger = logging.getLogger(__name__)


class MoveStatus(Enum):
    """Enumeration for move outcomes."""
    APPLIED = "applied"
    INVALID = "invalid"
    OVERFLOW = "overflow"


@dataclass
class MoveResult:
    """
    Outcome of a single placement.

    Attributes:
        status: Whether the move was applied, rejected, or aborted by the overflow guard
        player: The acting player
        node_id: The target node
        fired: IDs of nodes in the order they fired
        steps: Number of worklist entries evaluated
        winner: The winning player if this move ended the game
    """
    status: MoveStatus
    player: Player
    node_id: int
    fired: List[int] = field(default_factory=list)
    steps: int = 0
    winner: Optional[Player] = None

    @property
    def applied(self) -> bool:
        return self.status != MoveStatus.INVALID

    @property
    def did_fire(self) -> bool:
        return bool(self.fired)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "player": self.player.to_dict(),
            "node": self.node_id,
            "fired": list(self.fired),
            "steps": self.steps,
            "winner": self.winner.to_dict() if self.winner else None,
        }


class CascadeEngine:
    """
    Handles token placement and chain-reaction resolution on a board.
    """

    def __init__(self, max_steps: Optional[int] = None):
        """
        Initialize the engine.

        Args:
            max_steps: Worklist evaluations allowed per move before the cascade
                is aborted (defaults to CascadeConfig.MAX_STEPS)
        """
        self.max_steps = max_steps if max_steps is not None else CascadeConfig.MAX_STEPS
        if self.max_steps <= 0:
            raise ValueError("Cascade step limit must be positive")

    def is_valid_move(self, graph: BoardGraph, node_id: int, player: Player) -> bool:
        """
        Check whether a player may place a token on a node.

        Returns:
            True if the node exists, the player is seated, the game is not over
            and the node is unclaimed or already owned by the player
        """
        if node_id not in graph.nodes:
            return False
        if player not in graph.tallies:
            return False
        if graph.has_winner():
            return False

        owner = graph.nodes[node_id].owner
        return owner is None or owner == player

    def apply_move(self, graph: BoardGraph, node_id: int, player: Player) -> MoveResult:
        """
        Place a token and resolve the resulting cascade in place.

        Invalid moves leave the board untouched and come back with
        MoveStatus.INVALID. If the overflow guard trips, the cascade stops where
        it is and the result is MoveStatus.OVERFLOW; the board stays playable.

        Args:
            graph: Live board to mutate
            node_id: Target node
            player: Acting player

        Returns:
            MoveResult describing the move

        Raises:
            PreconditionViolation: If the board is a frozen snapshot or a cascade
                is already resolving on it
        """
        if graph.frozen:
            raise PreconditionViolation("Cannot play on a board snapshot")
        if graph.resolving:
            raise PreconditionViolation("A cascade is already resolving on this board")

        if not self.is_valid_move(graph, node_id, player):
            logger.debug(f"Rejected move by {player.name} on node {node_id}")
            return MoveResult(MoveStatus.INVALID, player, node_id)

        graph.add_tokens(node_id, 1)
        graph.claim(node_id, player)

        result = MoveResult(MoveStatus.APPLIED, player, node_id)
        graph.resolving = True
        try:
            self._resolve(graph, [node_id], player, result)
        finally:
            graph.resolving = False

        result.winner = graph.winner()
        if result.winner is not None:
            logger.info(f"{result.winner.name} owns all {graph.total_nodes()} nodes")
        return result

    def _resolve(self, graph: BoardGraph, worklist: List[int], player: Player,
                 result: MoveResult) -> None:
        """
        Drain the worklist, last in first out.

        Stops early once somebody owns the whole board or the step limit is hit.
        """
        while worklist:
            if result.steps >= self.max_steps:
                logger.warning(f"Cascade aborted after {result.steps} steps with "
                               f"{len(worklist)} nodes pending")
                result.status = MoveStatus.OVERFLOW
                worklist.clear()
                break

            current = worklist.pop()
            result.steps += 1

            if graph.has_winner():
                worklist.clear()
                break

            degree = graph.degree(current)
            if degree == 0 or graph.nodes[current].count < degree:
                continue

            graph.add_tokens(current, -degree)
            result.fired.append(current)
            for neighbor in graph.neighbors(current):
                graph.add_tokens(neighbor, 1)
                graph.claim(neighbor, player)
                worklist.append(neighbor)

        logger.debug(f"Cascade by {player.name} fired {len(result.fired)} nodes "
                     f"in {result.steps} steps")
