"""Splode: a chain-reaction territory game on arbitrary graphs."""

from .boards import generate
from .core import BoardGraph, Node, Player, PreconditionViolation
from .engine import CascadeEngine, MoveResult, MoveStatus
from .history import SnapshotStore
from .session import GameSession
from .turns import TurnManager

__all__ = [
    "BoardGraph",
    "CascadeEngine",
    "GameSession",
    "MoveResult",
    "MoveStatus",
    "Node",
    "Player",
    "PreconditionViolation",
    "SnapshotStore",
    "TurnManager",
    "generate",
]
