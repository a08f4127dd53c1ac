"""
Splode - Core Data Structures

This module contains the board data model for a chain-reaction capture game
played on an undirected graph of nodes. Every node holds tokens and an owner;
a node whose token count reaches its degree fires into its neighbors.
"""

import math
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple


class PreconditionViolation(ValueError):
    """Raised when a caller breaks a structural contract of the board."""


@dataclass(frozen=True)
class Player:
    """
    Represents a player in the game.

    Attributes:
        name: Display name of the player
        color: Display color, only used by renderers
    """
    name: str
    color: str = "#000000"

    def to_dict(self) -> Dict:
        return {"name": self.name, "color": self.color}


@dataclass(frozen=True)
class Node:
    """
    Represents a node (cell) of the board.

    Node records are immutable; the board swaps in a new record whenever a
    node changes owner or token count.

    Attributes:
        id: Stable identifier of the node within its board
        position: (x, y) board-space coordinates for visualization
        radius: Drawing radius, used for hit testing
        owner: Player who owns this node, or None if unclaimed
        count: Number of tokens currently on this node
    """
    id: int
    position: Tuple[float, float] = (0.0, 0.0)
    radius: float = 1.0
    owner: Optional[Player] = None
    count: int = 0

    def __post_init__(self):
        """Validate node data after initialization."""
        if self.count < 0:
            raise ValueError("Token count cannot be negative")
        if self.radius <= 0:
            raise ValueError("Node radius must be positive")

    def contains(self, x: float, y: float) -> bool:
        """Check if the board-space point (x, y) lies within this node."""
        dx = x - self.position[0]
        dy = y - self.position[1]
        return math.sqrt(dx * dx + dy * dy) <= self.radius


class BoardGraph:
    """
    Manages the board: nodes, their adjacency, per-player tallies and the
    turn pointer.

    Adjacency is stored as ordered lists of neighbor ids. Boards handed to the
    cascade engine are expected to be symmetric (if A lists B, B lists A); this
    is not verified on every move.
    """

    def __init__(self, players: Sequence[Player]):
        """
        Initialize an empty board for the given players.

        Args:
            players: Players in turn order

        Raises:
            ValueError: If no players are given or a player is listed twice
        """
        if not players:
            raise ValueError("A board needs at least one player")
        if len(set(players)) != len(players):
            raise ValueError("Players must be distinct")

        self.players: Tuple[Player, ...] = tuple(players)
        self.nodes: Mapping[int, Node] = {}
        self._adjacency: Dict[int, List[int]] = {}
        self.tallies: Dict[Player, int] = {player: 0 for player in self.players}

        # Index into players of whose turn it is
        self.current_index = 0

        # Undo chain and cascade bookkeeping
        self.previous: Optional["BoardGraph"] = None
        self.resolving = False
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark this board as an immutable snapshot."""
        self._frozen = True
        self.nodes = MappingProxyType(dict(self.nodes))

    def _check_mutable(self) -> None:
        if self._frozen:
            raise PreconditionViolation("Board snapshot is immutable")

    def _check_member(self, node_id: int) -> None:
        if node_id not in self.nodes:
            raise PreconditionViolation(f"Node {node_id} doesn't exist")

    def add_node(self, node: Node) -> None:
        """
        Add a node to the board. No edges are created.

        Args:
            node: Node object to add

        Raises:
            PreconditionViolation: If the node ID already exists or the board is frozen
        """
        self._check_mutable()
        if node.id in self.nodes:
            raise PreconditionViolation(f"Node with ID {node.id} already exists")
        if node.owner is not None and node.owner not in self.tallies:
            raise ValueError(f"Node {node.id} is owned by an unseated player")

        self.nodes[node.id] = node
        self._adjacency[node.id] = []
        if node.owner is not None:
            self.tallies[node.owner] += 1

    def remove_node(self, node_id: int) -> None:
        """
        Remove a node and every reference to it from the board.

        Args:
            node_id: ID of node to remove

        Raises:
            PreconditionViolation: If the node doesn't exist or the board is frozen
        """
        self._check_mutable()
        self._check_member(node_id)

        for neighbor_id in self._adjacency:
            if neighbor_id != node_id:
                neighbors = self._adjacency[neighbor_id]
                while node_id in neighbors:
                    neighbors.remove(node_id)

        node = self.nodes.pop(node_id)
        del self._adjacency[node_id]
        if node.owner is not None:
            self.tallies[node.owner] -= 1

    def add_edge(self, from_node: int, to_node: int) -> None:
        """
        Add a directed adjacency from one node to another.

        Raises:
            PreconditionViolation: If either node doesn't exist, the edge is a
                self-loop or the edge already exists
        """
        self._check_mutable()
        self._check_member(from_node)
        self._check_member(to_node)
        if from_node == to_node:
            raise PreconditionViolation("Self-loops are not allowed")
        if to_node in self._adjacency[from_node]:
            raise PreconditionViolation(f"Edge from {from_node} to {to_node} already exists")

        self._adjacency[from_node].append(to_node)

    def connect(self, a: int, b: int) -> None:
        """Add a symmetric edge between two nodes."""
        self.add_edge(a, b)
        self.add_edge(b, a)

    def neighbors(self, node_id: int) -> Tuple[int, ...]:
        """
        Get the neighbors of a node in insertion order.

        Returns:
            Tuple of adjacent node IDs

        Raises:
            PreconditionViolation: If the node doesn't exist
        """
        self._check_member(node_id)
        return tuple(self._adjacency[node_id])

    def degree(self, node_id: int) -> int:
        """Number of distinct other nodes adjacent to the node."""
        self._check_member(node_id)
        return len(self._adjacency[node_id])

    def edges(self) -> List[Tuple[int, int]]:
        """All directed edges as (from, to) pairs."""
        return [(a, b) for a, neighbors in self._adjacency.items() for b in neighbors]

    def is_symmetric(self) -> bool:
        """Check that every edge has its reverse."""
        return all(a in self._adjacency[b] for a, b in self.edges())

    def node_at(self, x: float, y: float) -> Optional[Node]:
        """Return the first node containing the board-space point, if any."""
        for node in self.nodes.values():
            if node.contains(x, y):
                return node
        return None

    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Compute a buffered bounding box for drawing the board.

        Returns:
            (min_x, min_y, max_x, max_y), each node padded by twice its radius
        """
        if not self.nodes:
            return (0.0, 0.0, 0.0, 0.0)

        min_x = min(n.position[0] - 2 * n.radius for n in self.nodes.values())
        min_y = min(n.position[1] - 2 * n.radius for n in self.nodes.values())
        max_x = max(n.position[0] + 2 * n.radius for n in self.nodes.values())
        max_y = max(n.position[1] + 2 * n.radius for n in self.nodes.values())
        return (min_x, min_y, max_x, max_y)

    def claim(self, node_id: int, player: Player) -> None:
        """
        Transfer ownership of a node to a player, keeping tallies consistent.

        Raises:
            PreconditionViolation: If the node doesn't exist or the board is frozen
            ValueError: If the player is not seated on this board
        """
        self._check_mutable()
        self._check_member(node_id)
        if player not in self.tallies:
            raise ValueError(f"Player {player.name} is not seated on this board")

        node = self.nodes[node_id]
        if node.owner == player:
            return
        if node.owner is not None:
            self.tallies[node.owner] -= 1
        self.tallies[player] += 1
        self.nodes[node_id] = replace(node, owner=player)

    def add_tokens(self, node_id: int, amount: int) -> None:
        """Change the token count of a node by amount."""
        self._check_mutable()
        self._check_member(node_id)
        node = self.nodes[node_id]
        if node.count + amount < 0:
            raise PreconditionViolation(f"Node {node_id} cannot hold a negative token count")
        self.nodes[node_id] = replace(node, count=node.count + amount)

    def tally_for(self, player: Player) -> int:
        """Number of nodes owned by the player."""
        return self.tallies.get(player, 0)

    def total_nodes(self) -> int:
        return len(self.nodes)

    def total_tokens(self) -> int:
        return sum(node.count for node in self.nodes.values())

    def winner(self) -> Optional[Player]:
        """The player who owns every node, or None."""
        total = self.total_nodes()
        if total == 0:
            return None
        for player in self.players:
            if self.tallies[player] == total:
                return player
        return None

    def has_winner(self) -> bool:
        return self.winner() is not None

    def is_full(self) -> bool:
        """Check if every node has been claimed by some player."""
        return sum(self.tallies.values()) == self.total_nodes()

    def clone(self) -> "BoardGraph":
        """
        Produce a deep, fully independent copy of the board.

        The copy is mutable and has no previous snapshot. Node records are
        immutable and may be shared; adjacency lists are not.
        """
        if self.resolving:
            raise PreconditionViolation("Cannot copy a board while a cascade is resolving")

        copy = BoardGraph(self.players)
        copy.nodes = dict(self.nodes)
        copy._adjacency = {node_id: list(neighbors) for node_id, neighbors in self._adjacency.items()}
        copy.tallies = dict(self.tallies)
        copy.current_index = self.current_index
        return copy

    def same_state(self, other: "BoardGraph") -> bool:
        """Compare structure, ownership, counts, tallies and turn pointer."""
        return (self.players == other.players
                and dict(self.nodes) == dict(other.nodes)
                and self._adjacency == other._adjacency
                and self.tallies == other.tallies
                and self.current_index == other.current_index)

    def to_dict(self) -> Dict:
        """
        Convert the board to dictionary format for JSON serialization.

        Returns:
            Dictionary representation of the board
        """
        winner = self.winner()
        return {
            "nodes": [
                {
                    "id": n.id,
                    "position": list(n.position),
                    "radius": n.radius,
                    "count": n.count,
                    "owner": n.owner.to_dict() if n.owner else None,
                    "degree": len(self._adjacency[n.id]),
                }
                for n in self.nodes.values()
            ],
            "edges": [{"from": a, "to": b} for a, b in self.edges()],
            "players": [
                dict(p.to_dict(), tally=self.tallies[p]) for p in self.players
            ],
            "current_player": self.players[self.current_index].to_dict(),
            "winner": winner.to_dict() if winner else None,
            "bounds": list(self.bounds()),
        }
