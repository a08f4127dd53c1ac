"""
Board generators.

Every topology is produced by a plain function that returns a symmetric
BoardGraph; ``generate`` picks one by its tag. Coordinates are in board space
and only matter relative to one another.
"""

import logging
import math
from typing import Callable, Dict, Optional, Sequence, Tuple

from .config import BoardConfig
from .core import BoardGraph, Node, Player

logger = logging.getLogger(__name__)


def _check_size(name: str, value: int, minimum: int = BoardConfig.MIN_SIZE) -> None:
    if not (minimum <= value <= BoardConfig.MAX_SIZE):
        raise ValueError(f"Board {name} must be between {minimum} and {BoardConfig.MAX_SIZE}")


def geometric(graph: BoardGraph, distance: float) -> None:
    """
    Connect every pair of distinct nodes lying within the given distance.

    Args:
        graph: Board whose nodes are already placed
        distance: Maximum centre-to-centre distance for two nodes to be adjacent
    """
    nodes = list(graph.nodes.values())
    for n1 in nodes:
        for n2 in nodes:
            if n1.id == n2.id:
                continue
            dx = n1.position[0] - n2.position[0]
            dy = n1.position[1] - n2.position[1]
            if math.sqrt(dx * dx + dy * dy) <= distance:
                graph.add_edge(n1.id, n2.id)


def grid(players: Sequence[Player], width: int, height: Optional[int] = None) -> BoardGraph:
    """
    Generate a rectangular board with orthogonal connections.

    Nodes are numbered column by column, so the node at column x and row y has
    ID x * height + y.

    Args:
        players: Players in turn order
        width: Number of columns
        height: Number of rows (defaults to width)

    Raises:
        ValueError: If a dimension is out of range
    """
    height = width if height is None else height
    _check_size("width", width)
    _check_size("height", height)

    graph = BoardGraph(players)
    spacing = BoardConfig.SPACING
    for x in range(width):
        for y in range(height):
            graph.add_node(Node(x * height + y, (x * spacing, y * spacing), BoardConfig.GRID_RADIUS))

    for i in range(width * height):
        if i >= height:
            graph.add_edge(i, i - height)
        if i % height != height - 1:
            graph.add_edge(i, i + 1)
        if i < (width - 1) * height:
            graph.add_edge(i, i + height)
        if i % height != 0:
            graph.add_edge(i, i - 1)

    return graph


def square(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    return grid(players, size, size)


def path(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    return grid(players, size, 1)


def _ring(players: Sequence[Player], size: int) -> Tuple[BoardGraph, float]:
    """Place size nodes evenly on a circle; returns the board and the chord length."""
    _check_size("size", size, BoardConfig.MIN_RING_SIZE)

    r = BoardConfig.RING_RADIUS
    angle = 2 * math.pi / size
    chord = math.sqrt((r * math.cos(angle) - r) ** 2 + (r * math.sin(angle)) ** 2)

    graph = BoardGraph(players)
    for i in range(size):
        position = (r * math.cos(angle * i), r * math.sin(angle * i))
        graph.add_node(Node(i, position, BoardConfig.RING_NODE_SCALE * chord))
    return graph, chord


def cycle(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    """Generate a cycle of size nodes."""
    graph, chord = _ring(players, size)
    geometric(graph, chord + 1)
    return graph


def wheel(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    """Generate a cycle of size rim nodes plus a hub adjacent to all of them."""
    graph, chord = _ring(players, size)
    geometric(graph, chord + 1)

    hub = size
    graph.add_node(Node(hub, (0.0, 0.0), BoardConfig.RING_NODE_SCALE * chord))
    for i in range(size):
        graph.connect(hub, i)
    return graph


def complete(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    """Generate a board where every node is adjacent to every other node."""
    if size < BoardConfig.MIN_RING_SIZE:
        _check_size("size", size)
        graph = BoardGraph(players)
        for i in range(size):
            graph.add_node(Node(i, (i * BoardConfig.SPACING, 0.0), BoardConfig.GRID_RADIUS))
    else:
        graph, _ = _ring(players, size)

    for a in graph.nodes:
        for b in graph.nodes:
            if a != b:
                graph.add_edge(a, b)
    return graph


def diamond(players: Sequence[Player], size: int, height: Optional[int] = None) -> BoardGraph:
    """Generate the checkerboard cells of a size x size lattice, joined diagonally."""
    _check_size("size", size)

    graph = BoardGraph(players)
    spacing = BoardConfig.SPACING
    node_id = 0
    for i in range(size):
        for j in range(size):
            if (i + j) % 2 == 0:
                graph.add_node(Node(node_id, (i * spacing, j * spacing), BoardConfig.DIAMOND_RADIUS))
                node_id += 1

    geometric(graph, spacing * math.sqrt(2) + 10)
    return graph


GENERATORS: Dict[str, Callable[..., BoardGraph]] = {
    "grid": grid,
    "rect": grid,
    "square": square,
    "path": path,
    "cycle": cycle,
    "wheel": wheel,
    "complete": complete,
    "diamond": diamond,
}


def generate(topology: str, players: Sequence[Player], size: int,
             height: Optional[int] = None) -> BoardGraph:
    """
    Build a board for a named topology.

    Args:
        topology: One of the keys of GENERATORS
        players: Players in turn order
        size: Primary size parameter (width or node count)
        height: Grid height, ignored by other topologies

    Returns:
        A fresh symmetric board with every node unclaimed

    Raises:
        ValueError: If the topology is unknown or the parameters are out of range
    """
    if topology not in GENERATORS:
        raise ValueError(f"Unknown topology '{topology}'. Choose from: {', '.join(sorted(GENERATORS))}")
    if not (BoardConfig.MIN_PLAYERS <= len(players) <= BoardConfig.MAX_PLAYERS):
        raise ValueError(f"Player count must be between {BoardConfig.MIN_PLAYERS} and {BoardConfig.MAX_PLAYERS}")

    graph = GENERATORS[topology](players, size, height)
    logger.info(f"Generated {topology} board with {graph.total_nodes()} nodes "
                f"for {len(players)} players")
    return graph
