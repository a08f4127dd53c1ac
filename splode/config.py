# ===== SERVER CONFIGURATION =====
class ServerConfig:
    """WebSocket bridge configuration."""
    HOST = "localhost"
    PORT = 8765


# ===== GAME DEFAULTS =====
class GameDefaults:
    """Default settings for new games."""

    # Board shape
    TOPOLOGY = "grid"
    BOARD_WIDTH = 5
    BOARD_HEIGHT = 5

    # Hot-seat players as (name, color)
    PLAYERS = [("Red", "#e6194b"), ("Blue", "#4363d8")]

    # Presentation pacing between two firings of one cascade
    CASCADE_STEP_DELAY = 0.5  # seconds


# ===== BOARD GENERATION =====
class BoardConfig:
    """Board generation settings and limits."""

    # Size limits
    MIN_SIZE = 1
    MAX_SIZE = 50
    MIN_RING_SIZE = 3

    # Board-space geometry
    SPACING = 100.0
    GRID_RADIUS = 35.0
    RING_RADIUS = 100.0
    RING_NODE_SCALE = 0.35
    DIAMOND_RADIUS = 50.0

    # Player limits
    MIN_PLAYERS = 1
    MAX_PLAYERS = 8


# ===== CASCADE RESOLUTION =====
class CascadeConfig:
    """Cascade engine limits."""

    # Worklist pops allowed for a single move before the cascade is aborted
    MAX_STEPS = 30000
