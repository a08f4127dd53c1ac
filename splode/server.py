"""
Local hot-seat WebSocket bridge for Splode.

Hosts one GameSession so that a browser renderer can draw the board and forward
clicks. All connected clients see the same board.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Set

import websockets
from websockets.asyncio.server import ServerConnection, serve
from websockets.typing import Data

from .config import GameDefaults, ServerConfig
from .core import Player
from .engine import MoveResult
from .session import GameSession

logger = logging.getLogger(__name__)


def parse_players(data: Optional[List[Dict[str, Any]]]) -> List[Player]:
    """Build players from a list of {name, color} dicts, or the defaults."""
    if not data:
        return [Player(name, color) for name, color in GameDefaults.PLAYERS]
    players = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError("Each player needs a name")
        players.append(Player(str(entry["name"]), str(entry.get("color", "#000000"))))
    return players


class GameServer:
    """
    WebSocket server around a single hot-seat session.
    """

    def __init__(self, session: Optional[GameSession] = None):
        """Initialize the server with a default board if no session is given."""
        self.session = session or GameSession.new(
            GameDefaults.TOPOLOGY, parse_players(None),
            GameDefaults.BOARD_WIDTH, GameDefaults.BOARD_HEIGHT)
        self.connections: Set[ServerConnection] = set()
        logger.info(f"Server initialized with {self.session.graph.total_nodes()} nodes")

    async def send(self, websocket: ServerConnection, message: Dict[str, Any]) -> bool:
        """Send one message; False if the client is gone."""
        try:
            await websocket.send(json.dumps(message))
            return True
        except websockets.exceptions.ConnectionClosed:
            self.connections.discard(websocket)
            return False

    async def send_error(self, websocket: ServerConnection, error_message: str) -> bool:
        return await self.send(websocket, {"type": "error", "message": error_message})

    async def handle_client(self, websocket: ServerConnection) -> None:
        """Handle a new WebSocket client connection."""
        logger.info(f"New connection from {websocket.remote_address}")
        self.connections.add(websocket)
        await self.send(websocket, self.session.to_dict())

        try:
            async for message in websocket:
                await self.handle_message(websocket, message)
        except websockets.exceptions.ConnectionClosed:
            logger.info(f"Connection closed: {websocket.remote_address}")
        except Exception as e:
            logger.error(f"Error handling client: {e}")
        finally:
            self.connections.discard(websocket)

    async def handle_message(self, websocket: ServerConnection, message: Data) -> None:
        """Parse and route an incoming message."""
        try:
            data = json.loads(message)
            if not isinstance(data, dict):
                raise ValueError("Message must be a JSON object")
            message_type = data.get("type")

            if message_type == "new_game":
                await self.handle_new_game(data)

            elif message_type == "place":
                node_id = data.get("node")
                if not isinstance(node_id, int):
                    raise ValueError("node must be an integer")
                await self.handle_move(websocket, self.session.place(node_id))

            elif message_type == "click":
                x, y = float(data["x"]), float(data["y"])
                await self.handle_move(websocket, self.session.click(x, y))

            elif message_type == "undo":
                await self.handle_undo(websocket)

            elif message_type == "get_state":
                await self.send(websocket, self.session.to_dict())

            else:
                await self.send_error(websocket, f"Unknown message type: {message_type}")

        except json.JSONDecodeError:
            await self.send_error(websocket, "Invalid JSON format")
        except (KeyError, TypeError, ValueError) as e:
            await self.send_error(websocket, f"Invalid message: {e}")
        except Exception as e:
            logger.error(f"Error handling message: {e}")
            await self.send_error(websocket, "Internal server error")

    async def handle_new_game(self, data: Dict[str, Any]) -> None:
        """Replace the session with a freshly generated board."""
        topology = data.get("topology", GameDefaults.TOPOLOGY)
        size = int(data.get("size", GameDefaults.BOARD_WIDTH))
        height = data.get("height")
        players = parse_players(data.get("players"))

        self.session = GameSession.new(topology, players, size,
                                       int(height) if height is not None else None)
        logger.info(f"New {topology} game with {len(players)} players")
        await self.broadcast_game_state()

    async def handle_move(self, websocket: ServerConnection, result: MoveResult) -> None:
        """Report a move to its sender, or the new board to everyone."""
        if not result.applied:
            await self.send(websocket, {
                "type": "move_result",
                **result.to_dict(),
            })
            return

        await self.broadcast({
            "type": "move_result",
            "step_delay": GameDefaults.CASCADE_STEP_DELAY,
            **result.to_dict(),
        })
        await self.broadcast_game_state()

    async def handle_undo(self, websocket: ServerConnection) -> None:
        if not self.session.undo():
            await self.send_error(websocket, "Nothing to undo")
            return
        await self.broadcast_game_state()

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Send a message to every client, dropping the ones that went away."""
        message_json = json.dumps(message)
        for websocket in list(self.connections):
            try:
                await websocket.send(message_json)
            except websockets.exceptions.ConnectionClosed:
                logger.info(f"Dropping closed connection {websocket.remote_address}")
                self.connections.discard(websocket)

    async def broadcast_game_state(self) -> None:
        """Broadcast the current board to every client."""
        await self.broadcast(self.session.to_dict())


async def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the bridge until interrupted."""
    host = host or ServerConfig.HOST
    port = port or ServerConfig.PORT

    server = GameServer()
    logger.info(f"Starting server on {host}:{port}")

    async with serve(server.handle_client, host, port):
        await asyncio.Future()


def main() -> None:
    """Console entry point."""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")


if __name__ == "__main__":
    main()
