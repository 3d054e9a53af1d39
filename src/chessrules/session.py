from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, List, Optional, Tuple

from .engine.game import Game, GameStatus
from .engine.move import Move
from .engine.position import Position, Square


logger = logging.getLogger(__name__)


class GameSession:
    """A game whose mutating operations run behind a single-writer lock.

    Reads hand out immutable positions, so only ``play``, ``undo`` and
    ``reset`` need serializing.
    """

    def __init__(self, game: Optional[Game] = None) -> None:
        self._lock = threading.Lock()
        self._game = game if game is not None else Game.new()

    def current_position(self) -> Position:
        with self._lock:
            return self._game.current_position()

    def status(self) -> GameStatus:
        with self._lock:
            return self._game.status

    def legal_moves_for(self, square: Square) -> List[Move]:
        with self._lock:
            return self._game.legal_moves_for(square)

    def play(self, move: Move) -> Tuple[Position, GameStatus]:
        with self._lock:
            return self._game.play(move)

    def undo(self) -> Position:
        with self._lock:
            return self._game.undo()

    def reset(self) -> Position:
        with self._lock:
            return self._game.reset()

    def to_fen(self) -> str:
        with self._lock:
            return self._game.to_fen()


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve existing sessions by `game_id`
    - Delete sessions
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, GameSession] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        session = GameSession(game)
        with self._lock:
            self._sessions[gid] = session
        logger.info("session created", extra={"game_id": gid})
        return gid

    def get(self, game_id: str) -> GameSession:
        """Return the session for `game_id`.

        Raises:
            KeyError: If no session has that id.
        """
        with self._lock:
            return self._sessions[game_id]

    def delete(self, game_id: str) -> None:
        with self._lock:
            if game_id in self._sessions:
                del self._sessions[game_id]
                logger.info("session deleted", extra={"game_id": game_id})

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._sessions
