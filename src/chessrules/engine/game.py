from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .apply import apply_move
from .errors import GameOverError, IllegalMoveError, NoHistoryError
from .fen import decode, encode, startpos
from .legality import all_legal_moves, has_legal_move, in_check, legal_moves
from .move import Move, in_bounds
from .position import Color, Position, Square


logger = logging.getLogger(__name__)


class StatusKind(Enum):
    ACTIVE = "active"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class GameStatus:
    kind: StatusKind
    winner: Optional[Color] = None

    @classmethod
    def active(cls) -> "GameStatus":
        return cls(StatusKind.ACTIVE)

    @classmethod
    def checkmate(cls, winner: Color) -> "GameStatus":
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> "GameStatus":
        return cls(StatusKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not StatusKind.ACTIVE

    def __str__(self) -> str:
        if self.kind is StatusKind.CHECKMATE and self.winner is not None:
            return f"checkmate ({'white' if self.winner is Color.WHITE else 'black'} wins)"
        return self.kind.value


def evaluate_status(position: Position) -> GameStatus:
    """Classify ``position`` for the side to move."""
    if has_legal_move(position):
        return GameStatus.active()
    if in_check(position):
        return GameStatus.checkmate(position.side_to_move.opposite)
    return GameStatus.stalemate()


@dataclass
class Game:
    """Game wrapper around a history of position snapshots.

    Responsibility: track positions, expose legal moves, apply moves, and
    report checkmate/stalemate. ``play``, ``undo`` and ``reset`` are the only
    mutators; each computes the new history and status before swapping them in.
    """

    history: List[Position]
    move_stack: List[Move] = field(default_factory=list)
    status: GameStatus = field(init=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(history=[startpos()])

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(history=[decode(fen)])

    def __post_init__(self) -> None:
        if not self.history:
            raise ValueError("game history needs an initial position")
        self.status = evaluate_status(self.history[-1])

    def current_position(self) -> Position:
        return self.history[-1]

    def to_fen(self) -> str:
        return encode(self.current_position())

    def legal_moves_for(self, square: Square) -> List[Move]:
        if self.status.is_terminal:
            return []
        return legal_moves(self.current_position(), square)

    def legal_moves(self) -> List[Move]:
        if self.status.is_terminal:
            return []
        return all_legal_moves(self.current_position())

    def play(self, move: Move) -> Tuple[Position, GameStatus]:
        """Apply a legal move for the side to move.

        ``move`` is matched against the generated legal moves by origin,
        destination and, when given, promotion piece. The generated move,
        with its flags, is what gets applied.

        Args:
            move (Move): Move or move request (see ``parse_uci``).

        Returns:
            Tuple[Position, GameStatus]: New current position and status.

        Raises:
            GameOverError: If the game already ended in checkmate or stalemate.
            IllegalMoveError: If no legal move matches ``move``, including
                requests naming a square off the board.
        """
        if not (in_bounds(*move.from_sq) and in_bounds(*move.to_sq)):
            logger.warning(
                "move off the board",
                extra={"from_sq": move.from_sq, "to_sq": move.to_sq},
            )
            raise IllegalMoveError(f"square off the board: {move.from_sq} -> {move.to_sq}")
        if self.status.is_terminal:
            logger.warning(
                "move after game end",
                extra={"move": move.to_uci(), "status": str(self.status)},
            )
            raise GameOverError(f"game is over: {self.status}")
        current = self.current_position()
        resolved = self._resolve(current, move)
        if resolved is None:
            logger.warning("illegal move", extra={"move": move.to_uci(), "fen": encode(current)})
            raise IllegalMoveError(f"illegal move: {move.to_uci()}")

        after = apply_move(current, resolved)
        status = evaluate_status(after)
        context = {"move": resolved.to_uci(), "fen": encode(after), "status": str(status)}
        self.history = self.history + [after]
        self.move_stack = self.move_stack + [resolved]
        self.status = status
        logger.info("move played", extra=context)
        return after, status

    def undo(self) -> Position:
        """Drop the latest position and return the one before it.

        Raises:
            NoHistoryError: If only the initial position remains.
        """
        if len(self.history) <= 1:
            raise NoHistoryError("no moves to undo")
        history = self.history[:-1]
        status = evaluate_status(history[-1])
        self.history = history
        self.move_stack = self.move_stack[:-1]
        self.status = status
        logger.info("move undone", extra={"fen": encode(history[-1])})
        return history[-1]

    def reset(self) -> Position:
        """Start a new game from the standard starting position."""
        position = startpos()
        self.history = [position]
        self.move_stack = []
        self.status = evaluate_status(position)
        logger.info("game reset")
        return position

    # --- State flags ---
    def in_check(self) -> bool:
        return in_check(self.current_position())

    def checkmate(self) -> bool:
        return self.status.kind is StatusKind.CHECKMATE

    def stalemate(self) -> bool:
        return self.status.kind is StatusKind.STALEMATE

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]

    @staticmethod
    def _resolve(position: Position, move: Move) -> Optional[Move]:
        if not (in_bounds(*move.from_sq) and in_bounds(*move.to_sq)):
            return None
        for m in legal_moves(position, move.from_sq):
            if m.to_sq != move.to_sq:
                continue
            if move.promotion is not None and move.promotion != m.promotion:
                continue
            return m
        return None
