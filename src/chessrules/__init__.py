from __future__ import annotations

from .engine.errors import (
    ChessRulesError,
    GameOverError,
    IllegalMoveError,
    MalformedPositionError,
    NoHistoryError,
)
from .engine.fen import STARTPOS_FEN, decode, encode
from .engine.game import Game, GameStatus, StatusKind
from .engine.move import CastleSide, Move, parse_uci, square_to_str, str_to_square
from .engine.position import CastlingRights, Color, Piece, PieceKind, Position


__all__ = [
    "CastleSide",
    "CastlingRights",
    "ChessRulesError",
    "Color",
    "Game",
    "GameOverError",
    "GameStatus",
    "IllegalMoveError",
    "MalformedPositionError",
    "Move",
    "NoHistoryError",
    "Piece",
    "PieceKind",
    "Position",
    "STARTPOS_FEN",
    "StatusKind",
    "decode",
    "encode",
    "parse_uci",
    "square_to_str",
    "str_to_square",
]
