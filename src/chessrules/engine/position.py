from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Tuple


# (rank, file), both 0..7; rank 0 is white's back rank, file 0 is the a-file
Square = Tuple[int, int]


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """Rank delta of a single pawn step for this color."""
        return 1 if self is Color.WHITE else -1

    @property
    def back_rank(self) -> int:
        return 0 if self is Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        return 7 if self is Color.WHITE else 0


class PieceKind(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    @property
    def symbol(self) -> str:
        """Interchange letter, uppercase for white."""
        ch = self.kind.value
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Build a piece from its interchange letter.

        Raises:
            ValueError: If ``ch`` is not one of ``pnbrqkPNBRQK``.
        """
        kind = PieceKind(ch.lower())
        return cls(kind, Color.WHITE if ch.isupper() else Color.BLACK)


# board[rank][file]; immutable so a Board can never be changed under a
# Position that refers to it
Board = Tuple[Tuple[Optional[Piece], ...], ...]


def empty_board() -> Board:
    return tuple((None,) * 8 for _ in range(8))


def thaw(board: Board) -> List[List[Optional[Piece]]]:
    """Return a private mutable copy of ``board``."""
    return [list(row) for row in board]


def freeze(grid: List[List[Optional[Piece]]]) -> Board:
    return tuple(tuple(row) for row in grid)


def iter_pieces(board: Board) -> Iterator[Tuple[Square, Piece]]:
    """Yield ``(square, piece)`` for occupied squares, a1..h1, a2..h8."""
    for rank in range(8):
        for file in range(8):
            piece = board[rank][file]
            if piece is not None:
                yield (rank, file), piece


@dataclass(frozen=True)
class CastlingRights:
    """Castling availability as four independent flags."""

    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False

    @classmethod
    def all(cls) -> "CastlingRights":
        return cls(True, True, True, True)

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls()

    def has(self, color: Color, kingside: bool) -> bool:
        if color is Color.WHITE:
            return self.white_kingside if kingside else self.white_queenside
        return self.black_kingside if kingside else self.black_queenside

    def revoke(self, color: Color, kingside: bool) -> "CastlingRights":
        if color is Color.WHITE:
            field_name = "white_kingside" if kingside else "white_queenside"
        else:
            field_name = "black_kingside" if kingside else "black_queenside"
        return replace(self, **{field_name: False})

    def revoke_color(self, color: Color) -> "CastlingRights":
        return self.revoke(color, True).revoke(color, False)

    def any(self) -> bool:
        return (
            self.white_kingside
            or self.white_queenside
            or self.black_kingside
            or self.black_queenside
        )

    def to_fen(self) -> str:
        out = ""
        if self.white_kingside:
            out += "K"
        if self.white_queenside:
            out += "Q"
        if self.black_kingside:
            out += "k"
        if self.black_queenside:
            out += "q"
        return out or "-"

    @classmethod
    def from_fen(cls, field: str) -> "CastlingRights":
        """Parse the castling field of a position string.

        Raises:
            ValueError: If ``field`` is not ``-`` or a duplicate-free subset
                of ``KQkq``.
        """
        if field == "-":
            return cls.none()
        if not field or any(ch not in "KQkq" for ch in field) or len(set(field)) != len(field):
            raise ValueError(f"invalid castling rights: {field!r}")
        return cls("K" in field, "Q" in field, "k" in field, "q" in field)


@dataclass(frozen=True)
class Position:
    """Full game-state snapshot.

    Positions are values: every transformation returns a new one and the
    board inside is immutable.
    """

    board: Board
    side_to_move: Color
    castling: CastlingRights
    ep_square: Optional[Square]
    halfmove_clock: int
    fullmove_number: int

    def piece_at(self, sq: Square) -> Optional[Piece]:
        rank, file = sq
        return self.board[rank][file]

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        for sq, piece in iter_pieces(self.board):
            if color is None or piece.color is color:
                yield sq, piece
