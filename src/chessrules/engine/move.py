from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .position import PieceKind, Square


PROMOTION_PIECES = {"q", "r", "b", "n"}


class CastleSide(Enum):
    NONE = "none"
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Flags are decided by the move generator and consumed unchanged by the
    applier, which never re-derives them from board contents.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        is_capture (bool): Move removes an enemy piece (en passant included).
        is_double_push (bool): Pawn advanced two ranks from its start rank.
        is_en_passant (bool): Pawn captures onto the en-passant target.
        castle_side (CastleSide): Which rook travels with the king, if any.
        promotion (Optional[PieceKind]): Piece the pawn turns into, if any.
    """

    from_sq: Square
    to_sq: Square
    is_capture: bool = False
    is_double_push: bool = False
    is_en_passant: bool = False
    castle_side: CastleSide = CastleSide.NONE
    promotion: Optional[PieceKind] = None

    def to_uci(self) -> str:
        """Serialize the move into long algebraic UCI form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        promo = self.promotion.value if self.promotion is not None else ""
        return square_to_str(self.from_sq) + square_to_str(self.to_sq) + promo

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(uci: str) -> Move:
    """Parse a UCI move string into a move request.

    The result carries no capture/castle/en-passant flags; it only names the
    squares (and promotion piece). ``Game.play`` resolves it against the
    generated legal moves.

    Args:
        uci (str): Move encoded in long algebraic notation (e.g. ``"e2e4"``).

    Returns:
        Move: Parsed move request.

    Raises:
        ValueError: If the string has an invalid length, squares, or promotion
            piece.
    """
    if len(uci) not in (4, 5):
        raise ValueError(f"invalid UCI move length: {uci!r}")
    from_sq = str_to_square(uci[0:2])
    to_sq = str_to_square(uci[2:4])
    promo: Optional[PieceKind] = None
    if len(uci) == 5:
        letter = uci[4].lower()
        if letter not in PROMOTION_PIECES:
            raise ValueError(f"invalid promotion piece: {letter!r}")
        promo = PieceKind(letter)
    return Move(from_sq, to_sq, promotion=promo)


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a ``(rank, file)`` pair.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: Zero-based ``(rank, file)``.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return int(s[1]) - 1, ord(s[0]) - ord("a")


def square_to_str(sq: Square) -> str:
    """Convert a ``(rank, file)`` pair into algebraic notation.

    Args:
        sq (Square): Zero-based ``(rank, file)``.

    Returns:
        str: Algebraic notation for ``sq``.

    Raises:
        ValueError: If ``sq`` is outside the board.
    """
    rank, file = sq
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise ValueError(f"invalid square: {sq!r}")
    return chr(ord("a") + file) + str(rank + 1)


def in_bounds(rank: int, file: int) -> bool:
    return 0 <= rank < 8 and 0 <= file < 8
