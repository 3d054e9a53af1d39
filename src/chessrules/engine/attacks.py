from __future__ import annotations

from typing import Optional, Tuple

from .move import in_bounds
from .position import Board, Color, PieceKind, Square


# (rank delta, file delta) tables; order fixes move generation order
KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, -1),
    (2, 1),
    (1, -2),
    (1, 2),
    (-1, -2),
    (-1, 2),
    (-2, -1),
    (-2, 1),
)
KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, -1),
    (1, 0),
    (1, 1),
    (0, -1),
    (0, 1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)
BISHOP_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, -1), (1, 1), (-1, -1), (-1, 1))
ROOK_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, -1), (0, 1))
QUEEN_DIRECTIONS = BISHOP_DIRECTIONS + ROOK_DIRECTIONS


def is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Return True if ``square`` is attacked by any piece of ``by_color``.

    Covers: pawns, knights, king, and slider rays for bishops/rooks/queens.
    The query is static: it knows nothing about whose turn it is, en passant
    or castling, only which pieces could capture on ``square`` right now.
    """
    r, f = square

    # Pawn attacks: a pawn of by_color one step "behind" the square
    pr = r - by_color.pawn_direction
    for pf in (f - 1, f + 1):
        if in_bounds(pr, pf) and _is(board, pr, pf, PieceKind.PAWN, by_color):
            return True

    # Knight attacks
    for dr, df in KNIGHT_OFFSETS:
        tr, tf = r + dr, f + df
        if in_bounds(tr, tf) and _is(board, tr, tf, PieceKind.KNIGHT, by_color):
            return True

    # King attacks
    for dr, df in KING_OFFSETS:
        tr, tf = r + dr, f + df
        if in_bounds(tr, tf) and _is(board, tr, tf, PieceKind.KING, by_color):
            return True

    # Slider attacks (bishop/rook/queen)
    if _ray_hits(board, r, f, BISHOP_DIRECTIONS, (PieceKind.BISHOP, PieceKind.QUEEN), by_color):
        return True
    if _ray_hits(board, r, f, ROOK_DIRECTIONS, (PieceKind.ROOK, PieceKind.QUEEN), by_color):
        return True

    return False


def _is(board: Board, rank: int, file: int, kind: PieceKind, color: Color) -> bool:
    piece = board[rank][file]
    return piece is not None and piece.kind is kind and piece.color is color


def _ray_hits(
    board: Board,
    r: int,
    f: int,
    directions: Tuple[Tuple[int, int], ...],
    kinds: Tuple[PieceKind, ...],
    by_color: Color,
) -> bool:
    for dr, df in directions:
        tr, tf = r + dr, f + df
        while in_bounds(tr, tf):
            piece = board[tr][tf]
            if piece is not None:
                # First piece on the ray either attacks or blocks
                if piece.color is by_color and piece.kind in kinds:
                    return True
                break
            tr += dr
            tf += df
    return False


def find_king(board: Board, color: Color) -> Optional[Square]:
    """Locate the king of ``color``; ``None`` if the board has none."""
    for rank in range(8):
        for file in range(8):
            if _is(board, rank, file, PieceKind.KING, color):
                return rank, file
    return None
