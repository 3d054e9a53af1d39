from __future__ import annotations

from typing import List, Optional

from .apply import apply_move
from .attacks import find_king, is_attacked
from .move import Move, in_bounds
from .movegen import pseudo_moves
from .position import Color, Position, Square


def legal_moves(position: Position, square: Square) -> List[Move]:
    """Return legal moves for the piece on ``square``.

    Each pseudo-legal move is applied to a throwaway position and kept only
    if the mover's king is not attacked afterwards. Off-board squares and
    pieces that do not belong to the side to move have no legal moves.

    Args:
        position (Position): Current position.
        square (Square): Origin square.

    Returns:
        List[Move]: Legal moves in generation order.
    """
    if not in_bounds(*square):
        return []
    piece = position.piece_at(square)
    if piece is None or piece.color is not position.side_to_move:
        return []
    legal: List[Move] = []
    for mv in pseudo_moves(position, square):
        after = apply_move(position, mv)
        king_sq = find_king(after.board, piece.color)
        if king_sq is None:
            continue
        if not is_attacked(after.board, king_sq, after.side_to_move):
            legal.append(mv)
    return legal


def all_legal_moves(position: Position) -> List[Move]:
    """Return legal moves for every piece of the side to move."""
    moves: List[Move] = []
    for sq, _piece in position.pieces(position.side_to_move):
        moves.extend(legal_moves(position, sq))
    return moves


def has_legal_move(position: Position) -> bool:
    for sq, _piece in position.pieces(position.side_to_move):
        if legal_moves(position, sq):
            return True
    return False


def in_check(position: Position, color: Optional[Color] = None) -> bool:
    """Return True if the king of ``color`` (default: side to move) is attacked."""
    if color is None:
        color = position.side_to_move
    king_sq = find_king(position.board, color)
    if king_sq is None:
        return False
    return is_attacked(position.board, king_sq, color.opposite)
