from __future__ import annotations

from typing import List, Optional, Tuple

from .attacks import (
    BISHOP_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRECTIONS,
    ROOK_DIRECTIONS,
    is_attacked,
)
from .move import CastleSide, Move, in_bounds
from .position import Color, Piece, PieceKind, Position, Square


KING_HOME_FILE = 4

# side -> (rook file, squares that must be empty, king path incl. start)
CASTLING_LANES = {
    CastleSide.KINGSIDE: (7, (5, 6), (4, 5, 6)),
    CastleSide.QUEENSIDE: (0, (1, 2, 3), (4, 3, 2)),
}

SLIDER_DIRECTIONS = {
    PieceKind.BISHOP: BISHOP_DIRECTIONS,
    PieceKind.ROOK: ROOK_DIRECTIONS,
    PieceKind.QUEEN: QUEEN_DIRECTIONS,
}


def pseudo_moves(position: Position, square: Square) -> List[Move]:
    """Return pseudo-legal moves for the piece on ``square``.

    Pseudo-legal moves follow each piece's movement shape but may leave the
    mover's own king attacked; ``legality.legal_moves`` filters those out.
    The side to move is not consulted here.

    Args:
        position (Position): Position to generate in.
        square (Square): Origin square.

    Returns:
        List[Move]: Moves in a fixed order; empty if ``square`` is empty.
    """
    piece = position.piece_at(square)
    if piece is None:
        return []
    if piece.kind is PieceKind.PAWN:
        return _pawn_moves(position, square, piece)
    if piece.kind is PieceKind.KNIGHT:
        return _leaper_moves(position, square, piece, KNIGHT_OFFSETS)
    if piece.kind is PieceKind.KING:
        moves = _leaper_moves(position, square, piece, KING_OFFSETS)
        moves.extend(_castling_moves(position, square, piece))
        return moves
    return _slider_moves(position, square, piece, SLIDER_DIRECTIONS[piece.kind])


def _pawn_moves(position: Position, square: Square, piece: Piece) -> List[Move]:
    moves: List[Move] = []
    board = position.board
    r, f = square
    color = piece.color
    step = color.pawn_direction
    start_rank = 1 if color is Color.WHITE else 6
    promo: Optional[PieceKind] = None
    if r + step == color.promotion_rank:
        # Promotion always produces a queen
        promo = PieceKind.QUEEN

    # Single and double pushes
    tr = r + step
    if in_bounds(tr, f) and board[tr][f] is None:
        moves.append(Move(square, (tr, f), promotion=promo))
        tr2 = r + 2 * step
        if r == start_rank and board[tr2][f] is None:
            moves.append(Move(square, (tr2, f), is_double_push=True))

    # Diagonal captures
    for tf in (f - 1, f + 1):
        if not in_bounds(tr, tf):
            continue
        target = board[tr][tf]
        if target is not None and target.color is not color:
            moves.append(Move(square, (tr, tf), is_capture=True, promotion=promo))

    # En passant onto the target square behind a double-pushed pawn
    ep = position.ep_square
    if ep is not None and ep[0] == tr and abs(ep[1] - f) == 1:
        moves.append(Move(square, ep, is_capture=True, is_en_passant=True))

    return moves


def _leaper_moves(
    position: Position,
    square: Square,
    piece: Piece,
    offsets: Tuple[Tuple[int, int], ...],
) -> List[Move]:
    moves: List[Move] = []
    r, f = square
    for dr, df in offsets:
        tr, tf = r + dr, f + df
        if not in_bounds(tr, tf):
            continue
        target = position.board[tr][tf]
        if target is None:
            moves.append(Move(square, (tr, tf)))
        elif target.color is not piece.color:
            moves.append(Move(square, (tr, tf), is_capture=True))
    return moves


def _slider_moves(
    position: Position,
    square: Square,
    piece: Piece,
    directions: Tuple[Tuple[int, int], ...],
) -> List[Move]:
    moves: List[Move] = []
    r, f = square
    for dr, df in directions:
        tr, tf = r + dr, f + df
        while in_bounds(tr, tf):
            target = position.board[tr][tf]
            if target is None:
                moves.append(Move(square, (tr, tf)))
            else:
                if target.color is not piece.color:
                    moves.append(Move(square, (tr, tf), is_capture=True))
                break
            tr += dr
            tf += df
    return moves


def _castling_moves(position: Position, square: Square, piece: Piece) -> List[Move]:
    color = piece.color
    home = color.back_rank
    if square != (home, KING_HOME_FILE):
        return []
    board = position.board
    enemy = color.opposite
    moves: List[Move] = []
    for side, (rook_file, between, king_path) in CASTLING_LANES.items():
        if not position.castling.has(color, side is CastleSide.KINGSIDE):
            continue
        rook = board[home][rook_file]
        if rook is None or rook.kind is not PieceKind.ROOK or rook.color is not color:
            continue
        if any(board[home][file] is not None for file in between):
            continue
        # The rook's own square may be attacked; only the king's path matters
        if any(is_attacked(board, (home, file), enemy) for file in king_path):
            continue
        moves.append(Move(square, (home, king_path[-1]), castle_side=side))
    return moves
