from __future__ import annotations

from typing import Dict, Optional, Tuple

from .move import CastleSide, Move
from .position import CastlingRights, Color, Piece, PieceKind, Position, Square, freeze, thaw


# (color, side) -> (rook origin, rook destination)
CASTLE_ROOK_MOVES: Dict[Tuple[Color, CastleSide], Tuple[Square, Square]] = {
    (Color.WHITE, CastleSide.KINGSIDE): ((0, 7), (0, 5)),
    (Color.WHITE, CastleSide.QUEENSIDE): ((0, 0), (0, 3)),
    (Color.BLACK, CastleSide.KINGSIDE): ((7, 7), (7, 5)),
    (Color.BLACK, CastleSide.QUEENSIDE): ((7, 0), (7, 3)),
}

# rook corner -> (owner, kingside?)
ROOK_CORNERS: Dict[Square, Tuple[Color, bool]] = {
    (0, 0): (Color.WHITE, False),
    (0, 7): (Color.WHITE, True),
    (7, 0): (Color.BLACK, False),
    (7, 7): (Color.BLACK, True),
}


def apply_move(position: Position, move: Move) -> Position:
    """Return a new position with ``move`` applied.

    The input position is left untouched. No legality check is made and the
    move's flags are trusted as given; callers only pass generated moves.

    Args:
        position (Position): Position before the move.
        move (Move): Move produced by the move generator for ``position``.

    Returns:
        Position: Position after the move with the other side to move.
    """
    grid = thaw(position.board)
    from_r, from_f = move.from_sq
    to_r, to_f = move.to_sq
    piece = grid[from_r][from_f]
    if piece is None:
        raise ValueError("no piece to move from from_sq")
    mover = position.side_to_move

    # Counters
    if piece.kind is PieceKind.PAWN or move.is_capture:
        halfmove_clock = 0
    else:
        halfmove_clock = position.halfmove_clock + 1
    fullmove_number = position.fullmove_number + (1 if mover is Color.BLACK else 0)

    # Clear en passant by default; set only on double pawn pushes
    ep_square: Optional[Square] = None
    if move.is_double_push:
        ep_square = ((from_r + to_r) // 2, from_f)

    # Captured pawn sits beside the origin, on the destination file
    if move.is_en_passant:
        grid[from_r][to_f] = None

    if move.castle_side is not CastleSide.NONE:
        (rr, rf), (rtr, rtf) = CASTLE_ROOK_MOVES[(piece.color, move.castle_side)]
        grid[rtr][rtf] = grid[rr][rf]
        grid[rr][rf] = None

    placed = piece
    if piece.kind is PieceKind.PAWN and to_r == piece.color.promotion_rank:
        placed = Piece(PieceKind.QUEEN, piece.color)
    grid[from_r][from_f] = None
    grid[to_r][to_f] = placed

    castling = _revoke_castling(position.castling, piece, move)

    return Position(
        board=freeze(grid),
        side_to_move=mover.opposite,
        castling=castling,
        ep_square=ep_square,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )


def _revoke_castling(rights: CastlingRights, piece: Piece, move: Move) -> CastlingRights:
    """Update castling flags for king moves, rook moves and rook captures."""
    if piece.kind is PieceKind.KING:
        rights = rights.revoke_color(piece.color)
    if move.from_sq in ROOK_CORNERS:
        color, kingside = ROOK_CORNERS[move.from_sq]
        rights = rights.revoke(color, kingside)
    # Rook captured on its original square
    if move.is_capture and move.to_sq in ROOK_CORNERS:
        color, kingside = ROOK_CORNERS[move.to_sq]
        rights = rights.revoke(color, kingside)
    return rights
