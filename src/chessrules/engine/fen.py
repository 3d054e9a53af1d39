from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import MalformedPositionError
from .move import square_to_str, str_to_square
from .position import (
    Board,
    CastlingRights,
    Color,
    Piece,
    Position,
    Square,
    empty_board,
    freeze,
    thaw,
)


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def startpos() -> Position:
    """Return the standard chess starting position."""
    return decode(STARTPOS_FEN)


def decode(fen: str) -> Position:
    """Create a position from a Forsyth–Edwards Notation (FEN) string.

    Args:
        fen (str): FEN string describing the position to load.

    Returns:
        Position: Snapshot encoded in ``fen``.

    Raises:
        MalformedPositionError: If ``fen`` is empty, has the wrong number of
            fields, or contains invalid piece placement, castling rights, en
            passant square, or move counters.

    Notes:
        Castling rights are accepted in any order and normalized to ``KQkq``
        ordering, so ``encode`` may not reproduce such input verbatim.
    """
    if not fen or not isinstance(fen, str):
        raise MalformedPositionError("FEN must be a non-empty string")
    parts = fen.strip().split()
    if len(parts) != 6:
        raise MalformedPositionError("FEN must have 6 fields")
    placement, stm, castling, ep, halfmove, fullmove = parts

    board = _decode_placement(placement)

    if stm not in ("w", "b"):
        raise MalformedPositionError("side to move must be 'w' or 'b'")

    try:
        rights = CastlingRights.from_fen(castling)
    except ValueError as e:
        raise MalformedPositionError("invalid castling rights") from e

    ep_square: Optional[Square]
    if ep == "-":
        ep_square = None
    else:
        try:
            ep_square = str_to_square(ep)
        except ValueError as e:
            raise MalformedPositionError("invalid en passant square") from e
        # Target square sits behind an enemy pawn that just double-pushed
        if ep_square[0] != (5 if stm == "w" else 2):
            raise MalformedPositionError("invalid en passant square rank")

    if not all(c.isascii() and c.isdigit() for c in (halfmove, fullmove)):
        raise MalformedPositionError("invalid move counters in FEN")
    halfmove_clock = int(halfmove)
    fullmove_number = int(fullmove)
    if fullmove_number <= 0:
        raise MalformedPositionError("invalid move counters in FEN")

    return Position(
        board=board,
        side_to_move=Color(stm),
        castling=rights,
        ep_square=ep_square,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )


def _decode_placement(placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedPositionError("FEN board must have 8 ranks")
    grid = thaw(empty_board())
    for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
        file_idx = 0
        for ch in rank:
            if ch in "0123456789":
                n = int(ch)
                if n < 1 or n > 8:
                    raise MalformedPositionError("invalid empty count in FEN rank")
                file_idx += n
            else:
                try:
                    piece = Piece.from_symbol(ch)
                except ValueError as e:
                    raise MalformedPositionError(f"invalid piece in FEN: {ch!r}") from e
                if file_idx >= 8:
                    raise MalformedPositionError("too many squares in FEN rank")
                grid[rank_idx][file_idx] = piece
                file_idx += 1
            if file_idx > 8:
                raise MalformedPositionError("too many squares in FEN rank")
        if file_idx != 8:
            raise MalformedPositionError("rank does not sum to 8 squares in FEN")
    return freeze(grid)


def encode(position: Position) -> str:
    """Serialize a position into a normalized FEN string.

    Returns:
        str: FEN string; castling and en passant fields are ``-`` when unset.
    """
    ranks_str: List[str] = []
    for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
        run = 0
        row: List[str] = []
        for file_idx in range(8):
            piece = position.board[rank_idx][file_idx]
            if piece is None:
                run += 1
            else:
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(piece.symbol)
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    placement = "/".join(ranks_str)

    ep = square_to_str(position.ep_square) if position.ep_square is not None else "-"
    fields: Tuple[str, ...] = (
        placement,
        position.side_to_move.value,
        position.castling.to_fen(),
        ep,
        str(position.halfmove_clock),
        str(position.fullmove_number),
    )
    return " ".join(fields)
