from __future__ import annotations

import pytest

from chessrules.engine.errors import MalformedPositionError
from chessrules.engine.fen import STARTPOS_FEN, decode, encode, startpos
from chessrules.engine.move import str_to_square
from chessrules.engine.position import CastlingRights, Color, Piece, PieceKind


def test_startpos_round_trip() -> None:
    p = decode(STARTPOS_FEN)
    assert encode(p) == STARTPOS_FEN
    assert encode(startpos()) == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_startpos_fields() -> None:
    p = startpos()
    assert p.side_to_move is Color.WHITE
    assert p.castling == CastlingRights.all()
    assert p.ep_square is None
    assert p.halfmove_clock == 0 and p.fullmove_number == 1
    assert p.piece_at(str_to_square("e1")) == Piece(PieceKind.KING, Color.WHITE)
    assert p.piece_at(str_to_square("d8")) == Piece(PieceKind.QUEEN, Color.BLACK)
    assert p.piece_at(str_to_square("e4")) is None


@pytest.mark.parametrize(
    "fen",
    [
        # Mixed pieces and empty squares, some castling rights
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
        # No castling rights, ep target behind the pawn that just moved
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - e3 0 1",
        # All castling rights
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
        "4k3/8/8/8/8/8/8/4K3 b - - 99 140",
    ],
)
def test_round_trip_various_positions(fen: str) -> None:
    p = decode(fen)
    assert encode(p) == fen
    assert decode(encode(p)) == p


def test_castling_order_is_normalized() -> None:
    p = decode("r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1")
    assert encode(p).split()[2] == "KQkq"


def test_decode_tolerates_surrounding_whitespace() -> None:
    assert encode(decode(f"  {STARTPOS_FEN}\n")) == STARTPOS_FEN


@pytest.mark.parametrize(
    "fen",
    [
        "",  # empty
        "8/8/8/8/8/8/8 w - - 0 1",  # not enough ranks
        "8/8/8/8/8/8/8/8/8 w - - 0 1",  # too many ranks
        "8/8/8/8/8/8/8/8 w - - 0",  # missing fields
        "8/8/8/8/8/8/8/8 w - - 0 1 extra",  # too many fields
        "8/8/8/8/8/8/8/8 x - - 0 1",  # bad side to move
        "8/8/8/8/8/8/8/8 w A - 0 1",  # bad castling
        "8/8/8/8/8/8/8/8 w KK - 0 1",  # duplicated castling letter
        "8/8/8/8/8/8/8/8 w - z9 0 1",  # bad ep square
        "8/8/8/8/8/8/8/8 w - e4 0 1",  # ep square on wrong rank
        "4k3/8/8/8/8/8/3PP3/4K3 w - e3 0 1",  # ep square behind the side to move
        "4k3/8/8/8/8/8/8/4K3 b - e6 0 1",  # ep square behind the side to move
        "8/8/8/8/8/8/8/8 w - - -1 1",  # bad halfmove
        "8/8/8/8/8/8/8/8 w - - x 1",  # non-numeric halfmove
        "8/8/8/8/8/8/8/8 w - - 1_0 1",  # underscore in halfmove
        "8/8/8/8/8/8/8/8 w - - 0 +3",  # signed fullmove
        "8/8/8/8/8/8/8/8 w - - \u0661 1",  # non-ASCII digit
        "8/8/8/8/8/8/8/8 w - - 0 0",  # bad fullmove
        "9/8/8/8/8/8/8/8 w - - 0 1",  # too many squares
        "7/8/8/8/8/8/8/8 w - - 0 1",  # too few squares
        "ppppppppp/8/8/8/8/8/8/8 w - - 0 1",  # nine pieces on a rank
        "44/8/8/8/8/8/8/8 w - - 0 0",  # bad fullmove after valid rank
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",  # bad piece
    ],
)
def test_invalid_fen_raises(fen: str) -> None:
    with pytest.raises(MalformedPositionError):
        decode(fen)


def test_malformed_position_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        decode("not a fen")


def test_encoder_writes_dash_for_empty_fields() -> None:
    p = decode("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    fields = encode(p).split()
    assert fields[2] == "-"
    assert fields[3] == "-"
