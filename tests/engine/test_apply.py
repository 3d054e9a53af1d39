from __future__ import annotations

from chessrules.engine.apply import apply_move
from chessrules.engine.fen import STARTPOS_FEN, decode, encode, startpos
from chessrules.engine.move import CastleSide, Move, str_to_square
from chessrules.engine.position import CastlingRights


def sq(name: str):
    return str_to_square(name)


def test_apply_returns_new_position_and_does_not_mutate() -> None:
    p = startpos()
    p2 = apply_move(p, Move(sq("e2"), sq("e4"), is_double_push=True))

    # Original position unchanged
    assert encode(p) == STARTPOS_FEN
    assert p2 is not p and p2.board is not p.board

    # New position reflects move; halfmove reset, ep square set, side toggled
    assert encode(p2) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def test_flags_are_trusted_not_rederived() -> None:
    # Same squares, no double-push flag: no en passant target is recorded
    p2 = apply_move(startpos(), Move(sq("e2"), sq("e4")))
    assert p2.ep_square is None


def test_capture_flag_drives_halfmove_reset() -> None:
    p = decode("4k3/8/8/3p4/8/8/8/3RK3 w - - 7 20")
    after = apply_move(p, Move(sq("d1"), sq("d5"), is_capture=True))
    assert after.halfmove_clock == 0
    assert encode(after) == "4k3/8/8/3R4/8/8/8/4K3 b - - 0 20"


def test_castle_relocates_rook_atomically() -> None:
    p = decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    after = apply_move(p, Move(sq("e1"), sq("g1"), castle_side=CastleSide.KINGSIDE))
    assert encode(after) == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 1 1"
    # Original unchanged
    assert encode(p) == "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def test_capturing_rook_on_corner_revokes_victims_right() -> None:
    p = decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    after = apply_move(p, Move(sq("a1"), sq("a8"), is_capture=True))
    assert after.castling == CastlingRights(
        white_kingside=True, white_queenside=False, black_kingside=True, black_queenside=False
    )


def test_king_move_revokes_both_rights() -> None:
    p = decode("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    after = apply_move(p, Move(sq("e8"), sq("e7")))
    assert encode(after).split()[2] == "KQ"


def test_pawn_reaching_last_rank_becomes_queen() -> None:
    p = decode("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    after = apply_move(p, Move(sq("e7"), sq("e8")))
    assert encode(after).split()[0] == "k3Q3/8/8/8/8/8/8/4K3"
