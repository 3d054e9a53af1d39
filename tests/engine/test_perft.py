from __future__ import annotations

import pytest

from chessrules.engine.fen import STARTPOS_FEN, decode
from chessrules.engine.perft import perft, perft_divide


# Kiwipete (castling, EP, pins)
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
# Rook/pawn endgame with en passant and discovered checks along the fifth rank
POSITION_3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


@pytest.mark.parametrize(
    ("depth", "expected"),
    [
        (0, 1),
        (1, 20),
        (2, 400),
        (3, 8902),
    ],
)
def test_startpos_perft(depth: int, expected: int) -> None:
    assert perft(decode(STARTPOS_FEN), depth) == expected


@pytest.mark.parametrize(("depth", "expected"), [(1, 48), (2, 2039)])
def test_kiwipete_perft_shallow(depth: int, expected: int) -> None:
    assert perft(decode(KIWIPETE), depth) == expected


@pytest.mark.slow
def test_kiwipete_perft_depth3() -> None:
    assert perft(decode(KIWIPETE), 3) == 97862


@pytest.mark.parametrize(("depth", "expected"), [(1, 14), (2, 191), (3, 2812)])
def test_position3_perft(depth: int, expected: int) -> None:
    assert perft(decode(POSITION_3), depth) == expected


def test_perft_divide_sums_to_perft() -> None:
    p = decode(KIWIPETE)
    split = perft_divide(p, 2)
    assert len(split) == 48
    assert sum(split.values()) == 2039
    assert split["e1g1"] == perft(decode("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R4RK1 b kq - 1 1"), 1)


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        perft(decode(STARTPOS_FEN), -1)
    with pytest.raises(ValueError):
        perft_divide(decode(STARTPOS_FEN), 0)
