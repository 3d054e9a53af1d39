from __future__ import annotations

import random

import pytest

from chessrules.engine.apply import apply_move
from chessrules.engine.fen import decode, encode
from chessrules.engine.game import StatusKind, evaluate_status
from chessrules.engine.legality import all_legal_moves

chess = pytest.importorskip("chess")


def _reference_moves(board) -> set[str]:
    # Only queen promotions exist in this engine
    return {m.uci() for m in board.legal_moves if m.promotion in (None, chess.QUEEN)}


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_legal_moves_match_python_chess_on_random_games(seed: int) -> None:
    rng = random.Random(seed)
    board = chess.Board()
    for _ply in range(120):
        position = decode(board.fen())
        ours = {m.to_uci() for m in all_legal_moves(position)}
        assert ours == _reference_moves(board), board.fen()

        reference = list(board.legal_moves)
        if not reference:
            status = evaluate_status(position)
            expected = StatusKind.CHECKMATE if board.is_checkmate() else StatusKind.STALEMATE
            assert status.kind is expected
            break
        board.push(rng.choice(reference))


@pytest.mark.parametrize(
    "fen",
    [
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        "r2q1rk1/pP1p2pp/Q4n2/bbp1p3/Np6/1B3NBn/pPPP1PPP/R3K2R b KQ - 0 1",
        "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
    ],
)
def test_fen_matches_python_chess_after_each_reply(fen: str) -> None:
    board = chess.Board(fen)
    position = decode(fen)
    for move in all_legal_moves(position):
        board.push(chess.Move.from_uci(move.to_uci()))
        ours = encode(apply_move(position, move)).split()
        theirs = board.fen().split()
        # En passant field differs: python-chess only prints it when a capture is legal
        assert ours[:3] + ours[4:] == theirs[:3] + theirs[4:]
        board.pop()
