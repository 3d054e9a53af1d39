from __future__ import annotations

from typing import Dict

from .apply import apply_move
from .legality import all_legal_moves
from .position import Position


def perft(position: Position, depth: int) -> int:
    """Compute perft node count for ``position`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Promotions only ever produce a queen, so counts differ from published
    perft tables in positions where a pawn can promote within ``depth`` plies.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = all_legal_moves(position)
    if depth == 1:
        return len(moves)
    nodes = 0
    for m in moves:
        nodes += perft(apply_move(position, m), depth - 1)
    return nodes


def perft_divide(position: Position, depth: int) -> Dict[str, int]:
    """Return perft counts split by root move (UCI string -> nodes)."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {
        m.to_uci(): perft(apply_move(position, m), depth - 1)
        for m in all_legal_moves(position)
    }
