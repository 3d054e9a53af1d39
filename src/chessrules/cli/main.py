from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from ..engine.errors import ChessRulesError
from ..engine.fen import STARTPOS_FEN, decode
from ..engine.game import Game
from ..engine.legality import all_legal_moves, legal_moves
from ..engine.move import parse_uci, str_to_square
from ..engine.perft import perft, perft_divide


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chessrules", description="Chess rules engine utilities")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    perft_parser = subparsers.add_parser("perft", help="Count leaf nodes of the legal move tree")
    perft_parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    perft_parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    moves_parser = subparsers.add_parser("moves", help="List legal moves")
    moves_parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    moves_parser.add_argument("--square", type=str, default=None, help="Only moves from this square")

    play_parser = subparsers.add_parser("play", help="Play UCI moves and print the result")
    play_parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    play_parser.add_argument("moves", nargs="*", help="Moves in UCI form, e.g. e2e4 e7e5")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        if args.command == "perft":
            return _run_perft(args)
        if args.command == "moves":
            return _run_moves(args)
        return _run_play(args)
    except ChessRulesError as e:
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        # Bad square or UCI text
        print(f"error: {e}", file=sys.stderr)
        return 2


def _run_perft(args: argparse.Namespace) -> int:
    position = decode(args.fen)
    start = time.perf_counter()
    if args.divide:
        split = perft_divide(position, args.depth)
        for uci, count in split.items():
            print(f"{uci}: {count}")
        nodes = sum(split.values())
    else:
        nodes = perft(position, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
    return 0


def _run_moves(args: argparse.Namespace) -> int:
    position = decode(args.fen)
    if args.square:
        moves = legal_moves(position, str_to_square(args.square))
    else:
        moves = all_legal_moves(position)
    print(" ".join(m.to_uci() for m in moves))
    return 0


def _run_play(args: argparse.Namespace) -> int:
    game = Game.from_fen(args.fen)
    for uci in args.moves:
        game.play(parse_uci(uci))
    print(game.to_fen())
    print(f"status: {game.status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
