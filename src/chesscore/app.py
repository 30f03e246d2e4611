"""Command-line entry point for inspecting positions."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from chesscore.core.move_generator import perft, perft_divide
from chesscore.core.notation import STARTING_FEN, move_to_san
from chesscore.errors import ChessError
from chesscore.game import Game

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesscore", description="Chess rules engine utilities"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    moves = sub.add_parser("moves", help="list legal moves")
    moves.add_argument("--fen", default=STARTING_FEN)

    count = sub.add_parser("perft", help="count legal move sequences")
    count.add_argument("depth", type=int)
    count.add_argument("--fen", default=STARTING_FEN)
    count.add_argument(
        "--divide", action="store_true", help="print counts per root move"
    )

    play = sub.add_parser("play", help="apply moves and report the result")
    play.add_argument("moves", nargs="*", help="moves in SAN or long algebraic")
    play.add_argument("--fen", default=STARTING_FEN)
    return parser


def _cmd_moves(game: Game) -> None:
    position = game.position
    for move in sorted(game.legal_moves(), key=str):
        print(f"{move_to_san(position, move)}\t{move}")


def _cmd_perft(game: Game, depth: int, divide: bool) -> None:
    position = game.position
    if divide:
        counts = perft_divide(position, depth)
        for move in sorted(counts, key=str):
            print(f"{move}: {counts[move]}")
        print(f"total: {sum(counts.values())}")
        return
    print(perft(position, depth))


def _cmd_play(game: Game, notations: Sequence[str]) -> None:
    for notation in notations:
        game.move_to(notation)
    print(game.fen())
    termination = game.termination()
    if termination is None:
        status = "check" if game.is_check() else "in progress"
    else:
        status = termination.name.lower().replace("_", " ")
    print(f"{game.result().name.lower()} ({status})")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``chesscore`` command. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        game = Game.from_fen(args.fen)
        if args.command == "moves":
            _cmd_moves(game)
        elif args.command == "perft":
            if args.depth < 0:
                parser.error("depth must be non-negative")
            _cmd_perft(game, args.depth, args.divide)
        else:
            _cmd_play(game, args.moves)
    except ChessError as exc:
        _LOGGER.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
