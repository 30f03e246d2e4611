"""Notation package: FEN codec, SAN rendering and move resolution."""

from chesscore.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.notation.san import move_to_san, parse_move

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_move",
]
