"""Core domain layer: pure chess rules with no external dependencies.

Quick start::

    from chesscore.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from chesscore.core.attacks import attacks_of, is_square_attacked
from chesscore.core.board import Board
from chesscore.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
    Termination,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator, perft, perft_divide
from chesscore.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_move,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.piece import Piece
from chesscore.core.position import Position, PositionSignature
from chesscore.core.rules import Rules
from chesscore.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    "Termination",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "PositionSignature",
    "Rules",
    # Attacks / counting
    "attacks_of",
    "is_square_attacked",
    "perft",
    "perft_divide",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
]
