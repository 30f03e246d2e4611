"""chesscore: a chess rules engine.

Legal move generation, move application, check/checkmate/stalemate and
draw detection, and FEN encoding for downstream tools.
"""

import logging

from chesscore.config import RulesConfig
from chesscore.core import (
    STARTING_FEN,
    Board,
    CastlingRights,
    Color,
    GameResult,
    Move,
    MoveFlag,
    MoveGenerator,
    Piece,
    PieceType,
    Position,
    PositionSignature,
    Rules,
    Square,
    Termination,
    attacks_of,
    is_square_attacked,
    move_to_san,
    parse_move,
    parse_square,
    perft,
    position_from_fen,
    position_to_fen,
    square_name,
)
from chesscore.errors import ChessError, IllegalMove, MalformedFen, UnparsableNotation
from chesscore.game import Game, MoveRecord

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Game
    "Game",
    "MoveRecord",
    "RulesConfig",
    # Errors
    "ChessError",
    "IllegalMove",
    "MalformedFen",
    "UnparsableNotation",
    # Core
    "STARTING_FEN",
    "Board",
    "CastlingRights",
    "Color",
    "GameResult",
    "Move",
    "MoveFlag",
    "MoveGenerator",
    "Piece",
    "PieceType",
    "Position",
    "PositionSignature",
    "Rules",
    "Square",
    "Termination",
    "attacks_of",
    "is_square_attacked",
    "move_to_san",
    "parse_move",
    "parse_square",
    "perft",
    "position_from_fen",
    "position_to_fen",
    "square_name",
]
