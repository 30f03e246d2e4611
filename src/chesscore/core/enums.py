"""Enumerations shared by the board, move generator and game layers."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """The two sides. The value doubles as a table index."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntFlag):
    """What a move does besides relocating one piece.

    Flags combine: an en passant capture carries ``CAPTURE | EN_PASSANT``.
    Promotion is not a flag; it is the move's ``promotion`` field.
    """

    NONE = 0
    CAPTURE = auto()
    EN_PASSANT = auto()
    CASTLE_KINGSIDE = auto()
    CASTLE_QUEENSIDE = auto()
    DOUBLE_PAWN = auto()

    CASTLE = CASTLE_KINGSIDE | CASTLE_QUEENSIDE


class CastlingRights(IntFlag):
    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameResult(IntEnum):
    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def checkmated(cls, loser: Color) -> GameResult:
        """Result when *loser* is checkmated."""
        return cls.BLACK_WINS if loser == Color.WHITE else cls.WHITE_WINS


class Termination(IntEnum):
    """The rule that ended a game."""

    CHECKMATE = auto()
    STALEMATE = auto()
    FIFTY_MOVES = auto()
    THREEFOLD_REPETITION = auto()
    INSUFFICIENT_MATERIAL = auto()
    SEVENTY_FIVE_MOVES = auto()
    FIVEFOLD_REPETITION = auto()

    @property
    def is_draw(self) -> bool:
        return self is not Termination.CHECKMATE
