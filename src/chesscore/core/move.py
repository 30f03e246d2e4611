"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import MoveFlag, PieceType
from chesscore.core.types import Square, square_name

# Order in which the generator emits the four promotions of a pawn move.
PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_UCI_PROMOTION = dict(zip(PROMOTION_TYPES, "qrbn"))


@dataclass(frozen=True, slots=True)
class Move:
    """One move: origin, destination, flags and the promotion piece.

    Flags describe the move in the position it was generated for, so two
    moves are equal only when squares, flags and promotion all agree.
    """

    from_sq: Square
    to_sq: Square
    flags: MoveFlag = MoveFlag.NONE
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return MoveFlag.CAPTURE in self.flags

    @property
    def is_en_passant(self) -> bool:
        return MoveFlag.EN_PASSANT in self.flags

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE)

    @property
    def is_double_pawn_push(self) -> bool:
        return MoveFlag.DOUBLE_PAWN in self.flags

    @property
    def uci(self) -> str:
        """Long algebraic form, e.g. ``e7e8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            text += _UCI_PROMOTION[self.promotion]
        return text

    def __str__(self) -> str:
        return self.uci
