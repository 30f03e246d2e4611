"""Position: board plus the state that decides which moves are legal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import A1, A8, H1, H8, Square, file_of, make_square, rank_of


class PositionSignature(NamedTuple):
    """The part of a position that decides whether two positions repeat.

    Move clocks are deliberately absent: repetition ignores them.
    """

    placement: tuple[Piece | None, ...]
    side_to_move: Color
    castling: CastlingRights
    en_passant: Square | None


@dataclass(slots=True)
class _Undo:
    """What :meth:`Position.make_move` overwrote."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured: Piece | None


# Anything leaving or landing on a corner spends that corner's right.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_BOTH,
    CastlingRights.BLACK_BOTH,
)


class Position:
    """One moment of a game: placement, side to move, castling rights,
    en passant target and both move clocks.

    :meth:`make_move` advances one ply in place and :meth:`unmake_move`
    reverts it from an internal undo stack. Neither validates the move;
    pass moves taken from
    :class:`~chesscore.core.move_generator.MoveGenerator`.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_undo",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = Board.initial() if board is None else board
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._undo: list[_Undo] = []

    # ── Advancing and reverting ─────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Play *move* for the side to move."""
        board = self.board
        mover = board[move.from_sq]
        if mover is None:
            raise ValueError(f"No piece on {move.from_sq} to play {move}")

        victim_sq = _victim_square(move)
        captured = board.remove(victim_sq)
        self._undo.append(
            _Undo(self.castling, self.en_passant, self.halfmove_clock, captured)
        )

        board[move.from_sq] = None
        if move.promotion is not None:
            board[move.to_sq] = Piece(mover.color, move.promotion)
        else:
            board[move.to_sq] = mover
        if move.is_castle:
            self._relocate(*_castle_rook_squares(move))

        self.en_passant = (
            (move.from_sq + move.to_sq) // 2 if move.is_double_pawn_push else None
        )
        self.castling = self._rights_after(move, mover)
        if mover.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if mover.color == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = mover.color.opposite

    def unmake_move(self, move: Move) -> None:
        """Revert *move*, which must be the last one made."""
        undo = self._undo.pop()
        board = self.board

        mover = board.remove(move.to_sq)
        if mover is None:
            raise ValueError(f"No piece on {move.to_sq} to take back {move}")
        if move.promotion is not None:
            mover = Piece(mover.color, PieceType.PAWN)
        board[move.from_sq] = mover
        if undo.captured is not None:
            board[_victim_square(move)] = undo.captured
        if move.is_castle:
            rook_from, rook_to = _castle_rook_squares(move)
            self._relocate(rook_to, rook_from)

        self.side_to_move = mover.color
        if mover.color == Color.BLACK:
            self.fullmove_number -= 1
        self.castling = undo.castling
        self.en_passant = undo.en_passant
        self.halfmove_clock = undo.halfmove_clock

    def _relocate(self, from_sq: Square, to_sq: Square) -> None:
        self.board[to_sq] = self.board.remove(from_sq)

    def _rights_after(self, move: Move, mover: Piece) -> CastlingRights:
        rights = self.castling
        if not rights:
            return rights
        if mover.piece_type == PieceType.KING:
            rights &= ~_KING_RIGHTS[mover.color]
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                rights &= ~_ROOK_CORNERS[sq]
        return rights

    # ── Snapshots and comparison ────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy. The undo stack is not carried over."""
        return Position(
            self.board.copy(),
            self.side_to_move,
            self.castling,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
        )

    def signature(self) -> PositionSignature:
        return PositionSignature(
            self.board.placement(), self.side_to_move, self.castling, self.en_passant
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.signature(), self.halfmove_clock, self.fullmove_number) == (
            other.signature(),
            other.halfmove_clock,
            other.fullmove_number,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from chesscore.core.notation.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"


def _victim_square(move: Move) -> Square:
    # An en passant capture takes the pawn beside the mover, not on to_sq.
    if move.is_en_passant:
        return make_square(file_of(move.to_sq), rank_of(move.from_sq))
    return move.to_sq


def _castle_rook_squares(move: Move) -> tuple[Square, Square]:
    rank = rank_of(move.from_sq)
    if move.flags & MoveFlag.CASTLE_KINGSIDE:
        return make_square(7, rank), make_square(5, rank)
    return make_square(0, rank), make_square(3, rank)
