"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    PAWN_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_square_attacked,
)
from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.move import PROMOTION_TYPES, Move
from chesscore.core.piece import Piece
from chesscore.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from chesscore.core.position import Position


class _CastleSpec:
    """Squares involved in one castling option."""

    __slots__ = ("right", "flag", "king_from", "king_to", "rook_from", "empty", "safe")

    def __init__(
        self,
        right: CastlingRights,
        flag: MoveFlag,
        offset: int,
        king_to: int,
        rook_from: int,
        empty: tuple[int, ...],
        safe: tuple[int, ...],
    ) -> None:
        self.right = right
        self.flag = flag
        self.king_from: Square = offset + 4
        self.king_to: Square = offset + king_to
        self.rook_from: Square = offset + rook_from
        self.empty: tuple[Square, ...] = tuple(offset + f for f in empty)
        # Squares the king crosses or lands on; its start square is checked
        # separately.
        self.safe: tuple[Square, ...] = tuple(offset + f for f in safe)


def _castle_specs(
    kingside: CastlingRights, queenside: CastlingRights, offset: int
) -> tuple[_CastleSpec, _CastleSpec]:
    return (
        _CastleSpec(
            kingside,
            MoveFlag.CASTLE_KINGSIDE,
            offset,
            king_to=6,
            rook_from=7,
            empty=(5, 6),
            safe=(5, 6),
        ),
        _CastleSpec(
            queenside,
            MoveFlag.CASTLE_QUEENSIDE,
            offset,
            king_to=2,
            rook_from=0,
            empty=(1, 2, 3),
            safe=(3, 2),
        ),
    )


# [color] -> (kingside, queenside)
_CASTLES = (
    _castle_specs(CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE, 0),
    _castle_specs(CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE, 56),
)

# Pawn geometry per color: (push direction, start rank, last rank)
_PAWN_GEOMETRY: tuple[tuple[int, int, int], tuple[int, int, int]] = (
    (8, 1, 7),
    (-8, 6, 0),
)


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        pos = self._pos
        moving_color = pos.side_to_move
        opponent = moving_color.opposite
        board = self._board

        for move in self.generate_pseudo_legal_moves():
            pos.make_move(move)
            king_sq = board.king_square(moving_color)
            if not is_square_attacked(board, king_sq, opponent):
                legal.append(move)
            pos.unmake_move(move)
        return legal

    def has_legal_move(self) -> bool:
        """Whether at least one legal move exists (stops at the first)."""
        pos = self._pos
        moving_color = pos.side_to_move
        opponent = moving_color.opposite
        board = self._board

        for move in self.generate_pseudo_legal_moves():
            pos.make_move(move)
            safe = not is_square_attacked(
                board, board.king_square(moving_color), opponent
            )
            pos.unmake_move(move)
            if safe:
                return True
        return False

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.pieces(color, PieceType.PAWN):
            self._gen_pawn(sq, color, moves)
        for sq in board.pieces(color, PieceType.KNIGHT):
            self._gen_leaper(sq, color, KNIGHT_TARGETS[sq], moves)
        for sq in board.pieces(color, PieceType.BISHOP):
            self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.ROOK):
            self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.QUEEN):
            self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)
        for sq in board.pieces(color, PieceType.KING):
            self._gen_leaper(sq, color, KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)

        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._board, king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        push, start_rank, last_rank = _PAWN_GEOMETRY[int(color)]
        rank_idx = sq >> 3

        one_step = sq + push
        if 0 <= one_step < 64 and board.is_empty(one_step):
            if one_step >> 3 == last_rank:
                _add_promotions(sq, one_step, MoveFlag.NONE, moves)
            else:
                moves.append(Move(sq, one_step))
                if rank_idx == start_rank:
                    two_step = one_step + push
                    if board.is_empty(two_step):
                        moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for cap_sq in PAWN_TARGETS[int(color)][sq]:
            target = board[cap_sq]
            if target is not None:
                if target.color == color:
                    continue
                if cap_sq >> 3 == last_rank:
                    _add_promotions(sq, cap_sq, MoveFlag.CAPTURE, moves)
                else:
                    moves.append(Move(sq, cap_sq, MoveFlag.CAPTURE))
            elif cap_sq == self._pos.en_passant and self._has_en_passant_victim(
                sq, cap_sq, color
            ):
                moves.append(
                    Move(sq, cap_sq, MoveFlag.CAPTURE | MoveFlag.EN_PASSANT)
                )

    def _has_en_passant_victim(
        self, from_sq: Square, to_sq: Square, color: Color
    ) -> bool:
        victim = self._board[make_square(file_of(to_sq), rank_of(from_sq))]
        return victim == Piece(color.opposite, PieceType.PAWN)

    def _gen_leaper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        castling = self._pos.castling
        if not castling:
            return

        board = self._board
        opponent = color.opposite
        own_rook = Piece(color, PieceType.ROOK)
        king_safe: bool | None = None

        for spec in _CASTLES[int(color)]:
            if not castling & spec.right or king_sq != spec.king_from:
                continue
            if board[spec.rook_from] != own_rook:
                continue
            if not all(board.is_empty(s) for s in spec.empty):
                continue
            if king_safe is None:
                king_safe = not is_square_attacked(board, king_sq, opponent)
            if not king_safe:
                return
            if any(is_square_attacked(board, s, opponent) for s in spec.safe):
                continue
            moves.append(Move(king_sq, spec.king_to, spec.flag))


def _add_promotions(
    from_sq: Square, to_sq: Square, flags: MoveFlag, moves: list[Move]
) -> None:
    for pt in PROMOTION_TYPES:
        moves.append(Move(from_sq, to_sq, flags, pt))


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes of the legal move tree at *depth* using make/unmake."""
    if depth == 0:
        return 1
    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.unmake_move(move)
    return nodes


def perft_divide(position: Position, depth: int) -> dict[Move, int]:
    """Per-root-move perft counts, for locating generator bugs."""
    counts: dict[Move, int] = {}
    if depth < 1:
        return counts
    for move in MoveGenerator(position).generate_legal_moves():
        position.make_move(move)
        counts[move] = perft(position, depth - 1)
        position.unmake_move(move)
    return counts
