"""Board - what stands on each of the 64 squares."""

from __future__ import annotations

from collections.abc import Iterator

from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import FILE_NAMES, Square, make_square

_KINDS = len(PieceType)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _slot(color: Color, piece_type: PieceType) -> int:
    return int(color) * _KINDS + int(piece_type) - 1


def _bit_squares(bits: int) -> Iterator[Square]:
    """Yield the set squares of *bits*, lowest first."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


class Board:
    """Mutable 8x8 placement with per-piece bitboards.

    The board knows nothing about legality. Every write goes through
    :meth:`__setitem__`, which keeps the square list, the twelve piece
    bitboards, the two color occupancies and the king cache in step.
    """

    __slots__ = ("_squares", "_bits", "_occupancy", "_kings")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # _slot(color, kind) -> squares holding that piece
        self._bits: list[int] = [0] * (2 * _KINDS)
        self._occupancy: list[int] = [0, 0]
        self._kings: list[Square | None] = [None, None]

    # -- Square access ------------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if self._squares[sq] == piece:
            return
        self._lift(sq)
        if piece is not None:
            self._drop(sq, piece)

    def _lift(self, sq: Square) -> None:
        piece = self._squares[sq]
        if piece is None:
            return
        keep = ~(1 << sq)
        color = int(piece.color)
        self._bits[_slot(piece.color, piece.piece_type)] &= keep
        self._occupancy[color] &= keep
        if self._kings[color] == sq:
            self._kings[color] = None
        self._squares[sq] = None

    def _drop(self, sq: Square, piece: Piece) -> None:
        bit = 1 << sq
        color = int(piece.color)
        self._bits[_slot(piece.color, piece.piece_type)] |= bit
        self._occupancy[color] |= bit
        if piece.piece_type == PieceType.KING:
            self._kings[color] = sq
        self._squares[sq] = piece

    def occupant(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or ``None``."""
        return self._squares[sq]

    def place(self, sq: Square, piece: Piece) -> None:
        """Put *piece* on *sq*, replacing any occupant."""
        self[sq] = piece

    def remove(self, sq: Square) -> Piece | None:
        """Empty *sq* and return whatever stood there."""
        piece = self._squares[sq]
        self._lift(sq)
        return piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Piece lookups ------------------------------------------------------

    def pieces_bitboard(self, color: Color, piece_type: PieceType) -> int:
        return self._bits[_slot(color, piece_type)]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares holding *color*'s *piece_type*, ascending."""
        return list(_bit_squares(self._bits[_slot(color, piece_type)]))

    def squares_with(self, color: Color, piece_type: PieceType) -> set[Square]:
        return set(_bit_squares(self._bits[_slot(color, piece_type)]))

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return self._bits[_slot(color, piece_type)] != 0

    def all_pieces(self, color: Color) -> list[Square]:
        return list(_bit_squares(self._occupancy[int(color)]))

    def king_square(self, color: Color) -> Square:
        """Square of *color*'s king. Raises ``ValueError`` if it has none."""
        sq = self._kings[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def placement(self) -> tuple[Piece | None, ...]:
        """Hashable snapshot of all 64 squares, a1 first."""
        return tuple(self._squares)

    # -- Whole-board operations ---------------------------------------------

    def copy(self) -> Board:
        clone = Board()
        clone._squares = self._squares.copy()
        clone._bits = self._bits.copy()
        clone._occupancy = self._occupancy.copy()
        clone._kings = self._kings.copy()
        return clone

    def clear(self) -> None:
        self._squares = [None] * 64
        self._bits = [0] * (2 * _KINDS)
        self._occupancy = [0, 0]
        self._kings = [None, None]

    @classmethod
    def initial(cls) -> Board:
        """Board of the standard starting position."""
        board = cls()
        for file, kind in enumerate(_BACK_RANK):
            board[make_square(file, 0)] = Piece(Color.WHITE, kind)
            board[make_square(file, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            board[make_square(file, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            board[make_square(file, 7)] = Piece(Color.BLACK, kind)
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        lines = []
        for rank in range(7, -1, -1):
            cells = (self._squares[make_square(file, rank)] for file in range(8))
            row = " ".join(str(p) if p is not None else "." for p in cells)
            lines.append(f"{rank + 1} {row}")
        lines.append("  " + " ".join(FILE_NAMES))
        return "\n".join(lines)
