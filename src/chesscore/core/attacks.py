"""Attack generation: which squares a piece geometrically controls.

Everything here ignores whose turn it is and whether the attacker is pinned.
Pawn pushes are not attacks; only the two forward diagonals are.
"""

from __future__ import annotations

from collections.abc import Iterator

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.types import Square, file_of, make_square, rank_of

Step = tuple[int, int]
Ray = tuple[Square, ...]

KNIGHT_STEPS: tuple[Step, ...] = (
    (1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)
DIAGONALS: tuple[Step, ...] = ((1, 1), (1, -1), (-1, -1), (-1, 1))
ORTHOGONALS: tuple[Step, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def _walk(sq: Square, step: Step) -> Iterator[Square]:
    """Squares beyond *sq* along *step*, nearest first, up to the edge."""
    df, dr = step
    file, rank = file_of(sq) + df, rank_of(sq) + dr
    while 0 <= file < 8 and 0 <= rank < 8:
        yield make_square(file, rank)
        file += df
        rank += dr


def _leaps(steps: tuple[Step, ...]) -> tuple[Ray, ...]:
    """[sq] -> squares one step away along each of *steps*."""
    table = []
    for sq in range(64):
        targets = []
        for step in steps:
            first = next(_walk(sq, step), None)
            if first is not None:
                targets.append(first)
        table.append(tuple(targets))
    return tuple(table)


def _rays(steps: tuple[Step, ...]) -> tuple[tuple[Ray, ...], ...]:
    """[sq] -> one ray per direction in *steps*."""
    return tuple(
        tuple(tuple(_walk(sq, step)) for step in steps) for sq in range(64)
    )


def _masks(table: tuple[Ray, ...]) -> tuple[int, ...]:
    return tuple(sum(1 << to_sq for to_sq in targets) for targets in table)


KNIGHT_TARGETS = _leaps(KNIGHT_STEPS)
KING_TARGETS = _leaps(DIAGONALS + ORTHOGONALS)
# [color][sq] -> the two diagonals a pawn of that color on sq attacks.
PAWN_TARGETS = (_leaps(((-1, 1), (1, 1))), _leaps(((-1, -1), (1, -1))))

BISHOP_RAYS = _rays(DIAGONALS)
ROOK_RAYS = _rays(ORTHOGONALS)
QUEEN_RAYS = _rays(DIAGONALS + ORTHOGONALS)

_KNIGHT_MASKS = _masks(KNIGHT_TARGETS)
_KING_MASKS = _masks(KING_TARGETS)
# [by_color][sq] -> where a pawn of by_color must stand to attack sq. Those
# are the squares a pawn of the other color on sq would attack.
_PAWN_ATTACKER_MASKS = (
    _masks(PAWN_TARGETS[Color.BLACK]),
    _masks(PAWN_TARGETS[Color.WHITE]),
)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[Ray, ...], ...]] = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


def attacks_of(board: Board, sq: Square) -> set[Square]:
    """Squares attacked by the piece standing on *sq* (empty if none).

    Sliding rays stop at, and include, the first occupied square.
    """
    piece = board[sq]
    if piece is None:
        return set()

    kind = piece.piece_type
    if kind == PieceType.PAWN:
        return set(PAWN_TARGETS[piece.color][sq])
    if kind == PieceType.KNIGHT:
        return set(KNIGHT_TARGETS[sq])
    if kind == PieceType.KING:
        return set(KING_TARGETS[sq])

    attacked: set[Square] = set()
    for ray in _SLIDER_RAYS[kind][sq]:
        for to_sq in ray:
            attacked.add(to_sq)
            if board[to_sq] is not None:
                break
    return attacked


def _first_blocker_is(
    board: Board, rays: tuple[Ray, ...], color: Color, kinds: tuple[PieceType, ...]
) -> bool:
    for ray in rays:
        for to_sq in ray:
            blocker = board[to_sq]
            if blocker is not None:
                if blocker.color == color and blocker.piece_type in kinds:
                    return True
                break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Whether any piece of *by_color* attacks *sq*."""
    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKER_MASKS[by_color][sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_MASKS[sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_MASKS[sq]:
        return True

    queen = board.has_piece(by_color, PieceType.QUEEN)
    if queen or board.has_piece(by_color, PieceType.BISHOP):
        diagonal = (PieceType.BISHOP, PieceType.QUEEN)
        if _first_blocker_is(board, BISHOP_RAYS[sq], by_color, diagonal):
            return True
    if queen or board.has_piece(by_color, PieceType.ROOK):
        straight = (PieceType.ROOK, PieceType.QUEEN)
        if _first_blocker_is(board, ROOK_RAYS[sq], by_color, straight):
            return True
    return False
