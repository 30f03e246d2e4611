"""Square numbering and coordinate helpers.

A square is an ``int`` in ``0..63`` counted rank by rank from the white
side: a1=0, b1=1, ..., h1=7, a2=8, ..., h8=63.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


def file_of(sq: Square) -> int:
    """0 for the a-file through 7 for the h-file."""
    return sq % 8


def rank_of(sq: Square) -> int:
    """0 for the first rank through 7 for the eighth."""
    return sq // 8


def make_square(file: int, rank: int) -> Square:
    return 8 * rank + file


def square_name(sq: Square) -> str:
    """Algebraic name, e.g. ``square_name(28) == 'e4'``."""
    return FILE_NAMES[file_of(sq)] + RANK_NAMES[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`. Raises ``ValueError`` on bad input."""
    if len(name) == 2 and name[0] in FILE_NAMES and name[1] in RANK_NAMES:
        return make_square(FILE_NAMES.index(name[0]), RANK_NAMES.index(name[1]))
    raise ValueError(f"Invalid square name: {name!r}")


def is_light_square(sq: Square) -> bool:
    """a1 is dark, h1 is light."""
    return (file_of(sq) + rank_of(sq)) % 2 == 1


(
    A1, B1, C1, D1, E1, F1, G1, H1,
    A2, B2, C2, D2, E2, F2, G2, H2,
    A3, B3, C3, D3, E3, F3, G3, H3,
    A4, B4, C4, D4, E4, F4, G4, H4,
    A5, B5, C5, D5, E5, F5, G5, H5,
    A6, B6, C6, D6, E6, F6, G6, H6,
    A7, B7, C7, D7, E7, F7, G7, H7,
    A8, B8, C8, D8, E8, F8, G8, H8,
) = range(64)
