"""FEN parsing and serialization."""

from __future__ import annotations

import re

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import Square, make_square, parse_square, rank_of, square_name
from chesscore.errors import MalformedFen

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_NUMBER = re.compile(r"[0-9]+")

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_CASTLING_RIGHTS: dict[str, CastlingRights] = dict(_CASTLING_CHARS)


def position_from_fen(fen: str) -> Position:
    """Parse a six-field FEN string into a :class:`Position`.

    Raises :class:`~chesscore.errors.MalformedFen` on any grammar error;
    nothing is returned for a partially valid string.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedFen(fen, f"FEN needs 6 fields, got {len(parts)}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = _parse_placement(fen, placement)

    # Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedFen(fen, f"Invalid side-to-move field {side_part!r}")

    castling = _parse_castling(fen, castling_part)

    # En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedFen(fen, f"Invalid en-passant square {ep_part!r}") from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise MalformedFen(
                fen, f"En-passant square {ep_part!r} does not fit the side to move"
            )

    # Clocks
    if not _NUMBER.fullmatch(half_part):
        raise MalformedFen(fen, f"Invalid halfmove clock {half_part!r}")
    if not _NUMBER.fullmatch(full_part) or int(full_part) < 1:
        raise MalformedFen(fen, f"Invalid fullmove number {full_part!r}")

    return Position(board, side, castling, ep, int(half_part), int(full_part))


def _parse_placement(fen: str, placement: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedFen(fen, f"Board must contain 8 ranks, got {len(ranks)}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            else:
                try:
                    piece = Piece.from_char(ch)
                except ValueError:
                    raise MalformedFen(fen, f"Invalid piece letter {ch!r}") from None
                if file >= 8:
                    raise MalformedFen(fen, f"Rank {rank + 1} is wider than 8 files")
                board[make_square(file, rank)] = piece
                file += 1
            if file > 8:
                raise MalformedFen(fen, f"Rank {rank + 1} is wider than 8 files")
        if file != 8:
            raise MalformedFen(fen, f"Rank {rank + 1} covers {file} files, not 8")
    return board


def _parse_castling(fen: str, castling_part: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if castling_part == "-":
        return castling
    for ch in castling_part:
        right = _CASTLING_RIGHTS.get(ch)
        if right is None or castling & right:
            raise MalformedFen(fen, f"Invalid castling field {castling_part!r}")
        castling |= right
    return castling


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to six-field FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
