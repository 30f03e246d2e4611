"""Algebraic notation: SAN rendering and the minimal move resolver."""

from __future__ import annotations

import re

from chesscore.core.enums import MoveFlag, PieceType
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation.fen import position_to_fen
from chesscore.core.position import Position
from chesscore.core.types import FILE_NAMES, file_of, parse_square, rank_of, square_name
from chesscore.errors import UnparsableNotation

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_CASTLE_NOTATION: dict[str, MoveFlag] = {
    "O-O": MoveFlag.CASTLE_KINGSIDE,
    "0-0": MoveFlag.CASTLE_KINGSIDE,
    "O-O-O": MoveFlag.CASTLE_QUEENSIDE,
    "0-0-0": MoveFlag.CASTLE_QUEENSIDE,
}

_MOVE_RE = re.compile(
    r"(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"[x-]?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQKnbrqk]))?"
)


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)} for {move}")

    if move.flags & MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flags & MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        is_capture = move.is_capture or board[move.to_sq] is not None

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += FILE_NAMES[file_of(move.from_sq)]
        else:
            san += _SAN_PIECE[piece.piece_type]
            san += _disambiguation(position, move, piece.piece_type)

        if is_capture:
            san += "x"

        san += square_name(move.to_sq)

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    # Check / checkmate suffix
    position.make_move(move)
    try:
        gen_after = MoveGenerator(position)
        if gen_after.is_in_check(position.side_to_move):
            san += "+" if gen_after.has_legal_move() else "#"
    finally:
        position.unmake_move(move)

    return san


def _disambiguation(position: Position, move: Move, piece_type: PieceType) -> str:
    board = position.board
    rivals: list[int] = []
    for m in MoveGenerator(position).generate_legal_moves():
        if m.to_sq != move.to_sq or m.from_sq == move.from_sq:
            continue
        rival = board[m.from_sq]
        if rival is not None and rival.piece_type == piece_type:
            rivals.append(m.from_sq)
    if not rivals:
        return ""
    if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
        return FILE_NAMES[file_of(move.from_sq)]
    if all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
        return str(rank_of(move.from_sq) + 1)
    return square_name(move.from_sq)


def _strip_annotations(notation: str) -> str:
    clean = notation.strip()
    if clean.endswith("e.p."):
        clean = clean[:-4].rstrip()
    return clean.rstrip("+#!?")


def parse_move(position: Position, notation: str) -> Move:
    """Resolve *notation* to the single legal move it names in *position*.

    Accepts SAN (``Nf3``, ``exd6``, ``e8=Q``, ``O-O``), partially
    disambiguated forms (``Nbd2``, ``R1e2``) and long algebraic
    (``g1f3``, ``e7e8q``). Without a piece letter the move is a pawn move
    unless a full origin square is given. A pawn reaching the last rank
    with no promotion piece promotes to a queen.

    Raises :class:`~chesscore.errors.UnparsableNotation` when the text is
    malformed or matches zero or several legal moves.
    """
    clean = _strip_annotations(notation)
    legal = MoveGenerator(position).generate_legal_moves()

    castle_flag = _CASTLE_NOTATION.get(clean)
    if castle_flag is not None:
        candidates = [m for m in legal if m.flags & castle_flag]
        return _single(position, notation, candidates)

    match = _MOVE_RE.fullmatch(clean)
    if match is None:
        raise UnparsableNotation(
            notation, position_to_fen(position), reason="Malformed notation"
        )

    to_sq = parse_square(match["to"])
    from_file = FILE_NAMES.index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) - 1 if match["rank"] else None
    promotion = _SAN_PIECE_REV[match["promo"].upper()] if match["promo"] else None
    if promotion == PieceType.KING:
        raise UnparsableNotation(
            notation, position_to_fen(position), reason="Cannot promote to a king"
        )

    piece_type: PieceType | None
    if match["piece"]:
        piece_type = _SAN_PIECE_REV[match["piece"]]
    elif from_file is not None and from_rank is not None:
        piece_type = None  # long algebraic: origin square says it all
    else:
        piece_type = PieceType.PAWN

    board = position.board
    candidates: list[Move] = []
    for m in legal:
        if m.to_sq != to_sq:
            continue
        p = board[m.from_sq]
        if p is None or (piece_type is not None and p.piece_type != piece_type):
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        if promotion is not None:
            if m.promotion != promotion:
                continue
        elif m.promotion not in (None, PieceType.QUEEN):
            continue
        candidates.append(m)

    return _single(position, notation, candidates)


def _single(position: Position, notation: str, candidates: list[Move]) -> Move:
    if len(candidates) == 1:
        return candidates[0]
    raise UnparsableNotation(notation, position_to_fen(position), len(candidates))
