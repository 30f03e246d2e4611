"""Game state: the move log, repetition counts and how the game ended."""

from __future__ import annotations

import logging
from collections import Counter

from chesscore.config import STANDARD_RULES, RulesConfig
from chesscore.core.attacks import is_square_attacked
from chesscore.core.enums import Color, GameResult, MoveFlag, PieceType, Termination
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import (
    move_to_san,
    parse_move,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.piece import Piece
from chesscore.core.position import Position, PositionSignature
from chesscore.core.rules import Rules
from chesscore.core.types import file_of, make_square, rank_of
from chesscore.errors import IllegalMove, MalformedFen

_LOGGER = logging.getLogger(__name__)

_UNSET = object()


class MoveRecord:
    """A single entry in the move history.

    Holds the applied move and the position it produced. The stored
    position is private to the game; :attr:`position` hands out copies.
    """

    __slots__ = ("move", "san", "captured", "_position")

    def __init__(
        self, move: Move, position: Position, san: str, captured: Piece | None
    ) -> None:
        self.move = move
        self.san = san
        self.captured = captured
        self._position = position

    @property
    def position(self) -> Position:
        return self._position.copy()

    @property
    def fen_after(self) -> str:
        return position_to_fen(self._position)

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    def __repr__(self) -> str:
        return f"MoveRecord({self.san!r}, {self.fen_after!r})"


class Game:
    """A chess game: an initial position plus an append-only move log.

    Each applied move is validated against the legal move set, applied to
    a copy of the current position and appended with the new position.
    Repetition is counted on :class:`PositionSignature` values over the whole
    log, the initial position included. Undo truncates the log.

    A game is single-owner state with no locking; use one instance per
    worker.
    """

    __slots__ = ("_initial", "_records", "_signature_counts", "_config", "_status")

    def __init__(
        self,
        position: Position | None = None,
        config: RulesConfig | None = None,
    ) -> None:
        initial = position.copy() if position is not None else Position()
        _check_kings(initial)
        self._initial = initial
        self._records: list[MoveRecord] = []
        self._signature_counts: Counter[PositionSignature] = Counter(
            [initial.signature()]
        )
        self._config = config if config is not None else STANDARD_RULES
        self._status: object = _UNSET

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def new(cls, config: RulesConfig | None = None) -> Game:
        """Game from the standard starting position."""
        return cls(config=config)

    @classmethod
    def from_fen(cls, fen: str, config: RulesConfig | None = None) -> Game:
        """Game starting from *fen*. Raises :class:`MalformedFen`."""
        position = position_from_fen(fen)
        try:
            return cls(position, config)
        except ValueError as exc:
            raise MalformedFen(fen, str(exc)) from None

    # ── Move application ─────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self._current).generate_legal_moves()

    def apply(self, move: Move) -> MoveRecord:
        """Apply *move* and return its history record.

        Raises :class:`IllegalMove` (leaving the game untouched) when *move*
        is not one of :meth:`legal_moves`.
        """
        current = self._current
        if move not in self.legal_moves():
            _LOGGER.debug("Rejected %s in %s", move, position_to_fen(current))
            raise IllegalMove(move, position_to_fen(current))

        captured = _captured_piece(current, move)
        san = move_to_san(current, move)

        after = current.copy()
        after.make_move(move)

        record = MoveRecord(move, after, san, captured)
        self._records.append(record)
        self._signature_counts[after.signature()] += 1
        self._status = _UNSET

        _LOGGER.debug("Ply %d: %s (%s)", len(self._records), san, move)
        termination = self.termination()
        if termination is not None:
            _LOGGER.debug("Game over by %s: %s", termination.name, self.result().name)
        return record

    def move_to(self, notation: str) -> MoveRecord:
        """Resolve *notation* against the legal moves and apply the match.

        Raises :class:`~chesscore.errors.UnparsableNotation` when the text
        does not name exactly one legal move.
        """
        return self.apply(parse_move(self._current, notation))

    def undo(self) -> Move | None:
        """Drop the last move. Returns it, or ``None`` if there is none."""
        if not self._records:
            return None
        record = self._records.pop()
        signature = record._position.signature()
        self._signature_counts[signature] -= 1
        if not self._signature_counts[signature]:
            del self._signature_counts[signature]
        self._status = _UNSET
        _LOGGER.debug("Undid %s", record.san)
        return record.move

    # ── Query helpers ────────────────────────────────────────────────────

    def fen(self) -> str:
        """Current position as six-field FEN."""
        return position_to_fen(self._current)

    def history(self) -> tuple[Move, ...]:
        """Applied moves, oldest first."""
        return tuple(record.move for record in self._records)

    def records(self) -> tuple[MoveRecord, ...]:
        return tuple(self._records)

    @property
    def position(self) -> Position:
        """Copy of the current position."""
        return self._current.copy()

    @property
    def initial_position(self) -> Position:
        return self._initial.copy()

    @property
    def config(self) -> RulesConfig:
        return self._config

    @property
    def side_to_move(self) -> Color:
        return self._current.side_to_move

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._records)

    def repetition_count(self) -> int:
        """How many times the current position has occurred in this game."""
        return self._signature_counts[self._current.signature()]

    def is_check(self) -> bool:
        return Rules.is_in_check(self._current)

    def is_checkmate(self) -> bool:
        return self.termination() == Termination.CHECKMATE

    def is_stalemate(self) -> bool:
        return self.termination() == Termination.STALEMATE

    def is_draw(self) -> bool:
        return Rules.is_draw_termination(self.termination())

    def is_game_over(self) -> bool:
        return self.termination() is not None

    def termination(self) -> Termination | None:
        """The rule that ended the game, or ``None`` while it is running."""
        if self._status is _UNSET:
            self._status = Rules.termination(
                self._current, self.repetition_count(), self._config
            )
        return self._status  # type: ignore[return-value]

    def result(self) -> GameResult:
        termination = self.termination()
        if termination is None:
            return GameResult.IN_PROGRESS
        if termination == Termination.CHECKMATE:
            return GameResult.checkmated(self.side_to_move)
        return GameResult.DRAW

    # ── Internal ─────────────────────────────────────────────────────────

    @property
    def _current(self) -> Position:
        if self._records:
            return self._records[-1]._position
        return self._initial

    def __repr__(self) -> str:
        return f"Game({self.fen()!r}, plies={self.ply_count})"


def _captured_piece(position: Position, move: Move) -> Piece | None:
    if move.flags & MoveFlag.EN_PASSANT:
        return position.board[make_square(file_of(move.to_sq), rank_of(move.from_sq))]
    return position.board[move.to_sq]


def _check_kings(position: Position) -> None:
    board = position.board
    for color in Color:
        kings = board.pieces(color, PieceType.KING)
        if len(kings) != 1:
            raise ValueError(f"{color.name} must have exactly one king, has {len(kings)}")
    # The side that just moved cannot have left its own king attacked.
    mover = position.side_to_move
    waiting = mover.opposite
    if is_square_attacked(board, board.king_square(waiting), mover):
        raise ValueError(
            f"{waiting.name} king is in check with {mover.name} to move"
        )
