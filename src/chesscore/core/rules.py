"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.config import STANDARD_RULES, RulesConfig
from chesscore.core.enums import Color, GameResult, PieceType, Termination
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.types import Square, is_light_square

if TYPE_CHECKING:
    from chesscore.core.board import Board
    from chesscore.core.position import Position

_MATING_KINDS = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Repetition depends on game history, which a position does not carry,
    so the repetition predicates take the occurrence count of the current
    position from the caller.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """Whether the material left can never deliver mate.

        Covers bare kings, a single knight or bishop, and one bishop per
        side standing on squares of the same color.
        """
        board = position.board
        for color in Color:
            for kind in _MATING_KINDS:
                if board.has_piece(color, kind):
                    return False

        white = _minor_squares(board, Color.WHITE)
        black = _minor_squares(board, Color.BLACK)
        if len(white) + len(black) <= 1:
            return True
        if len(white) == 1 and len(black) == 1:
            white_bishops = board.pieces(Color.WHITE, PieceType.BISHOP)
            black_bishops = board.pieces(Color.BLACK, PieceType.BISHOP)
            if white_bishops and black_bishops:
                return is_light_square(white_bishops[0]) == is_light_square(
                    black_bishops[0]
                )
        return False

    @staticmethod
    def is_fifty_move_rule(
        position: Position, config: RulesConfig = STANDARD_RULES
    ) -> bool:
        return position.halfmove_clock >= config.fifty_move_plies

    @staticmethod
    def is_seventy_five_move_rule(
        position: Position, config: RulesConfig = STANDARD_RULES
    ) -> bool:
        return position.halfmove_clock >= config.seventy_five_move_plies

    @staticmethod
    def is_threefold_repetition(
        repetitions: int, config: RulesConfig = STANDARD_RULES
    ) -> bool:
        return repetitions >= config.repetition_limit

    @staticmethod
    def is_fivefold_repetition(
        repetitions: int, config: RulesConfig = STANDARD_RULES
    ) -> bool:
        return repetitions >= config.fivefold_limit

    @staticmethod
    def is_claimable_draw(
        position: Position, repetitions: int, config: RulesConfig = STANDARD_RULES
    ) -> bool:
        """Whether the side to move may claim a draw by rule."""
        return Rules.is_fifty_move_rule(
            position, config
        ) or Rules.is_threefold_repetition(repetitions, config)

    @staticmethod
    def termination(
        position: Position,
        repetitions: int = 1,
        config: RulesConfig = STANDARD_RULES,
    ) -> Termination | None:
        """The rule that ends the game in *position*, or ``None``.

        Checkmate and stalemate come first; draw rules are then tried in
        order: fifty moves, threefold repetition, insufficient material,
        seventy-five moves, fivefold repetition.
        """
        if not MoveGenerator(position).has_legal_move():
            if Rules.is_in_check(position):
                return Termination.CHECKMATE
            return Termination.STALEMATE

        if not config.automatic_draws_only:
            if Rules.is_fifty_move_rule(position, config):
                return Termination.FIFTY_MOVES
            if Rules.is_threefold_repetition(repetitions, config):
                return Termination.THREEFOLD_REPETITION
        if config.insufficient_material_is_draw and Rules.is_insufficient_material(
            position
        ):
            return Termination.INSUFFICIENT_MATERIAL
        if Rules.is_seventy_five_move_rule(position, config):
            return Termination.SEVENTY_FIVE_MOVES
        if Rules.is_fivefold_repetition(repetitions, config):
            return Termination.FIVEFOLD_REPETITION
        return None

    @staticmethod
    def is_draw_termination(termination: Termination | None) -> bool:
        return termination is not None and termination.is_draw

    @staticmethod
    def game_result(
        position: Position,
        repetitions: int = 1,
        config: RulesConfig = STANDARD_RULES,
    ) -> GameResult:
        """Determine the current game result."""
        termination = Rules.termination(position, repetitions, config)
        if termination is None:
            return GameResult.IN_PROGRESS
        if termination == Termination.CHECKMATE:
            return GameResult.checkmated(position.side_to_move)
        return GameResult.DRAW


def _minor_squares(board: Board, color: Color) -> list[Square]:
    return board.pieces(color, PieceType.KNIGHT) + board.pieces(
        color, PieceType.BISHOP
    )
