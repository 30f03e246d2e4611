"""Tests for Rules: checkmate, stalemate, draw detection."""

import pytest

from chesscore.config import RulesConfig
from chesscore.core.enums import GameResult, Termination
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"
ROOKS = "4k3/8/8/8/8/8/4K2R/7r w - - {clock} 80"

AUTOMATIC = RulesConfig(automatic_draws_only=True)


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)

    def test_checkmate_outranks_fifty_moves(self) -> None:
        pos = position_from_fen(FOOLS_MATE.replace("- 1 3", "- 100 60"))
        assert Rules.termination(pos, 3) == Termination.CHECKMATE


class TestStalemate:
    def test_king_trapped(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.termination(pos) == Termination.STALEMATE
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            pytest.param("8/8/4k3/8/8/4K3/8/8 w - - 0 1", id="K-K"),
            pytest.param("8/8/4k3/8/8/4K3/3B4/8 w - - 0 1", id="KB-K"),
            pytest.param("8/8/4k3/8/8/4K3/3N4/8 w - - 0 1", id="KN-K"),
            pytest.param("8/3n4/4k3/8/8/4K3/8/8 w - - 0 1", id="K-KN"),
            pytest.param("5b2/8/4k3/8/8/4K3/8/2B5 w - - 0 1", id="KB-KB-same"),
        ],
    )
    def test_dead_positions(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert Rules.is_insufficient_material(pos)
        assert Rules.termination(pos) == Termination.INSUFFICIENT_MATERIAL

    @pytest.mark.parametrize(
        "fen",
        [
            pytest.param("8/8/4k3/8/8/4K3/3R4/8 w - - 0 1", id="KR-K"),
            pytest.param("8/8/4k3/8/4P3/4K3/8/8 w - - 0 1", id="KP-K"),
            pytest.param("8/8/4k3/8/8/4K3/3Q4/8 w - - 0 1", id="KQ-K"),
            pytest.param("8/8/4k3/8/8/4K3/3NN3/8 w - - 0 1", id="KNN-K"),
            pytest.param("2b5/8/4k3/8/8/4K3/8/2B5 w - - 0 1", id="KB-KB-opposite"),
            pytest.param("8/8/4k3/3n4/8/4K3/3B4/8 w - - 0 1", id="KB-KN"),
            pytest.param("8/3n4/4k3/8/8/4K3/3N4/8 w - - 0 1", id="KN-KN"),
            pytest.param(STARTING_FEN, id="start"),
        ],
    )
    def test_material_left(self, fen: str) -> None:
        assert not Rules.is_insufficient_material(position_from_fen(fen))

    def test_can_be_disabled(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        config = RulesConfig(insufficient_material_is_draw=False)
        assert Rules.termination(pos, 1, config) is None


class TestFiftyMoveRule:
    def test_not_triggered_at_99(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=99))
        assert not Rules.is_fifty_move_rule(pos)
        assert Rules.termination(pos) is None

    def test_triggered_at_100_halfmoves(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=100))
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.is_claimable_draw(pos, 1)
        assert Rules.termination(pos) == Termination.FIFTY_MOVES
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_claimable_only_under_automatic_policy(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=100))
        assert Rules.termination(pos, 1, AUTOMATIC) is None
        assert Rules.game_result(pos, 1, AUTOMATIC) == GameResult.IN_PROGRESS

    def test_seventy_five_move_rule(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=150))
        assert Rules.is_seventy_five_move_rule(pos)
        assert Rules.termination(pos, 1, AUTOMATIC) == Termination.SEVENTY_FIVE_MOVES

    def test_custom_threshold(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=20))
        assert Rules.is_fifty_move_rule(pos, RulesConfig(fifty_move_plies=20))


class TestRepetition:
    def test_threefold_at_limit(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=8))
        assert not Rules.is_threefold_repetition(2)
        assert Rules.is_threefold_repetition(3)
        assert Rules.termination(pos, 3) == Termination.THREEFOLD_REPETITION
        assert Rules.is_claimable_draw(pos, 3)

    def test_fivefold_is_automatic(self) -> None:
        pos = position_from_fen(ROOKS.format(clock=16))
        assert Rules.termination(pos, 4, AUTOMATIC) is None
        assert Rules.termination(pos, 5, AUTOMATIC) == Termination.FIVEFOLD_REPETITION


class TestTermination:
    def test_in_progress_at_start(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert Rules.termination(pos) is None
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_draw_terminations(self) -> None:
        assert Rules.is_draw_termination(Termination.STALEMATE)
        assert Rules.is_draw_termination(Termination.THREEFOLD_REPETITION)
        assert not Rules.is_draw_termination(Termination.CHECKMATE)
        assert not Rules.is_draw_termination(None)


class TestRulesConfig:
    def test_standard_values(self) -> None:
        config = RulesConfig.standard()
        assert config.fifty_move_plies == 100
        assert config.repetition_limit == 3
        assert not config.automatic_draws_only

    def test_rejects_non_positive_threshold(self) -> None:
        with pytest.raises(ValueError, match="repetition_limit"):
            RulesConfig(repetition_limit=0)
