"""Tests for FEN and SAN notation."""

import pytest

from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesscore.core.move import Move
from chesscore.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_move,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.piece import Piece
from chesscore.core.types import (
    A1, A2, B1, B2, B7, B8, C1, D2, D5, D6, D8, E1, E2, E3, E4, E5, E8, G1, H4,
    parse_square,
)
from chesscore.errors import IllegalMove, MalformedFen, UnparsableNotation

CASTLE_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"
EP_FEN = "rnbqkbnr/1pp1pppp/p7/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3"
PROMO_FEN = "4k3/1P6/8/8/8/8/8/4K3 w - - 0 1"
KNIGHTS_FEN = "4k3/8/8/8/8/5N2/8/1N2K3 w - - 0 1"
ROOKS_FEN = "4k3/8/8/8/8/R7/8/R3K3 w - - 0 1"


class TestFenParsing:
    def test_starting_fields(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_starting_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert position_from_fen(fen).en_passant == E3

    def test_no_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
        assert position_from_fen(fen).castling == CastlingRights.NONE

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        assert position_from_fen(fen).castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_clocks(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 37 112")
        assert pos.side_to_move == Color.BLACK
        assert (pos.halfmove_clock, pos.fullmove_number) == (37, 112)

    def test_consecutive_digits_summing_to_eight(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/K43 w - - 0 1")
        assert position_to_fen(pos) == "4k3/8/8/8/8/8/8/K7 w - - 0 1"

    @pytest.mark.parametrize(
        ("fen", "reason"),
        [
            ("invalid", "6 fields"),
            ("", "6 fields"),
            (STARTING_FEN + " extra", "6 fields"),
            ("8/8/8/8/8/8/8 w - - 0 1", "8 ranks"),
            ("8/8/8/8/8/8/8/8/8 w - - 0 1", "8 ranks"),
            ("9/8/8/8/8/8/8/8 w - - 0 1", "piece letter"),
            ("0/8/8/8/8/8/8/8 w - - 0 1", "piece letter"),
            ("4x3/8/8/8/8/8/8/8 w - - 0 1", "piece letter"),
            ("7/8/8/8/8/8/8/8 w - - 0 1", "covers 7 files"),
            ("ppppppppp/8/8/8/8/8/8/8 w - - 0 1", "wider than 8"),
            ("8/8/8/8/8/8/8/8 x - - 0 1", "side-to-move"),
            ("8/8/8/8/8/8/8/8 W - - 0 1", "side-to-move"),
            ("8/8/8/8/8/8/8/8 w KK - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w K- - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w X - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w - e9 0 1", "en-passant"),
            ("8/8/8/8/8/8/8/8 w - e3 0 1", "does not fit"),
            ("8/8/8/8/8/8/8/8 b - e6 0 1", "does not fit"),
            ("8/8/8/8/8/8/8/8 w - - -1 1", "halfmove"),
            ("8/8/8/8/8/8/8/8 w - - x 1", "halfmove"),
            ("8/8/8/8/8/8/8/8 w - - 0 0", "fullmove"),
            ("8/8/8/8/8/8/8/8 w - - 0 one", "fullmove"),
        ],
    )
    def test_malformed(self, fen: str, reason: str) -> None:
        with pytest.raises(MalformedFen, match=reason) as info:
            position_from_fen(fen)
        assert info.value.fen == fen

    def test_malformed_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("invalid")


class TestFenSerialisation:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            CASTLE_FEN,
            EP_FEN,
            "8/PK4N1/P1p2rn1/7p/1P1B3P/2P5/p1NR4/5k2 w - - 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "4k3/8/8/8/8/8/8/4K3 b - - 99 150",
        ],
    )
    def test_roundtrip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_after_double_push(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert (
            position_to_fen(pos)
            == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )


class TestMoveToSan:
    def test_pawn_push(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(E2, E4, MoveFlag.DOUBLE_PAWN)) == "e4"

    def test_knight_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(G1, parse_square("f3"))) == "Nf3"

    def test_pawn_capture(self) -> None:
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        pos = position_from_fen(fen)
        assert move_to_san(pos, Move(E4, D5, MoveFlag.CAPTURE)) == "exd5"

    def test_en_passant(self) -> None:
        pos = position_from_fen(EP_FEN)
        move = Move(E5, D6, MoveFlag.CAPTURE | MoveFlag.EN_PASSANT)
        assert move_to_san(pos, move) == "exd6"

    def test_castling(self) -> None:
        pos = position_from_fen(CASTLE_FEN)
        assert move_to_san(pos, Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)) == "O-O"
        assert move_to_san(pos, Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE)) == "O-O-O"

    def test_promotion_with_check(self) -> None:
        pos = position_from_fen(PROMO_FEN)
        assert move_to_san(pos, Move(B7, B8, promotion=PieceType.QUEEN)) == "b8=Q+"
        assert move_to_san(pos, Move(B7, B8, promotion=PieceType.KNIGHT)) == "b8=N"

    def test_checkmate_suffix(self) -> None:
        fen = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq g3 0 2"
        pos = position_from_fen(fen)
        assert move_to_san(pos, Move(D8, H4)) == "Qh4#"
        assert position_to_fen(pos) == fen

    def test_file_disambiguation(self) -> None:
        pos = position_from_fen(KNIGHTS_FEN)
        assert move_to_san(pos, Move(B1, D2)) == "Nbd2"
        assert move_to_san(pos, Move(parse_square("f3"), D2)) == "Nfd2"

    def test_rank_disambiguation(self) -> None:
        pos = position_from_fen(ROOKS_FEN)
        assert move_to_san(pos, Move(A1, A2)) == "R1a2"
        assert move_to_san(pos, Move(parse_square("a3"), A2)) == "R3a2"

    def test_square_disambiguation(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/Q7/8/Q1Q1K3 w - - 0 1")
        assert move_to_san(pos, Move(A1, B2)) == "Qa1b2"

    def test_empty_origin_raises(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        with pytest.raises(ValueError):
            move_to_san(pos, Move(E4, E5))


class TestParseMove:
    @pytest.mark.parametrize(
        ("notation", "expected"),
        [
            ("e4", Move(E2, E4, MoveFlag.DOUBLE_PAWN)),
            ("e3", Move(E2, E3)),
            ("Nf3", Move(G1, parse_square("f3"))),
            ("g1f3", Move(G1, parse_square("f3"))),
            ("Ng1f3", Move(G1, parse_square("f3"))),
            ("e2-e4", Move(E2, E4, MoveFlag.DOUBLE_PAWN)),
            ("e4!?", Move(E2, E4, MoveFlag.DOUBLE_PAWN)),
            ("  Nc3 ", Move(B1, parse_square("c3"))),
        ],
    )
    def test_starting_position(self, notation: str, expected: Move) -> None:
        assert parse_move(position_from_fen(STARTING_FEN), notation) == expected

    @pytest.mark.parametrize("notation", ["O-O", "0-0", "O-O+"])
    def test_kingside_castle(self, notation: str) -> None:
        move = parse_move(position_from_fen(CASTLE_FEN), notation)
        assert move == Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)

    @pytest.mark.parametrize("notation", ["O-O-O", "0-0-0"])
    def test_queenside_castle(self, notation: str) -> None:
        move = parse_move(position_from_fen(CASTLE_FEN), notation)
        assert move == Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE)

    def test_castle_without_right(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kkq - 0 1")
        with pytest.raises(UnparsableNotation) as info:
            parse_move(pos, "O-O-O")
        assert info.value.candidates == 0

    @pytest.mark.parametrize("notation", ["exd6", "exd6 e.p.", "exd6e.p.", "e5d6"])
    def test_en_passant(self, notation: str) -> None:
        move = parse_move(position_from_fen(EP_FEN), notation)
        assert move == Move(E5, D6, MoveFlag.CAPTURE | MoveFlag.EN_PASSANT)

    @pytest.mark.parametrize(
        ("notation", "promotion"),
        [
            ("b8=Q", PieceType.QUEEN),
            ("b8Q", PieceType.QUEEN),
            ("b8=R", PieceType.ROOK),
            ("b8=N+", PieceType.KNIGHT),
            ("b7b8n", PieceType.KNIGHT),
            ("b7b8b", PieceType.BISHOP),
            ("b8", PieceType.QUEEN),
            ("b7b8", PieceType.QUEEN),
        ],
    )
    def test_promotion(self, notation: str, promotion: PieceType) -> None:
        move = parse_move(position_from_fen(PROMO_FEN), notation)
        assert move == Move(B7, B8, promotion=promotion)

    @pytest.mark.parametrize("notation", ["b8=K", "b8K", "b7b8k"])
    def test_promotion_to_king_rejected(self, notation: str) -> None:
        with pytest.raises(UnparsableNotation, match="Cannot promote to a king"):
            parse_move(position_from_fen(PROMO_FEN), notation)

    def test_ambiguous(self) -> None:
        pos = position_from_fen(KNIGHTS_FEN)
        with pytest.raises(UnparsableNotation, match="Ambiguous") as info:
            parse_move(pos, "Nd2")
        assert info.value.candidates == 2
        assert info.value.notation == "Nd2"

    def test_disambiguated(self) -> None:
        assert parse_move(position_from_fen(KNIGHTS_FEN), "Nbd2") == Move(B1, D2)
        assert parse_move(position_from_fen(ROOKS_FEN), "R1a2") == Move(A1, A2)
        assert parse_move(position_from_fen(ROOKS_FEN), "R3a2") == Move(
            parse_square("a3"), A2
        )

    @pytest.mark.parametrize("notation", ["Ke2", "e5", "Nf4", "e2e5", "Bb5"])
    def test_no_legal_match(self, notation: str) -> None:
        with pytest.raises(UnparsableNotation, match="no legal move") as info:
            parse_move(position_from_fen(STARTING_FEN), notation)
        assert info.value.candidates == 0

    @pytest.mark.parametrize("notation", ["", "zz", "e9", "Xe4", "O-O-O-O", "e4e5e6"])
    def test_malformed(self, notation: str) -> None:
        with pytest.raises(UnparsableNotation, match="Malformed"):
            parse_move(position_from_fen(STARTING_FEN), notation)

    def test_errors_are_illegal_moves(self) -> None:
        with pytest.raises(IllegalMove):
            parse_move(position_from_fen(STARTING_FEN), "Ke2")

    def test_position_untouched(self) -> None:
        pos = position_from_fen(CASTLE_FEN)
        parse_move(pos, "O-O")
        assert position_to_fen(pos) == CASTLE_FEN
