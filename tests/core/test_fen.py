"""FEN parsing and serialisation."""

import pytest

from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import A8, E3, E4, parse_square


class TestParse:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos == Position.initial()
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None

    def test_fields(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b Kq e3 0 1"
        )
        assert pos.side_to_move == Color.BLACK
        assert pos.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        assert pos.en_passant == E3
        assert pos.board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_clocks_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w Q -")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_clocks_read(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 37 52")
        assert pos.halfmove_clock == 37
        assert pos.fullmove_number == 52

    def test_corner_placement(self) -> None:
        pos = position_from_fen("r3k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert pos.board[A8] == Piece(Color.BLACK, PieceType.ROOK)


class TestRoundTrip:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/R3K3 b Q - 12 40",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_initial_serialises_to_starting_fen(self) -> None:
        assert position_to_fen(Position.initial()) == STARTING_FEN


class TestInvalid:
    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkx - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KKq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1",
            "4k2R/8/8/8/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_rejected(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",
        ],
    )
    def test_king_count_enforced(self, fen: str) -> None:
        with pytest.raises(ValueError, match="king"):
            position_from_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            # White to move with the black king already attacked by the rook.
            "4k2R/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K2r b - - 0 1",
            "4k3/8/8/8/8/8/3p4/4K3 b - - 0 1",
        ],
    )
    def test_side_not_to_move_in_check(self, fen: str) -> None:
        with pytest.raises(ValueError, match="in check"):
            position_from_fen(fen)

    def test_side_to_move_may_be_in_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert pos.side_to_move == Color.WHITE

    @pytest.mark.parametrize(
        "fen",
        [
            "P3k3/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/p3K3 w - - 0 1",
            "p3k3/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/P3K3 w - - 0 1",
        ],
    )
    def test_back_rank_pawns(self, fen: str) -> None:
        with pytest.raises(ValueError, match="pawn"):
            position_from_fen(fen)

    def test_en_passant_rank_must_match_side(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - e3 0 1")
        assert position_from_fen("4k3/8/8/8/4P3/8/8/4K3 b - e3 0 1").en_passant == (
            parse_square("e3")
        )
