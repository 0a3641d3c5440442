"""Tests for Board."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2, E4,
    A8, B8, C8, D8, E8, F8, G8, H8,
)


class TestBoardInitial:
    def test_kings(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_back_ranks(self) -> None:
        board = Board.initial()
        expected = [
            PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
            PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK,
        ]
        for sq, pt in zip((A1, B1, C1, D1, E1, F1, G1, H1), expected):
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"
        for sq, pt in zip((A8, B8, C8, D8, E8, F8, G8, H8), expected):
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawn_counts(self) -> None:
        board = Board.initial()
        assert len(board.pieces(Color.WHITE, PieceType.PAWN)) == 8
        assert len(board.pieces(Color.BLACK, PieceType.PAWN)) == 8
        assert board.piece_count() == 32

    def test_middle_is_empty(self) -> None:
        board = Board.initial()
        assert all(board.is_empty(sq) for sq in range(16, 48))


class TestBoardMutation:
    def test_set_and_clear_square(self) -> None:
        board = Board()
        knight = Piece(Color.WHITE, PieceType.KNIGHT)
        board[E4] = knight
        assert board[E4] == knight
        assert board.pieces(Color.WHITE, PieceType.KNIGHT) == [E4]
        board[E4] = None
        assert board.is_empty(E4)
        assert not board.has_piece(Color.WHITE, PieceType.KNIGHT)

    def test_overwrite_updates_indexes(self) -> None:
        board = Board.initial()
        board[E2] = Piece(Color.BLACK, PieceType.QUEEN)
        assert E2 not in board.pieces(Color.WHITE, PieceType.PAWN)
        assert E2 in board.pieces(Color.BLACK, PieceType.QUEEN)
        assert E2 not in board.all_pieces(Color.WHITE)

    def test_missing_king_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError):
            board.king_square(Color.WHITE)

    def test_two_kings_raise(self) -> None:
        board = Board()
        board[E1] = Piece(Color.WHITE, PieceType.KING)
        board[E2] = Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(ValueError):
            board.king_square(Color.WHITE)

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[E2] = None
        assert board[E2] is not None
        assert board != clone

    def test_occupied_pairs(self) -> None:
        board = Board()
        board[E1] = Piece(Color.WHITE, PieceType.KING)
        board[E8] = Piece(Color.BLACK, PieceType.KING)
        assert list(board.occupied()) == [
            (E1, Piece(Color.WHITE, PieceType.KING)),
            (E8, Piece(Color.BLACK, PieceType.KING)),
        ]

    def test_equality(self) -> None:
        assert Board.initial() == Board.initial()
        assert Board.initial() != Board()
