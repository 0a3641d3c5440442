"""Board — piece placement only; side to move and rights live in Position."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _slot(color: Color, piece_type: PieceType) -> int:
    return int(color) * 6 + int(piece_type) - 1


def _squares_from_bitboard(bitboard: int) -> list[Square]:
    squares: list[Square] = []
    while bitboard:
        lsb = bitboard & -bitboard
        squares.append(lsb.bit_length() - 1)
        bitboard ^= lsb
    return squares


class Board:
    """64 squares, each empty or holding one piece.

    A square list answers "what is on e4"; twelve bitboards (one per colour
    and piece type) answer "where are White's knights".  Both are kept in
    step by ``__setitem__``, the only mutator.
    """

    __slots__ = ("_squares", "_bitboards")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self._bitboards: list[int] = [0] * 12

    # ── Element access ───────────────────────────────────────────────────

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old = self._squares[sq]
        if old is not None:
            self._bitboards[_slot(old.color, old.piece_type)] &= ~(1 << sq)
        self._squares[sq] = piece
        if piece is not None:
            self._bitboards[_slot(piece.color, piece.piece_type)] |= 1 << sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """(square, piece) pairs for every occupied square, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    # ── Piece lookup ─────────────────────────────────────────────────────

    def pieces_bitboard(self, color: Color, piece_type: PieceType) -> int:
        return self._bitboards[_slot(color, piece_type)]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares holding *color*'s pieces of *piece_type*, a1 first."""
        return _squares_from_bitboard(self.pieces_bitboard(color, piece_type))

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return self.pieces_bitboard(color, piece_type) != 0

    def all_pieces_bitboard(self, color: Color) -> int:
        start = int(color) * 6
        bits = 0
        for bitboard in self._bitboards[start : start + 6]:
            bits |= bitboard
        return bits

    def all_pieces(self, color: Color) -> list[Square]:
        return _squares_from_bitboard(self.all_pieces_bitboard(color))

    def piece_count(self) -> int:
        return sum(bitboard.bit_count() for bitboard in self._bitboards)

    def king_square(self, color: Color) -> Square:
        """Square of *color*'s king; a board without exactly one is invalid."""
        kings = self.pieces_bitboard(color, PieceType.KING)
        if kings == 0 or kings & (kings - 1):
            raise ValueError(f"Expected exactly one {color} king on the board")
        return kings.bit_length() - 1

    # ── Copying / construction ───────────────────────────────────────────

    def copy(self) -> Board:
        clone = Board.__new__(Board)
        clone._squares = self._squares.copy()
        clone._bitboards = self._bitboards.copy()
        return clone

    @classmethod
    def initial(cls) -> Board:
        """Standard starting placement."""
        board = cls()
        for file, piece_type in enumerate(_BACK_RANK):
            board[make_square(file, 0)] = Piece(Color.WHITE, piece_type)
            board[make_square(file, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            board[make_square(file, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            board[make_square(file, 7)] = Piece(Color.BLACK, piece_type)
        return board

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = [
            f"{rank + 1} "
            + " ".join(
                str(self._squares[make_square(file, rank)] or ".") for file in range(8)
            )
            for rank in range(7, -1, -1)
        ]
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
