"""Position — board plus side to move, castling, en passant and clocks.

Special moves are resolved here: castling slides the rook in the same ply,
en passant removes the pawn beside the target square, and promotion swaps
the pawn for the chosen piece.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core import zobrist
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of, make_square, rank_of

# Rook home square → castling right it guards.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def castle_rook_squares(move: Move) -> tuple[Square, Square]:
    """(rook_from, rook_to) for a castling move."""
    r = rank_of(move.from_sq)
    if move.flags & MoveFlag.CASTLE_KINGSIDE:
        return make_square(7, r), make_square(5, r)
    return make_square(0, r), make_square(3, r)


def en_passant_victim_square(move: Move) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


@dataclass(slots=True)
class _UndoState:
    """Snapshot saved before each move so a scratch position can step back."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    zobrist_hash: int


class Position:
    """Full chess position.

    Positions held by a game are never modified after they are committed;
    :meth:`after` produces the successor.  :meth:`make_move` and
    :meth:`unmake_move` are meant for scratch copies, e.g. during legality
    filtering.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_zobrist_hash",
        "_undo",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._zobrist_hash = self._compute_zobrist_hash()
        self._undo: list[_UndoState] = []

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Core move operations ─────────────────────────────────────────────

    def after(self, move: Move) -> Position:
        """Return the position reached by playing *move*; ``self`` is untouched."""
        nxt = self.copy()
        nxt.make_move(move)
        nxt._undo.clear()
        return nxt

    def make_move(self, move: Move) -> None:
        """Apply *move* in place, pushing undo state."""
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        self._undo.append(
            _UndoState(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                zobrist_hash=self._zobrist_hash,
            )
        )

        self._remove(move.from_sq)

        if move.flags & MoveFlag.EN_PASSANT:
            self._remove(en_passant_victim_square(move))
        elif self.board[move.to_sq] is not None:
            self._remove(move.to_sq)

        placed = piece if move.promotion is None else Piece(piece.color, move.promotion)
        self._place(move.to_sq, placed)

        if move.flags & MoveFlag.CASTLE:
            rook_from, rook_to = castle_rook_squares(move)
            rook = self._remove(rook_from)
            self._place(rook_to, rook)

        next_en_passant: Square | None = None
        if move.flags & MoveFlag.DOUBLE_PAWN_PUSH:
            next_en_passant = (move.from_sq + move.to_sq) // 2
        self._set_en_passant(next_en_passant)

        self._update_castling(move, piece)

        if move.resets_halfmove_clock:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite
        self._zobrist_hash ^= zobrist.side_to_move_key()

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move` of *move*."""
        state = self._undo.pop()

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        board = self.board
        board[move.to_sq] = None
        board[move.from_sq] = move.piece

        if move.captured is not None:
            if move.flags & MoveFlag.EN_PASSANT:
                board[en_passant_victim_square(move)] = move.captured
            else:
                board[move.to_sq] = move.captured

        if move.flags & MoveFlag.CASTLE:
            rook_from, rook_to = castle_rook_squares(move)
            board[rook_from] = board[rook_to]
            board[rook_to] = None

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self._zobrist_hash = state.zobrist_hash

    # ── Board + hash bookkeeping ─────────────────────────────────────────

    def _remove(self, sq: Square) -> Piece:
        piece = self.board[sq]
        assert piece is not None
        self._zobrist_hash ^= zobrist.piece_key(piece, sq)
        self.board[sq] = None
        return piece

    def _place(self, sq: Square, piece: Piece) -> None:
        self.board[sq] = piece
        self._zobrist_hash ^= zobrist.piece_key(piece, sq)

    def _update_castling(self, move: Move, piece: Piece) -> None:
        next_castling = self.castling
        if piece.is_king:
            next_castling &= ~CastlingRights.both(piece.color)

        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_CORNERS.get(sq)
            if right is not None:
                next_castling &= ~right

        self._set_castling(next_castling)

    def _set_castling(self, castling: CastlingRights) -> None:
        if castling == self.castling:
            return
        self._zobrist_hash ^= zobrist.castling_key(self.castling)
        self.castling = castling
        self._zobrist_hash ^= zobrist.castling_key(self.castling)

    def _set_en_passant(self, en_passant: Square | None) -> None:
        if en_passant == self.en_passant:
            return
        if self.en_passant is not None:
            self._zobrist_hash ^= zobrist.en_passant_key(self.en_passant)
        self.en_passant = en_passant
        if self.en_passant is not None:
            self._zobrist_hash ^= zobrist.en_passant_key(self.en_passant)

    def _compute_zobrist_hash(self) -> int:
        return zobrist.full_hash(
            list(self.board.occupied()),
            self.side_to_move,
            self.castling,
            self.en_passant,
        )

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy without undo history."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.en_passant = self.en_passant
        pos.halfmove_clock = self.halfmove_clock
        pos.fullmove_number = self.fullmove_number
        pos._zobrist_hash = self._zobrist_hash
        pos._undo = []
        return pos

    @property
    def zobrist_hash(self) -> int:
        """Key over placement, side to move, castling rights and en passant."""
        return self._zobrist_hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from chessrules.core.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"
