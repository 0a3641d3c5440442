"""Move value object.

A move is only meaningful relative to the position it was generated from:
it records the moving piece and the piece it captures in that position.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    promotion: PieceType | None = None
    flags: MoveFlag = MoveFlag.NONE

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "?")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE)

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveFlag.EN_PASSANT)

    @property
    def is_double_pawn_push(self) -> bool:
        return bool(self.flags & MoveFlag.DOUBLE_PAWN_PUSH)

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def resets_halfmove_clock(self) -> bool:
        """Pawn moves and captures reset the fifty-move counter."""
        return self.piece.piece_type == PieceType.PAWN or self.captured is not None
