"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType, StatusKind
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.status import GameStatus
from chessrules.core.types import is_light_square

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.position import Position

FIFTY_MOVE_LIMIT = 100  # half-moves
REPETITION_LIMIT = 3


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Policy: threefold repetition, the fifty-move rule and insufficient
    # material all end the game automatically; nobody has to claim them.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.generate_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return (
            not gen.is_in_check(position.side_to_move)
            and not gen.generate_legal_moves()
        )

    @staticmethod
    def evaluate(position: Position, legal_moves: Sequence[Move]) -> GameStatus:
        """Classify *position* from its already generated legal moves.

        Returns CHECKMATE, STALEMATE, CHECK or IN_PROGRESS; draw rules are
        not considered here.
        """
        in_check = Rules.is_in_check(position)
        if not legal_moves:
            if in_check:
                return GameStatus.checkmate(position.side_to_move.opposite)
            return GameStatus.stalemate()
        if in_check:
            return GameStatus.check(position.side_to_move)
        return GameStatus.in_progress()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        board = position.board
        total = board.piece_count()

        if total == 2:
            return True

        if total == 3:
            return any(
                board.has_piece(color, pt)
                for color in Color
                for pt in (PieceType.KNIGHT, PieceType.BISHOP)
            )

        if total == 4:
            white_bishops = board.pieces(Color.WHITE, PieceType.BISHOP)
            black_bishops = board.pieces(Color.BLACK, PieceType.BISHOP)
            if len(white_bishops) == 1 and len(black_bishops) == 1:
                return is_light_square(white_bishops[0]) == is_light_square(
                    black_bishops[0]
                )

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position, limit: int = FIFTY_MOVE_LIMIT) -> bool:
        return position.halfmove_clock >= limit

    @staticmethod
    def game_status(
        position: Position,
        legal_moves: Sequence[Move],
        repetition_count: int,
        *,
        repetition_limit: int = REPETITION_LIMIT,
        fifty_move_limit: int = FIFTY_MOVE_LIMIT,
        insufficient_material_draw: bool = True,
    ) -> GameStatus:
        """Full status after a ply.

        Checkmate and stalemate win over every draw rule, so a mate
        delivered on the hundredth quiet ply is still a mate.
        """
        status = Rules.evaluate(position, legal_moves)
        if status.is_terminal:
            return status
        if repetition_count >= repetition_limit:
            return GameStatus(StatusKind.DRAW_BY_REPETITION)
        if Rules.is_fifty_move_rule(position, fifty_move_limit):
            return GameStatus(StatusKind.DRAW_BY_FIFTY_MOVE)
        if insufficient_material_draw and Rules.is_insufficient_material(position):
            return GameStatus(StatusKind.DRAW_BY_INSUFFICIENT_MATERIAL)
        return status
