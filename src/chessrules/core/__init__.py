"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, Position, Rules

    pos = Position.initial()
    moves = MoveGenerator(pos).generate_legal_moves()
    status = Rules.evaluate(pos, moves)
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
    StatusKind,
)
from chessrules.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator, is_square_attacked
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.repetition import RepetitionTracker
from chessrules.core.rules import Rules
from chessrules.core.status import GameStatus
from chessrules.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    "StatusKind",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "RepetitionTracker",
    "Rules",
    "is_square_attacked",
    # FEN
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
