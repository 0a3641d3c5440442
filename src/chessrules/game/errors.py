"""Errors raised by the game layer.

Every rejected mutation leaves the game exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.enums import Color
    from chessrules.core.move import Move
    from chessrules.core.status import GameStatus


class GameError(Exception):
    """Base class for all rejected game operations."""


class GameAlreadyTerminalError(GameError):
    """A mutation was attempted after the game ended."""

    def __init__(self, status: GameStatus) -> None:
        super().__init__(f"Game is already over: {status}")
        self.status = status


class MoveError(GameError):
    """Base class for rejected moves."""

    def __init__(self, message: str, move: Move | None = None) -> None:
        super().__init__(message)
        self.move = move


class IllegalMoveError(MoveError):
    """The move is not in the legal-move set of the current position."""


class InvalidPromotionChoiceError(MoveError):
    """A promotion is required but the piece choice is missing or invalid."""


class NotYourTurnError(MoveError):
    """The side issuing the move is not the side to move."""

    def __init__(self, actor: Color, side_to_move: Color, move: Move | None = None) -> None:
        super().__init__(f"{actor} cannot move: it is {side_to_move}'s turn", move)
        self.actor = actor
        self.side_to_move = side_to_move


class NoDrawOfferError(GameError):
    """Accept / decline without a pending offer from the opponent."""

    def __init__(self, color: Color) -> None:
        super().__init__(f"No draw offer pending for {color} to answer")
        self.color = color
