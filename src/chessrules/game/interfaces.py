"""Abstract interface for the game layer.

Presentation and network front ends depend on this ABC rather than on the
concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.enums import Color, PieceType
    from chessrules.core.move import Move
    from chessrules.core.status import GameStatus
    from chessrules.core.types import Square


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game (also used for a rematch)."""

    @abstractmethod
    def submit_move(self, move: Move, actor: Color | None = None) -> GameStatus:
        """Submit a move; raises a ``MoveError`` if it is rejected."""

    @abstractmethod
    def submit_squares(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
        actor: Color | None = None,
    ) -> GameStatus:
        """Submit a move given as squares, as transport layers deliver it."""

    @abstractmethod
    def resign(self, color: Color) -> GameStatus:
        """Player of *color* resigns."""

    @abstractmethod
    def offer_draw(self, color: Color) -> GameStatus:
        """Player offers a draw."""

    @abstractmethod
    def accept_draw(self, color: Color) -> GameStatus:
        """Opponent accepts the draw offer."""

    @abstractmethod
    def decline_draw(self, color: Color) -> None:
        """Opponent declines the draw offer."""

    @abstractmethod
    def time_expired(self, color: Color) -> GameStatus:
        """The external clock reports that *color* ran out of time."""
