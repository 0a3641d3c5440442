"""Game management layer — state machine, controller, configuration.

Quick start::

    from chessrules.core import parse_square
    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.submit_squares(parse_square("e2"), parse_square("e4"))
"""

from chessrules.game.config import RulesConfig
from chessrules.game.controller import GameController, GameEvents
from chessrules.game.errors import (
    GameAlreadyTerminalError,
    GameError,
    IllegalMoveError,
    InvalidPromotionChoiceError,
    MoveError,
    NoDrawOfferError,
    NotYourTurnError,
)
from chessrules.game.interfaces import IGameController
from chessrules.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
    "RulesConfig",
    # Errors
    "GameAlreadyTerminalError",
    "GameError",
    "IllegalMoveError",
    "InvalidPromotionChoiceError",
    "MoveError",
    "NoDrawOfferError",
    "NotYourTurnError",
]
