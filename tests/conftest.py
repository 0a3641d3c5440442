"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.enums import PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.status import GameStatus
from chessrules.core.types import parse_square
from chessrules.game.state import GameState

_PROMOTIONS = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

PlayFn = Callable[..., GameStatus]
FindFn = Callable[[Position, str], Move]


@pytest.fixture
def play() -> PlayFn:
    """Play UCI moves (``"e2e4"``, ``"a7a8q"``) on a GameState."""

    def _play(state: GameState, *ucis: str) -> GameStatus:
        status = state.status
        for uci in ucis:
            move = state.resolve_move(
                parse_square(uci[:2]),
                parse_square(uci[2:4]),
                _PROMOTIONS.get(uci[4:]),
            )
            status = state.apply_move(move)
        return status

    return _play


@pytest.fixture
def find_move() -> FindFn:
    """Look up a legal move of *position* by its UCI text."""

    def _find(position: Position, uci: str) -> Move:
        for move in MoveGenerator(position).generate_legal_moves():
            if str(move) == uci:
                return move
        raise AssertionError(f"{uci} is not legal here")

    return _find
