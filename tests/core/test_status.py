"""GameStatus value semantics."""

import pytest

from chessrules.core.enums import Color, GameResult, StatusKind
from chessrules.core.status import GameStatus


@pytest.mark.parametrize(
    ("status", "terminal", "draw", "winner", "result"),
    [
        (GameStatus.in_progress(), False, False, None, GameResult.IN_PROGRESS),
        (GameStatus.check(Color.WHITE), False, False, None, GameResult.IN_PROGRESS),
        (
            GameStatus.checkmate(Color.WHITE),
            True,
            False,
            Color.WHITE,
            GameResult.WHITE_WINS,
        ),
        (GameStatus.stalemate(), True, True, None, GameResult.DRAW),
        (
            GameStatus(StatusKind.DRAW_BY_REPETITION),
            True,
            True,
            None,
            GameResult.DRAW,
        ),
        (
            GameStatus(StatusKind.DRAW_BY_AGREEMENT),
            True,
            True,
            None,
            GameResult.DRAW,
        ),
        (
            GameStatus.resigned(Color.WHITE),
            True,
            False,
            Color.BLACK,
            GameResult.BLACK_WINS,
        ),
        (
            GameStatus.time_forfeit(Color.BLACK),
            True,
            False,
            Color.WHITE,
            GameResult.WHITE_WINS,
        ),
    ],
)
def test_status_properties(status, terminal, draw, winner, result) -> None:
    assert status.is_terminal is terminal
    assert status.is_draw is draw
    assert status.winner == winner
    assert status.result == result


def test_equality_includes_color() -> None:
    assert GameStatus.check(Color.WHITE) == GameStatus.check(Color.WHITE)
    assert GameStatus.check(Color.WHITE) != GameStatus.check(Color.BLACK)


def test_str() -> None:
    assert str(GameStatus.in_progress()) == "in_progress"
    assert str(GameStatus.checkmate(Color.BLACK)) == "checkmate(black)"
