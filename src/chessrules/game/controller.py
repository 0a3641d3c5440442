"""GameController — orchestrates one game for a local loop or network session.

Owns a :class:`GameState` and emits events via simple callbacks so the
presentation layer / transport / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from chessrules.core.enums import Color, PieceType
from chessrules.core.move import Move
from chessrules.core.status import GameStatus
from chessrules.core.types import Square
from chessrules.game.config import RulesConfig
from chessrules.game.errors import GameError
from chessrules.game.interfaces import IGameController
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameStatus, GameState], None]
StatusCallback = Callable[[GameStatus], None]
DrawOfferCallback = Callable[[Color], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_game_over: list[StatusCallback] = field(default_factory=list)
    on_draw_offer: list[DrawOfferCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies actions for one game, then notifies listeners.

    Thread-safety: none.  A network front end must funnel remote and local
    actions into one ordered stream before calling in.  Rejected actions are
    logged and the engine error is re-raised to the caller.
    """

    __slots__ = ("_state", "_config", "events")

    def __init__(self, config: RulesConfig | None = None) -> None:
        self._config = config or RulesConfig()
        self._state = GameState(self._config)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._state.status

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        self._state.reset(fen)
        _LOGGER.info("New game started (%s)", self._state.start_fen)
        self._emit_status(self._state.status)

    def submit_move(self, move: Move, actor: Color | None = None) -> GameStatus:
        status = self._guard(lambda: self._state.apply_move(move, actor), "move")
        for cb in self.events.on_move:
            cb(move, status, self._state)
        self._emit_status(status)
        return status

    def submit_squares(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
        actor: Color | None = None,
    ) -> GameStatus:
        move = self._guard(
            lambda: self._state.resolve_move(from_sq, to_sq, promotion, actor), "move"
        )
        return self.submit_move(move, actor)

    def resign(self, color: Color) -> GameStatus:
        status = self._guard(lambda: self._state.resign(color), "resignation")
        self._emit_status(status)
        return status

    def offer_draw(self, color: Color) -> GameStatus:
        status = self._guard(lambda: self._state.offer_draw(color), "draw offer")
        if status.is_terminal:
            self._emit_status(status)
        else:
            for cb in self.events.on_draw_offer:
                cb(color)
        return status

    def accept_draw(self, color: Color) -> GameStatus:
        status = self._guard(lambda: self._state.accept_draw(color), "draw acceptance")
        self._emit_status(status)
        return status

    def decline_draw(self, color: Color) -> None:
        self._guard(lambda: self._state.decline_draw(color), "draw decline")

    def time_expired(self, color: Color) -> GameStatus:
        status = self._guard(lambda: self._state.flag_fall(color), "flag fall")
        self._emit_status(status)
        return status

    # ── Internal helpers ─────────────────────────────────────────────────

    def _guard(self, action: Callable[[], _T], what: str) -> _T:
        try:
            return action()
        except GameError as exc:
            _LOGGER.warning("Rejected %s: %s", what, exc)
            raise

    def _emit_status(self, status: GameStatus) -> None:
        for cb in self.events.on_status_changed:
            cb(status)
        if status.is_terminal:
            for cb in self.events.on_game_over:
                cb(status)
