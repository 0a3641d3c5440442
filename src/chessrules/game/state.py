"""Game state machine — the single mutation entry point for one game."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessrules.core.enums import PROMOTION_TYPES, Color, PieceType, StatusKind
from chessrules.core.fen import STARTING_FEN, position_from_fen
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.repetition import RepetitionTracker
from chessrules.core.rules import Rules
from chessrules.core.status import GameStatus
from chessrules.core.types import Square, square_name
from chessrules.game.config import RulesConfig
from chessrules.game.errors import (
    GameAlreadyTerminalError,
    IllegalMoveError,
    InvalidPromotionChoiceError,
    NoDrawOfferError,
    NotYourTurnError,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    position_after: Position
    status_after: GameStatus

    @property
    def was_check(self) -> bool:
        return self.status_after.kind in (StatusKind.CHECK, StatusKind.CHECKMATE)


@dataclass
class GameState:
    """Position, history, repetition table and draw offer of one game.

    Pure logic: no threading, no I/O.  Callers serialise access; whoever
    drives the game (a local loop or a network session) owns the instance.
    """

    config: RulesConfig = field(default_factory=RulesConfig)
    position: Position = field(init=False)
    status: GameStatus = field(init=False)
    draw_offer_by: Color | None = field(default=None, init=False)
    records: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _repetitions: RepetitionTracker = field(
        default_factory=RepetitionTracker, init=False, repr=False
    )
    _legal_moves: list[Move] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    # ── Initialisation ───────────────────────────────────────────────────

    def reset(self, fen: str | None = None) -> None:
        """Start over from the standard position (or *fen*)."""
        position = position_from_fen(fen) if fen is not None else Position.initial()
        self.start_fen = STARTING_FEN if fen is None else fen
        self.position = position
        self.records.clear()
        self.draw_offer_by = None
        self._repetitions.reset(self.position.zobrist_hash)
        self._legal_moves = MoveGenerator(self.position).generate_legal_moves()
        self.status = self._evaluate(self.position, self._legal_moves, 1)
        _LOGGER.debug("New game from %s (%s)", self.start_fen, self.status)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move, actor: Color | None = None) -> GameStatus:
        """Validate and play *move*; return the resulting status.

        *actor* is the side that issued the move, when the caller knows it.
        Nothing changes if the move is rejected.
        """
        self._ensure_in_progress()
        self._ensure_turn(actor, move)
        if move not in self._legal_moves:
            self._reject(move)

        next_position = self.position.after(move)
        next_legal = MoveGenerator(next_position).generate_legal_moves()
        key = next_position.zobrist_hash
        occurrences = self._repetitions.count(key) + 1
        status = self._evaluate(next_position, next_legal, occurrences)

        # Commit: nothing below can fail.
        self._repetitions.record(key)
        self.position = next_position
        self._legal_moves = next_legal
        self.records.append(MoveRecord(move, next_position, status))
        if self.draw_offer_by is not None:
            _LOGGER.debug("Draw offer by %s lapsed after %s", self.draw_offer_by, move)
            self.draw_offer_by = None
        self.status = status

        _LOGGER.debug(
            "Ply %d: %s played %s -> %s",
            self.ply_count,
            move.piece.color,
            move,
            status,
        )
        if status.is_terminal:
            _LOGGER.info("Game over after %s: %s", move, status)
        return status

    def resolve_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
        actor: Color | None = None,
    ) -> Move:
        """Find the legal move matching a square pair (plus promotion choice).

        Presentation and network layers only know squares; this turns their
        input into the :class:`Move` that :meth:`apply_move` expects.
        An *actor* other than the side to move is refused before the squares
        are looked at.
        """
        self._ensure_in_progress()
        self._ensure_turn(actor)
        candidates = [
            m for m in self._legal_moves if m.from_sq == from_sq and m.to_sq == to_sq
        ]
        if not candidates:
            raise IllegalMoveError(
                f"No legal move from {square_name(from_sq)} to {square_name(to_sq)}"
            )
        if candidates[0].is_promotion:
            if promotion not in PROMOTION_TYPES:
                raise InvalidPromotionChoiceError(
                    f"Promotion on {square_name(to_sq)} needs a knight, bishop, "
                    f"rook or queen, got {promotion!r}"
                )
            return next(m for m in candidates if m.promotion == promotion)
        if promotion is not None:
            raise IllegalMoveError(
                f"{square_name(from_sq)}{square_name(to_sq)} does not promote"
            )
        return candidates[0]

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> GameStatus:
        self._ensure_in_progress()
        return self._finish(GameStatus.resigned(color))

    def flag_fall(self, color: Color) -> GameStatus:
        """Time ran out for *color* (reported by the external clock)."""
        self._ensure_in_progress()
        return self._finish(GameStatus.time_forfeit(color))

    def offer_draw(self, color: Color) -> GameStatus:
        """Record a draw offer by *color*.

        An offer crossing the opponent's pending offer is an agreement.
        """
        self._ensure_in_progress()
        if self.draw_offer_by == color.opposite:
            return self.accept_draw(color)
        self.draw_offer_by = color
        _LOGGER.debug("%s offers a draw", color)
        return self.status

    def accept_draw(self, color: Color) -> GameStatus:
        self._ensure_in_progress()
        if self.draw_offer_by != color.opposite:
            raise NoDrawOfferError(color)
        return self._finish(GameStatus(StatusKind.DRAW_BY_AGREEMENT))

    def decline_draw(self, color: Color) -> None:
        self._ensure_in_progress()
        if self.draw_offer_by != color.opposite:
            raise NoDrawOfferError(color)
        _LOGGER.debug("%s declines the draw offer", color)
        self.draw_offer_by = None

    # ── Query helpers ────────────────────────────────────────────────────

    def current_position(self) -> Position:
        return self.position

    def current_status(self) -> GameStatus:
        return self.status

    def move_history(self) -> list[Move]:
        """Moves played so far, oldest first."""
        return [record.move for record in self.records]

    def is_draw_offer_pending(self) -> bool:
        return self.draw_offer_by is not None

    def legal_moves(self, from_sq: Square | None = None) -> list[Move]:
        """Legal moves of the side to move; empty once the game is over."""
        if self.status.is_terminal:
            return []
        if from_sq is None:
            return list(self._legal_moves)
        return [m for m in self._legal_moves if m.from_sq == from_sq]

    def legal_destinations(self, from_sq: Square) -> set[Square]:
        """Squares the piece on *from_sq* may move to (for highlighting)."""
        return {m.to_sq for m in self.legal_moves(from_sq)}

    def repetition_count(self) -> int:
        """How many times the current position has occurred."""
        return self._repetitions.count(self.position.zobrist_hash)

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.records)

    # ── Internal ─────────────────────────────────────────────────────────

    def _evaluate(
        self, position: Position, legal_moves: list[Move], occurrences: int
    ) -> GameStatus:
        return Rules.game_status(
            position,
            legal_moves,
            occurrences,
            repetition_limit=self.config.repetition_limit,
            fifty_move_limit=self.config.fifty_move_limit,
            insufficient_material_draw=self.config.insufficient_material_draw,
        )

    def _ensure_in_progress(self) -> None:
        if self.status.is_terminal:
            raise GameAlreadyTerminalError(self.status)

    def _ensure_turn(self, actor: Color | None, move: Move | None = None) -> None:
        side = self.position.side_to_move
        if actor is not None and actor != side:
            raise NotYourTurnError(actor, side, move)

    def _finish(self, status: GameStatus) -> GameStatus:
        self.status = status
        self.draw_offer_by = None
        _LOGGER.info("Game over: %s", status)
        return status

    def _reject(self, move: Move) -> None:
        same_squares = [
            m
            for m in self._legal_moves
            if m.from_sq == move.from_sq and m.to_sq == move.to_sq
        ]
        if any(m.is_promotion for m in same_squares) and (
            move.promotion not in PROMOTION_TYPES
        ):
            raise InvalidPromotionChoiceError(
                f"Promotion choice {move.promotion!r} is not allowed for {move}", move
            )
        raise IllegalMoveError(f"Illegal move {move}", move)
