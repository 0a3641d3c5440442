"""GameStatus — tagged status of a game after the latest ply."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, GameResult, StatusKind

_TERMINAL_KINDS = frozenset(StatusKind) - {StatusKind.IN_PROGRESS, StatusKind.CHECK}

_DRAW_KINDS = frozenset(
    {
        StatusKind.STALEMATE,
        StatusKind.DRAW_BY_REPETITION,
        StatusKind.DRAW_BY_FIFTY_MOVE,
        StatusKind.DRAW_BY_INSUFFICIENT_MATERIAL,
        StatusKind.DRAW_BY_AGREEMENT,
    }
)

# Kinds whose ``color`` names the losing side rather than the winner.
_LOSER_KINDS = frozenset({StatusKind.RESIGNED, StatusKind.TIME_FORFEIT})


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Status value; ``color`` meaning depends on ``kind``.

    * ``CHECK`` — the side in check.
    * ``CHECKMATE`` — the winner.
    * ``RESIGNED`` / ``TIME_FORFEIT`` — the loser.
    * every other kind — ``None``.
    """

    kind: StatusKind
    color: Color | None = None

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def check(cls, side_in_check: Color) -> GameStatus:
        return cls(StatusKind.CHECK, side_in_check)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @classmethod
    def resigned(cls, loser: Color) -> GameStatus:
        return cls(StatusKind.RESIGNED, loser)

    @classmethod
    def time_forfeit(cls, loser: Color) -> GameStatus:
        return cls(StatusKind.TIME_FORFEIT, loser)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_terminal(self) -> bool:
        return self.kind in _TERMINAL_KINDS

    @property
    def is_draw(self) -> bool:
        return self.kind in _DRAW_KINDS

    @property
    def winner(self) -> Color | None:
        if self.kind == StatusKind.CHECKMATE:
            return self.color
        if self.kind in _LOSER_KINDS and self.color is not None:
            return self.color.opposite
        return None

    @property
    def result(self) -> GameResult:
        if not self.is_terminal:
            return GameResult.IN_PROGRESS
        if self.is_draw:
            return GameResult.DRAW
        return GameResult.WHITE_WINS if self.winner == Color.WHITE else GameResult.BLACK_WINS

    def __str__(self) -> str:
        if self.color is None:
            return str(self.kind)
        return f"{self.kind}({self.color})"
