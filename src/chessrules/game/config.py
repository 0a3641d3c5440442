"""Rule configuration for a game."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.rules import FIFTY_MOVE_LIMIT, REPETITION_LIMIT


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Thresholds for the automatic draw rules.

    The defaults are the standard rules: threefold repetition, fifty moves
    (100 plies) by each side, dead positions by insufficient material.
    """

    repetition_limit: int = REPETITION_LIMIT
    fifty_move_limit: int = FIFTY_MOVE_LIMIT  # half-moves
    insufficient_material_draw: bool = True

    def __post_init__(self) -> None:
        if self.repetition_limit < 2:
            raise ValueError(
                f"repetition_limit must be >= 2, got {self.repetition_limit}"
            )
        if self.fifty_move_limit < 1:
            raise ValueError(
                f"fifty_move_limit must be >= 1, got {self.fifty_move_limit}"
            )
