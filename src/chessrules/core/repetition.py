"""Repetition table keyed by zobrist hash."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping


class RepetitionTracker:
    """Counts how often each position hash has occurred in a game.

    Equal hashes are treated as equal positions; boards are never compared.
    """

    __slots__ = ("_counts",)

    def __init__(self, initial_key: int | None = None) -> None:
        self._counts: Counter[int] = Counter()
        if initial_key is not None:
            self._counts[initial_key] = 1

    def reset(self, initial_key: int) -> None:
        """Forget everything and seed *initial_key* at count 1."""
        self._counts.clear()
        self._counts[initial_key] = 1

    def record(self, key: int) -> int:
        """Count one more occurrence of *key*; return the new count."""
        self._counts[key] += 1
        return self._counts[key]

    def count(self, key: int) -> int:
        return self._counts.get(key, 0)

    @property
    def counts(self) -> Mapping[int, int]:
        """Read-only view: hash → occurrence count."""
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)
