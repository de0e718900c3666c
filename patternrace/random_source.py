"""Random sources consumed by the trial generator.

The generator only needs uniform integer draws from a fixed inclusive range.
Sources are not thread-safe; the driver builds one per worker task.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable

import numpy as np


class RandomSourceError(RuntimeError):
    """Raised when a random source cannot be constructed or is exhausted."""


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer draws from ``[low, high]``."""

    low: int
    high: int

    def draw(self) -> int:
        """Return the next value."""
        ...

    def draw_many(self, count: int) -> Sequence[int]:
        """Return the next ``count`` values, equivalent to ``count`` draws."""
        ...


class DieSource:
    """Die-style source backed by :class:`numpy.random.Generator`.

    Single draws are served from an internal block so the per-value cost stays
    low; ``draw_many`` bypasses the block for whole sequences.

    Args:
        low: Smallest face value (inclusive).
        high: Largest face value (inclusive).
        seed: Seed for the underlying PCG64 generator. None uses OS entropy.
        block_size: Values fetched per refill for single draws.

    Raises:
        RandomSourceError: If the range is degenerate or the seed is rejected.
    """

    def __init__(
        self,
        low: int = 1,
        high: int = 6,
        seed: Optional[int] = None,
        block_size: int = 4096,
    ) -> None:
        if high <= low:
            raise RandomSourceError(f"Invalid die range [{low}, {high}]")
        if block_size < 1:
            raise RandomSourceError(f"block_size must be >= 1, got {block_size}")
        try:
            self._rng = np.random.default_rng(seed)
        except (TypeError, ValueError) as exc:
            raise RandomSourceError(f"Cannot seed random source: {exc}") from exc
        self.low = low
        self.high = high
        self.seed = seed
        self._block_size = block_size
        self._block = np.empty(0, dtype=np.int64)
        self._cursor = 0

    def draw(self) -> int:
        if self._cursor >= len(self._block):
            self._block = self.draw_many(self._block_size)
            self._cursor = 0
        value = self._block[self._cursor]
        self._cursor += 1
        return int(value)

    def draw_many(self, count: int) -> np.ndarray:
        # numpy's upper bound is exclusive
        return self._rng.integers(self.low, self.high + 1, size=count, dtype=np.int64)

    def __repr__(self) -> str:
        return f"DieSource(low={self.low}, high={self.high}, seed={self.seed})"


class ReplaySource:
    """Replays a fixed list of draws, for deterministic evaluation.

    Raises:
        RandomSourceError: On construction with out-of-range values, or when
            more values are requested than were recorded.
    """

    def __init__(self, values: Iterable[int], low: int = 1, high: int = 6) -> None:
        self.low = low
        self.high = high
        self._values = [int(v) for v in values]
        bad = [v for v in self._values if not low <= v <= high]
        if bad:
            raise RandomSourceError(
                f"Replay values outside [{low}, {high}]: {bad[:5]}"
            )
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._cursor

    def draw(self) -> int:
        return self.draw_many(1)[0]

    def draw_many(self, count: int) -> list[int]:
        if count > self.remaining:
            raise RandomSourceError(
                f"Replay exhausted: requested {count}, {self.remaining} left"
            )
        start = self._cursor
        self._cursor += count
        return self._values[start : self._cursor]
