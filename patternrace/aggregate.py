"""Aggregation of trial results into position sums and win counts.

An :class:`Aggregate` is a shard owned by exactly one worker task. Shards are
combined with :meth:`Aggregate.merge` in a single-threaded fold after the
parallel phase. Addition is commutative and associative, so the final totals
do not depend on task scheduling or completion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

import numpy as np

from patternrace.catalog import PATTERN_PAIRS, PATTERNS, PatternPair
from patternrace.evaluator import TrialResult


def _zeros(size: int) -> np.ndarray:
    # int64 leaves headroom far beyond trials * sequence_length
    return np.zeros(size, dtype=np.int64)


@dataclass(eq=False)
class Aggregate:
    """Running totals over trials.

    Attributes:
        position_sums: Sum of end positions per pattern, in catalog order.
        win_counts: Trials in which the first member won, per pair.
        trials: Number of trials folded in.
    """

    position_sums: np.ndarray = field(default_factory=lambda: _zeros(len(PATTERNS)))
    win_counts: np.ndarray = field(default_factory=lambda: _zeros(len(PATTERN_PAIRS)))
    trials: int = 0

    def __post_init__(self) -> None:
        self.position_sums = np.asarray(self.position_sums, dtype=np.int64)
        self.win_counts = np.asarray(self.win_counts, dtype=np.int64)
        if self.position_sums.shape != (len(PATTERNS),):
            raise ValueError(
                f"position_sums must have shape ({len(PATTERNS)},), "
                f"got {self.position_sums.shape}"
            )
        if self.win_counts.shape != (len(PATTERN_PAIRS),):
            raise ValueError(
                f"win_counts must have shape ({len(PATTERN_PAIRS)},), "
                f"got {self.win_counts.shape}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Aggregate):
            return NotImplemented
        return (
            self.trials == other.trials
            and np.array_equal(self.position_sums, other.position_sums)
            and np.array_equal(self.win_counts, other.win_counts)
        )

    def add(self, result: TrialResult) -> None:
        """Fold one trial result into the totals."""
        self.position_sums += np.asarray(result.positions, dtype=np.int64)
        self.win_counts += np.asarray(result.wins, dtype=np.int64)
        self.trials += 1

    def merge(self, other: "Aggregate") -> None:
        """Fold another shard into this one."""
        self.position_sums += other.position_sums
        self.win_counts += other.win_counts
        self.trials += other.trials

    def copy(self) -> "Aggregate":
        return Aggregate(
            position_sums=self.position_sums.copy(),
            win_counts=self.win_counts.copy(),
            trials=self.trials,
        )

    def position_map(self) -> Dict[str, int]:
        """Pattern -> position sum. Always holds every catalog pattern."""
        return {p: int(v) for p, v in zip(PATTERNS, self.position_sums)}

    def win_map(self) -> Dict[PatternPair, int]:
        """PatternPair -> win count. Always holds every pair."""
        return {pair: int(v) for pair, v in zip(PATTERN_PAIRS, self.win_counts)}


def aggregate_results(results: Iterable[TrialResult]) -> Aggregate:
    """Fold trial results into a fresh aggregate."""
    aggregate = Aggregate()
    for result in results:
        aggregate.add(result)
    return aggregate


def merge_aggregates(shards: Iterable[Aggregate]) -> Aggregate:
    """Fold shards into a fresh aggregate. Inputs are not modified."""
    total = Aggregate()
    for shard in shards:
        total.merge(shard)
    return total
