"""Normalized simulation results.

:class:`SimulationResults` wraps a final aggregate and performs the division
by the trial count that the aggregator deliberately leaves to its caller. It
offers dict views for reporting, pandas views for analysis, and a JSON-safe
export.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from patternrace.aggregate import Aggregate
from patternrace.catalog import PATTERN_PAIRS, PATTERNS, PatternPair
from patternrace.config import SimulationConfig


@dataclass
class SimulationResults:
    """Results of a complete run.

    Attributes:
        trials: Number of trials executed.
        sequence_length: Symbols per sequence (the locator sentinel).
        position_sums: Pattern -> sum of end positions over all trials.
        win_counts: PatternPair -> trials in which the first member won.
        config: Configuration that produced the run, if known.
        metadata: Execution metadata from the trial driver.
    """

    trials: int
    sequence_length: int
    position_sums: Dict[str, int]
    win_counts: Dict[PatternPair, int]
    config: Optional[SimulationConfig] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_aggregate(
        cls,
        aggregate: Aggregate,
        config: SimulationConfig,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SimulationResults":
        return cls(
            trials=aggregate.trials,
            sequence_length=config.sequence_length,
            position_sums=aggregate.position_map(),
            win_counts=aggregate.win_map(),
            config=config,
            metadata=dict(metadata or {}),
        )

    def _require_trials(self) -> None:
        if self.trials < 1:
            raise ValueError("Cannot normalize results of zero trials")

    def expected_positions(self) -> Dict[str, float]:
        """Average end position of the first occurrence, per pattern."""
        self._require_trials()
        return {p: self.position_sums[p] / self.trials for p in PATTERNS}

    def win_percentages(self) -> Dict[PatternPair, float]:
        """Percentage of trials in which the first member of each pair won."""
        self._require_trials()
        return {
            pair: 100.0 * self.win_counts[pair] / self.trials for pair in PATTERN_PAIRS
        }

    def expectation_frame(self) -> pd.DataFrame:
        """Per-pattern position sums and averages, in catalog order."""
        expected = self.expected_positions()
        return pd.DataFrame(
            {
                "pattern": list(PATTERNS),
                "position_sum": [self.position_sums[p] for p in PATTERNS],
                "expected_position": [expected[p] for p in PATTERNS],
            }
        )

    def win_matrix(self) -> pd.DataFrame:
        """8x8 win percentages; rows are first members, columns second members.

        The diagonal is NaN.
        """
        matrix = pd.DataFrame(
            np.nan, index=list(PATTERNS), columns=list(PATTERNS), dtype=float
        )
        for pair, pct in self.win_percentages().items():
            matrix.loc[pair.first, pair.second] = pct
        matrix.index.name = "first"
        matrix.columns.name = "second"
        return matrix

    def pair_balance(self) -> pd.DataFrame:
        """Wins in both directions for every unordered pair.

        ``undecided`` counts trials in which neither direction recorded a win.
        Under the strict tie policy this is exactly the number of trials whose
        two positions were equal, so it can never be negative.
        """
        rows = []
        for i, a in enumerate(PATTERNS):
            for b in PATTERNS[i + 1 :]:
                forward = self.win_counts[PatternPair(a, b)]
                backward = self.win_counts[PatternPair(b, a)]
                rows.append(
                    {
                        "a": a,
                        "b": b,
                        "a_wins": forward,
                        "b_wins": backward,
                        "undecided": self.trials - forward - backward,
                    }
                )
        return pd.DataFrame(rows)

    def validate(self) -> None:
        """Check aggregate invariants.

        Raises:
            RuntimeError: If keys are missing or extra, a value is out of range,
                or the two directions of a pair exceed the trial count.
        """
        if set(self.position_sums) != set(PATTERNS):
            raise RuntimeError("Position sums do not cover exactly the catalog patterns")
        if set(self.win_counts) != set(PATTERN_PAIRS):
            raise RuntimeError("Win counts do not cover exactly the pattern pairs")

        for pattern, total in self.position_sums.items():
            low = self.trials * len(pattern)
            high = self.trials * self.sequence_length
            if not low <= total <= high:
                raise RuntimeError(
                    f"Position sum for {pattern} is {total}, outside [{low}, {high}]"
                )

        balance = self.pair_balance()
        broken = balance[balance["undecided"] < 0]
        if not broken.empty:
            first = broken.iloc[0]
            raise RuntimeError(
                f"Wins for {first['a']}/{first['b']} exceed the trial count "
                f"({first['a_wins']} + {first['b_wins']} > {self.trials})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe representation. Pair keys are rendered as ``FIRST>SECOND``."""
        data: Dict[str, Any] = {
            "trials": self.trials,
            "sequence_length": self.sequence_length,
            "position_sums": dict(self.position_sums),
            "win_counts": {str(pair): count for pair, count in self.win_counts.items()},
            "metadata": dict(self.metadata),
        }
        if self.trials > 0:
            data["expected_positions"] = self.expected_positions()
            data["win_percentages"] = {
                str(pair): pct for pair, pct in self.win_percentages().items()
            }
        if self.config is not None:
            data["config"] = self.config.to_dict()
        return data

    def save_json(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2, default=str))
