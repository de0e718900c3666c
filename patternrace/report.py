"""Text reports for simulation results."""

from __future__ import annotations

from typing import List

from patternrace.catalog import PATTERNS, PatternPair
from patternrace.results import SimulationResults

CELL_WIDTH = 6


def format_expectations(results: SimulationResults) -> str:
    """One line per pattern with its average first-occurrence position."""
    expected = results.expected_positions()
    return "\n".join(
        f"{pattern} average until occurrence: {expected[pattern]:.1f} occurrences"
        for pattern in PATTERNS
    )


def format_win_matrix(results: SimulationResults) -> str:
    """Pairwise win percentages; row pattern raced against column pattern.

    Diagonal cells are blank.
    """
    pct = results.win_percentages()
    lines: List[str] = [" " * 4 + "".join(f"{p:>{CELL_WIDTH}}" for p in PATTERNS)]
    for first in PATTERNS:
        cells = []
        for second in PATTERNS:
            if first == second:
                cells.append(" " * CELL_WIDTH)
            else:
                cells.append(f"{pct[PatternPair(first, second)]:>{CELL_WIDTH}.1f}")
        lines.append(f"{first} " + "".join(cells).rstrip())
    return "\n".join(lines)


def format_report(results: SimulationResults) -> str:
    return format_expectations(results) + "\n\n" + format_win_matrix(results)
