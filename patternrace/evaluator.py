"""Per-trial evaluation: expectation pass and race pass.

Tie policy of the race pass: a pair records True only when the first pattern
ends strictly before the second. When neither pattern occurs both positions
equal the sentinel and the pair records False, so "first wins" is undercounted
for pairs that are often both absent. Reported percentages depend on this
policy; keep it as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from patternrace.catalog import PAIR_MEMBER_INDICES, PATTERN_PAIRS, PATTERNS, PatternPair
from patternrace.generator import TrialGenerator
from patternrace.locator import locate_all


@dataclass(frozen=True)
class TrialResult:
    """Outcome of one trial, in catalog order.

    Attributes:
        positions: End position (or sentinel) per pattern, ordered as ``PATTERNS``.
        wins: Race outcome per pair, ordered as ``PATTERN_PAIRS``.
    """

    positions: Tuple[int, ...]
    wins: Tuple[bool, ...]

    def __post_init__(self) -> None:
        if len(self.positions) != len(PATTERNS):
            raise ValueError(
                f"Expected {len(PATTERNS)} positions, got {len(self.positions)}"
            )
        if len(self.wins) != len(PATTERN_PAIRS):
            raise ValueError(
                f"Expected {len(PATTERN_PAIRS)} race outcomes, got {len(self.wins)}"
            )

    def position_map(self) -> Dict[str, int]:
        return dict(zip(PATTERNS, self.positions))

    def win_map(self) -> Dict[PatternPair, bool]:
        return dict(zip(PATTERN_PAIRS, self.wins))


def expectation_pass(sequence: str) -> Tuple[int, ...]:
    """First-occurrence end position of every catalog pattern."""
    return locate_all(PATTERNS, sequence)


def race_pass(sequence: str) -> Tuple[bool, ...]:
    """For every pair, whether the first member ends strictly before the second."""
    return race_pass_from_positions(locate_all(PATTERNS, sequence))


def race_pass_from_positions(positions: Sequence[int]) -> Tuple[bool, ...]:
    return tuple(positions[i] < positions[j] for i, j in PAIR_MEMBER_INDICES)


def evaluate_sequences(expectation_sequence: str, race_sequence: str) -> TrialResult:
    """Evaluate one trial from already generated sequences.

    Deterministic: the same sequences always give the same result.
    """
    positions = expectation_pass(expectation_sequence)
    if race_sequence == expectation_sequence:
        wins = race_pass_from_positions(positions)
    else:
        wins = race_pass(race_sequence)
    return TrialResult(positions=positions, wins=wins)


def evaluate_trial(
    generator: TrialGenerator, share_sequence: bool = False
) -> TrialResult:
    """Generate and evaluate one trial.

    Args:
        generator: Sequence generator owned by the calling task.
        share_sequence: If True, both passes read one sequence. Otherwise each
            pass gets its own freshly generated sequence.
    """
    expectation_sequence = generator.generate()
    race_sequence = expectation_sequence if share_sequence else generator.generate()
    return evaluate_sequences(expectation_sequence, race_sequence)
