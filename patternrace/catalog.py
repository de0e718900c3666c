"""Pattern catalog: the 8 length-3 patterns and their 56 ordered pairs.

Catalog order is lexicographic over ``DOWN < UP`` and fixes the order of every
report and every dense index in the package. All tables are built once at
import time and never mutated, so workers share them without locking.
"""

from __future__ import annotations

from itertools import product
from typing import Dict, NamedTuple, Sequence, Tuple

UP = "U"
DOWN = "D"
ALPHABET = DOWN + UP
PATTERN_LENGTH = 3


class PatternPair(NamedTuple):
    """Ordered pair of distinct patterns raced against each other."""

    first: str
    second: str

    def __str__(self) -> str:
        return f"{self.first}>{self.second}"


def make_patterns(
    alphabet: str = ALPHABET, length: int = PATTERN_LENGTH
) -> Tuple[str, ...]:
    """Enumerate every pattern of ``length`` symbols over ``alphabet``."""
    return tuple("".join(symbols) for symbols in product(alphabet, repeat=length))


def make_pairs(patterns: Sequence[str]) -> Tuple[PatternPair, ...]:
    """Ordered pairs of distinct patterns.

    Outer loop over the first member, inner loop over the second, skipping
    equal indices. For 8 patterns this yields 8 * 8 - 8 = 56 pairs.
    """
    return tuple(
        PatternPair(first, second)
        for i, first in enumerate(patterns)
        for j, second in enumerate(patterns)
        if i != j
    )


PATTERNS: Tuple[str, ...] = make_patterns()
PATTERN_PAIRS: Tuple[PatternPair, ...] = make_pairs(PATTERNS)

# Dense indices into accumulator arrays
PATTERN_INDEX: Dict[str, int] = {p: i for i, p in enumerate(PATTERNS)}
PAIR_INDEX: Dict[PatternPair, int] = {pair: i for i, pair in enumerate(PATTERN_PAIRS)}

# For pair k, the pattern indices of its first and second member
PAIR_MEMBER_INDICES: Tuple[Tuple[int, int], ...] = tuple(
    (PATTERN_INDEX[pair.first], PATTERN_INDEX[pair.second]) for pair in PATTERN_PAIRS
)
