"""Pattern locator: end position of a pattern's first occurrence."""

from __future__ import annotations

from typing import Sequence, Tuple


def locate(pattern: str, sequence: str) -> int:
    """Return the end position of the first occurrence of ``pattern``.

    A match starting at zero-based index ``i`` ends at ``i + len(pattern)``,
    the number of symbols read once the pattern is complete. When the pattern
    does not occur the sentinel ``len(sequence)`` is returned; it is never an
    error. The sentinel equals the position of a match ending on the last
    symbol, so callers treat both as "seen no earlier than the window end".

    Args:
        pattern: Pattern to search for.
        sequence: Generated symbol sequence.

    Returns:
        End position in ``[len(pattern), len(sequence)]``, or ``len(sequence)``.
    """
    pos = sequence.find(pattern)
    return pos + len(pattern) if pos != -1 else len(sequence)


def locate_all(patterns: Sequence[str], sequence: str) -> Tuple[int, ...]:
    """Locate every pattern in ``sequence``, preserving pattern order."""
    return tuple(locate(pattern, sequence) for pattern in patterns)
