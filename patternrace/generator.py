"""Trial generator: random U/D sequences from an injected random source."""

from __future__ import annotations

import numpy as np

from patternrace.catalog import DOWN, UP
from patternrace.random_source import RandomSource

_UP_CODE = ord(UP)
_DOWN_CODE = ord(DOWN)


class TrialGenerator:
    """Builds one symbol sequence per call.

    Each symbol comes from one draw: values strictly above ``threshold`` map to
    ``UP``, everything else to ``DOWN``. With a 1..6 die and threshold 3 both
    symbols are equally likely.

    Attributes:
        source: Random source owned by this generator's task.
        length: Symbols per sequence.
        threshold: Split point between DOWN and UP draws.
    """

    def __init__(self, source: RandomSource, length: int, threshold: int) -> None:
        self.source = source
        self.length = length
        self.threshold = threshold

    def generate(self) -> str:
        draws = np.asarray(self.source.draw_many(self.length))
        codes = np.where(draws > self.threshold, _UP_CODE, _DOWN_CODE)
        return codes.astype(np.uint8).tobytes().decode("ascii")
