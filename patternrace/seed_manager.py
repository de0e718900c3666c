"""Deterministic seed derivation for per-task random sources."""

from __future__ import annotations

import hashlib
from typing import Any, Optional

from patternrace.random_source import DieSource


class SeedManager:
    """Derives independent seeds for worker tasks from one master seed.

    Each worker task gets its own source seeded from the master seed and the
    task identifiers, so results do not depend on which process runs a task or
    in which order tasks complete.

    Usage:
        seed_mgr = SeedManager(42)
        source = seed_mgr.create_random_source("trials", 3, low=1, high=6)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed. If None, derived seeds are None and sources
                draw fresh OS entropy.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a seed from the master seed and component identifiers.

        Args:
            *components: Identifiers (strings, integers, etc.) naming the consumer.

        Returns:
            Non-negative 63-bit integer, or None if no master seed is set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        digest = hashlib.sha256(seed_input.encode()).digest()
        return int.from_bytes(digest[:8], byteorder="big") & 0x7FFFFFFFFFFFFFFF

    def create_random_source(
        self, *components: Any, low: int = 1, high: int = 6
    ) -> DieSource:
        """Create a new die source seeded for the given components.

        Raises:
            RandomSourceError: If the source cannot be constructed.
        """
        return DieSource(low=low, high=high, seed=self.derive_seed(*components))
