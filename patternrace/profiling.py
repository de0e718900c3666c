"""Checkpoint timing for simulation runs.

The recorder marks named points in a run (start, serial baseline, parallel
run, post-processing) and reports the wall time between consecutive
checkpoints plus each checkpoint's share of the total.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional

from patternrace.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Checkpoint:
    """A named point in a run.

    Attributes:
        name: Label of the checkpoint.
        timestamp: ``time.perf_counter()`` value when it was recorded.
        elapsed: Seconds since the previous checkpoint (0.0 for the first one).
    """

    name: str
    timestamp: float
    elapsed: float = 0.0


@dataclass
class CheckpointRecorder:
    """Collects checkpoints in order.

    Attributes:
        checkpoints: Recorded checkpoints, oldest first.
    """

    checkpoints: List[Checkpoint] = field(default_factory=list)

    def checkpoint(self, name: str) -> Checkpoint:
        now = time.perf_counter()
        elapsed = now - self.checkpoints[-1].timestamp if self.checkpoints else 0.0
        point = Checkpoint(name=name, timestamp=now, elapsed=elapsed)
        self.checkpoints.append(point)
        logger.debug(f"Checkpoint '{name}' reached after {elapsed:.3f}s")
        return point

    @property
    def total_time(self) -> float:
        if len(self.checkpoints) < 2:
            return 0.0
        return self.checkpoints[-1].timestamp - self.checkpoints[0].timestamp

    def get(self, name: str) -> Optional[Checkpoint]:
        for point in self.checkpoints:
            if point.name == name:
                return point
        return None

    def format_report(self) -> str:
        """Render elapsed time per checkpoint as a text table."""
        if len(self.checkpoints) < 2:
            return "No checkpoint timings recorded."

        total = self.total_time
        name_width = max(len("Checkpoint"), *(len(p.name) for p in self.checkpoints))
        lines = [
            f"{'Checkpoint':<{name_width}}  {'Elapsed':>10}  {'% Total':>7}",
            f"{'-' * name_width}  {'-' * 10}  {'-' * 7}",
        ]
        for point in self.checkpoints[1:]:
            share = (point.elapsed / total) * 100 if total > 0 else 0.0
            lines.append(
                f"{point.name:<{name_width}}  {point.elapsed * 1000:>8.1f}ms  {share:>6.1f}%"
            )
        lines.append(f"{'Total':<{name_width}}  {total * 1000:>8.1f}ms")
        return "\n".join(lines)
