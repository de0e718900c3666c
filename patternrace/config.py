"""Configuration for patternrace simulations."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from patternrace.catalog import PATTERN_LENGTH


_INT_FIELDS = (
    "trials",
    "sequence_length",
    "die_low",
    "die_high",
    "workers",
    "chunk_size",
    "seed",
)
_OPTIONAL_FIELDS = ("chunk_size", "seed")
_BOOL_FIELDS = ("share_sequence", "serial_baseline")


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters for one Monte Carlo run.

    Attributes:
        trials: Number of independent trials to execute.
        sequence_length: Symbols per generated sequence. Also the "not found"
            sentinel returned by the pattern locator.
        die_low: Smallest value the random source can draw (inclusive).
        die_high: Largest value the random source can draw (inclusive).
        workers: Worker processes used by the trial driver.
        seed: Master seed for reproducible runs. None draws fresh OS entropy.
        chunk_size: Trials per worker task. None uses up to 10,000 trials per task.
        share_sequence: Reuse one generated sequence for the expectation and
            race passes of a trial instead of generating one per pass.
        serial_baseline: Run a single-process pass before the parallel run
            for timing comparison. Its result is discarded.
    """

    trials: int = 1_000_000
    sequence_length: int = 100
    die_low: int = 1
    die_high: int = 6
    workers: int = field(default_factory=_default_workers)
    seed: Optional[int] = None
    chunk_size: Optional[int] = None
    share_sequence: bool = False
    serial_baseline: bool = False

    def __post_init__(self) -> None:
        self.validate()

    @property
    def threshold(self) -> int:
        """Midpoint of the die range. Draws above it become "U"."""
        return (self.die_low + self.die_high) // 2

    def validate(self) -> None:
        """Check parameter types and ranges.

        Raises:
            ValueError: If any parameter has the wrong type or is out of range.
        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if value is None and name in _OPTIONAL_FIELDS:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"{name} must be an integer, got {type(value).__name__} {value!r}"
                )
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(
                    f"{name} must be a boolean, got {type(value).__name__} {value!r}"
                )

        if self.trials < 1:
            raise ValueError(f"trials must be >= 1, got {self.trials}")
        if self.sequence_length < PATTERN_LENGTH:
            raise ValueError(
                f"sequence_length must be >= {PATTERN_LENGTH}, "
                f"got {self.sequence_length}"
            )
        if self.die_high <= self.die_low:
            raise ValueError(
                f"die range is empty or degenerate: [{self.die_low}, {self.die_high}]"
            )
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

    def replace(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with non-None overrides applied."""
        values = self.to_dict()
        for key, value in overrides.items():
            if key not in values:
                raise ValueError(f"Unknown configuration key: '{key}'")
            if value is not None:
                values[key] = value
        return SimulationConfig(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Build a config from a mapping, rejecting unknown keys.

        Args:
            data: Mapping of field names to values. Missing fields use defaults.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "SimulationConfig":
        """Build a config from YAML text.

        The document may hold the fields at top level or under a
        ``simulation`` key.
        """
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration YAML must be a mapping")
        if "simulation" in data:
            data = data["simulation"] or {}
            if not isinstance(data, dict):
                raise ValueError("'simulation' section must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path) -> "SimulationConfig":
        return cls.from_yaml(Path(path).read_text())


# Reference configuration: one million trials of 100 symbols
DEFAULT_CONFIG = SimulationConfig()
