"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from patternrace.config import SimulationConfig


@pytest.fixture
def small_config() -> SimulationConfig:
    """Fast, seeded, single-process configuration."""
    return SimulationConfig(
        trials=200,
        sequence_length=30,
        workers=1,
        seed=1234,
        chunk_size=50,
    )


def padded(prefix: str, length: int = 100, fill: str = "D") -> str:
    """Pad a symbol prefix to ``length`` with ``fill``."""
    return prefix + fill * (length - len(prefix))


@pytest.fixture
def pad():
    return padded
