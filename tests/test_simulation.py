"""Tests for the end-to-end simulation pipeline."""

from unittest.mock import patch

import pytest

from patternrace.catalog import PATTERNS
from patternrace.profiling import CheckpointRecorder
from patternrace.simulation import (
    CHECKPOINT_PARALLEL,
    CHECKPOINT_SERIAL,
    CHECKPOINT_START,
    run_simulation,
)


def test_returns_normalized_results(small_config):
    results = run_simulation(small_config)

    assert results.trials == small_config.trials
    assert results.config == small_config
    expected = results.expected_positions()
    assert list(expected) == list(PATTERNS)
    assert all(3.0 <= v <= small_config.sequence_length for v in expected.values())
    assert results.metadata["chunks"] == 4


def test_checkpoint_order_without_baseline(small_config):
    recorder = CheckpointRecorder()
    run_simulation(small_config, recorder)
    assert [p.name for p in recorder.checkpoints] == [
        CHECKPOINT_START,
        CHECKPOINT_PARALLEL,
    ]


def test_checkpoint_order_with_serial_baseline(small_config):
    recorder = CheckpointRecorder()
    run_simulation(small_config.replace(serial_baseline=True), recorder)
    assert [p.name for p in recorder.checkpoints] == [
        "simulation start",
        "serial baseline",
        "parallel run",
    ]
    assert CHECKPOINT_SERIAL == "serial baseline"


def test_existing_start_checkpoint_is_kept(small_config):
    recorder = CheckpointRecorder()
    recorder.checkpoint("cli start")
    run_simulation(small_config, recorder)
    assert [p.name for p in recorder.checkpoints] == ["cli start", CHECKPOINT_PARALLEL]


def test_shared_sequence_mode_runs(small_config):
    results = run_simulation(small_config.replace(share_sequence=True))
    assert results.metadata["share_sequence"] is True
    results.validate()


def test_results_are_validated(small_config):
    with patch(
        "patternrace.simulation.SimulationResults.validate",
        side_effect=RuntimeError("broken totals"),
    ):
        with pytest.raises(RuntimeError, match="broken totals"):
            run_simulation(small_config)
