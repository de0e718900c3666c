"""End-to-end simulation pipeline: driver run, aggregation, normalization."""

from __future__ import annotations

from typing import Optional

from patternrace.config import SimulationConfig
from patternrace.driver import TrialDriver
from patternrace.logging import get_logger
from patternrace.profiling import CheckpointRecorder
from patternrace.results import SimulationResults

logger = get_logger(__name__)

CHECKPOINT_START = "simulation start"
CHECKPOINT_SERIAL = "serial baseline"
CHECKPOINT_PARALLEL = "parallel run"
CHECKPOINT_POST = "post-processing"


def run_simulation(
    config: SimulationConfig,
    recorder: Optional[CheckpointRecorder] = None,
) -> SimulationResults:
    """Run the configured number of trials and return validated results.

    Records ``simulation start``, ``serial baseline`` (only when
    ``config.serial_baseline`` is set) and ``parallel run`` checkpoints on
    ``recorder`` when one is given. The caller records post-processing.

    Raises:
        RandomSourceError: If a worker cannot construct its random source.
        RuntimeError: If aggregated totals violate their invariants.
    """
    if recorder is not None and not recorder.checkpoints:
        recorder.checkpoint(CHECKPOINT_START)

    driver = TrialDriver(config)

    if config.serial_baseline:
        driver.run_serial_baseline()
        if recorder is not None:
            recorder.checkpoint(CHECKPOINT_SERIAL)

    aggregate = driver.run()
    if recorder is not None:
        recorder.checkpoint(CHECKPOINT_PARALLEL)

    results = SimulationResults.from_aggregate(aggregate, config, driver.metadata)
    results.validate()
    logger.debug(f"Validated results for {results.trials} trials")
    return results
