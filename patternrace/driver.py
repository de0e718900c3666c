"""Parallel trial driver for Monte Carlo pattern races.

Trials are split into chunks and each chunk becomes one worker task. A task
builds its own random source from the master seed and its chunk index,
evaluates its trials, and folds every result into a local
:class:`~patternrace.aggregate.Aggregate` shard as soon as it is produced.
The parent process merges the returned shards in one single-threaded fold.

No state is shared between tasks: the pattern catalog is an immutable module
constant and each shard is owned by the task that created it. For a fixed
seed and chunk size the merged totals are identical whatever the worker count
or completion order.
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from patternrace.aggregate import Aggregate
from patternrace.config import SimulationConfig
from patternrace.evaluator import evaluate_trial
from patternrace.generator import TrialGenerator
from patternrace.logging import (
    LOG_LEVEL_ENV,
    apply_level_from_env,
    current_level_name,
    get_logger,
)
from patternrace.seed_manager import SeedManager

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


class ChunkTask(NamedTuple):
    """Picklable description of one worker task."""

    chunk_index: int
    trials: int
    master_seed: Optional[int]
    sequence_length: int
    die_low: int
    die_high: int
    threshold: int
    share_sequence: bool


def _worker_init() -> None:
    """Initialize a worker process with the parent's log level."""
    apply_level_from_env()
    get_logger(f"{__name__}.worker").debug(f"Worker {os.getpid()} initialized")


def _run_chunk(task: ChunkTask) -> Aggregate:
    """Execute one chunk of trials and return its shard.

    The random source is created here, once per task, and never leaves it.

    Raises:
        RandomSourceError: If the random source cannot be constructed.
    """
    source = SeedManager(task.master_seed).create_random_source(
        "trials", task.chunk_index, low=task.die_low, high=task.die_high
    )
    generator = TrialGenerator(source, task.sequence_length, task.threshold)

    shard = Aggregate()
    for _ in range(task.trials):
        shard.add(evaluate_trial(generator, share_sequence=task.share_sequence))
    return shard


def default_chunk_size(trials: int) -> int:
    """Trials per task when none is configured.

    Depends on the trial count only, so chunk indices (and therefore derived
    seeds) are the same whatever the worker count.
    """
    return max(1, min(trials, DEFAULT_CHUNK_SIZE))


def plan_chunks(trials: int, chunk_size: int) -> List[int]:
    """Split ``trials`` into chunk sizes that sum to exactly ``trials``."""
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    full, rest = divmod(trials, chunk_size)
    return [chunk_size] * full + ([rest] if rest else [])


class TrialDriver:
    """Runs N independent trials across a process pool.

    Attributes:
        config: Simulation parameters.
        metadata: Execution details of the most recent run.
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self.metadata: Dict[str, Any] = {}

    def build_tasks(self, trials: int) -> List[ChunkTask]:
        cfg = self.config
        size = cfg.chunk_size or default_chunk_size(trials)
        return [
            ChunkTask(
                chunk_index=index,
                trials=count,
                master_seed=cfg.seed,
                sequence_length=cfg.sequence_length,
                die_low=cfg.die_low,
                die_high=cfg.die_high,
                threshold=cfg.threshold,
                share_sequence=cfg.share_sequence,
            )
            for index, count in enumerate(plan_chunks(trials, size))
        ]

    def run(self, trials: Optional[int] = None, workers: Optional[int] = None) -> Aggregate:
        """Execute exactly ``trials`` trials and return the merged aggregate.

        Args:
            trials: Trial count. Defaults to ``config.trials``.
            workers: Worker processes. Defaults to ``config.workers``.

        Returns:
            Aggregate whose ``trials`` equals the requested count.

        Raises:
            RandomSourceError: If any task cannot construct its random source.
            RuntimeError: If the merged trial count differs from the request.
        """
        n_trials = self.config.trials if trials is None else trials
        n_workers = self.config.workers if workers is None else workers
        tasks = self.build_tasks(n_trials)

        logger.info(f"Running {n_trials} Monte-Carlo trials in {len(tasks)} chunks")
        logger.debug(
            f"Trial parameters: length={self.config.sequence_length}, "
            f"die=[{self.config.die_low}, {self.config.die_high}], "
            f"threshold={self.config.threshold}, "
            f"share_sequence={self.config.share_sequence}, seed={self.config.seed}"
        )

        start_time = time.time()
        use_parallel = n_workers > 1 and len(tasks) > 1
        if use_parallel:
            shards = self._run_parallel(tasks, n_workers)
        else:
            shards = self._run_serial(tasks)

        total = Aggregate()
        for shard in shards:
            total.merge(shard)
        elapsed_time = time.time() - start_time

        if total.trials != n_trials:
            raise RuntimeError(
                f"Aggregated {total.trials} trials but {n_trials} were requested"
            )

        self.metadata = {
            "trials": n_trials,
            "workers": min(n_workers, len(tasks)) if use_parallel else 1,
            "chunks": len(tasks),
            "chunk_size": tasks[0].trials,
            "seed": self.config.seed,
            "share_sequence": self.config.share_sequence,
            "execution_time": elapsed_time,
        }
        logger.info(f"Completed {n_trials} trials in {elapsed_time:.2f} seconds")
        return total

    def run_serial_baseline(self, trials: Optional[int] = None) -> Aggregate:
        """Run the same workload in this process only, for timing comparison."""
        logger.info("Running single-process baseline")
        saved = self.metadata
        try:
            return self.run(trials=trials, workers=1)
        finally:
            self.metadata = saved

    def _run_parallel(self, tasks: List[ChunkTask], parallelism: int) -> List[Aggregate]:
        """Run tasks on a process pool and collect their shards."""
        workers = min(parallelism, len(tasks))
        logger.info(
            f"Running parallel simulation with {workers} workers for {len(tasks)} chunks"
        )

        # Workers read the parent level in _worker_init
        os.environ[LOG_LEVEL_ENV] = current_level_name()

        shards: List[Aggregate] = []
        with ProcessPoolExecutor(max_workers=workers, initializer=_worker_init) as pool:
            self._collect(pool.map(_run_chunk, tasks), tasks, shards, "Parallel")
        return shards

    def _run_serial(self, tasks: List[ChunkTask]) -> List[Aggregate]:
        logger.info("Running serial simulation")
        shards: List[Aggregate] = []
        self._collect(map(_run_chunk, tasks), tasks, shards, "Serial")
        return shards

    @staticmethod
    def _collect(
        results: Iterable[Aggregate],
        tasks: List[ChunkTask],
        shards: List[Aggregate],
        label: str,
    ) -> None:
        total_trials = sum(task.trials for task in tasks)
        step = max(1, len(tasks) // 10)
        done_trials = 0
        for completed, shard in enumerate(results, start=1):
            shards.append(shard)
            done_trials += shard.trials
            if len(tasks) >= 10 and completed % step == 0:
                logger.info(
                    f"{label} simulation progress: {done_trials}/{total_trials} trials "
                    f"({completed}/{len(tasks)} chunks)"
                )
