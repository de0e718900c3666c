"""patternrace: Monte Carlo races between binary patterns.

Estimates, over random U/D sequences, where each length-3 pattern first
appears and how often each pattern of an ordered pair appears before the
other. Trials run in parallel worker processes and are merged into exact
integer totals.

Primary API:
    run_simulation() - Run a full simulation and return normalized results
    SimulationConfig - Run parameters
    TrialDriver - Parallel trial execution returning an Aggregate
    locate() - End position of a pattern's first occurrence

Example:
    from patternrace import SimulationConfig, run_simulation

    results = run_simulation(SimulationConfig(trials=10_000, seed=7))
    results.expected_positions()["UUU"]
    results.win_matrix()
"""

from __future__ import annotations

from patternrace import cli, logging
from patternrace.aggregate import Aggregate, aggregate_results, merge_aggregates
from patternrace.catalog import PATTERN_PAIRS, PATTERNS, PatternPair
from patternrace.config import DEFAULT_CONFIG, SimulationConfig
from patternrace.driver import TrialDriver
from patternrace.evaluator import TrialResult, evaluate_sequences, evaluate_trial
from patternrace.generator import TrialGenerator
from patternrace.locator import locate
from patternrace.random_source import (
    DieSource,
    RandomSource,
    RandomSourceError,
    ReplaySource,
)
from patternrace.results import SimulationResults
from patternrace.seed_manager import SeedManager
from patternrace.simulation import run_simulation

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Catalog
    "PATTERNS",
    "PATTERN_PAIRS",
    "PatternPair",
    # Configuration
    "SimulationConfig",
    "DEFAULT_CONFIG",
    # Randomness
    "RandomSource",
    "DieSource",
    "ReplaySource",
    "RandomSourceError",
    "SeedManager",
    # Trials
    "TrialGenerator",
    "TrialResult",
    "locate",
    "evaluate_sequences",
    "evaluate_trial",
    # Execution and aggregation
    "TrialDriver",
    "Aggregate",
    "aggregate_results",
    "merge_aggregates",
    "run_simulation",
    "SimulationResults",
    # Utilities
    "cli",
    "logging",
]
