"""Command-line interface for patternrace."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from patternrace.config import DEFAULT_CONFIG, SimulationConfig
from patternrace.logging import (
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)
from patternrace.profiling import CheckpointRecorder
from patternrace.report import format_report
from patternrace.simulation import CHECKPOINT_POST, CHECKPOINT_START, run_simulation

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patternrace",
        description=(
            "Estimate by Monte Carlo simulation where each U/D pattern of length 3 "
            "first appears and which pattern of each pair appears first."
        ),
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML file with simulation settings; command-line options override it",
    )
    parser.add_argument(
        "--trials",
        "-n",
        type=int,
        default=None,
        help=f"Number of trials (default: {DEFAULT_CONFIG.trials})",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        dest="sequence_length",
        help=f"Symbols per generated sequence (default: {DEFAULT_CONFIG.sequence_length})",
    )
    parser.add_argument(
        "--workers",
        "-j",
        type=int,
        default=None,
        help="Worker processes (default: number of CPUs)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Master seed for reproducible runs"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Trials per worker task (default: 10000, capped at the trial count)",
    )
    parser.add_argument(
        "--share-sequence",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use one generated sequence for both passes of a trial",
    )
    parser.add_argument(
        "--serial-baseline",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Time a single-process run before the parallel run",
    )
    parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export results to this JSON file",
    )
    parser.add_argument(
        "--no-timings",
        action="store_true",
        help="Do not print checkpoint timings",
    )
    return parser


def _load_config(args: argparse.Namespace) -> SimulationConfig:
    base = SimulationConfig.from_file(args.config) if args.config else DEFAULT_CONFIG
    return base.replace(
        trials=args.trials,
        sequence_length=args.sequence_length,
        workers=args.workers,
        seed=args.seed,
        chunk_size=args.chunk_size,
        share_sequence=args.share_sequence,
        serial_baseline=args.serial_baseline,
    )


def _run(args: argparse.Namespace) -> None:
    recorder = CheckpointRecorder()
    recorder.checkpoint(CHECKPOINT_START)

    try:
        config = _load_config(args)
        logger.info(
            f"Starting simulation: {config.trials} trials, "
            f"{config.sequence_length} symbols, {config.workers} workers"
        )
        results = run_simulation(config, recorder)

        print(format_report(results))

        if args.results is not None:
            logger.info(f"Writing results to: {args.results}")
            results.save_json(args.results)

        recorder.checkpoint(CHECKPOINT_POST)

        if not args.no_timings:
            print()
            print(recorder.format_report())

    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        print(f"ERROR: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Simulation failed: {type(e).__name__}: {e}")
        print(f"ERROR: Simulation failed: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``patternrace`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        disable_debug_logging()

    _run(args)


if __name__ == "__main__":
    main()
