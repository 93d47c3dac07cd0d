# src/sigdist_planner/cli.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .catalog import reference_system_config
from .config_models import load_config
from .optimizer import ConfigurationSelector
from .outputs import (
    report_selection,
    write_candidate_ledger,
    write_selection_summary,
    write_run_metadata,
)
from .plotting import plot_candidate_costs
from .progress import ProgressReporter


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Signal Distribution Block Component Selector"
    )
    parser.add_argument(
        "config",
        type=str,
        nargs="?",
        default=None,
        help="Path to YAML/JSON catalog config (default: built-in reference catalog)",
    )
    parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Write candidate ledger, selection and metadata artefacts here",
    )
    parser.add_argument(
        "--input-power-dbm",
        type=float,
        default=None,
        help="Override the block input power (dBm)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Evaluate candidates in worker processes",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Disable candidate cost plot generation",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable textual progress indicators",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log INFO messages to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config) if args.config else reference_system_config()
    if args.input_power_dbm is not None:
        cfg.search.input_power_dbm = args.input_power_dbm
    if args.parallel:
        cfg.search.parallel = True

    progress = None if args.no_progress else ProgressReporter()
    selector = ConfigurationSelector(cfg, progress=progress)
    result = selector.run()

    # "not found" is a valid outcome: always exit 0
    report_selection(result.best)

    if args.out_dir:
        out_dir = Path(args.out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        write_candidate_ledger(out_dir / "candidate_ledger.jsonl", result.evaluations)
        write_selection_summary(out_dir / "selection.json", result)
        write_run_metadata(out_dir / "run_metadata.json", cfg, result)

        if not args.no_plots:
            plot_candidate_costs(
                result.evaluations,
                out_path=out_dir / "candidate_costs.png",
                best=result.best,
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
