# src/sigdist_planner/outputs.py
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .config_models import SystemConfig
from .optimizer import CandidateEvaluation, Configuration, SelectionResult


BEST_HEADER = "*******Best Configuration:*******"
NOT_FOUND_MESSAGE = "No valid configuration found that meets the specifications."


def _format_cost(cost: float) -> str:
    # general format: 150.0 -> "150", 150.5 -> "150.5"
    return f"{cost:g}"


def format_selection(config: Optional[Configuration]) -> str:
    """One human-readable line for the selection (or the fixed not-found message)."""
    if config is None:
        return NOT_FOUND_MESSAGE
    return (
        f"Amplifier: {config.amplifier.name}, "
        f"Switch: {config.switch.name}, "
        f"Attenuator: {config.attenuator.name}, "
        f"Power Divider: {config.divider.name} "
        f"with total cost: ${_format_cost(config.total_cost)}"
    )


def report_selection(config: Optional[Configuration], stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    if config is not None:
        stream.write(BEST_HEADER + "\n")
    stream.write(format_selection(config) + "\n")
    stream.flush()


def _configuration_record(config: Configuration) -> dict:
    return {
        "index": config.index,
        "amplifier": config.amplifier.name,
        "switch": config.switch.name,
        "attenuator": config.attenuator.name,
        "power_divider": config.divider.name,
        "total_cost": config.total_cost,
        "metrics": config.metrics.as_dict(),
    }


def write_candidate_ledger(
    path: str | Path,
    evaluations: Iterable[CandidateEvaluation],
) -> None:
    """
    JSONL ledger: one record per evaluated candidate, in enumeration order,
    with derived metrics and the list of failed targets.
    """
    path = Path(path)
    with path.open("w") as f:
        for ev in evaluations:
            amp, sw, att, div = ev.component_names
            rec = {
                "index": ev.index,
                "amplifier": amp,
                "switch": sw,
                "attenuator": att,
                "power_divider": div,
                "feasible": ev.result.feasible,
                "total_cost": ev.result.total_cost,
                "failed": list(ev.result.failed),
                "metrics": ev.result.metrics.as_dict(),
            }
            f.write(json.dumps(rec) + "\n")


def write_selection_summary(path: str | Path, result: SelectionResult) -> None:
    """
    JSON summary of the selected configuration.

    {
      "found": true,
      "selection": {"amplifier": ..., "total_cost": ..., "metrics": {...}},
      "report": "<reporter line>",
      "n_candidates": ..., "n_feasible": ...
    }
    """
    path = Path(path)
    blob = {
        "found": result.best is not None,
        "selection": _configuration_record(result.best) if result.best is not None else None,
        "report": format_selection(result.best),
        "n_candidates": result.n_candidates,
        "n_feasible": result.n_feasible,
    }
    path.write_text(json.dumps(blob, indent=2))


def write_run_metadata(
    path: str | Path,
    cfg: SystemConfig,
    result: SelectionResult,
) -> None:
    """
    Small JSON header for the run: catalog sizes, limits, search options and
    modelling notes.
    """
    path = Path(path)
    lim = cfg.limits

    metadata = {
        "description": cfg.description,
        "catalog_sizes": cfg.catalog.sizes(),
        "n_combinations": cfg.catalog.size,
        "search": {
            "input_power_dbm": cfg.search.input_power_dbm,
            "parallel": cfg.search.parallel,
            "chunk_size": cfg.search.chunk_size,
        },
        "limits": {
            "switch_gain_min_1ghz": lim.switch_gain_min_1ghz,
            "switch_gain_min_20ghz": lim.switch_gain_min_20ghz,
            "amp_p1db_min_1ghz": lim.amp_p1db_min_1ghz,
            "amp_p1db_min_20ghz": lim.amp_p1db_min_20ghz,
            "switch_leakage_max_1ghz": lim.switch_leakage_max_1ghz,
            "switch_leakage_max_20ghz": lim.switch_leakage_max_20ghz,
        },
        "results": {
            "n_candidates": result.n_candidates,
            "n_feasible": result.n_feasible,
            "best_index": result.best.index if result.best is not None else None,
        },
        "modelling_notes": {
            "min_output_power_gated": False,
            "switch_p1db_gated": False,
            "attenuator_p1db_gated": False,
            "tie_break": "first in enumeration order (amp, switch, attenuator, divider)",
        },
    }

    path.write_text(json.dumps(metadata, indent=2))
