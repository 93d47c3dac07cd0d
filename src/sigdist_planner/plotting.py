# src/sigdist_planner/plotting.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

from .optimizer import CandidateEvaluation, Configuration


def plot_candidate_costs(
    evaluations: List[CandidateEvaluation],
    out_path: Optional[str | Path] = None,
    best: Optional[Configuration] = None,
) -> None:
    """
    Bar chart of total cost per candidate in enumeration order.

    Feasible candidates are drawn solid, infeasible ones hatched; the
    selected configuration (if any) is outlined.
    """
    idx = np.array([ev.index for ev in evaluations], dtype=int)
    costs = np.array([ev.result.total_cost for ev in evaluations], dtype=float)
    feasible = np.array([ev.result.feasible for ev in evaluations], dtype=bool)

    plt.figure()
    if np.any(feasible):
        plt.bar(idx[feasible], costs[feasible], color="tab:green", label="feasible")
    if np.any(~feasible):
        plt.bar(
            idx[~feasible],
            costs[~feasible],
            color="lightgray",
            hatch="//",
            label="infeasible",
        )
    if best is not None:
        plt.bar(
            [best.index],
            [best.total_cost],
            fill=False,
            edgecolor="black",
            linewidth=2.0,
            label="selected",
        )

    plt.xlabel("Candidate index")
    plt.ylabel("Total cost ($)")
    plt.title("Signal Distribution Candidates")
    if len(evaluations):
        plt.legend()
    plt.grid(True, axis="y")
    if out_path:
        out_path = Path(out_path)
        plt.savefig(out_path, dpi=150, bbox_inches="tight")
        plt.close()
    else:
        plt.show()
