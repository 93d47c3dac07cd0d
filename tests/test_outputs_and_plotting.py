# tests/test_outputs_and_plotting.py
from __future__ import annotations

import io
import json
from dataclasses import replace

from sigdist_planner.optimizer import ConfigurationSelector
from sigdist_planner.outputs import (
    NOT_FOUND_MESSAGE,
    format_selection,
    report_selection,
    write_candidate_ledger,
    write_selection_summary,
    write_run_metadata,
)
from sigdist_planner.plotting import plot_candidate_costs


REFERENCE_LINE = (
    "Amplifier: Amp-A, Switch: Switch-1, Attenuator: Attenuator-2, "
    "Power Divider: Divider-1 with total cost: $150"
)


def test_format_selection_reference(ref_config):
    result = ConfigurationSelector(ref_config).run()
    assert format_selection(result.best) == REFERENCE_LINE


def test_format_selection_not_found():
    assert format_selection(None) == (
        "No valid configuration found that meets the specifications."
    )


def test_format_selection_keeps_fractional_cost(ref_config):
    best = ConfigurationSelector(ref_config).run().best
    line = format_selection(replace(best, total_cost=150.25))
    assert line.endswith("with total cost: $150.25")


def test_report_selection_writes_header_and_line(ref_config):
    best = ConfigurationSelector(ref_config).run().best
    buf = io.StringIO()
    report_selection(best, stream=buf)
    assert buf.getvalue() == "*******Best Configuration:*******\n" + REFERENCE_LINE + "\n"


def test_report_selection_not_found_has_no_header():
    buf = io.StringIO()
    report_selection(None, stream=buf)
    assert buf.getvalue() == NOT_FOUND_MESSAGE + "\n"


def test_outputs_and_plotting_end_to_end(ref_config, tmp_path):
    """
    Ledger, summary, metadata and cost plot produced from one reference run.
    """
    result = ConfigurationSelector(ref_config).run()

    # --- Candidate ledger JSONL ------------------------------------------
    ledger_path = tmp_path / "candidate_ledger.jsonl"
    write_candidate_ledger(ledger_path, result.evaluations)

    lines = ledger_path.read_text().strip().splitlines()
    assert len(lines) == 16
    recs = [json.loads(line) for line in lines]
    assert [r["index"] for r in recs] == list(range(16))

    first = recs[0]
    assert first["amplifier"] == "Amp-A"
    assert first["attenuator"] == "Attenuator-1"
    assert first["feasible"] is False
    assert first["failed"] == ["output_20ghz_within_p1db"]
    assert first["total_cost"] == 150.0

    chosen = recs[2]
    assert chosen["feasible"] is True
    assert chosen["failed"] == []
    assert chosen["metrics"]["min_output_power_1ghz"] == 13.0

    # --- Selection summary JSON ------------------------------------------
    summary_path = tmp_path / "selection.json"
    write_selection_summary(summary_path, result)
    blob = json.loads(summary_path.read_text())
    assert blob["found"] is True
    assert blob["selection"]["power_divider"] == "Divider-1"
    assert blob["selection"]["total_cost"] == 150.0
    assert blob["report"] == REFERENCE_LINE
    assert blob["n_candidates"] == 16
    assert blob["n_feasible"] == 4

    # --- Run metadata ----------------------------------------------------
    meta_path = tmp_path / "run_metadata.json"
    write_run_metadata(meta_path, ref_config, result)
    meta = json.loads(meta_path.read_text())
    assert meta["n_combinations"] == 16
    assert meta["catalog_sizes"]["switches"] == 2
    assert meta["search"]["input_power_dbm"] == 0.0
    assert meta["limits"]["switch_leakage_max_1ghz"] == -55.0
    assert meta["results"]["best_index"] == 2
    assert meta["modelling_notes"]["min_output_power_gated"] is False

    # --- Plotting: just check that a PNG gets written --------------------
    out_png = tmp_path / "candidate_costs.png"
    plot_candidate_costs(result.evaluations, out_path=out_png, best=result.best)
    assert out_png.exists()


def test_summary_when_nothing_found(ref_config, tmp_path):
    ref_config.search.input_power_dbm = 10.0
    result = ConfigurationSelector(ref_config).run()

    path = tmp_path / "selection.json"
    write_selection_summary(path, result)
    blob = json.loads(path.read_text())
    assert blob["found"] is False
    assert blob["selection"] is None
    assert blob["report"] == NOT_FOUND_MESSAGE

    out_png = tmp_path / "costs.png"
    plot_candidate_costs(result.evaluations, out_path=out_png, best=None)
    assert out_png.exists()
