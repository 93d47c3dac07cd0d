# src/sigdist_planner/evaluator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .config_models import (
    Amplifier,
    Attenuator,
    DEFAULT_LIMITS,
    PowerDivider,
    SelectionLimits,
    Switch,
    dB,
    dBm,
)


PREDICATE_NAMES: Tuple[str, ...] = (
    "output_1ghz_within_p1db",
    "output_20ghz_within_p1db",
    "switch_gain_1ghz",
    "switch_gain_20ghz",
    "amp_p1db_1ghz",
    "amp_p1db_20ghz",
    "switch_leakage_1ghz",
    "switch_leakage_20ghz",
    "attenuator_in_range",
)


@dataclass(frozen=True)
class ChainMetrics:
    """
    Derived performance of one amp -> attenuator -> divider path.

    min_output_power_* is reported only; it is not part of the feasibility
    gate.
    """
    effective_gain_max_1ghz: dB
    effective_gain_max_20ghz: dB
    effective_gain_min_1ghz: dB
    effective_gain_min_20ghz: dB
    max_output_power_1ghz: dBm
    max_output_power_20ghz: dBm
    min_output_power_1ghz: dBm
    min_output_power_20ghz: dBm

    def as_dict(self) -> dict:
        return {
            "effective_gain_max_1ghz": self.effective_gain_max_1ghz,
            "effective_gain_max_20ghz": self.effective_gain_max_20ghz,
            "effective_gain_min_1ghz": self.effective_gain_min_1ghz,
            "effective_gain_min_20ghz": self.effective_gain_min_20ghz,
            "max_output_power_1ghz": self.max_output_power_1ghz,
            "max_output_power_20ghz": self.max_output_power_20ghz,
            "min_output_power_1ghz": self.min_output_power_1ghz,
            "min_output_power_20ghz": self.min_output_power_20ghz,
        }


@dataclass(frozen=True)
class FeasibilityResult:
    feasible: bool
    total_cost: float
    metrics: ChainMetrics
    failed: Tuple[str, ...] = ()

    @property
    def reason(self) -> Optional[str]:
        """Comma-separated failed predicates, or None when feasible."""
        if not self.failed:
            return None
        return ", ".join(self.failed)


def chain_metrics(
    amp: Amplifier,
    att: Attenuator,
    div: PowerDivider,
    input_power_dbm: dBm,
) -> ChainMetrics:
    g_max_1 = amp.gain_max_1ghz + att.gain + div.gain_1ghz
    g_max_20 = amp.gain_max_20ghz + att.gain + div.gain_20ghz
    g_min_1 = amp.gain_min_1ghz + att.gain + div.gain_1ghz
    g_min_20 = amp.gain_min_20ghz + att.gain + div.gain_20ghz
    return ChainMetrics(
        effective_gain_max_1ghz=g_max_1,
        effective_gain_max_20ghz=g_max_20,
        effective_gain_min_1ghz=g_min_1,
        effective_gain_min_20ghz=g_min_20,
        max_output_power_1ghz=input_power_dbm + g_max_1,
        max_output_power_20ghz=input_power_dbm + g_max_20,
        min_output_power_1ghz=input_power_dbm + g_min_1,
        min_output_power_20ghz=input_power_dbm + g_min_20,
    )


def evaluate(
    amp: Amplifier,
    sw: Switch,
    att: Attenuator,
    div: PowerDivider,
    input_power_dbm: dBm = 0.0,
    limits: SelectionLimits = DEFAULT_LIMITS,
) -> FeasibilityResult:
    """
    Check one (amp, switch, attenuator, divider) candidate against the
    ON-state and OFF-state targets.

    ON state:
      * max output power at 1/20 GHz must not exceed the amplifier P1dB,
      * switch insertion gain >= limit at both frequencies,
      * amplifier P1dB >= limit at both frequencies.
    OFF state:
      * switch leakage strictly below limit at both frequencies.
    Attenuator:
      * requested attenuation (-gain) within max_attenuation.

    Every predicate is evaluated so that `failed` lists all violations.
    Comparisons involving NaN are False, so NaN inputs fail the affected
    predicates instead of raising.
    """
    m = chain_metrics(amp, att, div, input_power_dbm)

    checks = (
        m.max_output_power_1ghz <= amp.p1db_1ghz,
        m.max_output_power_20ghz <= amp.p1db_20ghz,
        sw.gain_1ghz_typ >= limits.switch_gain_min_1ghz,
        sw.gain_20ghz_typ >= limits.switch_gain_min_20ghz,
        amp.p1db_1ghz >= limits.amp_p1db_min_1ghz,
        amp.p1db_20ghz >= limits.amp_p1db_min_20ghz,
        sw.leakage_1ghz < limits.switch_leakage_max_1ghz,
        sw.leakage_20ghz < limits.switch_leakage_max_20ghz,
        -att.gain <= att.max_attenuation,
    )
    failed = tuple(name for name, ok in zip(PREDICATE_NAMES, checks) if not ok)

    # cost is summed as given, independent of the gate
    total_cost = amp.cost + sw.cost + att.cost + div.cost

    return FeasibilityResult(
        feasible=not failed,
        total_cost=total_cost,
        metrics=m,
        failed=failed,
    )
