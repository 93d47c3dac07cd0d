# tests/conftest.py
from __future__ import annotations

from dataclasses import replace

import pytest

from sigdist_planner.catalog import reference_catalog, reference_system_config
from sigdist_planner.config_models import (
    Amplifier,
    Attenuator,
    ComponentCatalog,
    PowerDivider,
    Switch,
    SystemConfig,
)


GOOD_AMP = Amplifier(
    name="AmpX",
    gain_min_1ghz=10.0,
    gain_max_1ghz=12.0,
    gain_min_20ghz=9.0,
    gain_max_20ghz=11.0,
    p1db_1ghz=15.0,
    p1db_20ghz=13.0,
    cost=100.0,
)
GOOD_SWITCH = Switch(
    name="SwX",
    gain_1ghz_typ=-0.5,
    gain_20ghz_typ=-1.0,
    leakage_1ghz=-60.0,
    leakage_20ghz=-30.0,
    p1db_input=20.0,
    cost=50.0,
)
GOOD_ATT = Attenuator(name="AttX", gain=-3.0, max_attenuation=10.0, p1db_input=20.0)
GOOD_DIV = PowerDivider(name="DivX", gain_1ghz=-3.5, gain_20ghz=-4.0)


@pytest.fixture
def good_parts():
    """
    One component of each kind that together pass every target at 0 dBm:

      max output 1 GHz  = 12 - 3 - 3.5 = 5.5 dBm  (P1dB 15)
      max output 20 GHz = 11 - 3 - 4.0 = 4.0 dBm  (P1dB 13)
    """
    return GOOD_AMP, GOOD_SWITCH, GOOD_ATT, GOOD_DIV


@pytest.fixture
def make_parts():
    """Factory returning the good parts with per-kind field overrides."""

    def _make(amp=None, sw=None, att=None, div=None):
        return (
            replace(GOOD_AMP, **(amp or {})),
            replace(GOOD_SWITCH, **(sw or {})),
            replace(GOOD_ATT, **(att or {})),
            replace(GOOD_DIV, **(div or {})),
        )

    return _make


@pytest.fixture
def ref_catalog() -> ComponentCatalog:
    return reference_catalog()


@pytest.fixture
def ref_config() -> SystemConfig:
    return reference_system_config()


@pytest.fixture
def reference_yaml(tmp_path):
    """YAML config equivalent to the built-in reference catalog."""
    p = tmp_path / "catalog.yaml"
    p.write_text(
        """
description: "yaml reference"
search:
  input_power_dbm: 0.0
catalog:
  amplifiers:
    - {name: "Amp-A", gain_min_1ghz: 19.0, gain_max_1ghz: 15.0, gain_min_20ghz: 18.0, gain_max_20ghz: 14.0, p1db_1ghz: 12.0, p1db_20ghz: 10.5, cost: 100.0}
    - {name: "Amp-B", gain_min_1ghz: 18.0, gain_max_1ghz: 14.0, gain_min_20ghz: 17.0, gain_max_20ghz: 13.0, p1db_1ghz: 11.0, p1db_20ghz: 9.5, cost: 120.0}
  switches:
    - {name: "Switch-1", gain_1ghz_typ: 0.5, gain_20ghz_typ: 0.4, leakage_1ghz: -60.0, leakage_20ghz: -25.0, p1db_input: 15.0, cost: 50.0}
    - {name: "Switch-2", gain_1ghz_typ: 0.6, gain_20ghz_typ: 0.5, leakage_1ghz: -58.0, leakage_20ghz: -22.0, p1db_input: 14.0, cost: 60.0}
  attenuators:
    - {name: "Attenuator-1", gain: -3.0, max_attenuation: 10.0, p1db_input: 20.0}
    - {name: "Attenuator-2", gain: -6.0, max_attenuation: 15.0, p1db_input: 20.0}
  dividers:
    - {name: "Divider-1", gain_1ghz: 0.0, gain_20ghz: 0.0}
    - {name: "Divider-2", gain_1ghz: 0.0, gain_20ghz: 0.0}
"""
    )
    return p
