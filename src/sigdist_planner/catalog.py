# src/sigdist_planner/catalog.py
from __future__ import annotations

from .config_models import (
    Amplifier,
    Attenuator,
    ComponentCatalog,
    PowerDivider,
    SearchConfig,
    Switch,
    SystemConfig,
)


def reference_catalog() -> ComponentCatalog:
    """
    Two-entry example catalogs for the 1 GHz / 20 GHz distribution block.

    With 0 dBm input the cheapest compliant build is
    Amp-A + Switch-1 + Attenuator-2 + Divider-1 at $150.
    """
    amplifiers = [
        Amplifier("Amp-A", 19.0, 15.0, 18.0, 14.0, 12.0, 10.5, 100.0),
        Amplifier("Amp-B", 18.0, 14.0, 17.0, 13.0, 11.0, 9.5, 120.0),
    ]
    switches = [
        Switch("Switch-1", 0.5, 0.4, -60.0, -25.0, 15.0, 50.0),
        Switch("Switch-2", 0.6, 0.5, -58.0, -22.0, 14.0, 60.0),
    ]
    attenuators = [
        Attenuator("Attenuator-1", -3.0, 10.0, 20.0),
        Attenuator("Attenuator-2", -6.0, 15.0, 20.0),
    ]
    dividers = [
        PowerDivider("Divider-1", 0.0, 0.0),
        PowerDivider("Divider-2", 0.0, 0.0),
    ]
    return ComponentCatalog(amplifiers, switches, attenuators, dividers)


def reference_system_config(input_power_dbm: float = 0.0) -> SystemConfig:
    return SystemConfig(
        catalog=reference_catalog(),
        search=SearchConfig(input_power_dbm=input_power_dbm),
        description="reference signal distribution block catalog",
    )
