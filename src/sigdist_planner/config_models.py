# src/sigdist_planner/config_models.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml  # planning-grade: assume PyYAML available


dB = float
dBm = float
Cost = float


@dataclass(frozen=True)
class Amplifier:
    """
    Amplifier with a gain window per frequency.

    The (min, max) gain pair models unit-to-unit / temperature variation.
    """
    name: str
    gain_min_1ghz: dB
    gain_max_1ghz: dB
    gain_min_20ghz: dB
    gain_max_20ghz: dB
    p1db_1ghz: dBm
    p1db_20ghz: dBm
    cost: Cost


@dataclass(frozen=True)
class Switch:
    """SPST switch. Leakage is the OFF-state isolation (more negative = better)."""
    name: str
    gain_1ghz_typ: dB
    gain_20ghz_typ: dB
    leakage_1ghz: dB
    leakage_20ghz: dB
    p1db_input: dBm
    cost: Cost


@dataclass(frozen=True)
class Attenuator:
    name: str
    gain: dB  # negative value for attenuation
    max_attenuation: dB
    p1db_input: dBm
    cost: Cost = field(default=0.0, init=False)


@dataclass(frozen=True)
class PowerDivider:
    """1-to-N passive split; only the per-branch insertion loss is modelled."""
    name: str
    gain_1ghz: dB
    gain_20ghz: dB
    cost: Cost = field(default=0.0, init=False)


@dataclass(frozen=True)
class ComponentCatalog:
    """
    The four candidate collections. Order is preserved as supplied and drives
    tie-breaking during selection.
    """
    amplifiers: Tuple[Amplifier, ...] = ()
    switches: Tuple[Switch, ...] = ()
    attenuators: Tuple[Attenuator, ...] = ()
    dividers: Tuple[PowerDivider, ...] = ()

    def __post_init__(self) -> None:
        # accept any sequence, store as tuples
        object.__setattr__(self, "amplifiers", tuple(self.amplifiers))
        object.__setattr__(self, "switches", tuple(self.switches))
        object.__setattr__(self, "attenuators", tuple(self.attenuators))
        object.__setattr__(self, "dividers", tuple(self.dividers))

    @property
    def size(self) -> int:
        """Number of (amp, switch, attenuator, divider) combinations."""
        return (
            len(self.amplifiers)
            * len(self.switches)
            * len(self.attenuators)
            * len(self.dividers)
        )

    def sizes(self) -> dict:
        return {
            "amplifiers": len(self.amplifiers),
            "switches": len(self.switches),
            "attenuators": len(self.attenuators),
            "dividers": len(self.dividers),
        }


@dataclass(frozen=True)
class SelectionLimits:
    """
    Thresholds of the distribution-block performance targets.

    Output-power vs P1dB and attenuator range checks have no threshold of
    their own and are not listed here.
    """
    switch_gain_min_1ghz: dB = -1.0
    switch_gain_min_20ghz: dB = -2.0
    amp_p1db_min_1ghz: dBm = 12.0
    amp_p1db_min_20ghz: dBm = 10.5
    # strict upper bounds (leakage must be *below* these)
    switch_leakage_max_1ghz: dB = -55.0
    switch_leakage_max_20ghz: dB = -20.0


DEFAULT_LIMITS = SelectionLimits()


@dataclass
class SearchConfig:
    input_power_dbm: dBm = 0.0
    parallel: bool = False
    max_workers: Optional[int] = None
    chunk_size: int = 256  # candidates per worker task in parallel mode


@dataclass
class SystemConfig:
    """
    Top-level configuration object for a selection run.
    """
    catalog: ComponentCatalog
    limits: SelectionLimits = field(default_factory=SelectionLimits)
    search: SearchConfig = field(default_factory=SearchConfig)

    # Metadata / description
    description: Optional[str] = None


def _load_yaml_or_json(path: Path) -> dict:
    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    else:
        return json.loads(text)


def _section(raw: dict, key: str) -> List[dict]:
    items = raw.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(
            f"Catalog section '{key}' must be a list of records, got {type(items).__name__}."
        )
    return items


def catalog_from_dict(raw: dict) -> ComponentCatalog:
    """
    Build a ComponentCatalog from plain mappings (as found in YAML/JSON).

    Missing sections produce empty collections.
    """

    def r_amp(d) -> Amplifier:
        return Amplifier(
            name=str(d["name"]),
            gain_min_1ghz=float(d["gain_min_1ghz"]),
            gain_max_1ghz=float(d["gain_max_1ghz"]),
            gain_min_20ghz=float(d["gain_min_20ghz"]),
            gain_max_20ghz=float(d["gain_max_20ghz"]),
            p1db_1ghz=float(d["p1db_1ghz"]),
            p1db_20ghz=float(d["p1db_20ghz"]),
            cost=float(d["cost"]),
        )

    def r_switch(d) -> Switch:
        return Switch(
            name=str(d["name"]),
            gain_1ghz_typ=float(d["gain_1ghz_typ"]),
            gain_20ghz_typ=float(d["gain_20ghz_typ"]),
            leakage_1ghz=float(d["leakage_1ghz"]),
            leakage_20ghz=float(d["leakage_20ghz"]),
            p1db_input=float(d["p1db_input"]),
            cost=float(d["cost"]),
        )

    def r_att(d) -> Attenuator:
        return Attenuator(
            name=str(d["name"]),
            gain=float(d["gain"]),
            max_attenuation=float(d["max_attenuation"]),
            p1db_input=float(d["p1db_input"]),
        )

    def r_div(d) -> PowerDivider:
        return PowerDivider(
            name=str(d["name"]),
            gain_1ghz=float(d["gain_1ghz"]),
            gain_20ghz=float(d["gain_20ghz"]),
        )

    return ComponentCatalog(
        amplifiers=[r_amp(a) for a in _section(raw, "amplifiers")],
        switches=[r_switch(s) for s in _section(raw, "switches")],
        attenuators=[r_att(t) for t in _section(raw, "attenuators")],
        dividers=[r_div(d) for d in _section(raw, "dividers")],
    )


def load_config(path: Union[str, Path]) -> SystemConfig:
    """
    Load a SystemConfig from a JSON or YAML file.
    """
    path = Path(path)
    raw = _load_yaml_or_json(path)

    def r_limits(d) -> SelectionLimits:
        defaults = DEFAULT_LIMITS
        return SelectionLimits(
            switch_gain_min_1ghz=d.get("switch_gain_min_1ghz", defaults.switch_gain_min_1ghz),
            switch_gain_min_20ghz=d.get("switch_gain_min_20ghz", defaults.switch_gain_min_20ghz),
            amp_p1db_min_1ghz=d.get("amp_p1db_min_1ghz", defaults.amp_p1db_min_1ghz),
            amp_p1db_min_20ghz=d.get("amp_p1db_min_20ghz", defaults.amp_p1db_min_20ghz),
            switch_leakage_max_1ghz=d.get("switch_leakage_max_1ghz", defaults.switch_leakage_max_1ghz),
            switch_leakage_max_20ghz=d.get("switch_leakage_max_20ghz", defaults.switch_leakage_max_20ghz),
        )

    def r_search(d) -> SearchConfig:
        return SearchConfig(
            input_power_dbm=float(d.get("input_power_dbm", 0.0)),
            parallel=bool(d.get("parallel", False)),
            max_workers=d.get("max_workers"),
            chunk_size=int(d.get("chunk_size", 256)),
        )

    return SystemConfig(
        catalog=catalog_from_dict(raw.get("catalog") or {}),
        limits=r_limits(raw.get("limits") or {}),
        search=r_search(raw.get("search") or {}),
        description=raw.get("description"),
    )
