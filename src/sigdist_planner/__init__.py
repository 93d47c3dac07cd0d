# src/sigdist_planner/__init__.py
"""
Signal Distribution Block Component Selector.

Picks the cheapest amplifier / switch / attenuator / power-divider build that
meets the 1 GHz and 20 GHz performance targets of a single-input, dual-output
distribution block:

    IN -> Amplifier -> Attenuator -> Switch -> Power Divider -> OUT1 / OUT2
"""

from .config_models import (
    Amplifier,
    Attenuator,
    ComponentCatalog,
    PowerDivider,
    SelectionLimits,
    Switch,
    SystemConfig,
    load_config,
)

from .evaluator import (
    FeasibilityResult,
    evaluate,
)

from .optimizer import (
    Configuration,
    ConfigurationSelector,
    SelectionResult,
    select_best,
)

__all__ = [
    "Amplifier",
    "Attenuator",
    "ComponentCatalog",
    "PowerDivider",
    "SelectionLimits",
    "Switch",
    "SystemConfig",
    "load_config",
    "FeasibilityResult",
    "evaluate",
    "Configuration",
    "ConfigurationSelector",
    "SelectionResult",
    "select_best",
]
