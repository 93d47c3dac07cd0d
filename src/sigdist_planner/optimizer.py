# src/sigdist_planner/optimizer.py
from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from itertools import product
from typing import Iterable, Iterator, List, Optional, Tuple
from concurrent.futures import ProcessPoolExecutor, as_completed
import logging
import sys

from .config_models import (
    Amplifier,
    Attenuator,
    ComponentCatalog,
    DEFAULT_LIMITS,
    PowerDivider,
    SelectionLimits,
    Switch,
    SystemConfig,
)
from .evaluator import ChainMetrics, FeasibilityResult, evaluate
from .progress import ProgressReporter, NullProgressReporter

logger = logging.getLogger(__name__)

Candidate = Tuple[int, Amplifier, Switch, Attenuator, PowerDivider]

# Largest finite float: feasible candidates with NaN / +inf cost never win.
_NO_COST_BOUND = sys.float_info.max


@dataclass(frozen=True)
class Configuration:
    """Selected (amp, switch, attenuator, divider) tuple with its cost and metrics."""
    amplifier: Amplifier
    switch: Switch
    attenuator: Attenuator
    divider: PowerDivider
    total_cost: float
    metrics: ChainMetrics
    index: int  # position in enumeration order

    @property
    def component_names(self) -> Tuple[str, str, str, str]:
        return (
            self.amplifier.name,
            self.switch.name,
            self.attenuator.name,
            self.divider.name,
        )


@dataclass(frozen=True)
class CandidateEvaluation:
    index: int
    amplifier: Amplifier
    switch: Switch
    attenuator: Attenuator
    divider: PowerDivider
    result: FeasibilityResult

    @property
    def component_names(self) -> Tuple[str, str, str, str]:
        return (
            self.amplifier.name,
            self.switch.name,
            self.attenuator.name,
            self.divider.name,
        )


@dataclass
class SelectionResult:
    system_config: SystemConfig
    best: Optional[Configuration]
    evaluations: List[CandidateEvaluation]

    @property
    def n_candidates(self) -> int:
        return len(self.evaluations)

    @property
    def n_feasible(self) -> int:
        return sum(1 for ev in self.evaluations if ev.result.feasible)


def enumerate_candidates(catalog: ComponentCatalog) -> Iterator[Candidate]:
    """
    Yield (index, amp, switch, attenuator, divider) over the full product.

    Amplifier is the outermost loop, divider the innermost.
    """
    combos = product(
        catalog.amplifiers,
        catalog.switches,
        catalog.attenuators,
        catalog.dividers,
    )
    for idx, (amp, sw, att, div) in enumerate(combos):
        yield idx, amp, sw, att, div


def candidate_at(catalog: ComponentCatalog, index: int) -> Candidate:
    """Random access into the enumeration order (mixed-radix decode of index)."""
    rest, i_div = divmod(index, len(catalog.dividers))
    rest, i_att = divmod(rest, len(catalog.attenuators))
    i_amp, i_sw = divmod(rest, len(catalog.switches))
    return (
        index,
        catalog.amplifiers[i_amp],
        catalog.switches[i_sw],
        catalog.attenuators[i_att],
        catalog.dividers[i_div],
    )


def evaluate_candidates(
    candidates: Iterable[Candidate],
    input_power_dbm: float = 0.0,
    limits: SelectionLimits = DEFAULT_LIMITS,
) -> Iterator[CandidateEvaluation]:
    for idx, amp, sw, att, div in candidates:
        yield CandidateEvaluation(
            index=idx,
            amplifier=amp,
            switch=sw,
            attenuator=att,
            divider=div,
            result=evaluate(amp, sw, att, div, input_power_dbm, limits),
        )


def _keep_cheaper(
    best: Optional[Configuration],
    ev: CandidateEvaluation,
) -> Optional[Configuration]:
    """Fold step: strict '<' so the earliest candidate keeps a tied minimum."""
    if not ev.result.feasible:
        return best
    bound = best.total_cost if best is not None else _NO_COST_BOUND
    if ev.result.total_cost < bound:
        return Configuration(
            amplifier=ev.amplifier,
            switch=ev.switch,
            attenuator=ev.attenuator,
            divider=ev.divider,
            total_cost=ev.result.total_cost,
            metrics=ev.result.metrics,
            index=ev.index,
        )
    return best


def fold_best(evaluations: Iterable[CandidateEvaluation]) -> Optional[Configuration]:
    """
    Reduce evaluations (in enumeration order) to the cheapest feasible one.
    """
    return reduce(_keep_cheaper, evaluations, None)


def select_best(
    catalog: ComponentCatalog,
    input_power_dbm: float = 0.0,
    limits: SelectionLimits = DEFAULT_LIMITS,
) -> Optional[Configuration]:
    """
    Lowest-cost feasible configuration over the whole catalog, or None.

    An empty catalog section simply yields None.
    """
    return fold_best(
        evaluate_candidates(enumerate_candidates(catalog), input_power_dbm, limits)
    )


def _evaluate_index_range(
    catalog: ComponentCatalog,
    start: int,
    stop: int,
    input_power_dbm: float,
    limits: SelectionLimits,
) -> List[CandidateEvaluation]:
    """Worker task: evaluate candidates [start, stop) of the enumeration."""
    cands = (candidate_at(catalog, i) for i in range(start, stop))
    return list(evaluate_candidates(cands, input_power_dbm, limits))


class ConfigurationSelector:
    """
    Exhaustive selection engine over a SystemConfig.
    """

    def __init__(self, cfg: SystemConfig, progress: ProgressReporter | None = None):
        self.cfg = cfg
        # Progress reporter (defaults to a no-op)
        self.progress = progress or NullProgressReporter()

    def _evaluate_sequential(self) -> List[CandidateEvaluation]:
        cfg = self.cfg
        out: List[CandidateEvaluation] = []
        for ev in evaluate_candidates(
            enumerate_candidates(cfg.catalog),
            cfg.search.input_power_dbm,
            cfg.limits,
        ):
            out.append(ev)
            self.progress.advance(feasible=ev.result.feasible)
        return out

    def _evaluate_parallel(self) -> List[CandidateEvaluation]:
        """
        Evaluate index chunks in worker processes.

        Chunks complete in arbitrary order; results are sorted back into
        enumeration order so the tie-break matches the sequential path.
        """
        cfg = self.cfg
        total = cfg.catalog.size
        chunk = max(1, cfg.search.chunk_size)
        out: List[CandidateEvaluation] = []

        with ProcessPoolExecutor(max_workers=cfg.search.max_workers) as ex:
            futures = [
                ex.submit(
                    _evaluate_index_range,
                    cfg.catalog,
                    start,
                    min(start + chunk, total),
                    cfg.search.input_power_dbm,
                    cfg.limits,
                )
                for start in range(0, total, chunk)
            ]
            for fut in as_completed(futures):
                evs = fut.result()
                out.extend(evs)
                self.progress.advance(
                    len(evs),
                    feasible=sum(1 for ev in evs if ev.result.feasible),
                )

        out.sort(key=lambda ev: ev.index)
        return out

    def run(self) -> SelectionResult:
        """
        1. Enumerate amp x switch x attenuator x divider (amp outermost).
        2. Evaluate each candidate against the performance targets.
        3. Keep the cheapest feasible candidate; first in order wins ties.
        """
        cfg = self.cfg
        sizes = cfg.catalog.sizes()
        logger.info(
            "Catalog sizes: %d amplifiers, %d switches, %d attenuators, %d dividers "
            "(%d combinations).",
            sizes["amplifiers"],
            sizes["switches"],
            sizes["attenuators"],
            sizes["dividers"],
            cfg.catalog.size,
        )
        for section, n in sizes.items():
            if n == 0:
                logger.warning(
                    "Catalog section '%s' is empty; no configuration can be formed.",
                    section,
                )

        self.progress.start("Evaluating configurations", total=cfg.catalog.size)
        if cfg.search.parallel and cfg.catalog.size > 1:
            evaluations = self._evaluate_parallel()
        else:
            evaluations = self._evaluate_sequential()
        self.progress.end()

        best = fold_best(evaluations)
        result = SelectionResult(
            system_config=cfg,
            best=best,
            evaluations=evaluations,
        )

        if best is None:
            logger.warning(
                "No feasible configuration among %d candidates.",
                result.n_candidates,
            )
        else:
            logger.info(
                "Selected %s (candidate #%d of %d, %d feasible) at total cost %g.",
                " / ".join(best.component_names),
                best.index,
                result.n_candidates,
                result.n_feasible,
                best.total_cost,
            )
        return result
