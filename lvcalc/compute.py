"""High level interface for the voltage drop calculation."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Sequence

from .power import cables as cable_solver
from .power import demand, results
from .types import Cable, CableType, CalculationResult, ComputeOptions, Node, Scenario
from .utils import graph as graph_utils
from .utils.logging import get_logger
from .utils.validation import (
    check_cable_types,
    find_source,
    index_cable_types,
    normalise_scenario,
    validate_options,
)


def compute(
    nodes: Sequence[Node],
    cables: Sequence[Cable],
    cable_types: Mapping[str, CableType] | Iterable[CableType],
    scenario: Scenario | str,
    *,
    options: ComputeOptions | None = None,
    **overrides: Any,
) -> CalculationResult:
    """Compute currents, voltage drops and losses of a radial LV network.

    Args:
        nodes: Network nodes, exactly one of them flagged as source.
        cables: Cables linking the nodes.
        cable_types: Catalog as a mapping ``id -> CableType`` or an iterable.
        scenario: Active :class:`Scenario` (or its name).
        options: Base :class:`ComputeOptions`.
        **overrides: Individual option values such as ``cos_phi=0.9``.

    Returns:
        A new :class:`CalculationResult`; inputs are left untouched.

    Raises:
        SourceCountError: If the number of source nodes is not one.
        UnknownCableTypeError: If a cable references an unknown type.
    """

    logger = get_logger(__name__)
    nodes = list(nodes)
    cables = list(cables)
    scenario = normalise_scenario(scenario)
    opts = validate_options(options, overrides)

    source = find_source(nodes)
    catalog = index_cable_types(cable_types)
    check_cable_types(cables, catalog)

    tree = graph_utils.reduce_topology(nodes, cables, source.id)
    detached = graph_utils.unreachable(nodes, tree.parents)
    if detached:
        logger.warning("%d node(s) not connected to source %s: %s", len(detached), source.id, detached)

    net = demand.net_powers(nodes, scenario)
    downstream = demand.aggregate_downstream(tree.order, tree.children, net)

    nodes_by_id = {n.id: n for n in nodes}
    solved = cable_solver.solve_cables(cables, nodes_by_id, catalog, tree.parents, downstream, opts)

    result = results.summarise(scenario, nodes, solved, opts, detached)
    logger.info(
        "Scenario %s: %d cables, losses %.6f kW, max dU %.4f %% (%s)",
        scenario.value,
        len(solved),
        result.global_losses_kw,
        result.max_voltage_drop_percent,
        result.compliance.value,
    )
    return result


def compute_scenarios(
    nodes: Sequence[Node],
    cables: Sequence[Cable],
    cable_types: Mapping[str, CableType] | Iterable[CableType],
    *,
    options: ComputeOptions | None = None,
    **overrides: Any,
) -> Dict[Scenario, CalculationResult]:
    """Run :func:`compute` once per scenario."""

    catalog = index_cable_types(cable_types)
    return {
        scenario: compute(nodes, cables, catalog, scenario, options=options, **overrides)
        for scenario in Scenario
    }


class Calculator:
    """Holds a power factor between calculations.

    The value is passed explicitly to :func:`compute` on every call.
    """

    def __init__(self, cos_phi: float = 0.95, options: ComputeOptions | None = None):
        self.options = validate_options(options, {"cos_phi": cos_phi})

    @property
    def cos_phi(self) -> float:
        return self.options.cos_phi

    def set_cos_phi(self, value: float) -> None:
        self.options = validate_options(self.options, {"cos_phi": value})

    def compute(self, nodes, cables, cable_types, scenario) -> CalculationResult:
        return compute(nodes, cables, cable_types, scenario, options=self.options)

    def compute_scenarios(self, nodes, cables, cable_types) -> Dict[Scenario, CalculationResult]:
        return compute_scenarios(nodes, cables, cable_types, options=self.options)
