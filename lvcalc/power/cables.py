"""Per-cable current, voltage drop and losses.

The electrical model of a cable is chosen from the connection type of its
distal node (the endpoint farther from the source):

``I = |S * 1000| / (U * cos_phi)``            single-phase
``I = |S * 1000| / (sqrt(3) * U * cos_phi)``  three-phase

``dU = I * (R * cos_phi + X * sin_phi) * L_km`` (times ``sqrt(3)`` in
three-phase). ``dU`` is negated when the distal power is negative, i.e. a
voltage rise under reverse flow. Losses ``I^2 * R * L_km / 1000`` kW do not
depend on the flow direction.
"""

from __future__ import annotations

import math
from typing import Dict, Hashable, List, Mapping, Optional, Sequence

from ..registry import CONNECTION_ALIASES, DEFAULT_CONNECTION, VOLTAGE_REGISTRY
from ..types import (
    Cable,
    CableType,
    CalculatedCable,
    ComputeOptions,
    DistalEdge,
    Node,
    NonTreeEdge,
    TreeEdge,
    VoltageConfig,
)
from ..utils.logging import get_logger
from .results import classify

SQRT3 = math.sqrt(3.0)


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def voltage_config(connection_type: Optional[str]) -> VoltageConfig:
    """Return the electrical model of a connection tag.

    Unknown tags use the three-phase plus neutral 400 V model.
    """

    tag = CONNECTION_ALIASES.get(connection_type, connection_type)
    config = VOLTAGE_REGISTRY.get(tag)
    if config is None:
        get_logger(__name__).debug("Unknown connection type %r, using %s", connection_type, DEFAULT_CONNECTION)
        config = VOLTAGE_REGISTRY[DEFAULT_CONNECTION]
    return config


def distal_edge(cable: Cable, parents: Mapping[Hashable, Optional[Hashable]]) -> DistalEdge:
    """Decide which endpoint of ``cable`` lies downstream.

    Cables outside the BFS tree (loops, detached fragments) fall back to
    ``node_b``.
    """

    if cable.node_b in parents and parents[cable.node_b] == cable.node_a:
        return TreeEdge(cable.node_b)
    if cable.node_a in parents and parents[cable.node_a] == cable.node_b:
        return TreeEdge(cable.node_a)
    return NonTreeEdge(cable.node_b)


def solve_cable(
    cable: Cable,
    cable_type: CableType,
    edge: DistalEdge,
    distal_s_kva: float,
    connection_type: Optional[str],
    options: ComputeOptions,
) -> CalculatedCable:
    """Compute the electrical quantities of one cable."""

    config = voltage_config(connection_type)
    if config.use_zero_sequence:
        r_per_km, x_per_km = cable_type.r0_ohm_per_km, cable_type.x0_ohm_per_km
    else:
        r_per_km, x_per_km = cable_type.r12_ohm_per_km, cable_type.x12_ohm_per_km

    cos_phi = options.cos_phi
    sin_phi = math.sqrt(max(0.0, 1.0 - cos_phi * cos_phi))

    denom = (SQRT3 * config.u_v if config.three_phase else config.u_v) * cos_phi
    current = _finite(abs(distal_s_kva * 1000.0) / denom) if denom > 0 else 0.0

    length_km = (cable.length_m or 0.0) / 1000.0
    drop_v = current * (r_per_km * cos_phi + x_per_km * sin_phi) * length_km
    if config.three_phase:
        drop_v *= SQRT3
    if distal_s_kva < 0:
        drop_v = -drop_v
    drop_v = _finite(drop_v)

    drop_percent = _finite(drop_v / config.u_v * 100.0) if config.u_v else 0.0
    losses_kw = _finite(current * current * r_per_km * length_km / 1000.0)

    return CalculatedCable(
        id=cable.id,
        node_a=cable.node_a,
        node_b=cable.node_b,
        length_m=cable.length_m,
        type_id=cable.type_id,
        name=cable.name,
        current_a=current,
        voltage_drop_v=drop_v,
        voltage_drop_percent=drop_percent,
        losses_kw=losses_kw,
        compliance=classify(drop_percent, options),
        distal_node=edge.distal,
        tree_edge=isinstance(edge, TreeEdge),
    )


def solve_cables(
    cables: Sequence[Cable],
    nodes_by_id: Mapping[Hashable, Node],
    catalog: Mapping[str, CableType],
    parents: Mapping[Hashable, Optional[Hashable]],
    downstream: Dict[Hashable, float],
    options: ComputeOptions,
) -> List[CalculatedCable]:
    """Solve every cable, keeping the input order.

    Every ``type_id`` must already be present in ``catalog``.
    """

    logger = get_logger(__name__)
    solved: List[CalculatedCable] = []
    for cable in cables:
        cable_type = catalog[cable.type_id]
        edge = distal_edge(cable, parents)
        if isinstance(edge, NonTreeEdge):
            logger.info("Cable %s is not a tree edge, distal node %s assumed", cable.id, edge.distal)

        distal = nodes_by_id.get(edge.distal)
        connection = distal.connection_type if distal is not None else None
        result = solve_cable(
            cable,
            cable_type,
            edge,
            downstream.get(edge.distal, 0.0),
            connection,
            options,
        )
        logger.debug(
            "Cable %s: I=%.3f A, dU=%.4f V (%.4f %%), losses=%.6f kW",
            cable.id,
            result.current_a,
            result.voltage_drop_v,
            result.voltage_drop_percent,
            result.losses_kw,
        )
        solved.append(result)
    return solved
