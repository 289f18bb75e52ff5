"""Network-wide totals and compliance verdict."""

from __future__ import annotations

from typing import Hashable, Sequence

import pandas as pd

from ..types import CalculatedCable, CalculationResult, Compliance, ComputeOptions, Node, Scenario

FRAME_COLUMNS = [
    "id",
    "name",
    "node_a",
    "node_b",
    "distal_node",
    "tree_edge",
    "type_id",
    "length_m",
    "current_a",
    "voltage_drop_v",
    "voltage_drop_percent",
    "losses_kw",
    "compliance",
]


def classify(deviation_percent: float, options: ComputeOptions | None = None) -> Compliance:
    """Band a voltage deviation (sign ignored)."""

    options = options or ComputeOptions()
    magnitude = abs(deviation_percent)
    if magnitude <= options.compliant_limit:
        return Compliance.COMPLIANT
    if magnitude <= options.warning_limit:
        return Compliance.WARNING
    return Compliance.CRITICAL


def summarise(
    scenario: Scenario,
    nodes: Sequence[Node],
    cables: Sequence[CalculatedCable],
    options: ComputeOptions,
    unreachable_nodes: Sequence[Hashable] = (),
) -> CalculationResult:
    """Roll the per-cable values into a :class:`CalculationResult`."""

    losses = 0.0
    worst = 0.0
    for cable in cables:
        losses += cable.losses_kw
        worst = max(worst, abs(cable.voltage_drop_percent))

    digits = options.round_digits
    # abs() keeps a rounded -0.0 out of the totals
    global_losses = abs(round(losses, digits))
    max_drop = abs(round(worst, digits))

    return CalculationResult(
        scenario=scenario,
        cables=tuple(cables),
        total_load_kva=sum(n.total_load_kva for n in nodes),
        total_production_kva=sum(n.total_production_kva for n in nodes),
        global_losses_kw=global_losses,
        max_voltage_drop_percent=max_drop,
        compliance=classify(max_drop, options),
        cos_phi=options.cos_phi,
        unreachable_nodes=tuple(unreachable_nodes),
    )


def to_frame(result: CalculationResult) -> pd.DataFrame:
    """One row per calculated cable, compliance as plain strings."""

    rows = []
    for cable in result.cables:
        row = {column: getattr(cable, column) for column in FRAME_COLUMNS}
        row["compliance"] = cable.compliance.value
        rows.append(row)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
