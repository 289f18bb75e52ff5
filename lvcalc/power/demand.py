"""Net apparent power per node and its aggregation over the tree.

Sign convention: S > 0 consumption (flows from the source toward the node),
S < 0 injection (flows back toward the source).
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Sequence

from ..types import Node, Scenario


def net_power(node: Node, scenario: Scenario) -> float:
    """Own net apparent power of ``node`` in kVA."""

    if scenario is Scenario.WITHDRAWAL:
        return node.total_load_kva
    if scenario is Scenario.PRODUCTION:
        return -node.total_production_kva
    return node.total_load_kva - node.total_production_kva


def net_powers(nodes: Sequence[Node], scenario: Scenario) -> Dict[Hashable, float]:
    return {n.id: net_power(n, scenario) for n in nodes}


def aggregate_downstream(
    order: Iterable[Hashable],
    children: Dict[Hashable, List[Hashable]],
    net: Dict[Hashable, float],
) -> Dict[Hashable, float]:
    """Cumulative downstream power for every node of the tree.

    ``order`` must list children before their parent (post-order). The value
    of a node is the power crossing the cable that feeds it.
    """

    downstream: Dict[Hashable, float] = {}
    for node in order:
        total = net.get(node, 0.0)
        for child in children.get(node, []):
            total += downstream.get(child, 0.0)
        downstream[node] = total
    return downstream
