"""Visualization of a calculated network."""

from typing import Dict, FrozenSet, Hashable

import matplotlib.pyplot as plt
import networkx as nx
import scienceplots  # noqa: F401

from lvcalc.types import CalculationResult, Compliance

plt.style.use(["science", "no-latex"])

COMPLIANCE_COLORS = {
    Compliance.COMPLIANT: "green",
    Compliance.WARNING: "orange",
    Compliance.CRITICAL: "red",
}

SEVERITY = [Compliance.COMPLIANT, Compliance.WARNING, Compliance.CRITICAL]


def cable_colors(result: CalculationResult) -> Dict[FrozenSet[Hashable], str]:
    """Colour of each unordered node pair, the worst band wins for parallel cables."""

    worst: Dict[FrozenSet[Hashable], Compliance] = {}
    for cable in result.cables:
        key = frozenset((cable.node_a, cable.node_b))
        current = worst.get(key)
        if current is None or SEVERITY.index(cable.compliance) > SEVERITY.index(current):
            worst[key] = cable.compliance
    return {key: COMPLIANCE_COLORS[band] for key, band in worst.items()}


def node_color(node) -> str:
    if node.is_source:
        return "steelblue"
    if node.total_production_kva > node.total_load_kva:
        return "gold"  # producer
    if node.total_load_kva > 0:
        return "lightcoral"  # consumer
    return "gray"


def plot_network(
    nodes,
    result: CalculationResult,
    filename="figures/Network.pdf",
    dpi: int = 300,
    show: bool = True,
):
    """Draw the network with cables coloured by compliance band.

    Parameters
    ----------
    nodes : sequence of lvcalc.Node
        Nodes of the calculation. ``position`` is used when every node has
        one, otherwise a spring layout is computed.
    result : lvcalc.CalculationResult
        Output of :func:`lvcalc.compute` for these nodes.
    filename : str, optional
        Path where the figure will be saved.
    dpi : int, optional
        Resolution of the generated figure.
    show : bool, optional
        If ``True`` display the figure.

    Returns
    -------
    networkx.Graph
        The drawn graph.
    """

    G = nx.Graph()
    for node in nodes:
        G.add_node(node.id, pos=node.position, color=node_color(node))

    colors = cable_colors(result)
    labels = {}
    for cable in result.cables:
        if cable.node_a not in G or cable.node_b not in G:
            continue
        G.add_edge(cable.node_a, cable.node_b, color=colors[frozenset((cable.node_a, cable.node_b))])
        labels[(cable.node_a, cable.node_b)] = f"{cable.id}\n{cable.voltage_drop_percent:.2f} %"

    pos = nx.get_node_attributes(G, "pos")
    if len(pos) != len(G) or any(p is None for p in pos.values()):
        pos = nx.spring_layout(G, seed=0)

    plt.figure(figsize=(12, 8), dpi=dpi)
    nx.draw(
        G,
        pos,
        with_labels=True,
        node_size=900,
        node_color=[G.nodes[n]["color"] for n in G.nodes],
        edge_color=[G.edges[e]["color"] for e in G.edges],
        width=2.5,
        edgecolors="black",
        font_size=8,
        alpha=0.85,
    )
    nx.draw_networkx_edge_labels(G, pos, edge_labels=labels, font_size=7)

    plt.title(
        f"{result.scenario.value}: max dU {result.max_voltage_drop_percent:.2f} % "
        f"({result.compliance.value}), losses {result.global_losses_kw:.3f} kW"
    )
    plt.axis("equal")
    plt.tight_layout()
    plt.savefig(filename, dpi=dpi)
    if show:
        plt.show()
    plt.close()
    return G
