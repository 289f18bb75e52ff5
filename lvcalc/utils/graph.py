"""Graph utilities turning a cable network into a radial tree.

The cable graph is undirected and may hold parallel cables between the same
pair of nodes, hence a :class:`networkx.MultiGraph` keyed by cable id. The
tree is rooted at the source: power is assumed to flow outward from it.
"""

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Sequence

import networkx as nx

from ..types import Cable, Node
from .logging import get_logger


@dataclass
class Tree:
    """Parent/children relations derived from a BFS over the cable graph."""

    source: Hashable
    parents: Dict[Hashable, Optional[Hashable]]
    children: Dict[Hashable, List[Hashable]]
    order: List[Hashable]


def build_graph(nodes: Sequence[Node], cables: Iterable[Cable]) -> nx.MultiGraph:
    """Build the undirected cable graph.

    Cables whose endpoints are not both known nodes are left out.
    """

    logger = get_logger(__name__)
    G = nx.MultiGraph()
    for node in nodes:
        G.add_node(node.id)

    for cable in cables:
        if cable.node_a not in G or cable.node_b not in G:
            logger.debug("Cable %s skipped: unknown endpoint", cable.id)
            continue
        G.add_edge(
            cable.node_a,
            cable.node_b,
            key=cable.id,
            length_m=cable.length_m,
            type_id=cable.type_id,
        )
    return G


def bfs_parents(G: nx.MultiGraph, source: Hashable) -> Dict[Hashable, Optional[Hashable]]:
    """Map each node reachable from ``source`` to the node it was discovered from.

    Neighbours are visited in cable insertion order, so equal-length paths are
    resolved by input order. Unreachable nodes get no entry.
    """

    parents: Dict[Hashable, Optional[Hashable]] = {source: None}
    for parent, child in nx.bfs_edges(G, source):
        parents[child] = parent
    return parents


def children_of(parents: Dict[Hashable, Optional[Hashable]]) -> Dict[Hashable, List[Hashable]]:
    """Invert the parent relation."""

    children: Dict[Hashable, List[Hashable]] = {n: [] for n in parents}
    for node, parent in parents.items():
        if parent is not None:
            children[parent].append(node)
    return children


def post_order(children: Dict[Hashable, List[Hashable]], root: Hashable) -> List[Hashable]:
    """Return the tree nodes with every child before its parent.

    Iterative, so deep feeders do not hit the recursion limit.
    """

    order: List[Hashable] = []
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        stack.append((node, True))
        for child in reversed(children.get(node, [])):
            stack.append((child, False))
    return order


def unreachable(nodes: Sequence[Node], parents: Dict[Hashable, Optional[Hashable]]) -> List[Hashable]:
    """Ids of the nodes that are not connected to the source."""

    return [n.id for n in nodes if n.id not in parents]


def reduce_topology(nodes: Sequence[Node], cables: Iterable[Cable], source: Hashable) -> Tree:
    """Facade building the rooted tree from nodes and cables."""

    G = build_graph(nodes, cables)
    parents = bfs_parents(G, source)
    children = children_of(parents)
    return Tree(source=source, parents=parents, children=children, order=post_order(children, source))
