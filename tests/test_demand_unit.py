"""Unit tests for :mod:`lvcalc.power.demand`."""

import pytest

from lvcalc.power.demand import aggregate_downstream, net_power, net_powers
from lvcalc.types import Client, Node, Production, Scenario


@pytest.fixture
def mixed_node():
    return Node(
        "N",
        clients=(Client(4.0, name="a"), Client(6.0, name="b")),
        productions=(Production(3.0), Production(9.0)),
    )


@pytest.mark.parametrize(
    "scenario, expected",
    [
        (Scenario.WITHDRAWAL, 10.0),
        (Scenario.PRODUCTION, -12.0),
        (Scenario.MIXED, -2.0),
    ],
)
def test_net_power_per_scenario(mixed_node, scenario, expected):
    """Each scenario applies its own rule to clients and productions."""

    value = net_power(mixed_node, scenario)
    print(f"net_power({scenario.value}) -> {value}")
    assert value == pytest.approx(expected)


def test_net_power_of_empty_node_is_zero():
    assert net_power(Node("E"), Scenario.MIXED) == 0.0
    assert net_power(Node("E"), Scenario.PRODUCTION) == 0.0


def test_net_powers_covers_every_node(mixed_node):
    nodes = [Node("S", is_source=True), mixed_node]
    assert net_powers(nodes, Scenario.WITHDRAWAL) == {"S": 0.0, "N": 10.0}


def test_aggregate_downstream_sums_subtrees():
    """Each node carries its own power plus its whole subtree."""

    children = {"S": ["A", "B"], "A": ["C"], "B": [], "C": []}
    net = {"S": 1.0, "A": 2.0, "B": -4.0, "C": 3.0, "X": 100.0}
    downstream = aggregate_downstream(["C", "A", "B", "S"], children, net)
    print(f"aggregate_downstream -> {downstream}")
    assert downstream == {"C": 3.0, "A": 5.0, "B": -4.0, "S": 2.0}
    # X is not in the tree and contributes nothing
    assert "X" not in downstream
