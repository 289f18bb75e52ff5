"""Test configuration shared across the suite."""

import pathlib
import sys

import matplotlib
import pytest

matplotlib.use("Agg")

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from lvcalc.types import Cable, CableType, Client, Node, Production  # noqa: E402


@pytest.fixture
def cable_type():
    """Single catalog entry with distinct positive and zero sequence values."""

    return CableType(
        id="T1",
        r12_ohm_per_km=0.5,
        x12_ohm_per_km=0.1,
        r0_ohm_per_km=2.0,
        x0_ohm_per_km=0.4,
        name="Test 4x35",
    )


@pytest.fixture
def catalog(cable_type):
    return {cable_type.id: cable_type}


@pytest.fixture
def two_nodes():
    """Source S feeding a 10 kVA load L over a 100 m cable."""

    nodes = [
        Node("S", is_source=True),
        Node("L", clients=(Client(10.0),)),
    ]
    cables = [Cable("C1", "S", "L", 100.0, "T1")]
    return nodes, cables


@pytest.fixture
def chain():
    """S -> A -> B, 5 kVA on A and on B, identical 100 m cables."""

    nodes = [
        Node("S", is_source=True),
        Node("A", clients=(Client(5.0),)),
        Node("B", clients=(Client(5.0),)),
    ]
    cables = [
        Cable("SA", "S", "A", 100.0, "T1"),
        Cable("AB", "A", "B", 100.0, "T1"),
    ]
    return nodes, cables


@pytest.fixture
def prosumer():
    """Source feeding a node with 10 kVA of load and 10 kVA of production."""

    nodes = [
        Node("S", is_source=True),
        Node("P", clients=(Client(10.0),), productions=(Production(10.0),)),
    ]
    cables = [Cable("C1", "S", "P", 250.0, "T1")]
    return nodes, cables
