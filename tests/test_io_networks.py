"""Tests for :mod:`lvcalc.io.networks`."""

import math

import pandapower as pp
import pytest

from lvcalc import Scenario, compute
from lvcalc.catalog import DEFAULT_CABLE_TYPES, get_cable_types
from lvcalc.io import networks
from lvcalc.io.networks import NetworkData, from_dict, from_pandapower, load
from lvcalc.types import ConnectionType


def test_default_catalog_is_fresh_copy():
    first = get_cable_types()
    first.pop("cu-4x16")
    assert "cu-4x16" in get_cable_types()
    assert len(get_cable_types()) == len(DEFAULT_CABLE_TYPES)


def test_load_json_snapshot():
    """The demo snapshot loads with its catalog override."""

    data = load("lotissement.json")
    print(f"load('lotissement.json') -> {len(data.nodes)} nodes, {len(data.cables)} cables")
    assert data.name == "lotissement"
    assert [n.id for n in data.nodes] == ["S", "N1", "N2", "N3", "N4"]
    assert sum(n.is_source for n in data.nodes) == 1
    assert data.cable_types["al-4x95"].x12_ohm_per_km == 0.075
    assert "cu-4x16" in data.cable_types
    assert data.nodes[3].connection_type == ConnectionType.MONO_PN
    assert data.nodes[0].position == (0.0, 0.0)


def test_load_without_suffix():
    assert load("lotissement").name == "lotissement"


def test_loaded_snapshot_computes():
    data = load("lotissement.json")
    result = compute(data.nodes, data.cables, data.cable_types, Scenario.MIXED)
    print(result.to_frame())
    assert len(result.cables) == 4
    assert all(c.tree_edge for c in result.cables)
    assert result.total_production_kva == 48.0
    # PV surplus on N2 exceeds the N2 and N4 loads: voltage rise on C2
    assert result.cable("C2").voltage_drop_v < 0


def test_load_missing_file():
    with pytest.raises(ValueError):
        load("does_not_exist.json")


def test_load_unsupported_suffix(tmp_path, monkeypatch):
    (tmp_path / "net.txt").write_text("")
    monkeypatch.setattr(networks, "NETWORKS_DIR", tmp_path)
    with pytest.raises(ValueError):
        load("net.txt")


def test_load_module_without_build(tmp_path, monkeypatch):
    """Modules without a ``build`` function are rejected."""

    (tmp_path / "empty.py").write_text("VALUE = 1\n")
    monkeypatch.setattr(networks, "NETWORKS_DIR", tmp_path)
    with pytest.raises(ValueError):
        load("empty.py")


def test_load_module_returning_mapping(tmp_path, monkeypatch):
    (tmp_path / "inline.py").write_text(
        "def build():\n"
        "    return {'name': 'inline', 'nodes': [{'id': 'S', 'is_source': True}], 'cables': []}\n"
    )
    monkeypatch.setattr(networks, "NETWORKS_DIR", tmp_path)
    assert load("inline.py").name == "inline"


def test_load_invalid_type():
    with pytest.raises(TypeError):
        load(42)


def test_load_network_data_unchanged():
    data = NetworkData(nodes=[], cables=[], cable_types={})
    assert load(data) is data


def test_from_dict_camel_case_aliases():
    """Snapshots saved by the diagram editor use camelCase keys."""

    data = from_dict(
        {
            "nodes": [
                {"id": "S", "isSource": True, "connectionType": "TÉTRA_3P+N_230_400V"},
                {"id": "L", "connectionType": "MONO_230V_PP", "clients": [{"S_kVA": 4}], "productions": [{"S_kVA": 1.5}]},
            ],
            "cables": [{"id": "c", "nodeAId": "S", "nodeBId": "L", "length_m": 35, "typeId": "X"}],
            "cableTypes": [
                {"id": "X", "R12_ohm_per_km": 1.0, "X12_ohm_per_km": 0.1, "R0_ohm_per_km": 4.0, "X0_ohm_per_km": 0.4}
            ],
            "voltageType": "400V",
        }
    )
    assert data.nodes[0].is_source
    assert data.nodes[1].total_load_kva == 4.0
    assert data.nodes[1].total_production_kva == 1.5
    assert data.cables[0].node_b == "L"
    assert data.cable_types["X"].r0_ohm_per_km == 4.0
    assert data.extra == {"voltageType": "400V"}


def test_from_dict_invalid_snapshot():
    with pytest.raises(ValueError):
        from_dict({"nodes": [{"name": "no id"}]})


@pytest.fixture(scope="module")
def pp_network():
    return load("pp_feeder.py")


def test_from_pandapower_nodes(pp_network):
    """Buses, loads and static generators map onto nodes."""

    nodes = {n.id: n for n in pp_network.nodes}
    print(f"from_pandapower -> {nodes}")
    assert nodes[0].is_source and not nodes[1].is_source
    assert nodes[1].total_load_kva == pytest.approx(math.hypot(12.0, 4.0) + 9.0)
    assert nodes[2].total_production_kva == pytest.approx(30.0)
    assert nodes[1].connection_type == ConnectionType.TETRA_3PN
    assert nodes[1].name == "Coffret 1"


def test_from_pandapower_cables(pp_network):
    cable = pp_network.cables[0]
    cable_type = pp_network.cable_types[cable.type_id]
    assert (cable.node_a, cable.node_b) == (0, 1)
    assert cable.length_m == pytest.approx(150.0)
    assert cable_type.r12_ohm_per_km == pytest.approx(0.206)
    assert cable_type.r0_ohm_per_km == pytest.approx(0.824)


def test_from_pandapower_reverse_flow(pp_network):
    """The PV surplus on bus 2 raises the voltage in the production scenario."""

    result = compute(pp_network.nodes, pp_network.cables, pp_network.cable_types, Scenario.PRODUCTION)
    assert all(c.voltage_drop_v < 0 for c in result.cables)


def test_from_pandapower_requires_ext_grid():
    net = pp.create_empty_network()
    pp.create_bus(net, vn_kv=0.4)
    with pytest.raises(ValueError):
        from_pandapower(net)


def test_from_pandapower_defaults_without_zero_sequence():
    """Lines without r0/x0 reuse the positive sequence values; LV buses below 0.4 kV are single-phase."""

    net = pp.create_empty_network()
    b0 = pp.create_bus(net, vn_kv=0.23)
    b1 = pp.create_bus(net, vn_kv=0.23)
    pp.create_ext_grid(net, bus=b0)
    pp.create_line_from_parameters(net, b0, b1, length_km=0.05, r_ohm_per_km=1.2, x_ohm_per_km=0.08, c_nf_per_km=0.0, max_i_ka=0.1)
    data = from_pandapower(net)
    cable_type = data.cable_types[data.cables[0].type_id]
    assert cable_type.r0_ohm_per_km == pytest.approx(1.2)
    assert cable_type.x0_ohm_per_km == pytest.approx(0.08)
    assert data.nodes[1].connection_type == ConnectionType.MONO_PN
