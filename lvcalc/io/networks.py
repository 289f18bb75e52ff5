"""Utilities to load network snapshots from disk or from pandapower."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from importlib import util as importlib_util
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandapower as pp

from ..catalog import get_cable_types
from ..types import Cable, CableType, Client, ConnectionType, Node, Production
from ..utils.logging import get_logger

NETWORKS_DIR = Path(__file__).resolve().parents[2] / "networks"


@dataclass
class NetworkData:
    """Inputs of :func:`lvcalc.compute` for one network."""

    nodes: List[Node]
    cables: List[Cable]
    cable_types: Dict[str, CableType]
    name: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


def _maybe_float(value: Any) -> Optional[float]:
    """Return ``value`` as ``float``, ``None`` for missing or ``NaN`` entries."""

    try:
        val = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(val):
        return None
    return val


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First value found under one of ``keys``.

    Snapshots written by the diagram editor use camelCase names, hence the
    aliases.
    """

    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _label(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


# ---------------------------------------------------------------------------
# JSON snapshots
# ---------------------------------------------------------------------------


def _parse_node(data: Mapping[str, Any]) -> Node:
    clients = tuple(
        Client(s_kva=float(_pick(c, "s_kva", "S_kVA", default=0.0)), name=_label(c.get("name")))
        for c in _pick(data, "clients", default=[])
    )
    productions = tuple(
        Production(s_kva=float(_pick(p, "s_kva", "S_kVA", default=0.0)), name=_label(p.get("name")))
        for p in _pick(data, "productions", default=[])
    )
    position = _pick(data, "position")
    if isinstance(position, Mapping):
        position = (float(position["x"]), float(position["y"]))
    elif position is not None:
        position = (float(position[0]), float(position[1]))
    return Node(
        id=data["id"],
        is_source=bool(_pick(data, "is_source", "isSource", default=False)),
        connection_type=_pick(data, "connection_type", "connectionType", default=ConnectionType.TETRA_3PN),
        clients=clients,
        productions=productions,
        name=_label(data.get("name")),
        position=position,
    )


def _parse_cable(data: Mapping[str, Any]) -> Cable:
    return Cable(
        id=data["id"],
        node_a=_pick(data, "node_a", "nodeAId"),
        node_b=_pick(data, "node_b", "nodeBId"),
        length_m=float(_pick(data, "length_m", "length", default=0.0)),
        type_id=_pick(data, "type_id", "typeId", "cableTypeId"),
        name=_label(data.get("name")),
    )


def _parse_cable_type(data: Mapping[str, Any]) -> CableType:
    return CableType(
        id=data["id"],
        r12_ohm_per_km=float(_pick(data, "r12_ohm_per_km", "R12_ohm_per_km", "r12")),
        x12_ohm_per_km=float(_pick(data, "x12_ohm_per_km", "X12_ohm_per_km", "x12")),
        r0_ohm_per_km=float(_pick(data, "r0_ohm_per_km", "R0_ohm_per_km", "r0")),
        x0_ohm_per_km=float(_pick(data, "x0_ohm_per_km", "X0_ohm_per_km", "x0")),
        name=_label(data.get("name")),
        material=_label(data.get("material")),
    )


def from_dict(data: Mapping[str, Any]) -> NetworkData:
    """Parse a snapshot mapping.

    Cable types listed in the snapshot override the default catalog entries
    with the same id.
    """

    try:
        nodes = [_parse_node(n) for n in data.get("nodes", [])]
        cables = [_parse_cable(c) for c in data.get("cables", [])]
        cable_types = get_cable_types()
        for entry in _pick(data, "cable_types", "cableTypes", default=[]):
            ct = _parse_cable_type(entry)
            cable_types[ct.id] = ct
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid network snapshot: {exc}") from exc

    extra = {k: v for k, v in data.items() if k not in {"name", "nodes", "cables", "cable_types", "cableTypes"}}
    return NetworkData(nodes, cables, cable_types, name=_label(data.get("name")), extra=extra)


# ---------------------------------------------------------------------------
# pandapower
# ---------------------------------------------------------------------------


def _bus_positions(net: pp.pandapowerNet) -> Dict[int, Tuple[float, float]]:
    """Bus coordinates when the network carries any (``geo`` or ``bus_geodata``)."""

    pos: Dict[int, Tuple[float, float]] = {}
    if "geo" in net.bus.columns:
        for idx, geo in net.bus["geo"].items():
            if isinstance(geo, str):
                try:
                    geo = json.loads(geo)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Invalid geo data for bus {idx}") from exc
            coords = geo.get("coordinates") if isinstance(geo, dict) else None
            if isinstance(coords, (list, tuple)) and len(coords) == 2:
                pos[idx] = (float(coords[0]), float(coords[1]))
    elif hasattr(net, "bus_geodata") and len(net.bus_geodata):
        pos = {idx: (float(row["x"]), float(row["y"])) for idx, row in net.bus_geodata.iterrows()}
    return pos


def _apparent_kva(row: Any) -> float:
    """Apparent power of a load/sgen row in kVA (``sn_mva`` or ``hypot(p, q)``)."""

    sn = _maybe_float(getattr(row, "sn_mva", None))
    if not sn:
        sn = math.hypot(_maybe_float(getattr(row, "p_mw", 0.0)) or 0.0, _maybe_float(getattr(row, "q_mvar", 0.0)) or 0.0)
    scaling = _maybe_float(getattr(row, "scaling", 1.0))
    return sn * (1.0 if scaling is None else scaling) * 1000.0


def _bus_connection(bus: Any) -> str:
    tag = getattr(bus, "connection_type", None)
    if isinstance(tag, str) and tag:
        return tag
    vn_kv = _maybe_float(getattr(bus, "vn_kv", None)) or 0.0
    return ConnectionType.TETRA_3PN if vn_kv >= 0.4 else ConnectionType.MONO_PN


def from_pandapower(net: pp.pandapowerNet) -> NetworkData:
    """Convert a pandapower network.

    Buses become nodes, the first ``ext_grid`` bus is the source, loads and
    static generators become clients and productions, in-service lines become
    cables with one cable type per line.
    """

    if net.ext_grid.empty:
        raise ValueError("pandapower network has no ext_grid to use as source")
    source_bus = int(net.ext_grid.bus.iloc[0])

    clients: Dict[int, List[Client]] = {int(i): [] for i in net.bus.index}
    productions: Dict[int, List[Production]] = {int(i): [] for i in net.bus.index}
    for row in net.load.itertuples():
        if getattr(row, "in_service", True):
            clients[int(row.bus)].append(Client(_apparent_kva(row), name=_label(row.name)))
    for row in net.sgen.itertuples():
        if getattr(row, "in_service", True):
            productions[int(row.bus)].append(Production(_apparent_kva(row), name=_label(row.name)))

    pos = _bus_positions(net)
    nodes = [
        Node(
            id=int(bus.Index),
            is_source=int(bus.Index) == source_bus,
            connection_type=_bus_connection(bus),
            clients=tuple(clients[int(bus.Index)]),
            productions=tuple(productions[int(bus.Index)]),
            name=_label(bus.name),
            position=pos.get(bus.Index),
        )
        for bus in net.bus.itertuples()
    ]

    cables: List[Cable] = []
    cable_types: Dict[str, CableType] = {}
    for line in net.line.itertuples():
        if not getattr(line, "in_service", True):
            continue
        parallel = _maybe_float(getattr(line, "parallel", 1)) or 1.0
        r12 = float(line.r_ohm_per_km) / parallel
        x12 = float(line.x_ohm_per_km) / parallel
        r0 = _maybe_float(getattr(line, "r0_ohm_per_km", None))
        x0 = _maybe_float(getattr(line, "x0_ohm_per_km", None))
        type_id = f"line-{line.Index}"
        cable_types[type_id] = CableType(
            id=type_id,
            r12_ohm_per_km=r12,
            x12_ohm_per_km=x12,
            r0_ohm_per_km=r12 if r0 is None else r0 / parallel,
            x0_ohm_per_km=x12 if x0 is None else x0 / parallel,
            name=_label(getattr(line, "std_type", None)),
        )
        cables.append(
            Cable(
                id=int(line.Index),
                node_a=int(line.from_bus),
                node_b=int(line.to_bus),
                length_m=float(line.length_km) * 1000.0,
                type_id=type_id,
                name=_label(line.name),
            )
        )

    return NetworkData(nodes, cables, cable_types, name=_label(getattr(net, "name", "")))


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


def _load_module(path: Path) -> Any:
    spec = importlib_util.spec_from_file_location(path.stem, path)
    module = importlib_util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    if not hasattr(module, "build"):
        raise ValueError(f"Network module '{path.name}' must define a build() function")
    return module.build()


def load(network: Any, *, logger=None) -> NetworkData:
    """Load a network from an object or a file name.

    Args:
        network: A :class:`NetworkData` (returned as is), a snapshot mapping, a
            ``pandapowerNet``, or the name of a file stored in the repository
            level ``networks`` directory. JSON files hold a snapshot; Python
            modules must provide a ``build()`` function returning any of the
            object forms above.
        logger: Optional logger instance.

    Raises:
        ValueError: If the file is missing, unsupported or malformed.
        TypeError: If ``network`` is of an unsupported type.
    """

    logger = logger or get_logger(__name__)

    if isinstance(network, str):
        path = NETWORKS_DIR / network
        if not path.suffix:
            candidates = [path.with_suffix(s) for s in (".json", ".py")]
            path = next((p for p in candidates if p.exists()), path)
        if not path.exists():
            raise ValueError(f"Network file '{network}' not found in {NETWORKS_DIR}")
        if path.suffix == ".json":
            with open(path, "r", encoding="utf-8") as handle:
                network = json.load(handle)
        elif path.suffix == ".py":
            network = _load_module(path)
            if isinstance(network, str):
                raise ValueError(f"build() of '{path.name}' must return a network, not a name")
        else:
            raise ValueError(f"Unsupported network file type '{path.suffix}'")

    if isinstance(network, NetworkData):
        data = network
    elif isinstance(network, pp.pandapowerNet):
        data = from_pandapower(network)
    elif isinstance(network, Mapping):
        data = from_dict(network)
    else:
        raise TypeError("network must be NetworkData, a mapping, a pandapowerNet or a file name")

    logger.info("Loaded network '%s' with %d nodes and %d cables", data.name, len(data.nodes), len(data.cables))
    return data
