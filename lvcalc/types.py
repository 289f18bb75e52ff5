"""Common dataclasses and enumerations."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Tuple, Union

NodeId = Hashable


class Scenario(str, Enum):
    """Rule used to derive the net apparent power of each node."""

    WITHDRAWAL = "withdrawal"
    PRODUCTION = "production"
    MIXED = "mixed"


class Compliance(str, Enum):
    """Voltage deviation band of a cable or of the whole network."""

    COMPLIANT = "compliant"
    WARNING = "warning"
    CRITICAL = "critical"


class ConnectionType:
    """Connection tags understood by the cable solver."""

    MONO_PN = "MONO_230V_PN"
    MONO_PP = "MONO_230V_PP"
    TRI_3F = "TRI_230V_3F"
    TETRA_3PN = "TETRA_3P+N_230_400V"


@dataclass(frozen=True)
class VoltageConfig:
    """Electrical model selected by a connection type.

    Attributes:
        u_v: Nominal voltage in volts.
        three_phase: Whether the ``sqrt(3)`` factors apply.
        use_zero_sequence: Use ``r0``/``x0`` (neutral return path) instead of
            ``r12``/``x12``.
    """

    u_v: float
    three_phase: bool
    use_zero_sequence: bool


@dataclass(frozen=True)
class Client:
    s_kva: float
    name: str = ""


@dataclass(frozen=True)
class Production:
    s_kva: float
    name: str = ""


@dataclass(frozen=True)
class Node:
    """Point of the network (supply, load or production)."""

    id: NodeId
    is_source: bool = False
    connection_type: str = ConnectionType.TETRA_3PN
    clients: Tuple[Client, ...] = ()
    productions: Tuple[Production, ...] = ()
    name: str = ""
    position: Tuple[float, float] | None = None

    @property
    def total_load_kva(self) -> float:
        return sum((c.s_kva or 0.0 for c in self.clients), 0.0)

    @property
    def total_production_kva(self) -> float:
        return sum((p.s_kva or 0.0 for p in self.productions), 0.0)


@dataclass(frozen=True)
class CableType:
    """Catalog entry with per-kilometre impedances."""

    id: str
    r12_ohm_per_km: float
    x12_ohm_per_km: float
    r0_ohm_per_km: float
    x0_ohm_per_km: float
    name: str = ""
    material: str = ""


@dataclass(frozen=True)
class Cable:
    """Undirected link between two nodes."""

    id: Hashable
    node_a: NodeId
    node_b: NodeId
    length_m: float
    type_id: str
    name: str = ""


@dataclass(frozen=True)
class TreeEdge:
    """The cable is an edge of the BFS tree, ``distal`` is the child."""

    distal: NodeId


@dataclass(frozen=True)
class NonTreeEdge:
    """The cable closes a loop or joins a detached fragment.

    ``distal`` is the second endpoint by convention, so the values computed
    for this cable are an approximation.
    """

    distal: NodeId


DistalEdge = Union[TreeEdge, NonTreeEdge]


@dataclass
class ComputeOptions:
    """Options controlling :func:`lvcalc.compute`.

    Attributes:
        cos_phi: Power factor shared by every cable of the calculation.
        compliant_limit: Largest ``|dU%|`` still reported as compliant.
        warning_limit: Largest ``|dU%|`` reported as warning.
        round_digits: Decimals kept on the network-wide totals.
    """

    cos_phi: float = 0.95
    compliant_limit: float = 8.0
    warning_limit: float = 10.0
    round_digits: int = 6


@dataclass(frozen=True)
class CalculatedCable:
    """Input cable annotated with the electrical quantities."""

    id: Hashable
    node_a: NodeId
    node_b: NodeId
    length_m: float
    type_id: str
    current_a: float
    voltage_drop_v: float
    voltage_drop_percent: float
    losses_kw: float
    compliance: Compliance
    distal_node: NodeId
    tree_edge: bool
    name: str = ""


@dataclass(frozen=True)
class CalculationResult:
    """Structured result returned by :func:`lvcalc.compute`."""

    scenario: Scenario
    cables: Tuple[CalculatedCable, ...]
    total_load_kva: float
    total_production_kva: float
    global_losses_kw: float
    max_voltage_drop_percent: float
    compliance: Compliance
    cos_phi: float = 0.95
    unreachable_nodes: Tuple[NodeId, ...] = field(default_factory=tuple)

    def cable(self, cable_id: Hashable) -> CalculatedCable:
        for cable in self.cables:
            if cable.id == cable_id:
                return cable
        raise KeyError(cable_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain mapping (enums as their string values)."""

        data = asdict(self)
        data["scenario"] = self.scenario.value
        data["compliance"] = self.compliance.value
        data["cables"] = [
            {**c, "compliance": c["compliance"].value} for c in data["cables"]
        ]
        data["unreachable_nodes"] = list(self.unreachable_nodes)
        return data

    def to_frame(self):
        """Return the calculated cables as a :class:`pandas.DataFrame`."""

        from .power.results import to_frame

        return to_frame(self)
