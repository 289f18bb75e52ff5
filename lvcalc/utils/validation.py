"""Input validation helpers."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Sequence

from ..registry import SCENARIO_ALIASES
from ..types import Cable, CableType, ComputeOptions, Node, Scenario


class NetworkInputError(ValueError):
    """Input snapshot that cannot be calculated."""


class SourceCountError(NetworkInputError):
    """The node collection does not hold exactly one source."""


class UnknownCableTypeError(NetworkInputError):
    """A cable references a type missing from the catalog."""


def find_source(nodes: Sequence[Node]) -> Node:
    """Return the unique source node."""

    sources = [n for n in nodes if n.is_source]
    if len(sources) != 1:
        raise SourceCountError(
            f"Calculation requires exactly one source node, got {len(sources)}"
        )
    return sources[0]


def index_cable_types(cable_types: Mapping[str, CableType] | Iterable[CableType]) -> Dict[str, CableType]:
    """Return ``{id: CableType}`` from a mapping or an iterable of types."""

    if isinstance(cable_types, Mapping):
        return dict(cable_types)
    return {ct.id: ct for ct in cable_types}


def check_cable_types(cables: Iterable[Cable], catalog: Mapping[str, CableType]) -> None:
    """Raise if any cable references an unknown type."""

    for cable in cables:
        if cable.type_id not in catalog:
            raise UnknownCableTypeError(
                f"Cable type '{cable.type_id}' of cable '{cable.id}' not found in catalog"
            )


def normalise_scenario(scenario: Any) -> Scenario:
    """Accept a :class:`Scenario` or its name (case and spacing insensitive)."""

    if isinstance(scenario, Scenario):
        return scenario
    if not isinstance(scenario, str):
        raise TypeError("scenario must be a Scenario or a string")
    key = scenario.strip().lower().replace(" ", "_")
    try:
        return SCENARIO_ALIASES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown scenario '{scenario}'") from exc


def validate_options(options: ComputeOptions | None, overrides: Dict[str, Any]) -> ComputeOptions:
    """Merge keyword overrides into ``options`` and check their ranges."""

    base = options or ComputeOptions()
    params = {
        "cos_phi": base.cos_phi,
        "compliant_limit": base.compliant_limit,
        "warning_limit": base.warning_limit,
        "round_digits": base.round_digits,
    }
    unknown = set(overrides) - set(params)
    if unknown:
        raise TypeError(f"Unknown options: {', '.join(sorted(unknown))}")
    params.update({k: v for k, v in overrides.items() if v is not None})

    cos_phi = params["cos_phi"]
    if isinstance(cos_phi, bool) or not isinstance(cos_phi, (int, float)):
        raise TypeError("cos_phi must be a number")
    if math.isnan(cos_phi):
        raise ValueError("cos_phi must not be NaN")
    if params["compliant_limit"] > params["warning_limit"]:
        raise ValueError("compliant_limit must not exceed warning_limit")

    return ComputeOptions(
        cos_phi=float(cos_phi),
        compliant_limit=float(params["compliant_limit"]),
        warning_limit=float(params["warning_limit"]),
        round_digits=int(params["round_digits"]),
    )
