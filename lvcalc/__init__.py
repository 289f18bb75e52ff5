"""Voltage drop and losses of low-voltage radial networks."""

from __future__ import annotations

from .compute import Calculator, compute, compute_scenarios
from .types import (
    Cable,
    CableType,
    CalculatedCable,
    CalculationResult,
    Client,
    Compliance,
    ComputeOptions,
    ConnectionType,
    Node,
    Production,
    Scenario,
)
from .utils.validation import NetworkInputError, SourceCountError, UnknownCableTypeError

__all__ = [
    "Cable",
    "CableType",
    "CalculatedCable",
    "CalculationResult",
    "Calculator",
    "Client",
    "Compliance",
    "ComputeOptions",
    "ConnectionType",
    "NetworkInputError",
    "Node",
    "Production",
    "Scenario",
    "SourceCountError",
    "UnknownCableTypeError",
    "compute",
    "compute_scenarios",
]
