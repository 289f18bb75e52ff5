"""Default catalog of low-voltage cable types.

Values are typical 4-core cables at operating temperature, in ohm/km.
``r12``/``x12`` are the positive-sequence values, ``r0``/``x0`` the
zero-sequence values used for phase-to-neutral circuits.
"""

from __future__ import annotations

from typing import Dict

from .types import CableType

DEFAULT_CABLE_TYPES = (
    # Copper
    CableType("cu-4x16", 1.150, 0.080, 4.600, 0.320, name="Cu 4x16mm²", material="CUIVRE"),
    CableType("cu-4x25", 0.727, 0.078, 2.908, 0.312, name="Cu 4x25mm²", material="CUIVRE"),
    CableType("cu-4x35", 0.524, 0.076, 2.096, 0.304, name="Cu 4x35mm²", material="CUIVRE"),
    CableType("cu-4x50", 0.387, 0.074, 1.548, 0.296, name="Cu 4x50mm²", material="CUIVRE"),
    CableType("cu-4x95", 0.193, 0.072, 0.772, 0.288, name="Cu 4x95mm²", material="CUIVRE"),
    CableType("cu-4x150", 0.124, 0.070, 0.496, 0.280, name="Cu 4x150mm²", material="CUIVRE"),
    # Aluminium
    CableType("al-4x50", 0.641, 0.074, 2.564, 0.296, name="Al 4x50mm²", material="ALUMINIUM"),
    CableType("al-4x95", 0.320, 0.072, 1.280, 0.288, name="Al 4x95mm²", material="ALUMINIUM"),
    CableType("al-4x150", 0.206, 0.070, 0.824, 0.280, name="Al 4x150mm²", material="ALUMINIUM"),
    CableType("al-3x240+95", 0.125, 0.069, 0.500, 0.276, name="Al 3x240+95mm²", material="ALUMINIUM"),
)


def get_cable_types() -> Dict[str, CableType]:
    """Return a fresh ``{id: CableType}`` mapping of the default catalog."""

    return {ct.id: ct for ct in DEFAULT_CABLE_TYPES}
