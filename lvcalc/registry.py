"""Dispatch registries for connection types and scenarios."""

from .types import ConnectionType, Scenario, VoltageConfig

VOLTAGE_REGISTRY = {
    ConnectionType.MONO_PN: VoltageConfig(u_v=230.0, three_phase=False, use_zero_sequence=True),
    ConnectionType.MONO_PP: VoltageConfig(u_v=230.0, three_phase=False, use_zero_sequence=False),
    ConnectionType.TRI_3F: VoltageConfig(u_v=230.0, three_phase=True, use_zero_sequence=False),
    ConnectionType.TETRA_3PN: VoltageConfig(u_v=400.0, three_phase=True, use_zero_sequence=False),
}

# Spellings found in saved projects.
CONNECTION_ALIASES = {
    "TÉTRA_3P+N_230_400V": ConnectionType.TETRA_3PN,
}

DEFAULT_CONNECTION = ConnectionType.TETRA_3PN

SCENARIO_ALIASES = {
    "withdrawal": Scenario.WITHDRAWAL,
    "prelevement": Scenario.WITHDRAWAL,
    "prélèvement": Scenario.WITHDRAWAL,
    "production": Scenario.PRODUCTION,
    "mixed": Scenario.MIXED,
    "mixte": Scenario.MIXED,
}
