from lvcalc import Calculator, Compliance, Scenario
from lvcalc.io.networks import load


def test_all_scenarios_on_demo_networks():
    """Run every scenario on the bundled networks and check the invariants."""

    calc = Calculator(cos_phi=0.92)
    for name in ("lotissement.json", "pp_feeder.py"):
        data = load(name)
        results = calc.compute_scenarios(data.nodes, data.cables, data.cable_types)
        for scenario, res in results.items():
            print(f"{name} [{scenario.value}] -> losses {res.global_losses_kw} kW, max dU {res.max_voltage_drop_percent} %")
            assert res.scenario is scenario
            assert res.cos_phi == 0.92
            assert res.global_losses_kw >= 0
            assert res.max_voltage_drop_percent >= 0
            assert all(c.losses_kw >= 0 for c in res.cables)
            assert res.compliance in set(Compliance)
            assert not res.unreachable_nodes

        assert results[Scenario.WITHDRAWAL].global_losses_kw > 0
