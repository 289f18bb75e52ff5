"""Three-bus 0.4 kV feeder built with pandapower.

Bus 0 is fed by the external grid, bus 1 holds two loads and bus 2 a PV
static generator larger than its local load.
"""

import pandapower as pp


def build() -> pp.pandapowerNet:
    net = pp.create_empty_network(name="pp_feeder")
    b0 = pp.create_bus(net, vn_kv=0.4, name="Poste")
    b1 = pp.create_bus(net, vn_kv=0.4, name="Coffret 1")
    b2 = pp.create_bus(net, vn_kv=0.4, name="Coffret 2")
    pp.create_ext_grid(net, bus=b0, vm_pu=1.0)

    for frm, to, length_km in [(b0, b1, 0.150), (b1, b2, 0.100)]:
        pp.create_line_from_parameters(
            net,
            frm,
            to,
            length_km=length_km,
            r_ohm_per_km=0.206,
            x_ohm_per_km=0.070,
            c_nf_per_km=0.0,
            max_i_ka=0.25,
            r0_ohm_per_km=0.824,
            x0_ohm_per_km=0.280,
            c0_nf_per_km=0.0,
        )

    pp.create_load(net, bus=b1, p_mw=0.012, q_mvar=0.004, name="Maison 1")
    pp.create_load(net, bus=b1, p_mw=0.008, q_mvar=0.0, sn_mva=0.009, name="Maison 2")
    pp.create_load(net, bus=b2, p_mw=0.006, q_mvar=0.0, name="Atelier")
    pp.create_sgen(net, bus=b2, p_mw=0.030, q_mvar=0.0, name="PV")
    return net


if __name__ == "__main__":
    net = build()
    print(net.line[["from_bus", "to_bus", "length_km", "r_ohm_per_km", "x_ohm_per_km"]])
