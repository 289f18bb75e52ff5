"""Sweep power factor values and plot the resulting network metrics."""

import matplotlib.pyplot as plt
import numpy as np
import scienceplots  # noqa: F401

from lvcalc import compute

plt.style.use(["science", "no-latex"])


def plot_cos_phi(
    nodes,
    cables,
    cable_types,
    scenario,
    cos_phi_min: float = 0.80,
    cos_phi_max: float = 1.0,
    cos_phi_step: float = 0.05,
    show: bool = True,
    filename: str = "figures/Plot_cos_phi.pdf",
):
    """Run the calculation for several ``cos_phi`` values and optionally plot.

    Parameters
    ----------
    nodes, cables, cable_types, scenario
        Inputs forwarded to :func:`lvcalc.compute`.
    cos_phi_min, cos_phi_max : float, optional
        Bounds of the scanned range, clipped to ``(0, 1]``.
    cos_phi_step : float, optional
        Increment between successive values.
    show : bool, optional
        If ``True`` draw, save and display the plot.
    filename : str, optional
        Destination path for the saved figure.

    Returns
    -------
    dict
        Sampled ``cos_phi`` values with the worst voltage deviation (%) and
        the global losses (kW) of each run.
    """

    values = np.arange(cos_phi_min, cos_phi_max + cos_phi_step / 2, cos_phi_step)
    values = values[(values > 0) & (values <= 1.0 + 1e-12)]
    values = np.minimum(np.round(values, 12), 1.0)

    max_drop, losses = [], []
    for cos_phi in values:
        res = compute(nodes, cables, cable_types, scenario, cos_phi=float(cos_phi))
        max_drop.append(res.max_voltage_drop_percent)
        losses.append(res.global_losses_kw)

    if show:
        fig, ax_drop = plt.subplots(figsize=(8, 5))
        ax_drop.plot(values, max_drop, marker="o", linestyle="-", color="blue", label="Max voltage drop")
        ax_drop.axhline(8.0, linestyle=":", color="orange")
        ax_drop.axhline(10.0, linestyle=":", color="red")
        ax_drop.set_xlabel("$\\cos\\varphi$", fontsize="xx-large")
        ax_drop.set_ylabel("Voltage drop (%)", fontsize="x-large")

        ax_loss = ax_drop.twinx()
        ax_loss.plot(values, losses, marker="x", linestyle="--", color="green", label="Losses")
        ax_loss.set_ylabel("Losses (kW)", fontsize="x-large")

        handles = ax_drop.get_legend_handles_labels()[0] + ax_loss.get_legend_handles_labels()[0]
        ax_drop.legend(
            handles,
            [h.get_label() for h in handles],
            loc="upper center",
            bbox_to_anchor=(0.5, -0.15),
            ncol=2,
            frameon=False,
        )
        ax_drop.grid(True)
        fig.tight_layout(rect=[0, 0.05, 1, 1])
        fig.savefig(filename, bbox_inches="tight")
        plt.show()
        plt.close(fig)

    return {
        "cos_phi": values.tolist(),
        "max_voltage_drop_percent": max_drop,
        "losses_kw": losses,
    }
