"""Plot Green-Ampt cumulative infiltration curves for contrasting soils.

Usage:
  .venv/bin/python scripts/plot_infiltration_curve.py --out results/figures
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from soilsim.core.constants import UNIT_CONVERSIONS
from soilsim.core.logging_setup import configure_logging
from soilsim.physics.infiltration import GreenAmptParameters, InfiltrationSolver

logger = logging.getLogger(__name__)

# Representative (Ks [m/s], psi [m], delta_theta)
SOILS = {
    "Sandy Loam": GreenAmptParameters(ks=2.9e-5, psi=0.11, delta_theta=0.21),
    "Silty Clay": GreenAmptParameters(ks=5.0e-7, psi=0.29, delta_theta=0.18),
}


def _ensure_matplotlib():
    try:
        import matplotlib.pyplot as plt  # noqa: F401
    except ImportError as e:  # pragma: no cover
        raise SystemExit(
            "matplotlib is required for plotting. Install with: pip install 'soilsim[plot]'\n"
            f"Original error: {e}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot Green-Ampt infiltration curves")
    parser.add_argument("--hours", type=float, default=2.0, help="Duration (h)")
    parser.add_argument("--interval", type=float, default=60.0, help="Time between points (s)")
    parser.add_argument(
        "--texture",
        action="append",
        default=[],
        help="Add a USDA texture class from the Rawls table (repeatable), e.g. 'silt loam'",
    )
    parser.add_argument("--delta-theta", type=float, default=0.2, help="Moisture deficit for --texture soils")
    parser.add_argument("--out", type=Path, default=Path("results/figures"), help="Output folder")
    args = parser.parse_args()

    configure_logging()
    _ensure_matplotlib()
    import matplotlib.pyplot as plt

    soils = dict(SOILS)
    for texture in args.texture:
        soils[texture.title()] = GreenAmptParameters.from_texture_class(texture, args.delta_theta)

    t = np.arange(0.0, args.hours * 3600 + args.interval / 2, args.interval)
    solver = InfiltrationSolver()

    fig, ax = plt.subplots(figsize=(7, 5), constrained_layout=True)
    for name, params in soils.items():
        result = solver.solve_parameters(params, t)
        if not result.all_converged:
            logger.warning(f"{name}: {int(np.sum(~result.converged))} points did not converge")
        ax.plot(t / 60, result.cumulative_infiltration * UNIT_CONVERSIONS["m_to_mm"], linewidth=2, label=name)

    ax.set_title("Green-Ampt Cumulative Infiltration")
    ax.set_xlabel("Time (minutes)")
    ax.set_ylabel("Cumulative Infiltration (mm)")
    ax.legend(loc="lower right")
    ax.grid(True)

    args.out.mkdir(parents=True, exist_ok=True)
    out_path = args.out / "infiltration_curve.png"
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    logger.info(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
