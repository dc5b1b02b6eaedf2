"""Simulate a day of heat moving into a uniformly cool soil and plot the profiles.

Usage:
  .venv/bin/python scripts/plot_temperature_profile.py --out results/figures

A hot surface (25 °C) is applied to a 2 m profile at 15 °C. The profile is
advanced in 30-minute steps and plotted at 6, 12 and 24 hours.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from soilsim.core.constants import UNIT_CONVERSIONS
from soilsim.core.logging_setup import configure_logging
from soilsim.physics.heat_diffusion import DiffusionProfileSolver, max_stable_timestep

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = UNIT_CONVERSIONS["seconds_per_hour"]


def _ensure_matplotlib():
    try:
        import matplotlib.pyplot as plt  # noqa: F401
    except ImportError as e:  # pragma: no cover
        raise SystemExit(
            "matplotlib is required for plotting. Install with: pip install 'soilsim[plot]'\n"
            f"Original error: {e}"
        )


def _steps_to_reach(target_s: float, elapsed_s: float, dt: float) -> int:
    """Number of dt steps from elapsed_s to target_s, never fewer than one"""
    return max(1, int(round((target_s - elapsed_s) / dt)))


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot soil temperature profile evolution")
    parser.add_argument("--dz", type=float, default=0.1, help="Node spacing (m)")
    parser.add_argument("--depth", type=float, default=2.0, help="Profile depth (m)")
    parser.add_argument("--diffusivity", type=float, default=4e-7, help="Thermal diffusivity (m²/s)")
    parser.add_argument("--dt", type=float, default=1800.0, help="Time step (s)")
    parser.add_argument("--surface", type=float, default=25.0, help="Surface temperature (°C)")
    parser.add_argument("--initial", type=float, default=15.0, help="Initial uniform temperature (°C)")
    parser.add_argument("--out", type=Path, default=Path("results/figures"), help="Output folder")
    args = parser.parse_args()

    configure_logging()
    _ensure_matplotlib()
    import matplotlib.pyplot as plt

    z = np.arange(1, int(round(args.depth / args.dz)) + 1) * args.dz
    initial = np.full(z.size, args.initial)
    bottom = initial[-1]

    limit = max_stable_timestep(args.diffusivity, args.dz)
    if args.dt > limit:
        raise SystemExit(
            f"Simulation would be unstable: dt={args.dt:g}s exceeds {limit:g}s. Decrease dt or increase dz."
        )

    solver = DiffusionProfileSolver()
    fig, ax = plt.subplots(figsize=(7, 5), constrained_layout=True)
    ax.plot(initial, -z, "k--", linewidth=1.5, label="Initial profile")

    profile = initial
    elapsed_s = 0.0
    for target_h in (6, 12, 24):
        steps = _steps_to_reach(target_h * SECONDS_PER_HOUR, elapsed_s, args.dt)
        result = solver.advance(profile, args.surface, bottom, args.diffusivity, args.dt, args.dz, steps)
        profile = result.profile
        elapsed_s += steps * args.dt
        ax.plot(profile, -z, linewidth=2, label=f"{elapsed_s / SECONDS_PER_HOUR:g} hours")

    ax.set_title("Soil Temperature Profile Evolution Over 24 Hours")
    ax.set_xlabel("Temperature (°C)")
    ax.set_ylabel("Depth (m)")
    ax.legend(loc="lower right")
    ax.grid(True)

    args.out.mkdir(parents=True, exist_ok=True)
    out_path = args.out / "temperature_profile.png"
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    logger.info(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
