"""Run the daily root-zone water balance and plot storage and percolation.

Usage:
  .venv/bin/python scripts/plot_water_balance.py --out results/figures
  .venv/bin/python scripts/plot_water_balance.py --forcings forcings.csv

Forcings CSV must have precipitation_mm and et0_mm columns and may have a
date column. Without --forcings a 30-day loam example is used (rain on
days 5, 15 and 25, constant ET0 of 3.5 mm).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from soilsim.core.logging_setup import configure_logging
from soilsim.physics.water_balance import WaterBalanceTracker

logger = logging.getLogger(__name__)


def _ensure_matplotlib():
    try:
        import matplotlib.pyplot as plt  # noqa: F401
    except ImportError as e:  # pragma: no cover
        raise SystemExit(
            "matplotlib is required for plotting. Install with: pip install 'soilsim[plot]'\n"
            f"Original error: {e}"
        )


def _example_forcings(n_days: int = 30) -> pd.DataFrame:
    precip = np.zeros(n_days)
    precip[[4, 14, 24]] = [20.0, 10.0, 30.0]
    return pd.DataFrame(
        {"precipitation_mm": precip, "et0_mm": np.full(n_days, 3.5)},
        index=pd.RangeIndex(1, n_days + 1, name="day"),
    )


def _load_forcings(path: Optional[Path]) -> pd.DataFrame:
    if path is None:
        return _example_forcings()
    df = pd.read_csv(path)
    if "date" in df.columns:
        df["date"] = pd.to_datetime(df["date"])
        df = df.set_index("date")
    return df


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot daily root-zone water balance")
    parser.add_argument("--forcings", type=Path, default=None, help="CSV with precipitation_mm, et0_mm")
    parser.add_argument("--fc", type=float, default=0.34, help="Field capacity (m³/m³)")
    parser.add_argument("--wp", type=float, default=0.18, help="Wilting point (m³/m³)")
    parser.add_argument("--root-depth", type=float, default=600.0, help="Root zone depth (mm)")
    parser.add_argument(
        "--initial-fraction",
        type=float,
        default=0.5,
        help="Initial storage as fraction of available water (0 = WP, 1 = FC)",
    )
    parser.add_argument("--out", type=Path, default=Path("results/figures"), help="Output folder")
    args = parser.parse_args()

    configure_logging()
    _ensure_matplotlib()
    import matplotlib.pyplot as plt

    forcings = _load_forcings(args.forcings)
    initial = (args.wp + args.initial_fraction * (args.fc - args.wp)) * args.root_depth

    results = WaterBalanceTracker().run_frame(
        forcings, args.fc, args.wp, args.root_depth, initial
    )

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8, 6), sharex=True, constrained_layout=True)
    ax1.plot(results.index, results["storage_mm"], linewidth=2)
    ax1.axhline(args.fc * args.root_depth, color="tab:blue", linestyle=":", label="Field capacity")
    ax1.axhline(args.wp * args.root_depth, color="tab:red", linestyle=":", label="Wilting point")
    ax1.set_ylabel("Soil Moisture (mm)")
    ax1.set_title("Daily Soil Water Balance")
    ax1.legend(loc="best")
    ax2.bar(results.index, results["percolation_mm"])
    ax2.set_ylabel("Percolation (mm)")
    ax2.set_xlabel(results.index.name or "Day")

    args.out.mkdir(parents=True, exist_ok=True)
    out_path = args.out / "water_balance.png"
    fig.savefig(out_path, dpi=200)
    plt.close(fig)
    results.to_csv(args.out / "water_balance.csv")
    logger.info(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
