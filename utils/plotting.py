"""Plotting helpers for subband dispersion results."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import numpy as np

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from numerics.dispersion import DispersionResult
from physics.heterostructure import Heterostructure


def _ensure_parent(out_path: str | Path) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    return out


def render_dispersion(
    result: DispersionResult,
    x_label: str,
    y_label: str,
    y_bounds: tuple[float, float] | None,
    out_path: str | Path,
    x_values: np.ndarray | None = None,
) -> Path:
    """Plot every band of ``result`` on one set of axes and save a PNG.

    Bands are drawn against the sample index unless ``x_values`` is given.
    """
    out = _ensure_parent(out_path)
    x = np.arange(result.num_samples) if x_values is None else np.asarray(x_values, dtype=float)
    if x.shape != (result.num_samples,):
        raise ValueError(f"x_values must have shape ({result.num_samples},), got {x.shape}")

    fig, ax = plt.subplots(figsize=(8, 5))
    try:
        for b in range(result.num_bands):
            ax.plot(x, result.band(b), lw=1.5, label=f"E{b}")
        if y_bounds is not None:
            ax.set_ylim(float(y_bounds[0]), float(y_bounds[1]))
        ax.set_xlabel(x_label)
        ax.set_ylabel(y_label)
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=8)
        fig.tight_layout()
        fig.savefig(out, dpi=180)
    finally:
        plt.close(fig)
    return out


def plot_band_profile(structure: Heterostructure, out_path: str | Path) -> Path:
    """Conduction-band offset per lattice site with the well highlighted."""
    out = _ensure_parent(out_path)
    offsets = np.array(
        [
            np.mean([structure.regions[r].energy_offset for r in regions])
            for regions in structure.site_regions
        ]
    )
    z = np.arange(structure.site_count) * structure.lattice_spacing

    fig, ax = plt.subplots(figsize=(8, 4))
    try:
        ax.step(z, offsets, where="mid", color="black", lw=1.5)
        well = structure.well
        if well.width > 0:
            ax.axvspan(
                well.start * structure.lattice_spacing,
                (well.end - 1) * structure.lattice_spacing,
                color="tab:blue",
                alpha=0.15,
                label=well.label,
            )
            ax.legend(fontsize=8)
        ax.set_xlabel("z (Angstrom)")
        ax.set_ylabel("Band offset (eV)")
        ax.set_title("Conduction Band Profile")
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        fig.savefig(out, dpi=180)
    finally:
        plt.close(fig)
    return out
