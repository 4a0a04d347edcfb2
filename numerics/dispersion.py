"""Wavevector sweep collecting the lowest subband energies."""

from __future__ import annotations

import logging
import multiprocessing
from dataclasses import dataclass
from functools import partial

import numpy as np

from numerics.eigensolver import lowest_eigenvalues
from numerics.hamiltonian import hamiltonian_matrix
from physics.heterostructure import Heterostructure
from utils.errors import ConfigurationError


@dataclass(frozen=True)
class DispersionResult:
    wavevectors: np.ndarray
    eigenvalues: np.ndarray  # [num_bands, N]

    @property
    def num_bands(self) -> int:
        return self.eigenvalues.shape[0]

    @property
    def num_samples(self) -> int:
        return self.eigenvalues.shape[1]

    def band(self, index: int) -> np.ndarray:
        return self.eigenvalues[index]


def wavevector_range(k_min: float, k_max: float, samples: int) -> np.ndarray:
    """Closed interval [k_min, k_max] with ``samples`` equally spaced points."""
    if int(samples) != samples or samples < 2:
        raise ConfigurationError("sweep.samples must be an integer >= 2")
    if k_max < k_min:
        raise ConfigurationError("sweep.k_max must be >= sweep.k_min")
    return np.linspace(float(k_min), float(k_max), int(samples))


def solve_sample(k: float, structure: Heterostructure, hbar: float, num_bands: int) -> np.ndarray:
    H = hamiltonian_matrix(structure, k, hbar)
    return lowest_eigenvalues(H, num_bands)


def run_sweep(
    wavevectors,
    structure: Heterostructure,
    hbar: float,
    num_bands: int = 2,
    workers: int = 1,
    logger: logging.Logger | None = None,
) -> DispersionResult:
    """Solve every wavevector sample independently.

    Any failing sample raises and aborts the sweep. With ``workers > 1`` the
    samples are mapped over a process pool and gathered by column index.
    """
    ks = np.asarray(wavevectors, dtype=float)
    if ks.ndim != 1 or ks.size == 0:
        raise ConfigurationError("wavevectors must be a non-empty 1D sequence")
    if num_bands <= 0:
        raise ConfigurationError("num_bands must be positive")
    if num_bands > structure.site_count:
        raise ConfigurationError(f"num_bands={num_bands} exceeds the {structure.site_count} lattice sites")
    if workers <= 0:
        raise ConfigurationError("workers must be positive")

    log = logger or logging.getLogger("qwell_dispersion")
    grid = np.empty((num_bands, ks.size), dtype=float)
    solve = partial(solve_sample, structure=structure, hbar=hbar, num_bands=num_bands)

    if workers == 1:
        for c, k in enumerate(ks):
            grid[:, c] = solve(float(k))
            log.debug("sample=%d k=%.6f E=%s", c, k, np.array2string(grid[:, c], precision=6))
    else:
        with multiprocessing.Pool(processes=workers) as pool:
            columns = pool.map(solve, [float(k) for k in ks])
        for c, vals in enumerate(columns):
            grid[:, c] = vals
        log.debug("gathered %d samples from %d workers", ks.size, workers)

    ks = ks.copy()
    ks.setflags(write=False)
    grid.setflags(write=False)
    return DispersionResult(wavevectors=ks, eigenvalues=grid)
