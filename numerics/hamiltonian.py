"""Tight-binding assembly of the effective-mass Hamiltonian."""

from __future__ import annotations

import numpy as np

from physics.heterostructure import Heterostructure


class LatticeModel:
    """Sparse mapping ``(row, col) -> amplitude`` for a fixed number of sites.

    Amplitudes added to the same pair accumulate.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("LatticeModel size must be positive")
        self.size = int(size)
        self.amplitudes: dict[tuple[int, int], complex] = {}

    def add(self, amplitude: complex, row: int, col: int, hermitian_conjugate: bool = False) -> None:
        for idx in (row, col):
            if not 0 <= idx < self.size:
                raise IndexError(f"site index {idx} outside [0, {self.size})")
        key = (row, col)
        self.amplitudes[key] = self.amplitudes.get(key, 0.0) + complex(amplitude)
        if hermitian_conjugate:
            key_hc = (col, row)
            self.amplitudes[key_hc] = self.amplitudes.get(key_hc, 0.0) + complex(amplitude).conjugate()

    def __getitem__(self, key: tuple[int, int]) -> complex:
        return self.amplitudes.get(key, 0.0)

    def __len__(self) -> int:
        return len(self.amplitudes)

    def is_hermitian(self) -> bool:
        return all(self[(j, i)] == np.conj(v) for (i, j), v in self.amplitudes.items())

    def to_dense(self) -> np.ndarray:
        """Dense matrix; real dtype when every amplitude is real."""
        mat = np.zeros((self.size, self.size), dtype=np.complex128)
        for (i, j), v in self.amplitudes.items():
            mat[i, j] = v
        if not np.any(mat.imag):
            return mat.real.copy()
        return mat


def onsite_energies(structure: Heterostructure, wavevector: float, hbar: float) -> np.ndarray:
    """Diagonal E_r + 2 t_r + tp_r k^2, averaged over the regions meeting at interface sites."""
    a = structure.lattice_spacing
    k2 = wavevector * wavevector
    per_region = [
        region.energy_offset + 2.0 * region.hopping(hbar, a) + region.kinetic_prefactor(hbar) * k2
        for region in structure.regions
    ]
    return np.array(
        [sum(per_region[r] for r in regions) / len(regions) for regions in structure.site_regions],
        dtype=float,
    )


def bond_hoppings(structure: Heterostructure, hbar: float) -> np.ndarray:
    a = structure.lattice_spacing
    t = [region.hopping(hbar, a) for region in structure.regions]
    return np.array([-t[r] for r in structure.bond_regions], dtype=float)


def build_hamiltonian(structure: Heterostructure, wavevector: float, hbar: float) -> LatticeModel:
    model = LatticeModel(structure.site_count)
    for n, e in enumerate(onsite_energies(structure, wavevector, hbar)):
        model.add(e, n, n)
    for n, t in enumerate(bond_hoppings(structure, hbar)):
        model.add(t, n + 1, n, hermitian_conjugate=True)
    return model


def hamiltonian_matrix(structure: Heterostructure, wavevector: float, hbar: float) -> np.ndarray:
    return build_hamiltonian(structure, wavevector, hbar).to_dense()
