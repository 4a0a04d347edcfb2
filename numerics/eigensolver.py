"""Dense Hermitian eigensolver."""

from __future__ import annotations

import numpy as np
import torch

from utils.errors import NumericalError


def _check_hermitian(mat: np.ndarray, rtol: float) -> None:
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise NumericalError(f"matrix must be square, got shape {mat.shape}")
    if mat.shape[0] == 0:
        raise NumericalError("matrix is empty")
    if not np.all(np.isfinite(mat)):
        raise NumericalError("matrix has non-finite entries")
    scale = float(np.max(np.abs(mat)))
    asym = float(np.max(np.abs(mat - mat.conj().T)))
    if asym > rtol * max(scale, 1.0):
        raise NumericalError(f"matrix is not symmetric (max asymmetry {asym:.3e})")


def solve_eigenvalues(matrix, rtol: float = 1e-10) -> np.ndarray:
    """Eigenvalues of a real symmetric (or complex Hermitian) matrix, ascending."""
    mat = np.asarray(matrix)
    if not np.iscomplexobj(mat):
        mat = mat.astype(np.float64, copy=False)
    _check_hermitian(mat, rtol)

    H = torch.from_numpy(np.ascontiguousarray(mat))
    if H.is_complex():
        H = H.to(torch.complex128)
    try:
        vals = torch.linalg.eigvalsh(H)
    except torch.linalg.LinAlgError as exc:
        raise NumericalError(f"eigensolver did not converge: {exc}") from exc

    vals, _ = torch.sort(vals)
    out = vals.numpy()
    if not np.all(np.isfinite(out)):
        raise NumericalError("eigensolver returned non-finite eigenvalues")
    return out


def lowest_eigenvalues(matrix, count: int) -> np.ndarray:
    vals = solve_eigenvalues(matrix)
    if vals.size < count:
        raise NumericalError(f"requested {count} eigenvalues from a {vals.size}-dimensional matrix")
    return vals[:count]
