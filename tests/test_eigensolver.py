import numpy as np
import pytest
import torch

from numerics.eigensolver import lowest_eigenvalues, solve_eigenvalues
from utils.errors import NumericalError


def test_eigenvalues_sorted_ascending():
    rng = np.random.default_rng(7)
    A = rng.normal(size=(40, 40))
    vals = solve_eigenvalues(A + A.T)
    assert np.all(np.diff(vals) >= 0)


def test_ties_are_preserved():
    vals = solve_eigenvalues(np.diag([2.0, 1.0, 1.0]))
    np.testing.assert_allclose(vals, [1.0, 1.0, 2.0])


def test_complex_hermitian_input():
    H = np.array([[1.0, 1.0j], [-1.0j, 1.0]])
    np.testing.assert_allclose(solve_eigenvalues(H), [0.0, 2.0], atol=1e-12)


def test_non_square_rejected():
    with pytest.raises(NumericalError, match="square"):
        solve_eigenvalues(np.zeros((2, 3)))


def test_asymmetric_rejected():
    with pytest.raises(NumericalError, match="symmetric"):
        solve_eigenvalues(np.array([[1.0, 2.0], [0.0, 1.0]]))


def test_non_finite_rejected():
    with pytest.raises(NumericalError, match="non-finite"):
        solve_eigenvalues(np.array([[np.nan, 0.0], [0.0, 1.0]]))


def test_solver_failure_is_numerical_error(monkeypatch):
    def _fail(_):
        raise torch.linalg.LinAlgError("failed to converge")

    monkeypatch.setattr(torch.linalg, "eigvalsh", _fail)
    with pytest.raises(NumericalError, match="did not converge"):
        solve_eigenvalues(np.eye(3))


def test_lowest_eigenvalues():
    vals = lowest_eigenvalues(np.diag([3.0, -1.0, 2.0]), 2)
    np.testing.assert_allclose(vals, [-1.0, 2.0])
    with pytest.raises(NumericalError, match="requested 4"):
        lowest_eigenvalues(np.eye(3), 4)
