import numpy as np
import pytest

import numerics.dispersion as dispersion
from numerics.dispersion import run_sweep, wavevector_range
from physics.heterostructure import quantum_well
from physics.materials import GAAS, algaas
from physics.units import UnitSystem
from utils.errors import ConfigurationError, NumericalError


UNITS = UnitSystem()
HBAR = UNITS.reduced_planck_constant()
M_E = UNITS.electron_mass()


def _well(barrier_sites: int = 100, well_width: float = 69.0):
    return quantum_well(3.0, barrier_sites, well_width, algaas(0.3), GAAS, M_E)


def test_wavevector_range_is_closed():
    ks = wavevector_range(0.0, 0.05, 100)
    assert ks.shape == (100,)
    assert ks[0] == 0.0
    assert ks[-1] == pytest.approx(0.05)


def test_wavevector_range_rejects_single_sample():
    with pytest.raises(ConfigurationError, match="samples"):
        wavevector_range(0.0, 0.05, 1)


def test_reference_quantum_well():
    result = run_sweep(wavevector_range(0.0, 0.05, 100), _well(), HBAR)
    assert result.eigenvalues.shape == (2, 100)
    e0, e1 = result.eigenvalues[:, 0]
    assert 0.0 < e0 < 1.25
    assert 0.0 < e1 < 1.25
    assert e0 < e1
    # ground state is bound below the Al0.3Ga0.7As barrier
    assert e0 < 0.375
    assert np.all(np.diff(result.band(0)) > 0)


def test_sweep_is_deterministic():
    ks = wavevector_range(0.0, 0.05, 7)
    r1 = run_sweep(ks, _well(20), HBAR)
    r2 = run_sweep(ks, _well(20), HBAR)
    assert np.array_equal(r1.eigenvalues, r2.eigenvalues)


def test_result_is_read_only():
    result = run_sweep(wavevector_range(0.0, 0.05, 3), _well(20), HBAR)
    with pytest.raises(ValueError):
        result.eigenvalues[0, 0] = 1.0


def test_ground_state_decreases_with_well_width():
    base = _well(100)
    ground = []
    for well_sites in (10, 15, 20, 25, 30, 35):
        result = run_sweep([0.0], base.with_well_sites(well_sites), HBAR)
        ground.append(result.eigenvalues[0, 0])
    assert np.all(np.diff(ground) < 0)


def test_parallel_sweep_matches_serial():
    ks = wavevector_range(0.0, 0.05, 6)
    serial = run_sweep(ks, _well(30), HBAR, workers=1)
    parallel = run_sweep(ks, _well(30), HBAR, workers=2)
    np.testing.assert_allclose(parallel.eigenvalues, serial.eigenvalues, rtol=1e-12)


def test_failed_sample_aborts_sweep(monkeypatch):
    real = dispersion.solve_sample

    def _flaky(k, structure, hbar, num_bands):
        if k > 0.02:
            raise NumericalError("did not converge")
        return real(k, structure, hbar, num_bands)

    monkeypatch.setattr(dispersion, "solve_sample", _flaky)
    with pytest.raises(NumericalError):
        run_sweep(wavevector_range(0.0, 0.05, 5), _well(20), HBAR)


def test_too_many_bands_rejected():
    s = quantum_well(3.0, 2, 3.0, algaas(0.3), GAAS, M_E)
    with pytest.raises(ConfigurationError, match="num_bands"):
        run_sweep([0.0], s, HBAR, num_bands=s.site_count + 1)


def test_failed_sample_aborts_parallel_sweep():
    # a NaN hbar makes every matrix non-finite inside the workers
    with pytest.raises(NumericalError, match="non-finite"):
        run_sweep(wavevector_range(0.0, 0.05, 4), _well(20), float("nan"), workers=2)
