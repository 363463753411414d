"""
Tests for covariance + eigendecomposition

Covers:
1. Decreasing eigenvalue order and reconstruction V·diag(λ)·Vᵗ ≈ C
2. Clamping of negative eigenvalues
3. DegenerateSpectrum / DecompositionFailure
4. Covariance centered on the neighborhood centroid
"""

import numpy as np
import pytest
import logging

from covariance_features.errors import DecompositionFailure, DegenerateSpectrum
from covariance_features.features import CovarianceBuilder, Neighborhood, SpectralDecomposer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def test_eigenvalues_sorted_and_reconstruct():
    """λ0 >= λ1 >= λ2 >= 0 and the spectrum reconstructs the matrix"""
    rng = np.random.default_rng(42)
    decomposer = SpectralDecomposer()

    for _ in range(50):
        points = rng.normal(size=(20, 3)) * rng.uniform(0.1, 10, size=3)
        cov = CovarianceBuilder.covariance(points)
        spectrum = decomposer.decompose(cov)

        values = spectrum.values
        assert values[0] >= values[1] >= values[2] >= 0, f"Bad order: {values}"
        np.testing.assert_allclose(spectrum.reconstruct(), cov, atol=1e-9)
        np.testing.assert_allclose(np.linalg.norm(spectrum.vectors, axis=0), 1.0)
        assert spectrum.total == pytest.approx(values.sum())

    logger.info("✅ Spectrum order/reconstruction test passed")


def test_eigenvectors_follow_eigenvalues():
    """Column i of vectors belongs to values[i]"""
    cov = np.diag([1.0, 9.0, 4.0])
    spectrum = SpectralDecomposer().decompose(cov)

    np.testing.assert_allclose(spectrum.values, [9.0, 4.0, 1.0])
    np.testing.assert_allclose(np.abs(spectrum.e1), [0, 1, 0], atol=1e-12)
    np.testing.assert_allclose(np.abs(spectrum.e2), [0, 0, 1], atol=1e-12)
    np.testing.assert_allclose(np.abs(spectrum.e3), [1, 0, 0], atol=1e-12)


def test_negative_eigenvalues_clamped():
    """Numerical noise below zero becomes exactly 0"""
    cov = np.diag([4.0, 1.0, -1e-12])
    spectrum = SpectralDecomposer().decompose(cov)

    assert spectrum.values[2] == 0.0
    assert spectrum.total == pytest.approx(5.0)


def test_degenerate_spectrum_raises():
    """All-zero covariance (coincident points) is a hard error"""
    points = np.tile([1.0, 2.0, 3.0], (10, 1))
    cov = CovarianceBuilder.covariance(points)

    with pytest.raises(DegenerateSpectrum) as excinfo:
        SpectralDecomposer().decompose(cov, point_id=7)

    assert excinfo.value.point_id == 7


def test_non_finite_matrix_raises():
    cov = np.eye(3)
    cov[0, 1] = cov[1, 0] = np.nan

    with pytest.raises(DecompositionFailure):
        SpectralDecomposer().decompose(cov)


def test_solver_failure_raises(monkeypatch):
    """LinAlgError from the solver is surfaced as DecompositionFailure"""
    def failing_eigh(matrix):
        raise np.linalg.LinAlgError("Eigenvalues did not converge")

    monkeypatch.setattr(np.linalg, "eigh", failing_eigh)

    with pytest.raises(DecompositionFailure, match="did not converge"):
        SpectralDecomposer().decompose(np.eye(3), point_id=3)


def test_covariance_uses_centroid():
    """Shifting the neighborhood does not change the covariance"""
    rng = np.random.default_rng(1)
    points = rng.normal(size=(30, 3))
    shifted = points + np.array([5e5, 5.8e6, 120.0])  # PL-2000 like offsets

    cov = CovarianceBuilder.covariance(points)
    cov_shifted = CovarianceBuilder.covariance(shifted)

    np.testing.assert_allclose(cov_shifted, cov, atol=1e-6)
    np.testing.assert_allclose(cov, np.cov(points.T), atol=1e-12)
    np.testing.assert_array_equal(cov, cov.T)


def test_coincident_points_give_exact_zero_covariance():
    """Identical non-representable coordinates -> covariance exactly 0"""
    rng = np.random.default_rng(11)

    for _ in range(20):
        p = rng.uniform(40, 45, 3)
        cov = CovarianceBuilder.covariance(np.tile(p, (10, 1)))
        assert np.all(cov == 0), f"Max |cov| = {np.abs(cov).max()}"

    p = np.array([523456.789, 5812345.678, 123.456])  # PL-2000
    cov = CovarianceBuilder.covariance(np.tile(p, (7, 1)))
    assert np.all(cov == 0)

    with pytest.raises(DegenerateSpectrum):
        SpectralDecomposer().decompose(cov)


def test_covariance_small_inputs():
    assert np.array_equal(CovarianceBuilder.covariance(np.empty((0, 3))), np.zeros((3, 3)))
    assert np.array_equal(CovarianceBuilder.covariance(np.ones((1, 3))), np.zeros((3, 3)))


def test_query_point_trimmed_in_knn_mode():
    """The extra (k+1-th) neighbor is the query point and is dropped"""
    nb = Neighborhood(query_id=4, ids=[4, 1, 2, 3], includes_query=True)
    assert CovarianceBuilder.neighbor_ids(nb) == [1, 2, 3]

    # Query missing (duplicate positions) -> farthest candidate dropped
    nb = Neighborhood(query_id=4, ids=[5, 1, 2, 3], includes_query=True)
    assert CovarianceBuilder.neighbor_ids(nb) == [5, 1, 2]

    # Radius / optimal neighborhoods are used as-is
    nb = Neighborhood(query_id=4, ids=[4, 1, 2])
    assert CovarianceBuilder.neighbor_ids(nb) == [4, 1, 2]
