"""Tests for dmvnorm."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.stats import multivariate_normal, norm

from pydmvnorm.dmvnorm import (
    DMVNormControl,
    InvalidCovariance,
    dmvnorm,
    dmvnorm_reference,
)


class TestDMVNorm:
    def test_against_scipy(self, points_3d, cov_3x3, method):
        mean = np.array([0.5, -1.0, 2.0])
        dens = dmvnorm(points_3d, mean, cov_3x3, control=DMVNormControl(method=method))
        ref = multivariate_normal.pdf(points_3d, mean=mean, cov=cov_3x3)
        np.testing.assert_allclose(dens, ref, rtol=1e-10)

    def test_log_against_scipy(self, points_3d, cov_3x3):
        mean = np.array([0.5, -1.0, 2.0])
        logd = dmvnorm(points_3d, mean, cov_3x3, log=True)
        ref = multivariate_normal.logpdf(points_3d, mean=mean, cov=cov_3x3)
        np.testing.assert_allclose(logd, ref, rtol=1e-12)

    def test_log_finite_far_from_mean(self):
        """The log density stays finite where the density underflows."""
        x = np.array([[60.0, 0.0]])
        logd = dmvnorm(x, np.zeros(2), np.eye(2), log=True)
        assert np.isfinite(logd[0])
        np.testing.assert_allclose(logd[0], -np.log(2 * np.pi) - 1800.0, rtol=1e-12)
        assert dmvnorm(x, np.zeros(2), np.eye(2))[0] == 0.0

    def test_univariate(self):
        x = np.array([[-2.0], [0.0], [0.5]])
        np.testing.assert_allclose(dmvnorm(x), norm.pdf(x[:, 0]), rtol=1e-12)

    def test_peak_value(self, cov_2x2):
        d = dmvnorm(np.zeros(2), np.zeros(2), cov_2x2)
        expected = 1.0 / (2 * np.pi * np.sqrt(np.linalg.det(cov_2x2)))
        np.testing.assert_allclose(d, [expected], rtol=1e-12)

    def test_empty(self):
        assert dmvnorm(np.empty((0, 2))).shape == (0,)

    def test_invalid_covariance(self):
        with pytest.raises(InvalidCovariance):
            dmvnorm(np.ones((2, 2)), np.zeros(2), np.array([[1.0, 0.0], [0.0, -2.0]]))


class TestReference:
    def test_reference_density_matches_kernel(self, points_3d, cov_3x3):
        mean = np.array([0.5, -1.0, 2.0])
        np.testing.assert_allclose(
            dmvnorm_reference(points_3d, mean, cov_3x3),
            dmvnorm(points_3d, mean, cov_3x3),
            rtol=1e-10,
        )

    def test_reference_univariate_vector(self):
        x = np.array([0.0, 1.0, -1.0])
        np.testing.assert_allclose(
            dmvnorm_reference(x, np.zeros(1), np.eye(1)), norm.pdf(x), rtol=1e-12
        )

    def test_reference_rejects_same_inputs(self):
        cov = np.array([[1.0, 2.0], [2.0, 1.0]])
        with pytest.raises(InvalidCovariance):
            dmvnorm_reference(np.ones((1, 2)), np.zeros(2), cov)
