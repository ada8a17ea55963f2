"""Pytest configuration and fixtures for midasreg tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pytest
from numpy.typing import NDArray
from scipy.signal import lfilter

import midasreg as mr
from midasreg.models.base import TermInfo

TRUE_PARAMS = np.array([-0.1, 0.1, -0.1, -0.001])
N_LAGS = 4 * 12
FREQUENCY = 12


def theta_h0(p: NDArray[np.floating[Any]], dk: int) -> NDArray[np.floating[Any]]:
    """Unnormalised exponential Almon shape ``(a + b i) exp(c i + d i^2)``."""
    i = np.arange(dk, dtype=np.float64)
    return (p[0] + p[1] * i) * np.exp(p[2] * i + p[3] * i**2)


def theta_h0_gradient(
    p: NDArray[np.floating[Any]], dk: int
) -> NDArray[np.floating[Any]]:
    """Analytic gradient of :func:`theta_h0`."""
    i = np.arange(dk, dtype=np.float64)
    a = np.exp(p[2] * i + p[3] * i**2)
    lin = p[0] + p[1] * i
    return np.column_stack([a, a * i, a * i * lin, a * i**2 * lin])


def ar1_series(
    rng: np.random.Generator, n: int, phi: float = 0.6, burn: int = 200
) -> NDArray[np.floating[Any]]:
    """Stationary AR(1) series with standard normal innovations."""
    e = rng.standard_normal(n + burn)
    return lfilter([1.0], [1.0, -phi], e)[burn:]


def fmls(
    x: NDArray[np.floating[Any]], n_lags: int, m: int
) -> NDArray[np.floating[Any]]:
    """Lags 0..n_lags-1 of a high-frequency series at each low-frequency period.

    Row ``t`` holds ``x[(t + 1) m - 1 - h]`` for ``h = 0, ..., n_lags - 1``;
    entries reaching before the start of ``x`` are NaN.
    """
    n = len(x) // m
    out = np.full((n, n_lags), np.nan)
    last = np.arange(1, n + 1) * m - 1
    for h in range(n_lags):
        idx = last - h
        valid = idx >= 0
        out[valid, h] = x[idx[valid]]
    return out


def simulate_midas(
    rng: np.random.Generator,
    n: int,
    coefs: NDArray[np.floating[Any]],
    m: int = FREQUENCY,
    sigma: float = 1.0,
    noise: NDArray[np.floating[Any]] | None = None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Simulate ``y_t = sum_h coefs_h x_{tm - h} + e_t`` with AR(1) ``x``.

    Returns
    -------
    tuple[NDArray, NDArray]
        Response (n,) and lag matrix (n, len(coefs)) with complete rows.
    """
    n_lags = len(coefs)
    extra = -(-n_lags // m)
    x = ar1_series(rng, (n + extra) * m)
    X = fmls(x, n_lags, m)[extra:]
    if noise is None:
        noise = rng.standard_normal(n) * sigma
    y = X @ coefs + noise
    return y, X


@dataclass
class StubUnrestricted:
    """Minimal unrestricted fit."""

    params: NDArray[np.floating[Any]]
    resid: NDArray[np.floating[Any]]
    exog: NDArray[np.floating[Any]]


@dataclass
class StubFit:
    """Hand-built object satisfying the RestrictedFit protocol."""

    coefficients: NDArray[np.floating[Any]]
    expanded_coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    model_matrix: NDArray[np.floating[Any]]
    unrestricted: StubUnrestricted | None
    jac: NDArray[np.floating[Any]]
    terms: Sequence[TermInfo] = field(default_factory=tuple)

    def jacobian(self, params: Any) -> NDArray[np.floating[Any]]:
        return self.jac


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(13)


@pytest.fixture
def theta_shape() -> mr.WeightShape:
    """Custom shape with an analytic gradient."""
    return mr.WeightShape.custom(theta_h0, gradient=theta_h0_gradient)


@pytest.fixture
def midas_data(
    rng: np.random.Generator,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """500 low-frequency observations generated under the true restriction."""
    return simulate_midas(rng, 500, theta_h0(TRUE_PARAMS, N_LAGS))


@pytest.fixture
def restricted_results(
    midas_data: tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]],
    theta_shape: mr.WeightShape,
) -> mr.MidasRResults:
    """Restricted fit of the true shape."""
    y, X = midas_data
    model = mr.MidasR(y, [mr.MidasTerm("x", X, shape=theta_shape, start=TRUE_PARAMS)])
    return model.fit()


@pytest.fixture
def nealmon_data(
    rng: np.random.Generator,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Response driven by 12 normalized exponential Almon lags plus a trend."""
    n = 400
    coefs = mr.nealmon([2.0, 0.3, -0.05], 12)
    y, X = simulate_midas(rng, n, coefs)
    trend = np.arange(1, n + 1) / n
    return y + 0.5 * trend, np.column_stack([trend, X])


@pytest.fixture
def nealmon_results(
    nealmon_data: tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]],
) -> mr.MidasRResults:
    """Trend plus nealmon term."""
    y, X = nealmon_data
    model = mr.MidasR(
        y,
        [
            mr.MidasTerm("trend", X[:, 0]),
            mr.MidasTerm("x", X[:, 1:], shape="nealmon", start=[1.0, 0.0, 0.0]),
        ],
    )
    return model.fit()
