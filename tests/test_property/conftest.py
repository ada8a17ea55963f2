"""Hypothesis strategies for property-based testing of midasreg.

This module provides reusable data generators for property tests using
the Hypothesis library.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from hypothesis import strategies as st
from numpy.typing import NDArray


@st.composite
def restriction_inputs(
    draw: st.DrawFn,
    min_dk: int = 3,
    max_dk: int = 12,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Generate a cross-product, Jacobian and coefficient gap.

    Parameters
    ----------
    draw : st.DrawFn
        Hypothesis draw function.
    min_dk : int
        Minimum number of unrestricted coefficients.
    max_dk : int
        Maximum number of unrestricted coefficients.

    Returns
    -------
    tuple[NDArray, NDArray, NDArray]
        Positive definite XtX (dk, dk), Jacobian D0 (dk, p) with p < dk and
        gap (dk,).
    """
    dk = draw(st.integers(min_value=min_dk, max_value=max_dk))
    p = draw(st.integers(min_value=1, max_value=dk - 1))
    n = dk + draw(st.integers(min_value=5, max_value=60))

    # Seeded generator keeps the matrices well conditioned
    seed = draw(st.integers(min_value=0, max_value=2**31 - 1))
    rng = np.random.default_rng(seed)

    X = rng.standard_normal((n, dk))
    XtX = X.T @ X
    D0 = rng.standard_normal((dk, p))
    gap = rng.standard_normal(dk) * draw(st.floats(min_value=0.01, max_value=10.0))
    return XtX, D0, gap


@st.composite
def low_rank_matrix(
    draw: st.DrawFn,
    min_size: int = 2,
    max_size: int = 8,
) -> NDArray[np.floating[Any]]:
    """Generate a symmetric positive semidefinite matrix of deficient rank."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    rank = draw(st.integers(min_value=1, max_value=size - 1))
    seed = draw(st.integers(min_value=0, max_value=2**31 - 1))
    rng = np.random.default_rng(seed)
    B = rng.standard_normal((size, rank))
    return B @ B.T
