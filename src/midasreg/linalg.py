"""Linear algebra helpers shared by the restriction tests.

The generalized inverse follows the Moore-Penrose convention: singular
values below ``rtol * max(singular values)`` are treated as zero, so a
rank-deficient input yields a least-squares pseudo-solution instead of an
error. The default tolerance is ``sqrt(eps)``, the same cut-off used by
``MASS::ginv`` in R.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from scipy import linalg as sla

from midasreg.exceptions import SingularDesignMatrixError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


DEFAULT_RTOL: float = float(np.sqrt(np.finfo(np.float64).eps))


def _resolve_rtol(rtol: float | None) -> float:
    if rtol is None:
        return DEFAULT_RTOL
    if rtol < 0:
        raise ValueError(f"rtol must be non-negative, got {rtol}")
    return float(rtol)


def pinv(
    a: ArrayLike,
    rtol: float | None = None,
    return_rank: bool = False,
) -> NDArray[np.floating[Any]] | tuple[NDArray[np.floating[Any]], int]:
    """Moore-Penrose generalized inverse computed from the SVD.

    Parameters
    ----------
    a : ArrayLike
        Matrix of shape (m, n) to invert.
    rtol : float | None
        Relative tolerance. Singular values smaller than ``rtol`` times
        the largest singular value are discarded. Defaults to
        :data:`DEFAULT_RTOL`.
    return_rank : bool, default False
        If True, also return the numerical rank used for the inverse.

    Returns
    -------
    NDArray[np.floating] | tuple[NDArray[np.floating], int]
        The (n, m) pseudo-inverse, optionally with the effective rank.

    Notes
    -----
    For a full-rank square matrix the result equals the ordinary inverse
    up to rounding. For any matrix ``A @ pinv(A) @ A == A``.
    """
    arr = np.atleast_2d(np.asarray(a, dtype=np.float64))
    return sla.pinv(arr, atol=0.0, rtol=_resolve_rtol(rtol), return_rank=return_rank)


def numerical_rank(a: ArrayLike, rtol: float | None = None) -> int:
    """Rank of ``a`` using the same cut-off as :func:`pinv`."""
    arr = np.atleast_2d(np.asarray(a, dtype=np.float64))
    s = np.linalg.svd(arr, compute_uv=False)
    if s.size == 0 or s[0] == 0:
        return 0
    return int(np.sum(s > _resolve_rtol(rtol) * s[0]))


def condition_number(a: ArrayLike) -> float:
    """2-norm condition number; ``inf`` for singular matrices."""
    arr = np.atleast_2d(np.asarray(a, dtype=np.float64))
    s = np.linalg.svd(arr, compute_uv=False)
    if s.size == 0 or s[-1] == 0:
        return float(np.inf)
    return float(s[0] / s[-1])


def upper_cholesky(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """Upper-triangular Cholesky factor ``P`` with ``P.T @ P == a``.

    Parameters
    ----------
    a : ArrayLike
        Symmetric positive definite matrix.

    Returns
    -------
    NDArray[np.floating]
        Upper-triangular factor.

    Raises
    ------
    SingularDesignMatrixError
        If ``a`` is not positive definite (rank deficient or numerically
        singular).
    """
    arr = np.asarray(a, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Cholesky factorization needs a square matrix, got {arr.shape}")
    arr = (arr + arr.T) * 0.5
    try:
        return sla.cholesky(arr, lower=False)
    except np.linalg.LinAlgError as exc:
        raise SingularDesignMatrixError(
            "Cross-product of the design matrix is not positive definite; "
            "check the regressors for collinearity"
        ) from exc
