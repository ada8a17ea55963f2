"""Fitted-model interface consumed by the restriction tests.

The restriction tests never depend on a concrete estimator. Anything that
exposes the read accessors of :class:`RestrictedFit` (and, through it, an
:class:`UnrestrictedFit`) can be tested, which keeps the tests usable with
third-party MIDAS estimators.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from midasreg.weights import ShapeKind, WeightShape

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


def _ensure_array(
    data: ArrayLike | pd.Series[Any] | pd.DataFrame | None,
    name: str = "data",
    ndim: int | None = None,
) -> NDArray[np.floating[Any]] | None:
    """Convert input data to a float64 numpy array.

    Parameters
    ----------
    data : ArrayLike | pd.Series | pd.DataFrame | None
        Input data to convert.
    name : str
        Name of the variable for error messages.
    ndim : int | None
        Expected number of dimensions. If None, no check is performed.

    Returns
    -------
    NDArray[np.floating] | None
        Converted array, or None if input is None.

    Raises
    ------
    ValueError
        If data has unexpected dimensions.
    """
    if data is None:
        return None

    if isinstance(data, (pd.Series, pd.DataFrame)):
        arr = data.to_numpy(dtype=np.float64)
    else:
        arr = np.asarray(data, dtype=np.float64)

    if ndim is not None and arr.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got {arr.ndim}")

    return arr


@dataclass(frozen=True)
class TermInfo:
    """Bookkeeping for one regression term.

    Attributes
    ----------
    name : str
        Term name, used for parameter labels.
    shape : WeightShape | None
        Lag-weight shape restricting the term's coefficients. None means
        the coefficients are free (identity restriction).
    column_indices : tuple[int, ...]
        Columns of the design matrix (response excluded, zero based) that
        belong to the term.
    coef_indices : tuple[int, ...]
        Positions of the term's parameters in the restricted coefficient
        vector.
    """

    name: str
    shape: WeightShape | None
    column_indices: tuple[int, ...]
    coef_indices: tuple[int, ...]

    @property
    def kind(self) -> ShapeKind | None:
        """Shape family tag, or None for an unrestricted term."""
        return None if self.shape is None else self.shape.kind

    @property
    def n_params(self) -> int:
        """Number of restricted parameters of the term."""
        return len(self.coef_indices)

    @property
    def n_columns(self) -> int:
        """Number of design-matrix columns (unrestricted coefficients)."""
        return len(self.column_indices)


@runtime_checkable
class UnrestrictedFit(Protocol):
    """Read accessors required from the unrestricted companion fit."""

    @property
    def params(self) -> NDArray[np.floating[Any]]: ...

    @property
    def resid(self) -> NDArray[np.floating[Any]]: ...

    @property
    def exog(self) -> NDArray[np.floating[Any]]: ...


@runtime_checkable
class RestrictedFit(Protocol):
    """Read accessors required from a fitted restricted MIDAS model.

    Attributes
    ----------
    coefficients : NDArray[np.floating]
        Restricted parameter vector (length p).
    expanded_coefficients : NDArray[np.floating]
        Restriction map evaluated at ``coefficients`` (length dk).
    residuals : NDArray[np.floating]
        Restricted model residuals.
    model_matrix : NDArray[np.floating]
        Array of shape (n, dk + 1); the first column is the response.
    unrestricted : UnrestrictedFit | None
        Unrestricted companion fit, None when it could not be estimated.
    terms : Sequence[TermInfo]
        Ordered term bookkeeping.
    """

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]: ...

    @property
    def expanded_coefficients(self) -> NDArray[np.floating[Any]]: ...

    @property
    def residuals(self) -> NDArray[np.floating[Any]]: ...

    @property
    def model_matrix(self) -> NDArray[np.floating[Any]]: ...

    @property
    def unrestricted(self) -> UnrestrictedFit | None: ...

    @property
    def terms(self) -> Sequence[TermInfo]: ...

    def jacobian(self, params: ArrayLike) -> NDArray[np.floating[Any]]:
        """Jacobian of the restriction map, shape (dk, p)."""
        ...
