"""Parametric lag-weight shapes for MIDAS restrictions.

Every shape maps a short hyperparameter vector ``p`` to ``d`` lag
coefficients. Shapes carry an explicit :class:`ShapeKind` tag so that
tests which only make sense for a particular family (for example the
Andreou-Ghysels-Kourtellos LM test for normalized exponential Almon
weights) can dispatch on the tag rather than on a name.

References
----------
Ghysels, E., Sinko, A., Valkanov, R. (2007). MIDAS regressions: further
    results and new directions. Econometric Reviews, 26(1), 53-90.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np
from statsmodels.tools.numdiff import approx_fprime

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


WeightFunction = Callable[..., "ArrayLike"]


class ShapeKind(Enum):
    """Family a weight shape belongs to."""

    POLYNOMIAL = "polynomial"
    EXPONENTIAL_ALMON = "exponential_almon"
    CUSTOM = "custom"


def numeric_gradient(
    func: WeightFunction,
    params: ArrayLike,
    d: int,
) -> NDArray[np.floating[Any]]:
    """Central finite-difference Jacobian of ``func(params, d)``.

    Returns
    -------
    NDArray[np.floating]
        Matrix of shape (d, len(params)).
    """
    p = np.asarray(params, dtype=np.float64)
    grad = approx_fprime(
        p,
        lambda x: np.asarray(func(x, d), dtype=np.float64).ravel(),
        centered=True,
    )
    return np.asarray(grad, dtype=np.float64).reshape(d, len(p))


@dataclass(frozen=True)
class WeightShape:
    """A lag-weight shape and, optionally, its analytic gradient.

    Parameters
    ----------
    name : str
        Display name (e.g. "nealmon").
    kind : ShapeKind
        Family tag used for dispatch.
    func : callable
        ``func(p, d) -> (d,)`` lag coefficients.
    gradient : callable | None
        ``gradient(p, d) -> (d, len(p))``. When None, :meth:`jacobian`
        falls back to central finite differences.
    min_params : int
        Smallest admissible hyperparameter vector length.
    """

    name: str
    kind: ShapeKind
    func: WeightFunction
    gradient: WeightFunction | None = None
    min_params: int = 1

    @classmethod
    def custom(
        cls,
        func: WeightFunction,
        gradient: WeightFunction | None = None,
        name: str | None = None,
    ) -> WeightShape:
        """Wrap a user-supplied shape function."""
        return cls(
            name=name or getattr(func, "__name__", "custom"),
            kind=ShapeKind.CUSTOM,
            func=func,
            gradient=gradient,
        )

    @property
    def has_gradient(self) -> bool:
        """Whether an analytic gradient was supplied."""
        return self.gradient is not None

    def _check(self, p: NDArray[np.floating[Any]]) -> None:
        if p.ndim != 1 or len(p) < self.min_params:
            raise ValueError(
                f"{self.name} needs a 1D parameter vector of length >= "
                f"{self.min_params}, got shape {p.shape}"
            )

    def __call__(self, params: ArrayLike, d: int) -> NDArray[np.floating[Any]]:
        p = np.asarray(params, dtype=np.float64)
        self._check(p)
        out = np.asarray(self.func(p, d), dtype=np.float64).ravel()
        if len(out) != d:
            raise ValueError(
                f"{self.name} returned {len(out)} coefficients, expected {d}"
            )
        return out

    def jacobian(self, params: ArrayLike, d: int) -> NDArray[np.floating[Any]]:
        """Jacobian of the shape at ``params``, shape (d, len(params))."""
        p = np.asarray(params, dtype=np.float64)
        self._check(p)
        if self.gradient is None:
            return numeric_gradient(self.func, p, d)
        return np.asarray(self.gradient(p, d), dtype=np.float64).reshape(d, len(p))


def _raw_poly(i: NDArray[np.floating[Any]], degree: int) -> NDArray[np.floating[Any]]:
    """Raw polynomial basis ``[i, i**2, ..., i**degree]`` (no constant)."""
    return np.vander(i, degree + 1, increasing=True)[:, 1:]


def _nealmon(p: NDArray[np.floating[Any]], d: int) -> NDArray[np.floating[Any]]:
    i = np.arange(1, d + 1, dtype=np.float64)
    plc = _raw_poly(i, len(p) - 1) @ p[1:]
    e = np.exp(plc - plc.max())
    return p[0] * e / e.sum()


def _nealmon_gradient(
    p: NDArray[np.floating[Any]], d: int
) -> NDArray[np.floating[Any]]:
    i = np.arange(1, d + 1, dtype=np.float64)
    pl = _raw_poly(i, len(p) - 1)
    plc = pl @ p[1:]
    e = np.exp(plc - plc.max())
    w = e / e.sum()
    centred = pl - w @ pl
    return np.column_stack([w, p[0] * w[:, None] * centred])


def _almonp(p: NDArray[np.floating[Any]], d: int) -> NDArray[np.floating[Any]]:
    return _almonp_gradient(p, d) @ p


def _almonp_gradient(
    p: NDArray[np.floating[Any]], d: int
) -> NDArray[np.floating[Any]]:
    i = np.arange(d, dtype=np.float64)
    return np.vander(i, len(p), increasing=True)


nealmon = WeightShape(
    name="nealmon",
    kind=ShapeKind.EXPONENTIAL_ALMON,
    func=_nealmon,
    gradient=_nealmon_gradient,
    min_params=2,
)
"""Normalized exponential Almon lag.

``w_i = p0 * exp(p1 i + p2 i^2 + ...) / sum_j exp(p1 j + p2 j^2 + ...)``
for lags ``i = 1, ..., d``. With all curvature parameters at zero the
weights collapse to the simple average ``p0 / d``.
"""

almonp = WeightShape(
    name="almonp",
    kind=ShapeKind.POLYNOMIAL,
    func=_almonp,
    gradient=_almonp_gradient,
    min_params=1,
)
"""Almon polynomial lag ``w_i = p0 + p1 i + p2 i^2 + ...`` for ``i = 0, ..., d-1``."""


_REGISTRY: dict[str, WeightShape] = {
    nealmon.name: nealmon,
    almonp.name: almonp,
}


def get_shape(shape: str | WeightShape) -> WeightShape:
    """Look up a built-in shape by name, passing WeightShape through."""
    if isinstance(shape, WeightShape):
        return shape
    try:
        return _REGISTRY[shape]
    except KeyError:
        raise ValueError(
            f"Unknown weight shape {shape!r}. Available: {sorted(_REGISTRY)}"
        ) from None
