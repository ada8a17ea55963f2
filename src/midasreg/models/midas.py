"""MIDAS regression with functional restrictions on the lag coefficients.

The estimator takes prebuilt regressor blocks (one per term). A term either
has free coefficients or has its coefficients tied to a lag-weight shape,
``beta_term = shape(theta_term, n_columns)``. The restricted parameters are
estimated by nonlinear least squares; when there are enough observations the
unrestricted regression of the response on all columns is fitted as well, so
that the restriction can be tested.

References
----------
Ghysels, E., Santa-Clara, P., Valkanov, R. (2006). Predicting volatility:
    getting the most out of return data sampled at different frequencies.
    Journal of Econometrics, 131, 59-95.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy.optimize import least_squares

from midasreg.exceptions import ConvergenceWarning
from midasreg.linalg import pinv
from midasreg.models.base import TermInfo, _ensure_array
from midasreg.results.base import WIDTH, RegressionResultsBase
from midasreg.weights import ShapeKind, WeightShape, get_shape

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike, NDArray

    from midasreg.tests.base import RestrictionTestResult, RestrictionTestsResults


def expand_coefficients(
    terms: Sequence[TermInfo],
    params: ArrayLike,
    dk: int,
) -> NDArray[np.floating[Any]]:
    """Map restricted parameters to the dk unrestricted coefficients."""
    theta = np.asarray(params, dtype=np.float64)
    beta = np.zeros(dk)
    for term in terms:
        cols = list(term.column_indices)
        p = theta[list(term.coef_indices)]
        beta[cols] = p if term.shape is None else term.shape(p, term.n_columns)
    return beta


def restriction_jacobian(
    terms: Sequence[TermInfo],
    params: ArrayLike,
    dk: int,
) -> NDArray[np.floating[Any]]:
    """Jacobian of :func:`expand_coefficients`, shape (dk, len(params)).

    The matrix is block diagonal: free terms contribute identity blocks,
    restricted terms the gradient of their weight shape.
    """
    theta = np.asarray(params, dtype=np.float64)
    jac = np.zeros((dk, len(theta)))
    for term in terms:
        rows = np.asarray(term.column_indices)
        cols = np.asarray(term.coef_indices)
        if term.shape is None:
            block = np.eye(term.n_columns)
        else:
            block = term.shape.jacobian(theta[cols], term.n_columns)
        jac[np.ix_(rows, cols)] = block
    return jac


@dataclass
class MidasTerm:
    """One regression term of a MIDAS model.

    Parameters
    ----------
    name : str
        Term name used for parameter labels.
    exog : ArrayLike | pd.Series | pd.DataFrame
        Regressor block of shape (n_obs,) or (n_obs, n_columns), typically
        the high-frequency lags of one predictor.
    shape : str | WeightShape | None
        Weight shape restricting the block's coefficients. None leaves the
        coefficients free.
    start : ArrayLike | None
        Starting values for the term's parameters. Required when ``shape``
        is given; free terms start at zero.
    """

    name: str
    exog: Any
    shape: str | WeightShape | None = None
    start: ArrayLike | None = None


@dataclass(kw_only=True)
class UnrestrictedResults(RegressionResultsBase):
    """OLS fit of the response on every design-matrix column.

    Attributes
    ----------
    exog : NDArray[np.floating]
        Design matrix (n_obs, dk) the regression was run on.
    """

    exog: NDArray[np.floating[Any]]
    model_name: str = "Unrestricted"


@dataclass(kw_only=True)
class MidasRResults(RegressionResultsBase):
    """Results of a restricted MIDAS regression.

    Besides the usual regression output the object exposes the read
    accessors the restriction tests need (``coefficients``,
    ``expanded_coefficients``, ``residuals``, ``model_matrix``,
    ``jacobian``, ``unrestricted``, ``terms``).

    Attributes
    ----------
    endog : NDArray[np.floating]
        Response used in estimation.
    exog : NDArray[np.floating]
        Design matrix (n_obs, dk), response excluded.
    terms : tuple[TermInfo, ...]
        Term bookkeeping.
    unrestricted : UnrestrictedResults | None
        Unrestricted companion fit; None when ``nobs <= dk``.
    converged : bool
        Whether the least squares solver reported success.
    n_evals : int
        Number of residual evaluations used by the solver.
    """

    endog: NDArray[np.floating[Any]]
    exog: NDArray[np.floating[Any]]
    terms: tuple[TermInfo, ...]
    unrestricted: UnrestrictedResults | None = None
    converged: bool = True
    n_evals: int = 0
    model_name: str = "MIDAS-R"
    _expanded: NDArray[np.floating[Any]] | None = field(default=None, repr=False)

    @property
    def dk(self) -> int:
        """Number of unrestricted coefficients."""
        return self.exog.shape[1]

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Restricted parameter vector."""
        return self.params

    @property
    def expanded_coefficients(self) -> NDArray[np.floating[Any]]:
        """Restricted coefficients mapped to the unrestricted space."""
        if self._expanded is None:
            self._expanded = expand_coefficients(self.terms, self.params, self.dk)
        return self._expanded

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """Alias for ``resid``."""
        return self.resid

    @property
    def model_matrix(self) -> NDArray[np.floating[Any]]:
        """Response followed by the design matrix, shape (n_obs, dk + 1)."""
        return np.column_stack([self.endog, self.exog])

    def jacobian(self, params: ArrayLike) -> NDArray[np.floating[Any]]:
        """Jacobian of the restriction map at ``params``, shape (dk, p)."""
        return restriction_jacobian(self.terms, params, self.dk)

    def hah_test(self) -> RestrictionTestResult:
        """Classical (homoskedastic) restriction test.

        See Also
        --------
        midasreg.tests.classical_restriction_test
        """
        from midasreg.tests.restriction import classical_restriction_test

        return classical_restriction_test(self)

    def hahr_test(
        self,
        meat: ArrayLike | None = None,
        maxlags: int | None = None,
    ) -> RestrictionTestResult:
        """HAC-robust restriction test.

        See Also
        --------
        midasreg.tests.robust_restriction_test
        """
        from midasreg.tests.restriction import robust_restriction_test

        return robust_restriction_test(self, meat=meat, maxlags=maxlags)

    def agk_test(self) -> RestrictionTestResult:
        """LM test that the exponential Almon curvature parameters are zero.

        See Also
        --------
        midasreg.tests.exponential_almon_lm_test
        """
        from midasreg.tests.agk import exponential_almon_lm_test

        return exponential_almon_lm_test(self)

    def restriction_tests(self) -> RestrictionTestsResults:
        """Run every applicable restriction test."""
        from midasreg.tests.base import compute_restriction_tests

        return compute_restriction_tests(self)

    def summary(self) -> str:
        """Generate a text summary of the restricted fit.

        Returns
        -------
        str
            Formatted summary with the restricted parameters and, when the
            unrestricted model is available, the classical restriction test.
        """
        lines = self._header("MIDAS Regression with Restrictions")
        lines.append(
            f"Unrestricted coefs: {self.dk:>6}   Converged:    "
            f"{'Yes' if self.converged else 'No':>10}"
        )
        lines.extend(self._param_table())

        if self.unrestricted is not None and self.dk > self.df_model:
            test = self.hah_test()
            lines.append(
                f"{test.test_name}: {test.statistic:.4f} "
                f"(df={test.df}, p-value={test.pvalue:.4f})"
            )
            lines.append("=" * WIDTH)
        return "\n".join(lines)


class MidasR:
    """MIDAS regression with lag-weight restrictions.

    Parameters
    ----------
    endog : ArrayLike | pd.Series
        Response (n_obs,).
    terms : Sequence[MidasTerm]
        Regression terms. The design matrix is the column-wise
        concatenation of the term blocks in the given order; no intercept
        is added.

    Notes
    -----
    Rows with a missing value in the response or any regressor are dropped
    before estimation, which is what lag embedding at the start of a sample
    typically produces.

    Examples
    --------
    >>> import numpy as np
    >>> from midasreg import MidasR, MidasTerm
    >>> rng = np.random.default_rng(0)
    >>> X = rng.standard_normal((300, 12))
    >>> y = X @ np.full(12, 1 / 12) + rng.standard_normal(300) * 0.1
    >>> model = MidasR(y, [MidasTerm("x", X, shape="nealmon", start=[1, 0])])
    >>> results = model.fit()
    >>> print(results.hah_test())
    """

    def __init__(
        self,
        endog: ArrayLike | pd.Series[Any],
        terms: Sequence[MidasTerm],
    ) -> None:
        """Initialize the model and assemble the design matrix."""
        y = _ensure_array(endog, "endog")
        if y is None:
            raise ValueError("endog cannot be None")
        y = y.ravel()
        if not terms:
            raise ValueError("At least one term must be specified")

        blocks: list[NDArray[np.floating[Any]]] = []
        infos: list[TermInfo] = []
        starts: list[NDArray[np.floating[Any]]] = []
        param_names: list[str] = []
        col = 0
        coef = 0

        for term in terms:
            block = _ensure_array(term.exog, f"exog of term {term.name!r}")
            if block is None:
                raise ValueError(f"exog of term {term.name!r} cannot be None")
            if block.ndim == 1:
                block = block.reshape(-1, 1)
            if block.ndim != 2:
                raise ValueError(f"exog of term {term.name!r} must be 1D or 2D")
            if len(block) != len(y):
                raise ValueError(
                    f"endog and exog of term {term.name!r} must have same length, "
                    f"got {len(y)} and {len(block)}"
                )
            n_cols = block.shape[1]
            shape = None if term.shape is None else get_shape(term.shape)

            if shape is None:
                start = (
                    np.zeros(n_cols)
                    if term.start is None
                    else np.asarray(term.start, dtype=np.float64).ravel()
                )
                if len(start) != n_cols:
                    raise ValueError(
                        f"start of free term {term.name!r} must have {n_cols} values"
                    )
                names = (
                    [term.name]
                    if n_cols == 1
                    else [f"{term.name}{j}" for j in range(n_cols)]
                )
            else:
                if term.start is None:
                    raise ValueError(
                        f"start values are required for restricted term {term.name!r}"
                    )
                start = np.asarray(term.start, dtype=np.float64).ravel()
                if len(start) < shape.min_params:
                    raise ValueError(
                        f"{shape.name} needs at least {shape.min_params} "
                        f"parameters, term {term.name!r} has {len(start)}"
                    )
                names = [f"{term.name}{j + 1}" for j in range(len(start))]

            infos.append(
                TermInfo(
                    name=term.name,
                    shape=shape,
                    column_indices=tuple(range(col, col + n_cols)),
                    coef_indices=tuple(range(coef, coef + len(start))),
                )
            )
            blocks.append(block)
            starts.append(start)
            param_names.extend(names)
            col += n_cols
            coef += len(start)

        X = np.column_stack(blocks)
        keep = np.isfinite(y) & np.all(np.isfinite(X), axis=1)

        self.endog: NDArray[np.floating[Any]] = y[keep]
        self.exog: NDArray[np.floating[Any]] = X[keep]
        self.terms: tuple[TermInfo, ...] = tuple(infos)
        self.start: NDArray[np.floating[Any]] = np.concatenate(starts)
        self.param_names: list[str] = param_names

    @property
    def nobs(self) -> int:
        """Number of observations after dropping incomplete rows."""
        return len(self.endog)

    @property
    def dk(self) -> int:
        """Number of unrestricted coefficients."""
        return self.exog.shape[1]

    @property
    def n_params(self) -> int:
        """Number of restricted parameters."""
        return len(self.start)

    def has_shape(self, kind: ShapeKind) -> bool:
        """Whether any term uses a shape of the given family."""
        return any(t.kind is kind for t in self.terms)

    def fit_unrestricted(self) -> UnrestrictedResults | None:
        """OLS of the response on all columns; None if ``nobs <= dk``."""
        if self.nobs <= self.dk:
            return None

        sm_results = sm.OLS(self.endog, self.exog).fit()
        return UnrestrictedResults(
            params=np.asarray(sm_results.params),
            bse=np.asarray(sm_results.bse),
            resid=np.asarray(sm_results.resid),
            fittedvalues=np.asarray(sm_results.fittedvalues),
            cov_params_matrix=np.asarray(sm_results.cov_params()),
            nobs=self.nobs,
            exog=self.exog,
        )

    def fit(
        self,
        method: str = "trf",
        max_nfev: int | None = None,
        tol: float = 1e-10,
        **kwargs: Any,
    ) -> MidasRResults:
        """Estimate the restricted parameters by nonlinear least squares.

        Parameters
        ----------
        method : {"trf", "dogbox", "lm"}
            Algorithm passed to :func:`scipy.optimize.least_squares`.
        max_nfev : int | None
            Maximum number of residual evaluations.
        tol : float
            Used for ``ftol``, ``xtol`` and ``gtol``.
        **kwargs
            Further arguments for :func:`scipy.optimize.least_squares`.

        Returns
        -------
        MidasRResults
            Restricted fit with the unrestricted companion attached.
        """
        y, X, terms, dk = self.endog, self.exog, self.terms, self.dk
        if self.nobs <= self.n_params:
            raise ValueError(
                f"Not enough observations ({self.nobs}) for "
                f"{self.n_params} restricted parameters"
            )

        def residuals(theta: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
            return y - X @ expand_coefficients(terms, theta, dk)

        def jac(theta: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
            return -X @ restriction_jacobian(terms, theta, dk)

        kwargs.setdefault("ftol", tol)
        kwargs.setdefault("xtol", tol)
        kwargs.setdefault("gtol", tol)
        sol = least_squares(
            residuals, self.start, jac=jac, method=method, max_nfev=max_nfev, **kwargs
        )
        if not sol.success:
            warnings.warn(
                f"Nonlinear least squares did not converge: {sol.message}",
                ConvergenceWarning,
                stacklevel=2,
            )

        theta = np.asarray(sol.x, dtype=np.float64)
        beta = expand_coefficients(terms, theta, dk)
        fitted = X @ beta
        resid = y - fitted

        # Gauss-Newton covariance at the optimum
        G = X @ restriction_jacobian(terms, theta, dk)
        df_resid = self.nobs - len(theta)
        sigma2 = float(resid @ resid) / df_resid
        cov = sigma2 * pinv(G.T @ G)
        bse = np.sqrt(np.clip(np.diag(cov), 0.0, None))

        return MidasRResults(
            params=theta,
            bse=bse,
            resid=resid,
            fittedvalues=fitted,
            cov_params_matrix=cov,
            nobs=self.nobs,
            param_names=self.param_names,
            endog=y,
            exog=X,
            terms=terms,
            unrestricted=self.fit_unrestricted(),
            converged=bool(sol.success),
            n_evals=int(sol.nfev),
            _expanded=beta,
        )

    def __repr__(self) -> str:
        """Return string representation of the model."""
        return f"MidasR(nobs={self.nobs}, dk={self.dk}, n_params={self.n_params})"
