"""Result containers shared by the restricted and unrestricted MIDAS fits."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
from scipy import stats

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

WIDTH = 78


@dataclass(kw_only=True)
class MidasResultsBase(ABC):
    """Estimates common to every fitted MIDAS model.

    Parameters
    ----------
    params : NDArray[np.floating]
        Estimated parameters.
    nobs : int
        Number of complete observations used in estimation.
    model_name : str
        Label printed in summaries.
    """

    params: NDArray[np.floating[Any]]
    nobs: int
    model_name: str = "MIDAS"

    @property
    @abstractmethod
    def df_model(self) -> int:
        """Number of estimated parameters."""
        ...

    @property
    def df_resid(self) -> int:
        return self.nobs - self.df_model

    @abstractmethod
    def summary(self) -> str:
        """Fixed-width text report."""
        ...


@dataclass(kw_only=True)
class RegressionResultsBase(MidasResultsBase):
    """Least squares estimates with t-based inference.

    Parameters
    ----------
    bse : NDArray[np.floating]
        Standard errors of ``params``.
    resid : NDArray[np.floating]
        Residuals ``y - fittedvalues``.
    fittedvalues : NDArray[np.floating]
        Fitted response.
    cov_params_matrix : NDArray[np.floating]
        Covariance of ``params``.
    param_names : Sequence[str] | None
        Labels; ``x0, x1, ...`` when None.
    """

    bse: NDArray[np.floating[Any]]
    resid: NDArray[np.floating[Any]]
    fittedvalues: NDArray[np.floating[Any]]
    cov_params_matrix: NDArray[np.floating[Any]]
    param_names: Sequence[str] | None = None

    @property
    def df_model(self) -> int:
        return len(self.params)

    @property
    def names(self) -> list[str]:
        """Parameter labels used in tables."""
        if self.param_names is None:
            return [f"x{i}" for i in range(len(self.params))]
        return list(self.param_names)

    @property
    def tvalues(self) -> NDArray[np.floating[Any]]:
        return self.params / self.bse

    @property
    def pvalues(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values from the t distribution with ``df_resid``."""
        return 2 * stats.t.sf(np.abs(self.tvalues), self.df_resid)

    @property
    def ssr(self) -> float:
        """Sum of squared residuals."""
        return float(np.sum(self.resid**2))

    def conf_int(self, alpha: float = 0.05) -> NDArray[np.floating[Any]]:
        """Confidence intervals, shape (n_params, 2).

        Parameters
        ----------
        alpha : float, default 0.05
            One minus the coverage level.
        """
        q = stats.t.ppf(1 - alpha / 2, self.df_resid)
        return np.column_stack([self.params - q * self.bse, self.params + q * self.bse])

    def cov_params(self) -> NDArray[np.floating[Any]]:
        return self.cov_params_matrix

    def _header(self, title: str) -> list[str]:
        return [
            "=" * WIDTH,
            f"{title:^{WIDTH}}",
            "=" * WIDTH,
            f"No. Observations: {self.nobs:>10}   Df Residuals: {self.df_resid:>10}",
            f"Residual SS:  {self.ssr:>14.4f}   Df Model:     {self.df_model:>10}",
        ]

    def _param_table(self) -> list[str]:
        lines = [
            "=" * WIDTH,
            f"{'':>15} {'coef':>10} {'std err':>10} {'t':>10} "
            f"{'P>|t|':>10} {'[0.025':>10} {'0.975]':>10}",
            "-" * WIDTH,
        ]
        ci = self.conf_int()
        for i, name in enumerate(self.names):
            lines.append(
                f"{name:>15} {self.params[i]:>10.4f} {self.bse[i]:>10.4f} "
                f"{self.tvalues[i]:>10.3f} {self.pvalues[i]:>10.3f} "
                f"{ci[i, 0]:>10.3f} {ci[i, 1]:>10.3f}"
            )
        lines.append("=" * WIDTH)
        return lines

    def summary(self) -> str:
        """Header with fit statistics followed by the coefficient table."""
        return "\n".join(self._header(self.model_name) + self._param_table())

    def to_dataframe(self) -> pd.DataFrame:
        """Coefficient table as a DataFrame indexed by parameter name."""
        ci = self.conf_int()
        return pd.DataFrame(
            {
                "coef": self.params,
                "std_err": self.bse,
                "t": self.tvalues,
                "P>|t|": self.pvalues,
                "ci_lower": ci[:, 0],
                "ci_upper": ci[:, 1],
            },
            index=self.names,
        )
