"""Exceptions raised by the restriction tests and the MIDAS estimator."""

from __future__ import annotations

import numpy as np


class MidasError(Exception):
    """Base class for all midasreg errors."""


class MissingUnrestrictedModelError(MidasError, ValueError):
    """The fitted model carries no unrestricted companion fit.

    This happens when the unrestricted regression could not be estimated
    because there are fewer observations than unrestricted coefficients.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Unrestricted model cannot be estimated due to the lack of degrees "
            "of freedom, testing the restriction is not possible"
        )


class JacobianDimensionError(MidasError, ValueError):
    """Restriction Jacobian rows do not match the unrestricted dimension."""


class DegreesOfFreedomError(MidasError, ValueError):
    """The restriction leaves no degrees of freedom to test."""


class SingularDesignMatrixError(MidasError, np.linalg.LinAlgError):
    """The cross-product of the design matrix is not positive definite."""


class UnsupportedWeightShapeError(MidasError, ValueError):
    """The model has no term with the weight shape a test requires."""


class RankDeficiencyWarning(UserWarning):
    """A generalized inverse discarded near-zero singular values."""


class ConvergenceWarning(UserWarning):
    """The nonlinear least squares solver did not report convergence."""
