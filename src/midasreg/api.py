"""Public API for midasreg package.

This module provides a clean namespace for the most commonly used
classes and functions in the midasreg package.
"""

# Errors
from midasreg.exceptions import (
    ConvergenceWarning,
    DegreesOfFreedomError,
    JacobianDimensionError,
    MidasError,
    MissingUnrestrictedModelError,
    RankDeficiencyWarning,
    SingularDesignMatrixError,
    UnsupportedWeightShapeError,
)

# Linear algebra
from midasreg.linalg import pinv, upper_cholesky

# Models
from midasreg.models import (
    MidasR,
    MidasRResults,
    MidasTerm,
    RestrictedFit,
    TermInfo,
    UnrestrictedFit,
    UnrestrictedResults,
)

# Tests
from midasreg.tests import (
    RestrictionPrepData,
    RestrictionTestResult,
    RestrictionTestsResults,
    classical_restriction_test,
    compute_restriction_tests,
    exponential_almon_lm_test,
    hac_meat,
    prepare_restriction,
    robust_restriction_test,
)

# Weight shapes
from midasreg.weights import ShapeKind, WeightShape, almonp, nealmon

__all__ = [
    "ConvergenceWarning",
    "DegreesOfFreedomError",
    "JacobianDimensionError",
    "MidasError",
    "MidasR",
    "MidasRResults",
    "MidasTerm",
    "MissingUnrestrictedModelError",
    "RankDeficiencyWarning",
    "RestrictedFit",
    "RestrictionPrepData",
    "RestrictionTestResult",
    "RestrictionTestsResults",
    "ShapeKind",
    "SingularDesignMatrixError",
    "TermInfo",
    "UnrestrictedFit",
    "UnrestrictedResults",
    "UnsupportedWeightShapeError",
    "WeightShape",
    "almonp",
    "classical_restriction_test",
    "compute_restriction_tests",
    "exponential_almon_lm_test",
    "hac_meat",
    "nealmon",
    "pinv",
    "prepare_restriction",
    "robust_restriction_test",
    "upper_cholesky",
]
