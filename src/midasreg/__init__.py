"""midasreg: MIDAS regressions with functional restrictions and their tests.

Fits mixed-data-sampling regressions whose lag coefficients follow a
parametric weight shape and tests whether the restriction is supported by
the data.

Example
-------
>>> import numpy as np
>>> import midasreg as mr
>>>
>>> rng = np.random.default_rng(42)
>>> X = rng.standard_normal((400, 12))
>>> y = X @ mr.nealmon([1.0, 0.2, -0.05], 12) + rng.standard_normal(400)
>>>
>>> model = mr.MidasR(y, [mr.MidasTerm("x", X, shape="nealmon", start=[1, 0, 0])])
>>> results = model.fit()
>>> print(results.summary())
>>>
>>> # Test the restriction
>>> print(mr.classical_restriction_test(results))
>>> print(mr.robust_restriction_test(results))
>>> print(mr.exponential_almon_lm_test(results))
"""

from midasreg._version import __version__
from midasreg.api import (
    ConvergenceWarning,
    DegreesOfFreedomError,
    JacobianDimensionError,
    MidasError,
    MidasR,
    MidasRResults,
    MidasTerm,
    MissingUnrestrictedModelError,
    RankDeficiencyWarning,
    RestrictedFit,
    RestrictionPrepData,
    RestrictionTestResult,
    RestrictionTestsResults,
    ShapeKind,
    SingularDesignMatrixError,
    TermInfo,
    UnrestrictedFit,
    UnrestrictedResults,
    UnsupportedWeightShapeError,
    WeightShape,
    almonp,
    classical_restriction_test,
    compute_restriction_tests,
    exponential_almon_lm_test,
    hac_meat,
    nealmon,
    pinv,
    prepare_restriction,
    robust_restriction_test,
    upper_cholesky,
)

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
    "__version__",
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
