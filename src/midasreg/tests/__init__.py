"""Restriction tests for MIDAS regressions."""

from midasreg.tests.agk import exponential_almon_lm_test
from midasreg.tests.base import (
    RestrictionTestResult,
    RestrictionTestsResults,
    compute_restriction_tests,
)
from midasreg.tests.restriction import (
    RestrictionPrepData,
    classical_restriction_test,
    hac_meat,
    prepare_restriction,
    robust_restriction_test,
)

__all__ = [
    "RestrictionPrepData",
    "RestrictionTestResult",
    "RestrictionTestsResults",
    "classical_restriction_test",
    "compute_restriction_tests",
    "exponential_almon_lm_test",
    "hac_meat",
    "prepare_restriction",
    "robust_restriction_test",
]
