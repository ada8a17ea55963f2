"""Results containers for MIDAS models."""

from midasreg.results.base import MidasResultsBase, RegressionResultsBase

__all__ = [
    "MidasResultsBase",
    "RegressionResultsBase",
]
