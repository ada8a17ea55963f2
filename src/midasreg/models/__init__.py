"""MIDAS models and the fitted-model interface used by the tests."""

from midasreg.models.base import RestrictedFit, TermInfo, UnrestrictedFit
from midasreg.models.midas import (
    MidasR,
    MidasRResults,
    MidasTerm,
    UnrestrictedResults,
    expand_coefficients,
    restriction_jacobian,
)

__all__ = [
    "MidasR",
    "MidasRResults",
    "MidasTerm",
    "RestrictedFit",
    "TermInfo",
    "UnrestrictedFit",
    "UnrestrictedResults",
    "expand_coefficients",
    "restriction_jacobian",
]
