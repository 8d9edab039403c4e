"""Biquad filter coefficient calculator."""

from biquadcalc.core.biquad import (
    BiquadCoefficients,
    FilterParameters,
    FilterType,
    UnsupportedFilterTypeError,
    calculate_coefficients,
    compute,
)

__version__ = "0.1.0"

__all__ = [
    "BiquadCoefficients",
    "FilterParameters",
    "FilterType",
    "UnsupportedFilterTypeError",
    "calculate_coefficients",
    "compute",
]
