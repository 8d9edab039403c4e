"""Audio EQ Cookbook peaking and shelving designs.

Implements the "alpha" forms from Robert Bristow-Johnson's cookbook, where
Q also controls the slope of the shelves. Unlike the formulas in
biquadcalc.core.biquad these have no separate boost and cut branches; the
sign of the gain is carried through A.

The cookbook writes its transfer function as b0..b2 over a0..a2. Results
here are divided by the cookbook a0 and renamed to the BiquadCoefficients
convention, so the cookbook numerator becomes a0..a2 and the remaining
denominator terms become b1 and b2.

Reference:
    https://webaudio.github.io/Audio-EQ-Cookbook/audio-eq-cookbook.html
"""

import numpy as np

from biquadcalc.core.biquad import (
    BiquadCoefficients,
    FilterParameters,
    FilterType,
    UnsupportedFilterTypeError,
    resolve_filter_type,
)


def _normalize(num0, num1, num2, den0, den1, den2) -> BiquadCoefficients:
    """Divide through by the leading denominator term."""
    return BiquadCoefficients(
        a0=float(num0 / den0),
        a1=float(num1 / den0),
        a2=float(num2 / den0),
        b1=float(den1 / den0),
        b2=float(den2 / den0),
    )


def _cookbook_terms(frequency, gain_db, q, sample_rate):
    """Return (A, cos(w0), alpha) shared by every cookbook design."""
    A = 10 ** (gain_db / 40)  # noqa: N806
    w0 = 2 * np.pi * frequency / sample_rate
    return A, np.cos(w0), np.sin(w0) / (2 * q)


def _shelf(A, cos_w0, alpha, side):  # noqa: N803
    # side is +1 for the low shelf, -1 for the high shelf
    t = 2 * np.sqrt(A) * alpha
    return _normalize(
        A * ((A + 1) - side * (A - 1) * cos_w0 + t),
        side * 2 * A * ((A - 1) - side * (A + 1) * cos_w0),
        A * ((A + 1) - side * (A - 1) * cos_w0 - t),
        (A + 1) + side * (A - 1) * cos_w0 + t,
        -side * 2 * ((A - 1) + side * (A + 1) * cos_w0),
        (A + 1) + side * (A - 1) * cos_w0 - t,
    )


def calculate_peaking_eq(
    frequency: float,
    gain_db: float,
    q: float,
    sample_rate: float,
) -> BiquadCoefficients:
    """
    Cookbook peaking section, normalized by the cookbook a0.

    The response reaches gain_db exactly at frequency, and a cut of the
    same size is the exact inverse of the boost.

    Args:
        frequency: Center frequency in Hz
        gain_db: Peak gain in dB, negative for a dip
        q: Quality factor, the bandwidth between the half-gain points
        sample_rate: Sample rate in Hz

    Returns:
        Coefficients in the a0..a2 / b1, b2 convention
    """
    A, cos_w0, alpha = _cookbook_terms(frequency, gain_db, q, sample_rate)  # noqa: N806
    return _normalize(
        1 + alpha * A,
        -2 * cos_w0,
        1 - alpha * A,
        1 + alpha / A,
        -2 * cos_w0,
        1 - alpha / A,
    )


def calculate_low_shelf(
    frequency: float,
    gain_db: float,
    q: float,
    sample_rate: float,
) -> BiquadCoefficients:
    """
    Cookbook low shelf section, normalized by the cookbook a0.

    DC gain is gain_db, the top of the band is left at 0 dB and the
    corner at frequency sits at half of gain_db.
    """
    A, cos_w0, alpha = _cookbook_terms(frequency, gain_db, q, sample_rate)  # noqa: N806
    return _shelf(A, cos_w0, alpha, 1)


def calculate_high_shelf(
    frequency: float,
    gain_db: float,
    q: float,
    sample_rate: float,
) -> BiquadCoefficients:
    """Mirror of calculate_low_shelf: gain_db at Nyquist, 0 dB at DC."""
    A, cos_w0, alpha = _cookbook_terms(frequency, gain_db, q, sample_rate)  # noqa: N806
    return _shelf(A, cos_w0, alpha, -1)


def calculate_cookbook_coefficients(
    filter_type: FilterType | str,
    parameters: FilterParameters,
) -> BiquadCoefficients:
    """
    Calculate cookbook coefficients for a peak or shelf filter.

    Args:
        filter_type: PEAK, LOW_SHELF or HIGH_SHELF
        parameters: Filter parameters

    Returns:
        BiquadCoefficients for the filter

    Raises:
        UnsupportedFilterTypeError: For any other filter type
    """
    filter_type = resolve_filter_type(filter_type)
    args = (
        parameters.center_frequency,
        parameters.peak_gain_db,
        parameters.q,
        parameters.sample_rate,
    )

    if filter_type == FilterType.PEAK:
        return calculate_peaking_eq(*args)
    elif filter_type == FilterType.LOW_SHELF:
        return calculate_low_shelf(*args)
    elif filter_type == FilterType.HIGH_SHELF:
        return calculate_high_shelf(*args)
    else:
        raise UnsupportedFilterTypeError(filter_type)
