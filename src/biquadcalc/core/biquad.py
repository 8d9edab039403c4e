"""Biquad filter coefficient calculation.

Derives normalized second-order IIR coefficients from filter type,
frequency, sample rate, Q and gain, using the bilinear transform with
tangent pre-warping (Robert Bristow-Johnson / Udo Zolzer formulation).

The coefficients are meant for the difference equation::

    y[n] = a0*x[n] + a1*x[n-1] + a2*x[n-2] - b1*y[n-1] - b2*y[n-2]

Degenerate inputs (Q = 0, sample rate 0, frequency at or above Nyquist)
are not rejected; they yield inf/nan coefficients.

Reference:
    https://www.earlevel.com/main/2011/01/02/biquad-formulas/
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)

SQRT2 = np.sqrt(2.0)


class FilterType(Enum):
    """Type of biquad filter."""

    LOW_PASS = "lowpass"
    HIGH_PASS = "highpass"
    BAND_PASS = "bandpass"
    NOTCH = "notch"
    PEAK = "peak"  # Parametric EQ band
    LOW_SHELF = "lowShelf"
    HIGH_SHELF = "highShelf"


# Types whose formula depends on the gain and branches on its sign
GAIN_FILTER_TYPES = frozenset({FilterType.PEAK, FilterType.LOW_SHELF, FilterType.HIGH_SHELF})


class UnsupportedFilterTypeError(ValueError):
    """Raised when a filter type selector is not a known FilterType."""

    def __init__(self, filter_type: object):
        self.filter_type = filter_type
        super().__init__(f"Unsupported filter type: {filter_type!r}")


class BiquadCoefficients(NamedTuple):
    """Biquad filter coefficients (normalized).

    a0..a2 are the feed-forward (numerator) terms, b1 and b2 the feedback
    (denominator) terms. The leading denominator term is implicitly 1.0.
    """

    a0: float
    a1: float
    a2: float
    b1: float
    b2: float


@dataclass(frozen=True)
class FilterParameters:
    """Parameters of a single biquad section."""

    center_frequency: float  # Hz, 0 < f < sample_rate / 2
    sample_rate: float  # Hz
    q: float  # Q factor
    peak_gain_db: float = 0.0  # dB, only used by peak and shelf types


def db_to_gain(db: float) -> float:
    """Convert decibels to a linear amplitude factor."""
    return float(10 ** (db / 20))


def resolve_filter_type(filter_type: FilterType | str) -> FilterType:
    """
    Resolve a filter type selector to a FilterType member.

    Args:
        filter_type: FilterType member or its string value (e.g. "lowShelf")

    Returns:
        The matching FilterType

    Raises:
        UnsupportedFilterTypeError: If the selector matches no FilterType
    """
    if isinstance(filter_type, FilterType):
        return filter_type
    if isinstance(filter_type, str):
        try:
            return FilterType(filter_type)
        except ValueError:
            raise UnsupportedFilterTypeError(filter_type) from None
    raise UnsupportedFilterTypeError(filter_type)


def _lowpass(K, V, q, boost):  # noqa: N803
    norm = 1 / (1 + K / q + K * K)
    a0 = K * K * norm
    return a0, 2 * a0, a0, 2 * (K * K - 1) * norm, (1 - K / q + K * K) * norm


def _highpass(K, V, q, boost):  # noqa: N803
    norm = 1 / (1 + K / q + K * K)
    a0 = 1 * norm
    return a0, -2 * a0, a0, 2 * (K * K - 1) * norm, (1 - K / q + K * K) * norm


def _bandpass(K, V, q, boost):  # noqa: N803
    norm = 1 / (1 + K / q + K * K)
    a0 = K / q * norm
    return a0, 0.0, -a0, 2 * (K * K - 1) * norm, (1 - K / q + K * K) * norm


def _notch(K, V, q, boost):  # noqa: N803
    norm = 1 / (1 + K / q + K * K)
    a0 = (1 + K * K) * norm
    a1 = 2 * (K * K - 1) * norm
    return a0, a1, a0, a1, (1 - K / q + K * K) * norm


def _peak(K, V, q, boost):  # noqa: N803
    if boost:
        norm = 1 / (1 + 1 / q * K + K * K)
        a0 = (1 + V / q * K + K * K) * norm
        a1 = 2 * (K * K - 1) * norm
        a2 = (1 - V / q * K + K * K) * norm
        b2 = (1 - 1 / q * K + K * K) * norm
    else:
        norm = 1 / (1 + V / q * K + K * K)
        a0 = (1 + 1 / q * K + K * K) * norm
        a1 = 2 * (K * K - 1) * norm
        a2 = (1 - 1 / q * K + K * K) * norm
        b2 = (1 - V / q * K + K * K) * norm
    return a0, a1, a2, a1, b2


def _low_shelf(K, V, q, boost):  # noqa: N803
    sqrt_2V = np.sqrt(2 * V)  # noqa: N806
    if boost:
        norm = 1 / (1 + SQRT2 * K + K * K)
        a0 = (1 + sqrt_2V * K + V * K * K) * norm
        a1 = 2 * (V * K * K - 1) * norm
        a2 = (1 - sqrt_2V * K + V * K * K) * norm
        b1 = 2 * (K * K - 1) * norm
        b2 = (1 - SQRT2 * K + K * K) * norm
    else:
        norm = 1 / (1 + sqrt_2V * K + V * K * K)
        a0 = (1 + SQRT2 * K + K * K) * norm
        a1 = 2 * (K * K - 1) * norm
        a2 = (1 - SQRT2 * K + K * K) * norm
        b1 = 2 * (V * K * K - 1) * norm
        b2 = (1 - sqrt_2V * K + V * K * K) * norm
    return a0, a1, a2, b1, b2


def _high_shelf(K, V, q, boost):  # noqa: N803
    sqrt_2V = np.sqrt(2 * V)  # noqa: N806
    if boost:
        norm = 1 / (1 + SQRT2 * K + K * K)
        a0 = (V + sqrt_2V * K + K * K) * norm
        a1 = 2 * (K * K - V) * norm
        a2 = (V - sqrt_2V * K + K * K) * norm
        b1 = 2 * (K * K - 1) * norm
        b2 = (1 - SQRT2 * K + K * K) * norm
    else:
        norm = 1 / (V + sqrt_2V * K + K * K)
        a0 = (1 + SQRT2 * K + K * K) * norm
        a1 = 2 * (K * K - 1) * norm
        a2 = (1 - SQRT2 * K + K * K) * norm
        b1 = 2 * (K * K - V) * norm
        b2 = (V - sqrt_2V * K + K * K) * norm
    return a0, a1, a2, b1, b2


def compute(
    filter_type: FilterType | str,
    parameters: FilterParameters,
) -> BiquadCoefficients:
    """
    Calculate normalized biquad coefficients for a filter.

    For peak and shelf types a gain of 0 dB or more selects the boost
    formula, a negative gain the cut formula. At exactly 0 dB both reduce
    to the identity filter.

    Args:
        filter_type: Type of filter (FilterType or its string value)
        parameters: Frequency, sample rate, Q and gain

    Returns:
        BiquadCoefficients for the filter

    Raises:
        UnsupportedFilterTypeError: If filter_type is not a known type
    """
    filter_type = resolve_filter_type(filter_type)

    if filter_type == FilterType.LOW_PASS:
        design = _lowpass
    elif filter_type == FilterType.HIGH_PASS:
        design = _highpass
    elif filter_type == FilterType.BAND_PASS:
        design = _bandpass
    elif filter_type == FilterType.NOTCH:
        design = _notch
    elif filter_type == FilterType.PEAK:
        design = _peak
    elif filter_type == FilterType.LOW_SHELF:
        design = _low_shelf
    elif filter_type == FilterType.HIGH_SHELF:
        design = _high_shelf
    else:
        raise UnsupportedFilterTypeError(filter_type)

    gain_db = np.float64(parameters.peak_gain_db)
    boost = bool(gain_db >= 0)

    # float64 scalars so that degenerate inputs give inf/nan, not ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        V = 10 ** (np.abs(gain_db) / 20)  # noqa: N806
        K = np.tan(  # noqa: N806
            np.pi * np.float64(parameters.center_frequency) / np.float64(parameters.sample_rate)
        )
        values = design(K, V, np.float64(parameters.q), boost)

    coefficients = BiquadCoefficients(*(float(v) for v in values))

    if filter_type in GAIN_FILTER_TYPES:
        logger.debug("%s uses %s branch", filter_type.value, "boost" if boost else "cut")
    logger.debug("%s %s -> %s", filter_type.value, parameters, coefficients)
    if not np.all(np.isfinite(coefficients)):
        logger.warning("Non-finite coefficients for %s %s", filter_type.value, parameters)

    return coefficients


def calculate_coefficients(
    filter_type: FilterType | str,
    center_frequency: float,
    sample_rate: float,
    q: float,
    peak_gain_db: float = 0.0,
) -> BiquadCoefficients:
    """
    Calculate biquad coefficients from individual parameters.

    Args:
        filter_type: Type of filter
        center_frequency: Center or cutoff frequency in Hz
        sample_rate: Sample rate in Hz
        q: Q factor
        peak_gain_db: Gain in dB (peak and shelf types only)

    Returns:
        BiquadCoefficients for the filter
    """
    parameters = FilterParameters(
        center_frequency=center_frequency,
        sample_rate=sample_rate,
        q=q,
        peak_gain_db=peak_gain_db,
    )
    return compute(filter_type, parameters)
