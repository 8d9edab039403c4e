"""Frequency response of biquad sections.

Also converts coefficients to the (b, a) and second-order-sections layouts
used by scipy.signal.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.signal import freqz

from biquadcalc.core.biquad import BiquadCoefficients


def to_ba(
    coefficients: BiquadCoefficients,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Convert coefficients to scipy transfer function form.

    Args:
        coefficients: Biquad coefficients

    Returns:
        Tuple of (b, a): numerator [a0, a1, a2] and denominator [1, b1, b2]
    """
    b = np.array([coefficients.a0, coefficients.a1, coefficients.a2], dtype=np.float64)
    a = np.array([1.0, coefficients.b1, coefficients.b2], dtype=np.float64)
    return b, a


def to_sos(sections: Sequence[BiquadCoefficients]) -> NDArray[np.float64]:
    """
    Convert a cascade of sections to a scipy SOS array.

    Args:
        sections: Biquad sections in processing order

    Returns:
        Array of shape (n_sections, 6), rows [b0, b1, b2, 1, a1, a2]
    """
    sos = np.zeros((len(sections), 6), dtype=np.float64)
    for i, section in enumerate(sections):
        b, a = to_ba(section)
        sos[i, :3] = b
        sos[i, 3:] = a
    return sos


def dc_gain(coefficients: BiquadCoefficients) -> float:
    """Linear gain at 0 Hz: H(z=1)."""
    c = coefficients
    return (c.a0 + c.a1 + c.a2) / (1.0 + c.b1 + c.b2)


def calculate_complex_response(
    coefficients: BiquadCoefficients,
    frequencies: NDArray[np.float64],
    sample_rate: float,
) -> NDArray[np.complex128]:
    """
    Calculate complex frequency response of a biquad filter.

    Args:
        coefficients: Biquad filter coefficients
        frequencies: Array of frequencies in Hz
        sample_rate: Sample rate in Hz

    Returns:
        Complex response H(e^jw) at each frequency
    """
    b, a = to_ba(coefficients)
    _, H = freqz(b, a, worN=np.asarray(frequencies, dtype=np.float64), fs=sample_rate)  # noqa: N806
    return H


def calculate_frequency_response(
    coefficients: BiquadCoefficients,
    frequencies: NDArray[np.float64],
    sample_rate: float,
) -> NDArray[np.float64]:
    """
    Calculate frequency response of a biquad filter.

    Args:
        coefficients: Biquad filter coefficients
        frequencies: Array of frequencies in Hz
        sample_rate: Sample rate in Hz

    Returns:
        Magnitude response in dB
    """
    H = calculate_complex_response(coefficients, frequencies, sample_rate)  # noqa: N806
    magnitude_db = 20 * np.log10(np.abs(H) + 1e-10)
    return magnitude_db.astype(np.float64)  # type: ignore[no-any-return]


def calculate_cascade_response(
    sections: Sequence[BiquadCoefficients],
    frequencies: NDArray[np.float64],
    sample_rate: float,
    gain: float = 1.0,
) -> NDArray[np.float64]:
    """
    Calculate magnitude response of sections in series.

    Args:
        sections: Biquad sections
        frequencies: Array of frequencies in Hz
        sample_rate: Sample rate in Hz
        gain: Linear output gain applied after the last section

    Returns:
        Combined magnitude response in dB
    """
    H = np.full(len(frequencies), gain, dtype=np.complex128)  # noqa: N806
    for section in sections:
        H = H * calculate_complex_response(section, frequencies, sample_rate)  # noqa: N806

    magnitude_db = 20 * np.log10(np.abs(H) + 1e-10)
    return magnitude_db.astype(np.float64)  # type: ignore[no-any-return]
