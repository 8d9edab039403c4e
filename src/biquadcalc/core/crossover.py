"""Linkwitz-Riley crossover filters.

A 4th order Linkwitz-Riley (LR4) low or high pass is two identical
2nd order Butterworth sections in series. The low and high outputs are
both -6 dB at the crossover frequency and sum to a flat magnitude.
"""

from dataclasses import dataclass

import numpy as np

from biquadcalc.core.biquad import (
    BiquadCoefficients,
    FilterParameters,
    FilterType,
    UnsupportedFilterTypeError,
    compute,
    db_to_gain,
    resolve_filter_type,
)

BUTTERWORTH_Q = float(1 / np.sqrt(2))


@dataclass(frozen=True)
class LinkwitzRileyFilter:
    """Cascade of identical biquad sections with an output gain."""

    sections: tuple[BiquadCoefficients, ...]
    gain: float = 1.0  # Linear output gain

    @property
    def order(self) -> int:
        """Filter order (two per section)."""
        return 2 * len(self.sections)


def design_lr4(
    filter_type: FilterType | str,
    frequency: float,
    sample_rate: float,
    gain_db: float = 0.0,
) -> LinkwitzRileyFilter:
    """
    Design an LR4 low pass or high pass filter.

    Args:
        filter_type: LOW_PASS or HIGH_PASS
        frequency: Crossover frequency in Hz
        sample_rate: Sample rate in Hz
        gain_db: Output gain in dB

    Returns:
        LinkwitzRileyFilter with two sections

    Raises:
        UnsupportedFilterTypeError: For any other filter type
    """
    filter_type = resolve_filter_type(filter_type)
    if filter_type not in (FilterType.LOW_PASS, FilterType.HIGH_PASS):
        raise UnsupportedFilterTypeError(filter_type)

    section = compute(
        filter_type,
        FilterParameters(center_frequency=frequency, sample_rate=sample_rate, q=BUTTERWORTH_Q),
    )
    return LinkwitzRileyFilter(sections=(section, section), gain=db_to_gain(gain_db))


def design_lr4_lowpass(
    frequency: float, sample_rate: float, gain_db: float = 0.0
) -> LinkwitzRileyFilter:
    """Design an LR4 low pass filter."""
    return design_lr4(FilterType.LOW_PASS, frequency, sample_rate, gain_db)


def design_lr4_highpass(
    frequency: float, sample_rate: float, gain_db: float = 0.0
) -> LinkwitzRileyFilter:
    """Design an LR4 high pass filter."""
    return design_lr4(FilterType.HIGH_PASS, frequency, sample_rate, gain_db)
