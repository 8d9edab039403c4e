"""Multi-band parametric EQ.

A parametric EQ is a chain of cookbook sections in series: an optional
low shelf, any number of peaking bands and an optional high shelf,
followed by a linear output gain. The classic layout is a low shelf,
three peaking bands and a high shelf.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from biquadcalc.core.biquad import (
    BiquadCoefficients,
    FilterParameters,
    FilterType,
    UnsupportedFilterTypeError,
    db_to_gain,
    resolve_filter_type,
)
from biquadcalc.core.cookbook import calculate_cookbook_coefficients

logger = logging.getLogger(__name__)

EQ_BAND_TYPES = (FilterType.LOW_SHELF, FilterType.PEAK, FilterType.HIGH_SHELF)

DEFAULT_BAND_Q = 1.0


@dataclass(frozen=True)
class EQBand:
    """Single parametric EQ band."""

    filter_type: FilterType
    frequency: float  # Hz
    gain: float  # dB
    q: float = DEFAULT_BAND_Q
    enabled: bool = True

    def __post_init__(self):
        """Validate parameters."""
        filter_type = resolve_filter_type(self.filter_type)
        if filter_type not in EQ_BAND_TYPES:
            raise UnsupportedFilterTypeError(filter_type)
        object.__setattr__(self, "filter_type", filter_type)

        if self.frequency <= 0:
            raise ValueError("Frequency must be positive")
        if self.q <= 0:
            raise ValueError("Q must be positive")

    def to_parameters(self, sample_rate: float) -> FilterParameters:
        """Section parameters for this band at sample_rate."""
        return FilterParameters(
            center_frequency=self.frequency,
            sample_rate=sample_rate,
            q=self.q,
            peak_gain_db=self.gain,
        )


@dataclass(frozen=True)
class ParametricEQ:
    """Designed EQ: one section per enabled band, plus an output gain."""

    bands: tuple[EQBand, ...]
    sections: tuple[BiquadCoefficients, ...]
    sample_rate: float
    gain: float = 1.0  # Linear output gain

    @property
    def num_sections(self) -> int:
        return len(self.sections)


def parse_band(text: str, default_q: float = DEFAULT_BAND_Q) -> EQBand:
    """
    Parse a band from "TYPE:FREQUENCY:GAIN[:Q]", e.g. "peak:1000:-3:2".

    Raises:
        ValueError: If the text is malformed or describes an invalid band
    """
    fields = text.split(":")
    if len(fields) not in (3, 4):
        raise ValueError(f"Band must be TYPE:FREQUENCY:GAIN[:Q], got {text!r}")

    try:
        frequency = float(fields[1])
        gain = float(fields[2])
        q = float(fields[3]) if len(fields) == 4 else default_q
    except ValueError:
        raise ValueError(f"Band must be TYPE:FREQUENCY:GAIN[:Q], got {text!r}") from None

    return EQBand(fields[0], frequency, gain, q)


def design_parametric_eq(
    low_shelf: EQBand | None,
    peaks: Sequence[EQBand],
    high_shelf: EQBand | None,
    sample_rate: float,
    gain_db: float = 0.0,
) -> ParametricEQ:
    """
    Design a parametric EQ from its bands.

    Sections are ordered low shelf, peaks, high shelf. Disabled bands
    are left out of the chain.

    Args:
        low_shelf: LOW_SHELF band, or None
        peaks: PEAK bands in processing order
        high_shelf: HIGH_SHELF band, or None
        sample_rate: Sample rate in Hz
        gain_db: Output gain in dB

    Returns:
        ParametricEQ with its sections and linear output gain

    Raises:
        ValueError: If a band sits in a slot of the wrong type
    """
    if low_shelf is not None and low_shelf.filter_type != FilterType.LOW_SHELF:
        raise ValueError(f"Low shelf slot got a {low_shelf.filter_type.value} band")
    if high_shelf is not None and high_shelf.filter_type != FilterType.HIGH_SHELF:
        raise ValueError(f"High shelf slot got a {high_shelf.filter_type.value} band")
    for band in peaks:
        if band.filter_type != FilterType.PEAK:
            raise ValueError(f"Peak slot got a {band.filter_type.value} band")

    chain = [low_shelf, *peaks, high_shelf]
    bands = tuple(b for b in chain if b is not None and b.enabled)
    sections = tuple(
        calculate_cookbook_coefficients(b.filter_type, b.to_parameters(sample_rate))
        for b in bands
    )
    logger.debug("Parametric EQ with %d of %d band(s) active", len(bands), len(chain))

    return ParametricEQ(
        bands=bands,
        sections=sections,
        sample_rate=sample_rate,
        gain=db_to_gain(gain_db),
    )


def design_from_bands(
    bands: Sequence[EQBand],
    sample_rate: float,
    gain_db: float = 0.0,
) -> ParametricEQ:
    """
    Design a parametric EQ from an unordered list of bands.

    Bands are sorted into their slots by type; peaks keep their order.

    Raises:
        ValueError: If there is more than one low shelf or high shelf
    """
    low_shelves = [b for b in bands if b.filter_type == FilterType.LOW_SHELF]
    high_shelves = [b for b in bands if b.filter_type == FilterType.HIGH_SHELF]
    peaks = [b for b in bands if b.filter_type == FilterType.PEAK]

    if len(low_shelves) > 1:
        raise ValueError("At most one low shelf band is allowed")
    if len(high_shelves) > 1:
        raise ValueError("At most one high shelf band is allowed")

    return design_parametric_eq(
        low_shelves[0] if low_shelves else None,
        peaks,
        high_shelves[0] if high_shelves else None,
        sample_rate,
        gain_db,
    )
