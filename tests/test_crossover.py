"""Tests for Linkwitz-Riley crossover filters."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from biquadcalc.core.biquad import (
    FilterType,
    UnsupportedFilterTypeError,
    calculate_coefficients,
)
from biquadcalc.core.crossover import (
    BUTTERWORTH_Q,
    LinkwitzRileyFilter,
    design_lr4,
    design_lr4_highpass,
    design_lr4_lowpass,
)
from biquadcalc.core.response import (
    calculate_cascade_response,
    calculate_complex_response,
)


class TestDesignLR4:
    """Tests for LR4 filter design."""

    def test_two_identical_sections(self, sample_rate):
        """Test that LR4 is two identical 2nd order sections."""
        lr4 = design_lr4_lowpass(1000, sample_rate)

        assert isinstance(lr4, LinkwitzRileyFilter)
        assert len(lr4.sections) == 2
        assert lr4.sections[0] == lr4.sections[1]
        assert lr4.order == 4

    def test_lowpass_reference_section(self, sample_rate):
        """Test lowpass section against the sin/cos Butterworth form."""
        lr4 = design_lr4_lowpass(1000, sample_rate)

        expected = (
            0.0039161266605473831,
            0.0078322533210947662,
            0.0039161266605473831,
            -1.8153410827045682,
            0.83100558934675761,
        )
        assert_allclose(lr4.sections[0], expected, rtol=1e-9)

    def test_sections_are_butterworth(self, sample_rate):
        """Test that each section is a Butterworth lowpass/highpass."""
        lowpass = design_lr4_lowpass(2500, sample_rate)
        highpass = design_lr4_highpass(2500, sample_rate)

        assert lowpass.sections[0] == calculate_coefficients(
            FilterType.LOW_PASS, 2500, sample_rate, BUTTERWORTH_Q
        )
        assert highpass.sections[0] == calculate_coefficients(
            FilterType.HIGH_PASS, 2500, sample_rate, BUTTERWORTH_Q
        )

    def test_default_gain_is_unity(self, sample_rate):
        """Test that no output gain means a factor of 1."""
        assert design_lr4_highpass(1000, sample_rate).gain == 1.0

    def test_output_gain(self, sample_rate):
        """Test that gain in dB is stored as a linear factor."""
        lr4 = design_lr4_lowpass(1000, sample_rate, gain_db=-20.0)
        assert_allclose(lr4.gain, 0.1)

    def test_string_type(self, sample_rate):
        """Test selecting the type by value."""
        assert design_lr4("highpass", 1000, sample_rate) == design_lr4_highpass(1000, sample_rate)

    @pytest.mark.parametrize(
        "filter_type", [FilterType.BAND_PASS, FilterType.PEAK, FilterType.LOW_SHELF, "crossover"]
    )
    def test_unsupported_types(self, filter_type, sample_rate):
        """Test that only lowpass and highpass are accepted."""
        with pytest.raises(UnsupportedFilterTypeError):
            design_lr4(filter_type, 1000, sample_rate)


class TestLR4Response:
    """Tests for the LR4 magnitude response."""

    def test_minus_6db_at_crossover(self, sample_rate):
        """Test that both outputs are -6 dB at the crossover frequency."""
        freqs = np.array([1000.0])
        for lr4 in (design_lr4_lowpass(1000, sample_rate), design_lr4_highpass(1000, sample_rate)):
            response = calculate_cascade_response(lr4.sections, freqs, sample_rate, lr4.gain)
            assert_allclose(response[0], -6.0206, atol=1e-3)

    def test_outputs_sum_flat(self, sample_rate, test_frequencies):
        """Test that lowpass plus highpass has a flat magnitude."""
        lowpass = design_lr4_lowpass(1000, sample_rate)
        highpass = design_lr4_highpass(1000, sample_rate)

        total = np.zeros(len(test_frequencies), dtype=np.complex128)
        for lr4 in (lowpass, highpass):
            h = np.full(len(test_frequencies), lr4.gain, dtype=np.complex128)
            for section in lr4.sections:
                h *= calculate_complex_response(section, test_frequencies, sample_rate)
            total += h

        assert_allclose(np.abs(total), 1.0, atol=1e-6)

    def test_steep_rolloff(self, sample_rate):
        """Test 24 dB/octave slope well above the crossover."""
        lr4 = design_lr4_lowpass(500, sample_rate)
        response = calculate_cascade_response(
            lr4.sections, np.array([2000.0, 4000.0]), sample_rate, lr4.gain
        )
        assert_allclose(response[0] - response[1], 24.0, atol=1.5)
