"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from biquadcalc.config import ENV_PREFIX, ENV_VARIABLES
from biquadcalc.core.biquad import FilterParameters


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set random seed for reproducible tests."""
    np.random.seed(42)
    yield


@pytest.fixture
def sample_rate():
    """Standard sample rate for tests."""
    return 48000


@pytest.fixture
def test_frequencies():
    """Log-spaced audio band frequencies."""
    return np.logspace(np.log10(20), np.log10(20000), 500)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove calculator variables from the environment and isolate from any .env file."""
    for name in ENV_VARIABLES:
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(ENV_PREFIX + name, "")
        monkeypatch.delenv(ENV_PREFIX + name)
    monkeypatch.chdir(tmp_path)
    yield monkeypatch


@pytest.fixture
def reference_parameters():
    """Parameters used for the published lowpass/highpass reference values."""
    return FilterParameters(center_frequency=1000.0, sample_rate=44100.0, q=0.707)
