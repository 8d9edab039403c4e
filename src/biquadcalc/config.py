"""Default settings for the command line calculator.

Values come from environment variables (or a .env file in the working
directory) and fall back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from biquadcalc.core.crossover import BUTTERWORTH_Q
from biquadcalc.core.export_formats import DEFAULT_PRECISION, ExportFormatType

ENV_PREFIX = "BIQUADCALC_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_VARIABLES = ("SAMPLE_RATE", "Q", "GAIN_DB", "PRECISION", "FORMAT", "LOG_LEVEL")


@dataclass
class CalculatorConfig:
    """Defaults used when an option is not given on the command line."""

    sample_rate: float = 48000.0  # Hz
    q: float = BUTTERWORTH_Q
    gain_db: float = 0.0
    precision: int = DEFAULT_PRECISION  # Decimal places in output
    output_format: str = ExportFormatType.TABLE.value
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate settings."""
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be positive")
        if self.q <= 0:
            raise ValueError("Q must be positive")
        if not 0 <= self.precision <= 17:
            raise ValueError("Precision must be between 0 and 17")
        if self.output_format not in [f.value for f in ExportFormatType]:
            raise ValueError(f"Unknown output format: {self.output_format}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def log_level_number(self) -> int:
        """Log level as a logging module constant."""
        return getattr(logging, self.log_level)


def _read_env(name: str, default, convert=str):
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return default
    try:
        return convert(value.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {value!r}") from None


def load_config(dotenv: bool = True) -> CalculatorConfig:
    """
    Build a CalculatorConfig from the environment.

    Args:
        dotenv: Also load variables from a .env file (existing environment
            variables take precedence)

    Returns:
        CalculatorConfig with environment overrides applied

    Raises:
        ValueError: If a variable cannot be parsed or is out of range
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    defaults = CalculatorConfig()
    return CalculatorConfig(
        sample_rate=_read_env("SAMPLE_RATE", defaults.sample_rate, float),
        q=_read_env("Q", defaults.q, float),
        gain_db=_read_env("GAIN_DB", defaults.gain_db, float),
        precision=_read_env("PRECISION", defaults.precision, int),
        output_format=_read_env("FORMAT", defaults.output_format).lower(),
        log_level=_read_env("LOG_LEVEL", defaults.log_level),
    )
