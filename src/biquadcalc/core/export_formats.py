"""Export formats for biquad coefficients.

Provides output formats for computed coefficient sets:
- Table (.txt) - Fixed-width text for reading or pasting into code
- JSON (.json) - Machine-readable list of filters and coefficients
"""

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from biquadcalc.core.biquad import BiquadCoefficients, FilterParameters, FilterType

DEFAULT_PRECISION = 10


class ExportFormatType(Enum):
    """Available export format types."""

    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True)
class CoefficientEntry:
    """One computed filter section to export."""

    filter_type: FilterType
    parameters: FilterParameters
    coefficients: BiquadCoefficients
    label: str = ""  # e.g. "section 1" for cascades


class ExportFormat(ABC):
    """Abstract base class for export formats."""

    @abstractmethod
    def get_format_type(self) -> ExportFormatType:
        """Return the format type identifier."""
        ...

    @abstractmethod
    def get_file_extension(self) -> str:
        """Return the file extension (including dot)."""
        ...

    @abstractmethod
    def get_display_name(self) -> str:
        """Return human-readable format name."""
        ...

    @abstractmethod
    def export(self, entries: list[CoefficientEntry]) -> str:
        """Generate export content string."""
        ...

    def export_to_file(self, filepath: Path | str, entries: list[CoefficientEntry]) -> None:
        """Export entries to a file."""
        filepath = Path(filepath)
        content = self.export(entries)
        filepath.write_text(content)


# =============================================================================
# Table Export Format
# =============================================================================


class CoefficientTableExport(ExportFormat):
    """Fixed-width text table, one row per filter section."""

    COLUMNS = BiquadCoefficients._fields

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self.precision = precision

    def get_format_type(self) -> ExportFormatType:
        return ExportFormatType.TABLE

    def get_file_extension(self) -> str:
        return ".txt"

    def get_display_name(self) -> str:
        return "Coefficient Table"

    def _format_value(self, value: float) -> str:
        width = self.precision + 4
        if not math.isfinite(value):
            return f"{value!s:>{width}}"
        return f"{value:>{width}.{self.precision}f}"

    def _format_description(self, entry: CoefficientEntry) -> str:
        p = entry.parameters
        text = (
            f"{entry.filter_type.value} {p.center_frequency:g} Hz @ {p.sample_rate:g} Hz, "
            f"Q={p.q:g}"
        )
        if p.peak_gain_db:
            text += f", {p.peak_gain_db:+g} dB"
        if entry.label:
            text += f" ({entry.label})"
        return text

    def export(self, entries: list[CoefficientEntry]) -> str:
        """Generate text table."""
        if not entries:
            return "No filters.\n"

        width = self.precision + 4
        header = "  ".join(f"{name:>{width}}" for name in self.COLUMNS)
        lines = []

        for entry in entries:
            lines.append(f"# {self._format_description(entry)}")
            lines.append(header)
            lines.append("  ".join(self._format_value(v) for v in entry.coefficients))
            lines.append("")

        return "\n".join(lines)


# =============================================================================
# JSON Export Format
# =============================================================================


class JSONCoefficientExport(ExportFormat):
    """JSON list of filters with their parameters and coefficients."""

    def __init__(self, precision: int | None = None):
        self.precision = precision

    def get_format_type(self) -> ExportFormatType:
        return ExportFormatType.JSON

    def get_file_extension(self) -> str:
        return ".json"

    def get_display_name(self) -> str:
        return "JSON"

    def _encode_value(self, value: float) -> float | None:
        # JSON has no inf/nan
        if not math.isfinite(value):
            return None
        if self.precision is not None:
            return round(value, self.precision)
        return value

    def _entry_to_dict(self, entry: CoefficientEntry) -> dict:
        p = entry.parameters
        data = {
            "filter_type": entry.filter_type.value,
            "center_frequency": p.center_frequency,
            "sample_rate": p.sample_rate,
            "q": p.q,
            "peak_gain_db": p.peak_gain_db,
            "coefficients": {
                name: self._encode_value(value)
                for name, value in entry.coefficients._asdict().items()
            },
        }
        if entry.label:
            data["label"] = entry.label
        return data

    def export(self, entries: list[CoefficientEntry]) -> str:
        """Generate JSON document."""
        return json.dumps([self._entry_to_dict(e) for e in entries], indent=2) + "\n"


# =============================================================================
# Export Format Factory
# =============================================================================


def get_export_format(
    format_type: ExportFormatType | str,
    precision: int = DEFAULT_PRECISION,
) -> ExportFormat:
    """
    Get an export format instance.

    Args:
        format_type: The type of export format (or its string value)
        precision: Decimal places for the output

    Returns:
        ExportFormat instance
    """
    if isinstance(format_type, str):
        try:
            format_type = ExportFormatType(format_type)
        except ValueError:
            raise ValueError(f"Unknown export format: {format_type}") from None

    if format_type == ExportFormatType.TABLE:
        return CoefficientTableExport(precision=precision)
    elif format_type == ExportFormatType.JSON:
        return JSONCoefficientExport(precision=precision)
    else:
        raise ValueError(f"Unknown export format: {format_type}")


def get_available_formats() -> list[ExportFormat]:
    """Get an instance of every export format."""
    return [get_export_format(fmt) for fmt in ExportFormatType]
