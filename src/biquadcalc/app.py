"""Command line entry point."""

import argparse
import logging
import sys

import numpy as np

from biquadcalc import __version__
from biquadcalc.config import CalculatorConfig, load_config
from biquadcalc.core.biquad import FilterParameters, FilterType, compute, resolve_filter_type
from biquadcalc.core.cookbook import calculate_cookbook_coefficients
from biquadcalc.core.crossover import design_lr4
from biquadcalc.core.export_formats import (
    CoefficientEntry,
    ExportFormatType,
    get_export_format,
)
from biquadcalc.core.parametric_eq import design_from_bands, parse_band
from biquadcalc.core.response import calculate_cascade_response

logger = logging.getLogger(__name__)

DESIGNS = ("bilinear", "cookbook", "lr4", "eq")


def build_parser(config: CalculatorConfig) -> argparse.ArgumentParser:
    """Create the argument parser, using config for defaults."""
    parser = argparse.ArgumentParser(
        prog="biquadcalc",
        description="Calculate normalized biquad filter coefficients",
    )
    parser.add_argument(
        "filter_type",
        nargs="?",
        metavar="TYPE",
        help="Filter type (see --list-types)",
    )
    parser.add_argument(
        "frequency",
        nargs="?",
        type=float,
        metavar="FREQUENCY",
        help="Center or cutoff frequency in Hz",
    )
    parser.add_argument(
        "-r", "--sample-rate",
        type=float,
        default=config.sample_rate,
        help=f"Sample rate in Hz (default {config.sample_rate:g})",
    )
    parser.add_argument(
        "-q", "--q",
        type=float,
        default=config.q,
        help=f"Q factor (default {config.q:.4f})",
    )
    parser.add_argument(
        "-g", "--gain",
        type=float,
        default=config.gain_db,
        help="Gain in dB for peak and shelf filters, output gain for lr4 and eq "
        f"(default {config.gain_db:g})",
    )
    parser.add_argument(
        "--design",
        choices=DESIGNS,
        default="bilinear",
        help="bilinear: tangent pre-warped formulas; cookbook: RBJ alpha forms "
        "(peak/shelves); lr4: Linkwitz-Riley lowpass/highpass; eq: parametric EQ "
        "from --band options",
    )
    parser.add_argument(
        "-b", "--band",
        action="append",
        default=[],
        metavar="TYPE:FREQ:GAIN[:Q]",
        help="Parametric EQ band for --design eq (lowShelf, peak or highShelf), "
        "Q defaults to --q",
    )
    parser.add_argument(
        "-f", "--format",
        choices=[f.value for f in ExportFormatType],
        default=config.output_format,
        help=f"Output format (default {config.output_format})",
    )
    parser.add_argument(
        "-p", "--precision",
        type=int,
        default=config.precision,
        help=f"Decimal places (default {config.precision})",
    )
    parser.add_argument(
        "--response",
        type=float,
        nargs="+",
        metavar="FREQ",
        help="Also print magnitude response in dB at these frequencies",
    )
    parser.add_argument("-o", "--output", help="Write coefficients to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--list-types", action="store_true", help="List filter types and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_entries(
    design: str,
    filter_type: FilterType,
    parameters: FilterParameters,
) -> tuple[list[CoefficientEntry], float]:
    """
    Compute coefficient entries for the selected design.

    Returns:
        Tuple of (entries, linear output gain)
    """
    if design == "cookbook":
        coefficients = calculate_cookbook_coefficients(filter_type, parameters)
        return [CoefficientEntry(filter_type, parameters, coefficients)], 1.0

    if design == "lr4":
        lr4 = design_lr4(
            filter_type,
            parameters.center_frequency,
            parameters.sample_rate,
            parameters.peak_gain_db,
        )
        entries = [
            CoefficientEntry(filter_type, parameters, section, label=f"LR4 section {i}")
            for i, section in enumerate(lr4.sections, 1)
        ]
        return entries, lr4.gain

    coefficients = compute(filter_type, parameters)
    return [CoefficientEntry(filter_type, parameters, coefficients)], 1.0


def build_eq_entries(
    band_specs: list[str],
    sample_rate: float,
    default_q: float,
    gain_db: float,
) -> tuple[list[CoefficientEntry], float]:
    """
    Compute coefficient entries for a parametric EQ.

    Returns:
        Tuple of (entries, linear output gain)
    """
    bands = [parse_band(spec, default_q) for spec in band_specs]
    eq = design_from_bands(bands, sample_rate, gain_db)
    entries = [
        CoefficientEntry(
            band.filter_type,
            band.to_parameters(sample_rate),
            section,
            label=f"EQ band {i}",
        )
        for i, (band, section) in enumerate(zip(eq.bands, eq.sections), 1)
    ]
    return entries, eq.gain


def format_response(
    entries: list[CoefficientEntry],
    frequencies: list[float],
    sample_rate: float,
    gain: float,
) -> str:
    """Format magnitude response lines."""
    response_db = calculate_cascade_response(
        [e.coefficients for e in entries],
        np.array(frequencies, dtype=np.float64),
        sample_rate,
        gain=gain,
    )
    lines = ["# magnitude response"]
    for freq, db in zip(frequencies, response_db):
        lines.append(f"{freq:12.2f} Hz  {db:+9.3f} dB")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Run the biquadcalc command line tool."""
    try:
        config = load_config()
    except ValueError as e:
        print(f"biquadcalc: configuration error: {e}", file=sys.stderr)
        return 2

    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list_types:
        for filter_type in FilterType:
            print(filter_type.value)
        return 0

    if args.design == "eq":
        if not args.band:
            parser.error("--design eq requires at least one --band")
        if args.filter_type is not None:
            parser.error("TYPE and FREQUENCY are not used with --design eq")
    elif args.band:
        parser.error("--band requires --design eq")
    elif args.filter_type is None or args.frequency is None:
        parser.error("TYPE and FREQUENCY are required")
    if args.response and args.format == ExportFormatType.JSON.value and not args.output:
        parser.error("--response cannot be combined with JSON on standard output")

    try:
        if args.design == "eq":
            entries, gain = build_eq_entries(args.band, args.sample_rate, args.q, args.gain)
        else:
            parameters = FilterParameters(
                center_frequency=args.frequency,
                sample_rate=args.sample_rate,
                q=args.q,
                peak_gain_db=args.gain,
            )
            filter_type = resolve_filter_type(args.filter_type)
            entries, gain = build_entries(args.design, filter_type, parameters)
        exporter = get_export_format(args.format, precision=args.precision)
    except ValueError as e:
        logger.debug("Rejected arguments: %s", e)
        parser.error(str(e))

    if args.output:
        try:
            exporter.export_to_file(args.output, entries)
        except OSError as e:
            print(f"biquadcalc: cannot write {args.output}: {e.strerror or e}", file=sys.stderr)
            return 1
        logger.info("Wrote %d section(s) to %s", len(entries), args.output)
    else:
        sys.stdout.write(exporter.export(entries))

    if args.response:
        sys.stdout.write(format_response(entries, args.response, args.sample_rate, gain))

    return 0


if __name__ == "__main__":
    sys.exit(main())
