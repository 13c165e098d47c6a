"""
chartcore CLI - synthetic OHLCV series and technical indicators.

Usage:
    python cli.py generate [--bars N] [--base-price P] [--seed S] [--format FORMAT] [-o FILE]
    python cli.py indicators [--input FILE] [-i sma:20 -i macd:12,26,9 ...] [-o FILE]
"""

import argparse
import csv
import io
import json
import logging
import sys
from datetime import date
from pathlib import Path

from config import ChartCoreConfig, ConfigError, load_config
from domain import OHLCVSeries, compute_indicators, generate_series
from ports import ChartCoreError, InvalidParameter
from presentation import build_chart_payload, payload_to_json, write_payload

logger = logging.getLogger(__name__)

CSV_FIELDS = ["date", "open", "high", "low", "close", "volume"]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _generate_from_args(args: argparse.Namespace, config: ChartCoreConfig) -> OHLCVSeries:
    gen = config.generator
    start = gen.start_date
    if args.start:
        try:
            start = date.fromisoformat(args.start)
        except ValueError as e:
            raise InvalidParameter("start", args.start, "expected YYYY-MM-DD") from e

    return generate_series(
        args.bars if args.bars is not None else gen.bars,
        base_price=args.base_price if args.base_price is not None else gen.base_price,
        volatility=args.volatility if args.volatility is not None else gen.volatility,
        start=start,
        seed=args.seed if args.seed is not None else gen.seed,
        volume_min=gen.volume_min,
        volume_max=gen.volume_max,
        symbol=args.symbol,
    )


def read_series(path: Path, symbol: str | None = None) -> OHLCVSeries:
    """Load a series from a .csv file or a .json list of row objects.

    Raises:
        InvalidParameter: If the file cannot be read or is not valid JSON
    """
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(path.read_text())
            # Accept a bare list or a chart payload with "rows"
            if isinstance(data, dict):
                data = data.get("rows", [])
            return OHLCVSeries.from_records(data, symbol=symbol)

        with open(path, newline="") as f:
            return OHLCVSeries.from_records(csv.DictReader(f), symbol=symbol)
    except OSError as e:
        raise InvalidParameter("input", str(path), f"cannot read file: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise InvalidParameter("input", str(path), f"malformed JSON: {e.msg}") from e


def series_to_csv(series: OHLCVSeries) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS)
    writer.writeheader()
    writer.writerows(series.to_records())
    return buf.getvalue()


def _emit(content: str, output: str | None) -> None:
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(content)
        print(f"Written to {output}", file=sys.stderr)
    else:
        print(content)


def cmd_generate(args: argparse.Namespace, config: ChartCoreConfig) -> int:
    """Generate a synthetic series."""
    series = _generate_from_args(args, config)

    if args.format == "csv":
        content = series_to_csv(series)
    else:
        content = json.dumps(series.to_records(), indent=config.output.indent)

    _emit(content, args.output)
    return 0


def cmd_indicators(args: argparse.Namespace, config: ChartCoreConfig) -> int:
    """Compute indicators and emit a chart payload."""
    if args.input:
        series = read_series(Path(args.input), symbol=args.symbol)
        logger.info(f"Loaded {len(series)} bars from {args.input}")
    else:
        series = _generate_from_args(args, config)

    requests = args.indicator or config.indicators.to_requests()
    indicators = compute_indicators(series, requests)

    payload = build_chart_payload(
        series,
        indicators,
        up_color=config.output.up_color,
        down_color=config.output.down_color,
        include_rows=not args.no_rows,
    )

    if args.output:
        write_payload(payload, args.output, indent=config.output.indent)
        print(f"Chart payload written to {args.output}", file=sys.stderr)
    else:
        print(payload_to_json(payload, indent=config.output.indent))
    return 0


def _add_generator_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-n", "--bars", type=int, help="Number of bars")
    parser.add_argument("--base-price", type=float, help="Opening price of the first bar")
    parser.add_argument("--volatility", type=float, help="Max fractional move per bar")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--start", help="First calendar date (YYYY-MM-DD)")
    parser.add_argument("--symbol", help="Symbol label")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="chartcore",
        description="Synthetic OHLCV series and technical indicators",
    )
    parser.add_argument("-c", "--config", help="Path to TOML config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a synthetic series")
    _add_generator_args(gen_parser)
    gen_parser.add_argument(
        "-f", "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format",
    )
    gen_parser.add_argument("-o", "--output", help="Output file path")
    gen_parser.set_defaults(func=cmd_generate)

    # Indicators command
    ind_parser = subparsers.add_parser("indicators", help="Compute indicators")
    ind_parser.add_argument("--input", help="CSV or JSON series file (default: generate)")
    _add_generator_args(ind_parser)
    ind_parser.add_argument(
        "-i", "--indicator",
        action="append",
        help="Indicator as kind[:params], e.g. sma:20, rsi:14, macd:12,26,9 (repeatable)",
    )
    ind_parser.add_argument("--no-rows", action="store_true", help="Omit the per-bar row table")
    ind_parser.add_argument("-o", "--output", help="Output file path")
    ind_parser.set_defaults(func=cmd_indicators)

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    _setup_logging(config.log_level)

    try:
        return args.func(args, config)
    except ChartCoreError as e:
        logger.debug(f"Command failed: {e.to_dict()}")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
