"""Main entry point for bot_planner.

Usage:
    python -m bot_planner.main --config conf/bot_planner.yaml
    python -m bot_planner.main -c conf/bot_planner.yaml --crossings 3 --debug
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from bot_planner.config import load_config
from bot_planner.preview import build_preview
from bot_planner.reporter import print_console, save_json


def setup_logging(debug: bool = False) -> None:
    """Set up logging with console output."""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_formatter = logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.addHandler(console_handler)


logger = logging.getLogger(__name__)


def _non_negative_decimal(value: str) -> Decimal:
    """argparse type for --crossings."""
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not number.is_finite() or number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative number, got {value}")
    return number


def main(
    config_path: str = None,
    output_dir: str = "output",
    debug: bool = False,
    daily_grid_crossings: Decimal = None,
) -> int:
    """Main entry point.

    Args:
        config_path: Path to YAML config file
        output_dir: Directory for JSON output
        debug: Enable debug logging
        daily_grid_crossings: Override crossings per day from config

    Returns:
        Exit code: 0 if every draft is valid, 1 otherwise
    """
    setup_logging(debug=debug)

    # Load config
    try:
        config = load_config(config_path)
        logger.info(f"Loaded config with {len(config.bots)} bot drafts")
    except FileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Config error: {e}")
        return 1

    if daily_grid_crossings is not None:
        if daily_grid_crossings < 0:
            logger.error(f"Crossings per day must not be negative, got {daily_grid_crossings}")
            return 1
        config.estimator.daily_grid_crossings = daily_grid_crossings

    if not config.bots:
        logger.warning("No bot drafts found in config")
        return 0

    if not config.api_keys:
        logger.warning("No API keys configured; every draft will fail the API key check")

    previews = []
    for index, raw in enumerate(config.bots, start=1):
        trading_pair = raw.get("tradingPair", raw.get("trading_pair"))
        preview = build_preview(
            raw,
            config.estimator,
            api_key_ids=config.api_key_ids,
            last_price=config.last_price(trading_pair),
            label=str(raw.get("name") or f"Draft {index}"),
        )
        previews.append(preview)

    # Report
    print_console(previews)
    save_json(previews, config, output_dir)

    return 0 if all(p.valid for p in previews) else 1


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Bot Planner — validate grid bot drafts and estimate their performance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to YAML config file (default: conf/bot_planner.yaml)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="output",
        help="Output directory for JSON results (default: output/)",
    )
    parser.add_argument(
        "--crossings",
        type=_non_negative_decimal,
        default=None,
        help="Override completed grid trades assumed per day (default: from config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    try:
        exit_code = main(
            config_path=args.config,
            output_dir=args.output,
            debug=args.debug,
            daily_grid_crossings=args.crossings,
        )
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
