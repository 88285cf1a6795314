"""Command-line interface for Grand Prix Predictor."""

import argparse
import logging
import sys
from typing import List, Optional

from gp_predictor.engine import PredictionEngine
from gp_predictor.models import PredictionError, UsageError


CONDITIONS = ("wet", "dry")

EPILOG = """
Where TRACK is the name of the race track or country
and CONDITION is either 'wet' or 'dry'.

Examples:
  gp-predictor Monza              # Predict with track only
  gp-predictor Monza wet          # Predict with track and condition
  gp-predictor --verbose Spa dry  # Show scoring breakdown
  gp-predictor --no-weather Baku  # Skip the weather lookup
"""


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    """Create the command-line argument parser."""
    parser = ArgumentParser(
        prog='gp-predictor',
        description='Predict the finishing order of an F1 Grand Prix weekend',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )

    parser.add_argument('track', nargs='?', help='Race track or country name')
    parser.add_argument('condition', nargs='?', help="Race condition: 'wet' or 'dry'")

    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Team and driver configuration file (default: f1_config.json)'
    )
    parser.add_argument(
        '--no-weather',
        action='store_true',
        help='Do not look up weather for the track'
    )
    parser.add_argument(
        '--no-cache',
        action='store_true',
        help='Disable caching of live weather data'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show progress, logging and the per-driver scoring breakdown'
    )

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace, with condition lower-cased

    Raises:
        UsageError: If the arguments are missing, too many or invalid
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    args.track = (args.track or "").strip()
    if not args.track:
        raise UsageError("Incorrect usage! No arguments provided!")

    if args.condition is not None:
        args.condition = args.condition.lower()
        if args.condition not in CONDITIONS:
            raise UsageError("Incorrect usage! Race condition must be 'wet' or 'dry'.")
    else:
        args.condition = ""

    return args


def print_usage() -> None:
    """Print the usage line and examples to stdout."""
    build_parser().print_usage()
    print(EPILOG.strip())


def configure_logging(verbose: bool) -> None:
    """Set up console logging; INFO when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    engine = None

    try:
        try:
            args = parse_arguments(argv)
        except UsageError as e:
            print(f"Error: {e.message}")
            print_usage()
            return 1

        configure_logging(args.verbose)

        if not args.condition:
            print("Note: For more accurate race predictions, run program with track "
                  "name and race condition arguments.")
            print_usage()

        engine = PredictionEngine(
            config_path=args.config,
            use_weather=not args.no_weather,
            use_cache=not args.no_cache,
            verbose=args.verbose
        )

        result = engine.predict(track=args.track, condition=args.condition)
        print(engine.format_result(result))

        return 0

    except PredictionError as e:
        # Handle prediction-specific errors
        if engine:
            print("\n" + engine.format_error(e), file=sys.stderr)
        else:
            print(f"\nERROR: {e.message}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nPrediction cancelled by user.", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == '__main__':
    sys.exit(main())
