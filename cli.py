"""Command-line entry point running the demo models."""

import argparse
import signal
import sys
from typing import List, Optional

from common.config import RuntimeConfig
from common.logging_setup import setup_logging, get_logger
from demos import DEMOS
from protocol.model import Model
from runtime.program import Program
from terminal.lifecycle import TerminalError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Luma - run a demo model in the terminal",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "demo",
        nargs="?",
        default="shopping",
        choices=sorted(DEMOS),
        help="Demo model to run",
    )

    parser.add_argument(
        "--poll-interval",
        type=int,
        default=16,
        help="Keyboard poll wait per loop iteration in milliseconds",
    )

    parser.add_argument(
        "--tick-interval",
        type=int,
        default=100,
        help="Clock tick threshold in milliseconds",
    )

    parser.add_argument(
        "--no-mouse",
        action="store_true",
        help="Do not enable mouse capture",
    )

    parser.add_argument(
        "--no-alt-screen",
        action="store_true",
        help="Draw on the primary screen instead of the alternate one",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--log-file",
        help="Log file path (stderr when omitted)",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> RuntimeConfig:
    """Create a RuntimeConfig from parsed arguments."""
    return RuntimeConfig(
        poll_interval_ms=args.poll_interval,
        tick_interval_ms=args.tick_interval,
        mouse_capture=not args.no_mouse,
        alt_screen=not args.no_alt_screen,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def build_model(name: str) -> Model:
    """Instantiate the demo model registered under ``name``."""
    try:
        return DEMOS[name]()
    except KeyError:
        raise ValueError(f"Unknown demo: {name}") from None


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for luma-demo."""
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(level=config.log_level, log_file=config.log_file)

    # SystemExit unwinds through Program.run, which restores the terminal
    def signal_handler(sig, frame):
        sys.exit(128 + sig)

    signal.signal(signal.SIGTERM, signal_handler)

    try:
        program = Program(build_model(args.demo), config=config)
        program.run()
    except KeyboardInterrupt:
        pass
    except TerminalError as e:
        logger.error(f"Terminal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
