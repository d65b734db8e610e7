"""poptodo command-line interface."""

import argparse
import curses
import logging
import sys
from typing import List, Optional

from . import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="poptodo", description="Terminal TODO list with a popup editor."
    )
    p.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file (the screen belongs to the TUI)",
    )
    p.add_argument(
        "--log-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level used with --log-file (default: DEBUG)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def configure_logging(log_file: Optional[str], level: str) -> None:
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format=LOG_FORMAT,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Runs the TUI until the user quits."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    from .tui import main as tui_main

    try:
        tui_main()
    except (curses.error, OSError) as err:
        logger.exception("Terminal failure")
        sys.exit(f"poptodo: terminal error: {err}")


if __name__ == "__main__":
    main()
