"""Terminal Tetris.

Run with: `python -m termtris` (or the ``termtris`` console script).

Logging is off unless ``--log-file`` is given, because the terminal itself is
taken over by curses.
"""

from __future__ import annotations

import argparse
import curses
import logging
from typing import Optional, Sequence

from .run_terminal import run


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termtris", description="Falling-block puzzle game for the terminal."
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece bags")
    parser.add_argument("--log-file", default=None, help="write diagnostics to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level used with --log-file",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level: str) -> None:
    if log_file is None:
        logging.getLogger("termtris").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    LOGGER.info("Starting termtris (seed=%s)", args.seed)
    try:
        curses.wrapper(run, seed=args.seed)
    except KeyboardInterrupt:
        LOGGER.info("Interrupted")
    LOGGER.info("Exited")


if __name__ == "__main__":
    main()
