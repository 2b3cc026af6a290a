"""Entry point for the lineedit CLI."""

from __future__ import annotations

import argparse
import logging
import sys
import termios

from lineedit import __version__
from lineedit.config import Config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = Config()
    parser = argparse.ArgumentParser(
        prog="lineedit",
        description="Interactive single-line editor that echoes each submitted line",
    )
    parser.add_argument("--prompt", default=defaults.prompt, help=f"Prompt glyph (default: {defaults.prompt!r})")
    parser.add_argument(
        "--history-size",
        type=int,
        default=defaults.history_capacity,
        help=f"Number of lines kept in history (default: {defaults.history_capacity})",
    )
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write log records to this file instead of stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    if args.history_size < 1:
        raise SystemExit(f"lineedit: --history-size must be positive, got {args.history_size}")
    return Config(prompt=args.prompt, history_capacity=args.history_size)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )

    config = config_from_args(args)

    from lineedit.repl import run_repl
    from lineedit.terminal import ProcessTerminal

    try:
        run_repl(ProcessTerminal(), config)
    except (OSError, EOFError, termios.error) as exc:
        logger.error("terminal failure: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
