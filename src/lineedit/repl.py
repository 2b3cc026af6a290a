"""Read-eval-print loop around an edit session."""

from __future__ import annotations

import logging

from lineedit.config import Config
from lineedit.session import EditSession
from lineedit.terminal import Terminal

logger = logging.getLogger(__name__)


def print_message(terminal: Terminal, message: str) -> None:
    """Write *message* on its own row below the current line."""
    terminal.write("\n")
    terminal.move_to_column(0)
    terminal.write(message)
    terminal.write("\n")
    terminal.move_to_column(0)
    terminal.flush()


def run_repl(terminal: Terminal, config: Config | None = None) -> list[str]:
    """Edit and echo lines until the user exits; return the submitted lines.

    Raw mode is always restored, also when a terminal error aborts the loop.
    """
    config = config or Config()
    session = EditSession(terminal, config)
    submitted: list[str] = []

    terminal.enter_raw_mode()
    try:
        while True:
            line = session.read_line()
            if line is None:
                break
            submitted.append(line)
            print_message(terminal, f"{config.echo_label}{line}")

        if session.exit_reason == "signal":
            terminal.write("\n")
            terminal.move_to_column(0)
            terminal.write(config.exit_keyword)
            terminal.flush()
        logger.info("repl finished after %d lines", len(submitted))
    finally:
        terminal.leave_raw_mode()
        terminal.write("\n")
        terminal.flush()

    return submitted
