"""Configuration for the line editor REPL."""

from __future__ import annotations

from dataclasses import dataclass

from lineedit.history import DEFAULT_CAPACITY


@dataclass
class Config:
    """Session constants, filled in from command line flags."""

    prompt: str = "> "
    prompt_color: str = "blue"
    exit_keyword: str = "exit"
    echo_label: str = "Our buffer: "
    history_capacity: int = DEFAULT_CAPACITY
