"""Repaint planning for the edited line.

A repaint is computed as a list of :class:`Command` values from the buffer
state alone, then applied to a :class:`~lineedit.terminal.Terminal`. The
plan always redraws the whole line from the prompt, clears whatever an
earlier, longer line left behind, and finally places the cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from lineedit.line_buffer import LineBuffer
from lineedit.terminal import Terminal

CommandName = Literal["move_to_column", "write", "clear_line_end"]


@dataclass(frozen=True)
class Command:
    name: CommandName
    args: tuple = ()


def plan_repaint(text: str, cursor_column: int, prompt_offset: int) -> list[Command]:
    """Return the commands that make the screen show *text*.

    *cursor_column* is the display width of the text left of the insertion
    point; *prompt_offset* the column right after the prompt.
    """
    commands = [Command("move_to_column", (prompt_offset,))]
    if text:
        commands.append(Command("write", (text,)))
    # Terminals cannot shrink a line in place
    commands.append(Command("clear_line_end"))
    commands.append(Command("move_to_column", (prompt_offset + cursor_column,)))
    return commands


def plan_for_buffer(buffer: LineBuffer, prompt_offset: int) -> list[Command]:
    return plan_repaint(buffer.text, buffer.column, prompt_offset)


def apply(terminal: Terminal, commands: list[Command]) -> None:
    """Execute *commands* on *terminal* and flush."""
    for command in commands:
        getattr(terminal, command.name)(*command.args)
    terminal.flush()
