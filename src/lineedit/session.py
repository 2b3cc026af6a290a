"""Edit session - the control loop of the line editor.

One :class:`EditSession` owns a line buffer, the history store and a
terminal. Each input event is dispatched to at most one buffer or history
mutation, after which the line is repainted once.
"""

from __future__ import annotations

import logging
from typing import Literal

from lineedit import render
from lineedit.config import Config
from lineedit.history import History
from lineedit.keybindings import HISTORY_ACTIONS, EditorAction, KeyBindings
from lineedit.keys import parse_key
from lineedit.line_buffer import LineBuffer
from lineedit.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START
from lineedit.terminal import Terminal
from lineedit.utils import has_control_chars

logger = logging.getLogger(__name__)

Outcome = Literal["continue", "submit", "exit"]
ExitReason = Literal["keyword", "signal"]


class EditSession:
    """Single-line editor bound to one terminal."""

    def __init__(
        self,
        terminal: Terminal,
        config: Config | None = None,
        history: History | None = None,
    ) -> None:
        self.terminal = terminal
        self.config = config or Config()
        self.history = history if history is not None else History(self.config.history_capacity)
        self.buffer = LineBuffer()
        self.keybindings = KeyBindings()

        self.prompt_offset: int = 0
        self.last_submitted: str | None = None
        self.exit_reason: ExitReason | None = None

    # -- line lifecycle -----------------------------------------------------

    def begin_line(self) -> None:
        """Draw the prompt and remember where editable text starts."""
        self.buffer.clear()
        self.terminal.set_foreground(self.config.prompt_color)
        self.terminal.write(self.config.prompt)
        self.terminal.reset_color()
        self.terminal.flush()
        self.prompt_offset = self.terminal.cursor_column()
        logger.debug("new line, prompt offset %d", self.prompt_offset)

    def read_line(self) -> str | None:
        """Edit one line; return it on submission or ``None`` on exit."""
        self.exit_reason = None
        self.begin_line()
        while True:
            outcome = self.handle_event(self.terminal.read_event())
            if outcome == "submit":
                return self.last_submitted
            if outcome == "exit":
                return None

    # -- dispatch -----------------------------------------------------------

    def handle_event(self, data: str) -> Outcome:
        """Apply one input event and repaint if the line changed."""
        if data.startswith(BRACKETED_PASTE_START) and data.endswith(BRACKETED_PASTE_END):
            self.history.reset()
            pasted = data[len(BRACKETED_PASTE_START) : -len(BRACKETED_PASTE_END)]
            pasted = pasted.replace("\r\n", "").replace("\r", "").replace("\n", "")
            self.buffer.insert_at_cursor("".join(ch for ch in pasted if not has_control_chars(ch)))
            self.repaint()
            return "continue"

        key = parse_key(data)
        action = self.keybindings.action_for(key)
        logger.debug("event %r -> key %s, action %s", data, key, action)

        if action not in HISTORY_ACTIONS:
            self.history.reset()

        if action is None:
            if data and not has_control_chars(data):
                self.buffer.insert_at_cursor(data)
                self.repaint()
            return "continue"

        if action == "exit":
            self.exit_reason = "signal"
            return "exit"
        if action == "submit":
            return self._submit()

        if self._apply(action):
            self.repaint()
        return "continue"

    def _apply(self, action: EditorAction) -> bool:
        """Run an editing action; return whether the visible line changed."""
        buf = self.buffer
        before = (buf.text, buf.insertion_point)

        if action == "cursorLeft":
            buf.move_cursor_back()
        elif action == "cursorRight":
            buf.move_cursor_forward()
        elif action == "cursorWordLeft":
            buf.move_word_left()
        elif action == "cursorWordRight":
            buf.move_word_right()
        elif action == "cursorLineStart":
            buf.move_to_start()
        elif action == "cursorLineEnd":
            buf.move_to_end()
        elif action == "deleteCharBackward":
            buf.delete_backward()
        elif action == "deleteCharForward":
            buf.delete_forward()
        elif action == "deleteWordBackward":
            buf.delete_word_backward()
        elif action == "deleteToLineStart":
            buf.truncate_before_cursor()
        elif action == "deleteToLineEnd":
            buf.truncate_to_cursor()
        elif action == "historyOlder":
            self._recall(self.history.older())
        elif action == "historyNewer":
            self._recall(self.history.newer())

        return (buf.text, buf.insertion_point) != before

    def _recall(self, entry: str | None) -> None:
        if entry is None:
            return
        self.buffer.replace_all(entry)
        self.buffer.move_to_end()

    def _submit(self) -> Outcome:
        line = self.buffer.text
        if line == self.config.exit_keyword:
            self.exit_reason = "keyword"
            return "exit"
        if not line:
            return "continue"

        self.history.push(line)
        self.buffer.clear()
        self.last_submitted = line
        logger.info("submitted line (%d chars), history size %d", len(line), len(self.history))
        return "submit"

    # -- rendering ----------------------------------------------------------

    def repaint(self) -> None:
        render.apply(self.terminal, render.plan_for_buffer(self.buffer, self.prompt_offset))
