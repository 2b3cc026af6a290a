"""Terminal surface for the line editor.

Provides a ``Terminal`` protocol - the capability the edit session and the
renderer are written against - and a concrete ``ProcessTerminal`` that
drives a real tty through raw mode and ANSI escape sequences.

I/O errors are not swallowed here: a broken terminal channel cannot be
recovered, so the error travels up to whoever owns the session.
"""

from __future__ import annotations

import codecs
import collections
import logging
import os
import re
import select
import sys
import termios
import time
import tty
from typing import Protocol

from lineedit.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_MOVE_TO_COLUMN_FMT = "\x1b[{}G"
_MOVE_LEFT_FMT = "\x1b[{}D"
_MOVE_RIGHT_FMT = "\x1b[{}C"
_CLEAR_LINE_END = "\x1b[0K"
_RESET_COLOR = "\x1b[39m"
_QUERY_CURSOR = "\x1b[6n"

_CURSOR_REPORT_RE = re.compile(r"\x1b\[(\d+);(\d+)R")

FOREGROUND_COLORS: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}

# Quiet period after which a lone ESC is taken to be the escape key
_ESCAPE_TIMEOUT = 0.01
_CURSOR_REPORT_TIMEOUT = 1.0


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations.

    Columns are 0-based.
    """

    def read_event(self) -> str: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def move_to_column(self, column: int) -> None: ...

    def move_left(self, n: int = 1) -> None: ...

    def move_right(self, n: int = 1) -> None: ...

    def clear_line_end(self) -> None: ...

    def set_foreground(self, color: str) -> None: ...

    def reset_color(self) -> None: ...

    def enter_raw_mode(self) -> None: ...

    def leave_raw_mode(self) -> None: ...

    def cursor_column(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the process's stdin/stdout file descriptors.

    Raw mode is managed via :mod:`tty` and :mod:`termios`. Input is read
    with blocking :func:`os.read`, decoded incrementally as UTF-8 and split
    into key sequences by a :class:`StdinBuffer`. Output is buffered until
    :meth:`flush`.
    """

    def __init__(self, fd_in: int | None = None, fd_out: int | None = None) -> None:
        self._fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self._fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self._original_termios: list | None = None
        self._out: list[str] = []
        self._events: collections.deque[str] = collections.deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        self._stdin_buffer = StdinBuffer()
        self._stdin_buffer.on_data(self._events.append)
        self._stdin_buffer.on_paste(
            lambda data: self._events.append(BRACKETED_PASTE_START + data + BRACKETED_PASTE_END)
        )

    # -- raw mode -----------------------------------------------------------

    @property
    def raw(self) -> bool:
        return self._original_termios is not None

    def enter_raw_mode(self) -> None:
        """Save the tty state, switch to raw mode, enable bracketed paste."""
        if self.raw:
            return
        self._original_termios = termios.tcgetattr(self._fd_in)
        tty.setraw(self._fd_in)
        self.write(_BRACKETED_PASTE_ENABLE)
        self.flush()
        logger.debug("raw mode enabled on fd %d", self._fd_in)

    def leave_raw_mode(self) -> None:
        """Restore the tty state saved by :meth:`enter_raw_mode`."""
        if not self.raw:
            return
        self.write(_BRACKETED_PASTE_DISABLE)
        self.flush()
        termios.tcsetattr(self._fd_in, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None
        self._stdin_buffer.clear()
        logger.debug("raw mode disabled on fd %d", self._fd_in)

    # -- input --------------------------------------------------------------

    def read_event(self) -> str:
        """Block until one complete input event is available and return it."""
        while not self._events:
            self._fill()
        return self._events.popleft()

    def _fill(self) -> None:
        if self._stdin_buffer.get_buffer() and not self._readable(_ESCAPE_TIMEOUT):
            # Nothing followed the partial sequence: hand it over as-is
            self._events.extend(self._stdin_buffer.flush())
            return
        self._read_chunk()

    def _read_chunk(self) -> None:
        raw = os.read(self._fd_in, 4096)
        if not raw:
            raise EOFError("terminal input closed")
        data = self._decoder.decode(raw)
        if data:
            self._stdin_buffer.process(data)

    def _readable(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd_in], [], [], timeout)
        return bool(ready)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._out.append(data)

    def flush(self) -> None:
        if not self._out:
            return
        payload = "".join(self._out).encode("utf-8")
        self._out.clear()
        while payload:
            written = os.write(self._fd_out, payload)
            payload = payload[written:]

    # -- cursor / line manipulation ----------------------------------------

    def move_to_column(self, column: int) -> None:
        self.write(_MOVE_TO_COLUMN_FMT.format(column + 1))

    def move_left(self, n: int = 1) -> None:
        if n > 0:
            self.write(_MOVE_LEFT_FMT.format(n))

    def move_right(self, n: int = 1) -> None:
        if n > 0:
            self.write(_MOVE_RIGHT_FMT.format(n))

    def clear_line_end(self) -> None:
        self.write(_CLEAR_LINE_END)

    def set_foreground(self, color: str) -> None:
        try:
            code = FOREGROUND_COLORS[color]
        except KeyError:
            raise ValueError(f"unknown color {color!r}") from None
        self.write(f"\x1b[{code}m")

    def reset_color(self) -> None:
        self.write(_RESET_COLOR)

    def cursor_column(self) -> int:
        """Ask the terminal where the cursor is and return its column.

        Key presses that arrive before the report are kept for
        :meth:`read_event`.
        """
        self.write(_QUERY_CURSOR)
        self.flush()

        pending = ""
        deadline = time.monotonic() + _CURSOR_REPORT_TIMEOUT
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not self._readable(remaining):
                raise TimeoutError("terminal did not report the cursor position")
            raw = os.read(self._fd_in, 4096)
            if not raw:
                raise EOFError("terminal input closed")
            pending += self._decoder.decode(raw)
            match = _CURSOR_REPORT_RE.search(pending)
            if match:
                before, after = pending[: match.start()], pending[match.end() :]
                if before or after:
                    self._stdin_buffer.process(before + after)
                return int(match.group(2)) - 1
