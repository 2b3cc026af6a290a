"""StdinBuffer buffers input and emits complete sequences.

Stdin data can arrive in partial chunks, especially for escape sequences
like ``ESC [ 1 ; 3 D``. Without buffering, partial sequences would be
misinterpreted as separate keypresses. Runs of printable text are emitted
as one event so that a multi-code-point grapheme typed or pasted in one
go reaches the line buffer whole.
"""

from __future__ import annotations

from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        return _is_complete_csi_sequence(data)

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # ESC ESC [ ... : alt + CSI key on some terminals
    if after_esc.startswith(ESC) and len(after_esc) > 1:
        status = _is_complete_sequence(after_esc)
        return "complete" if status == "not-escape" else status

    if after_esc == ESC:
        return "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    last_char_code = ord(data[-1])
    if 0x40 <= last_char_code <= 0x7E:
        return "complete"
    return "incomplete"


def _is_text_char(ch: str) -> bool:
    cp = ord(ch)
    return not (cp < 32 or cp == 0x7F or 0x80 <= cp <= 0x9F)


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated buffer into complete sequences.

    Returns (sequences, remainder).
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if remaining.startswith(ESC):
            seq_end = 1
            while seq_end <= len(remaining):
                status = _is_complete_sequence(remaining[:seq_end])
                if status == "incomplete":
                    seq_end += 1
                    continue
                sequences.append(remaining[:seq_end])
                pos += seq_end
                break
            else:
                return sequences, remaining
        elif _is_text_char(remaining[0]):
            run_end = 1
            while run_end < len(remaining) and _is_text_char(remaining[run_end]):
                run_end += 1
            sequences.append(remaining[:run_end])
            pos += run_end
        else:
            sequences.append(remaining[0])
            pos += 1

    return sequences, ""


class StdinBuffer:
    """Buffers decoded stdin text and emits complete sequences.

    Handles partial escape sequences that arrive across multiple chunks and
    collects bracketed pastes into a single paste event.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        """Set callback for paste content."""
        self._on_paste = callback

    def _emit_data(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def _emit_paste(self, data: str) -> None:
        if self._on_paste:
            self._on_paste(data)

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._buffer += data

        if self._paste_mode:
            self._paste_buffer += self._buffer
            self._buffer = ""
            self._finish_paste()
            return

        start_index = self._buffer.find(BRACKETED_PASTE_START)
        if start_index != -1:
            if start_index > 0:
                sequences, _ = _extract_complete_sequences(self._buffer[:start_index])
                for sequence in sequences:
                    self._emit_data(sequence)

            self._paste_buffer = self._buffer[start_index + len(BRACKETED_PASTE_START) :]
            self._buffer = ""
            self._paste_mode = True
            self._finish_paste()
            return

        sequences, remainder = _extract_complete_sequences(self._buffer)
        self._buffer = remainder

        for sequence in sequences:
            self._emit_data(sequence)

    def _finish_paste(self) -> None:
        end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end_index == -1:
            return

        pasted_content = self._paste_buffer[:end_index]
        remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END) :]

        self._paste_mode = False
        self._paste_buffer = ""

        self._emit_paste(pasted_content)

        if remaining:
            self.process(remaining)

    def flush(self) -> list[str]:
        """Give up waiting for the rest of a sequence and return what is held."""
        if not self._buffer:
            return []

        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""

    def get_buffer(self) -> str:
        return self._buffer

    @property
    def in_paste(self) -> bool:
        return self._paste_mode
