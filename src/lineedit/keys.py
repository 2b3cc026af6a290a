"""Keyboard input parsing for raw-mode terminals.

Turns one complete input sequence (as produced by
:class:`lineedit.stdin_buffer.StdinBuffer`) into a key identifier such as
``"a"``, ``"left"``, ``"alt+left"`` or ``"ctrl+d"``.
"""

from __future__ import annotations

import re

KeyId = str

# ---------------------------------------------------------------------------
# Modifiers (xterm encoding: parameter = 1 + bitmask)
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[Z": "shift+tab",
}

# Final byte of a modified ``CSI 1;<mod><final>`` sequence
_CSI_LETTER_KEYS: dict[str, KeyId] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number of a modified ``CSI <n>;<mod>~`` sequence
_CSI_TILDE_KEYS: dict[str, KeyId] = {
    "1": "home",
    "2": "insert",
    "3": "delete",
    "4": "end",
    "5": "pageUp",
    "6": "pageDown",
}

_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([A-DHF])$")
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")

# rxvt sends these for ctrl+arrows
_RXVT_CTRL_SEQUENCES: dict[str, KeyId] = {
    "\x1bOa": "ctrl+up",
    "\x1bOb": "ctrl+down",
    "\x1bOc": "ctrl+right",
    "\x1bOd": "ctrl+left",
}


def _modifier_prefix(param: int) -> str:
    mod = param - 1
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def _parse_escape_sequence(data: str) -> KeyId | None:
    key = LEGACY_KEY_SEQUENCES.get(data) or _RXVT_CTRL_SEQUENCES.get(data)
    if key is not None:
        return key

    match = _MODIFIED_LETTER_RE.match(data)
    if match:
        return _modifier_prefix(int(match.group(1))) + _CSI_LETTER_KEYS[match.group(2)]

    match = _MODIFIED_TILDE_RE.match(data)
    if match and match.group(1) in _CSI_TILDE_KEYS:
        return _modifier_prefix(int(match.group(2))) + _CSI_TILDE_KEYS[match.group(1)]

    # ESC followed by an arrow sequence: some terminals send this for alt+arrow
    if data.startswith("\x1b\x1b") and data[1:] in LEGACY_KEY_SEQUENCES:
        return "alt+" + LEGACY_KEY_SEQUENCES[data[1:]]

    return None


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    ``None`` is returned for multi-character text runs and for sequences
    that are not recognised.
    """
    if not data:
        return None

    if data.startswith("\x1b") and len(data) > 2:
        return _parse_escape_sequence(data)

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return "alt+escape"
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        if ch.isprintable():
            return "alt+" + ch

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None
