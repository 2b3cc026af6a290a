"""lineedit: single-line terminal editor with grapheme-aware editing and history."""

from lineedit.config import Config
from lineedit.history import History
from lineedit.keybindings import DEFAULT_EDITOR_KEYBINDINGS, EditorAction, KeyBindings
from lineedit.keys import KeyId, parse_key
from lineedit.line_buffer import LineBuffer
from lineedit.render import Command, apply, plan_repaint
from lineedit.repl import run_repl
from lineedit.session import EditSession, Outcome
from lineedit.stdin_buffer import StdinBuffer
from lineedit.terminal import ProcessTerminal, Terminal

__version__ = "0.1.0"

__all__ = [
    "Command",
    "Config",
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditSession",
    "EditorAction",
    "History",
    "KeyBindings",
    "KeyId",
    "LineBuffer",
    "Outcome",
    "ProcessTerminal",
    "StdinBuffer",
    "Terminal",
    "apply",
    "parse_key",
    "plan_repaint",
    "run_repl",
]
