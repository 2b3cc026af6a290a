"""Fixed key map for the line editor."""

from __future__ import annotations

from typing import Literal

from lineedit.keys import KeyId

EditorAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteToLineStart",
    "deleteToLineEnd",
    # History
    "historyOlder",
    "historyNewer",
    # Session
    "submit",
    "exit",
]

HISTORY_ACTIONS: frozenset[str] = frozenset({"historyOlder", "historyNewer"})

DEFAULT_EDITOR_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorWordLeft": ["alt+left", "ctrl+left", "alt+b"],
    "cursorWordRight": ["alt+right", "ctrl+right", "alt+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "deleteWordBackward": ["ctrl+w", "alt+backspace"],
    "deleteToLineStart": "ctrl+u",
    "deleteToLineEnd": "ctrl+k",
    # History
    "historyOlder": ["up", "ctrl+p"],
    "historyNewer": ["down", "ctrl+n"],
    # Session
    "submit": "enter",
    "exit": ["ctrl+d", "ctrl+c"],
}


class KeyBindings:
    """Resolves key identifiers to editor actions."""

    def __init__(self) -> None:
        self._key_to_action: dict[KeyId, EditorAction] = {}
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            for key in key_array:
                self._key_to_action[key] = action

    def action_for(self, key: KeyId | None) -> EditorAction | None:
        """Return the action bound to *key*, or ``None``."""
        if key is None:
            return None
        return self._key_to_action.get(key)

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        keys = DEFAULT_EDITOR_KEYBINDINGS.get(action, [])
        return list(keys) if isinstance(keys, list) else [keys]
