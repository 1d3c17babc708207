"""Editor keybindings manager."""

from __future__ import annotations

from typing import Literal

from bubble.texteditor.keys import KeyId, matches_key

EditorAction = Literal[
    # Cursor movement
    "characterForward",
    "characterBackward",
    "lineUp",
    "lineDown",
    # Editing
    "deleteCharacterBackward",
    "insertNewline",
    # Completion overlay
    "selectUp",
    "selectDown",
    "selectConfirm",
    "selectCancel",
]

KeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    "characterForward": ["right", "ctrl+f"],
    "characterBackward": ["left", "ctrl+b"],
    "lineUp": "up",
    "lineDown": "down",
    "deleteCharacterBackward": ["backspace", "ctrl+h"],
    "insertNewline": ["enter", "ctrl+m"],
    "selectUp": "up",
    "selectDown": "down",
    "selectConfirm": "tab",
    "selectCancel": "escape",
}


class KeybindingsManager:
    """Maps editor actions to the keys that trigger them.

    Each instance is independent; widgets receive one explicitly.
    """

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: EditorAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        return self._action_to_keys.get(action, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        self._build_maps(config)
