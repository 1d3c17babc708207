"""Raw terminal input to key identifiers.

Only the legacy encodings a plain terminal sends are understood: CSI/SS3
cursor keys, the C0 control range, DEL/BS, and printable text. Key
identifiers use the ``"ctrl+f"`` / ``"left"`` form.
"""

from __future__ import annotations

KeyId = str


LEGACY_KEY_SEQUENCES: dict[str, str] = {
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
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

# C0 bytes that have a name of their own instead of ctrl+<letter>
_NAMED_CONTROLS: dict[str, str] = {
    "\x1b": "escape",
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    " ": "space",
}

# Aliases a binding may use for a key that arrives as a named control
_CTRL_ALIASES: dict[str, str] = {
    "ctrl+h": "backspace",
    "ctrl+i": "tab",
    "ctrl+m": "enter",
    "ctrl+j": "enter",
    "ctrl+[": "escape",
}


def parse_key(data: str) -> KeyId | None:
    """Return the key identifier for one chunk of raw input, or ``None``.

    Multi-character input that is not a known escape sequence (a paste,
    for instance) has no key identifier.
    """
    if not data:
        return None

    named = LEGACY_KEY_SEQUENCES.get(data)
    if named is not None:
        return named

    named = _NAMED_CONTROLS.get(data)
    if named is not None:
        return named

    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    if len(data) == 2 and data[0] == "\x1b" and data[1].isprintable():
        return "alt+" + data[1].lower()

    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Check whether raw *data* is the key named by *key_id*.

    ``ctrl+h`` matches the backspace byte and ``ctrl+m`` the carriage
    return, since terminals send the same byte for both.
    """
    parsed = parse_key(data)
    if parsed is None:
        return False
    key_id = key_id.lower() if len(key_id) > 1 else key_id
    return parsed.lower() == _CTRL_ALIASES.get(key_id, key_id).lower()


def is_printable_input(data: str) -> bool:
    """True for text that should be inserted as-is (typed runes or a paste)."""
    if not data or data.startswith("\x1b"):
        return False
    return all(ch.isprintable() or ch in "\n\t" for ch in data)
