"""Map raw keys and keypad buttons onto calcpad commands.

Keyboard keys use the names a key event reports ("7", "+", "Enter",
"Backspace", ...). Keypad buttons carry either a digit/point (num) or an
action name. Anything unmapped returns None: the key is not consumed and the
caller should let it through.
"""

from __future__ import annotations

from typing import Iterator, Optional

from calcpad.models import Command, Operator

_OPERATOR_KEYS = {op.value for op in Operator} | {op.glyph for op in Operator}

_KEY_COMMANDS = {
    "Enter": Command.equals(),
    "Return": Command.equals(),
    "=": Command.equals(),
    "Backspace": Command.backspace(),
    "Escape": Command.clear(),
    "c": Command.clear(),
    "C": Command.clear(),
    "%": Command.percent(),
    "±": Command.toggle_sign(),
    "n": Command.toggle_sign(),
    "N": Command.toggle_sign(),
}

# Keypad data-action names
_BUTTON_ACTIONS = {
    "=": Command.equals(),
    "clear": Command.clear(),
    "percent": Command.percent(),
    "toggle-sign": Command.toggle_sign(),
    "backspace": Command.backspace(),
}


def command_for_key(key: str) -> Optional[Command]:
    """Translate one key name into a command, or None if it is not ours."""
    if len(key) == 1 and key in "0123456789":
        return Command.digit(key)
    if key == ".":
        return Command.point()
    if key in _OPERATOR_KEYS:
        return Command.operator(key)
    return _KEY_COMMANDS.get(key)


def command_for_button(num: Optional[str] = None, action: Optional[str] = None) -> Optional[Command]:
    """Translate a keypad button into a command.

    A button with num set is a digit or point button; num wins over action.
    """
    if num is not None:
        return Command.point() if num == "." else Command.digit(num)
    if action is None:
        return None
    if action in _OPERATOR_KEYS:
        return Command.operator(action)
    return _BUTTON_ACTIONS.get(action)


def commands_for_text(text: str) -> Iterator[tuple[str, Command]]:
    """Yield (key, command) for each consumed character of typed text."""
    for ch in text:
        if ch in "\r\n":
            ch = "Enter"
        elif ch == "\x08":
            ch = "Backspace"
        elif ch == "\x1b":
            ch = "Escape"
        command = command_for_key(ch)
        if command is not None:
            yield ch, command
