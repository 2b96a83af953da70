"""Logical key actions derived from raw input events."""

from __future__ import annotations

from enum import Enum, auto

from .elements.base import InputEvent


class KeyAction(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    SUBMIT = auto()
    HOTKEY = auto()  # Any single printable character, space included
    INTERRUPT = auto()  # Ctrl+C
    IGNORED = auto()


def classify_key(event: InputEvent) -> tuple[KeyAction, str | None]:
    """Map an InputEvent to (action, hotkey character)."""
    if event.ctrl:
        if event.char == "c":
            return KeyAction.INTERRUPT, None
        return KeyAction.IGNORED, None
    if event.key == "Up":
        return KeyAction.MOVE_UP, None
    if event.key == "Down":
        return KeyAction.MOVE_DOWN, None
    if event.key == "Enter":
        return KeyAction.SUBMIT, None
    if event.char is not None and len(event.char) == 1 and event.char.isprintable():
        return KeyAction.HOTKEY, event.char
    return KeyAction.IGNORED, None
