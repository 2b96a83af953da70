"""Base types for interactive terminal elements.

This module provides:
- InputEvent: A single decoded keystroke
- ActiveElement: Protocol for elements driven by ElementManager
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class InputEvent:
    """A decoded keystroke.

    key is a symbolic name for special keys ("Up", "Down", "Enter", "Escape")
    or the character itself. char is the printable character, if any.
    """

    key: str
    char: str | None = None
    ctrl: bool = False


class ActiveElement(ABC, Generic[T]):
    """An element that owns the screen and input until it produces a result.

    ElementManager calls get_lines() for every render and handle_input() for
    every keystroke. handle_input() returns (done, result); the manager stops
    and returns result as soon as done is True. Otherwise it redraws when
    wants_render() says the keystroke changed something.
    """

    @abstractmethod
    def get_lines(self) -> list[str]:
        """Return the full block of lines to draw."""

    @abstractmethod
    def handle_input(self, event: InputEvent) -> tuple[bool, T | None]:
        """Apply a keystroke to the element's state."""

    def on_activate(self) -> None:
        """Called once before the first render."""

    def on_deactivate(self) -> None:
        """Called once after the element finished or failed."""

    def wants_render(self) -> bool:
        """Whether the last handle_input() changed what get_lines() shows.

        Keystrokes that change nothing skip the redraw.
        """
        return True

    def wants_refresh(self) -> bool:
        """Whether the last render should be redrawn periodically.

        Elements return True while their output depends on something that can
        change without a keystroke (e.g. the terminal size).
        """
        return False
