"""Interactive terminal elements.

This module provides an abstraction for interactive terminal elements
that own the screen and capture input until they produce a result.

Usage:
    from box_picker.elements import ElementManager

    manager = ElementManager()
    result = await manager.run(element)
"""

from .base import ActiveElement, InputEvent
from .manager import ElementManager
from .terminal import ANSI, RawInputReader, TerminalScreen

__all__ = [
    # Base
    "ActiveElement",
    "InputEvent",
    # Manager
    "ElementManager",
    # Terminal
    "ANSI",
    "RawInputReader",
    "TerminalScreen",
]
