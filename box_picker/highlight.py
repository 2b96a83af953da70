"""Highlighting for the line under the cursor.

A highlighter is any ``str -> str`` function. Callers pass their own, or name
a rich style ("cyan", "bold magenta", "bright_green", ...). Names rich cannot
parse fall back to the default accent.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

__all__ = ["DEFAULT_ACCENT", "Highlighter", "make_highlight"]

logger = logging.getLogger(__name__)

Highlighter = Callable[[str], str]

DEFAULT_ACCENT = "cyan"


def _plain(text: str) -> str:
    return text


def _style_highlighter(style: Style) -> Highlighter:
    def highlight(text: str) -> str:
        return style.render(text, color_system=ColorSystem.STANDARD)

    return highlight


def make_highlight(selected_color: str | Highlighter | None = None) -> Highlighter:
    """Resolve the selected_color option into a highlighter.

    With NO_COLOR set in the environment, named and default accents render
    plain text; a callable is always used as given.
    """
    if callable(selected_color):
        return selected_color
    if os.environ.get("NO_COLOR"):
        return _plain

    if isinstance(selected_color, str) and selected_color.strip():
        try:
            return _style_highlighter(Style.parse(selected_color))
        except StyleSyntaxError:
            logger.debug("unknown highlight style %r, using default", selected_color)
    elif selected_color is not None:
        logger.debug("unsupported highlight %r, using default", selected_color)

    return _style_highlighter(Style.parse(DEFAULT_ACCENT))
