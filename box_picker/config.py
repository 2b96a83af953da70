"""Prompt configuration and user defaults for box-picker."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from .choices import ChoiceEntry, normalize_choices
from .errors import InvalidQuestion, InvalidWidth
from .layout import MIN_BOX_WIDTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.environ.get(
    "BOX_PICKER_CONFIG", os.path.expanduser("~/.box-picker.json")
)

E = TypeVar("E", bound=Enum)


class BorderStyle(str, Enum):
    ROUND = "round"
    SINGLE = "single"
    DOUBLE = "double"


class DescriptionDisplay(str, Enum):
    """When descriptions are shown."""

    ALWAYS = "always"  # Every entry that has one
    SELECTED = "selected"  # Only the entry under the cursor
    NONE = "none"


class DescriptionPlacement(str, Enum):
    """Where descriptions are shown."""

    INLINE = "inline"  # Indented under the entry
    FOOTER = "footer"  # Below the choices


def _coerce(enum_cls: type[E], value: Any, default: E) -> E:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        logger.debug("invalid %s %r, using %r", enum_cls.__name__, value, default.value)
        return default


@dataclass
class PromptConfig:
    """Validated prompt options.

    Construction validates everything that can be wrong with the caller's
    options, so errors surface before the terminal is touched:
    - question must be a string (InvalidQuestion)
    - choices must be a non-empty list or mapping (InvalidChoices)
    - box_width, when given, must be an integer >= 15 (InvalidWidth)

    Unknown border styles fall back to round; unknown description modes fall
    back to their defaults.
    """

    question: str
    choices: Any
    default_index: int = 0
    border_style: BorderStyle = BorderStyle.ROUND
    selected_color: str | Callable[[str], str] | None = None
    confirm: bool = True
    description_display: DescriptionDisplay = DescriptionDisplay.SELECTED
    description_placement: DescriptionPlacement = DescriptionPlacement.INLINE
    show_footer_hint: bool = True
    box_width: int | None = None
    entries: list[ChoiceEntry] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.question, str):
            raise InvalidQuestion()
        self.entries = normalize_choices(self.choices)
        if self.box_width is not None and (
            isinstance(self.box_width, bool)
            or not isinstance(self.box_width, int)
            or self.box_width < MIN_BOX_WIDTH
        ):
            raise InvalidWidth(self.box_width, MIN_BOX_WIDTH)

        self.border_style = _coerce(BorderStyle, self.border_style, BorderStyle.ROUND)
        self.description_display = _coerce(
            DescriptionDisplay, self.description_display, DescriptionDisplay.SELECTED
        )
        self.description_placement = _coerce(
            DescriptionPlacement, self.description_placement, DescriptionPlacement.INLINE
        )

    def initial_index(self) -> int:
        """Starting cursor position: default_index wrapped into range."""
        if isinstance(self.default_index, bool) or not isinstance(self.default_index, int):
            return 0
        return self.default_index % len(self.entries)


def load_picker_config(path: str = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load user defaults from disk. Returns empty dict if not found or invalid."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.debug("ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}
