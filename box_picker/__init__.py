"""box-picker: boxed selection prompts for the terminal.

Draws a bordered box with a question and a list of choices, lets the user
move with the arrow keys or jump with hotkeys, optionally toggle several
entries and confirm, and resolves to the chosen value(s).

Usage:
    import asyncio
    from box_picker import pick_box

    result = asyncio.run(pick_box(
        question="What are you doing now?",
        choices={"c": "Coding", "r": "Reviewing", "s": "Sleeping"},
    ))
    print(result.value)

Features:
    - List choices (hotkeys 1, 2, ...) or mapping choices (keys are hotkeys)
    - Optional confirmation step
    - Descriptions inline or in the footer
    - Word wrapping to the terminal width, with a fallback box when the
      terminal is too narrow
    - Round, single and double borders
"""

from .choices import ChoiceEntry, normalize_choices
from .config import (
    BorderStyle,
    DescriptionDisplay,
    DescriptionPlacement,
    PromptConfig,
    load_picker_config,
)
from .errors import InvalidChoices, InvalidQuestion, InvalidWidth, PickerError
from .highlight import make_highlight
from .layout import BORDER_STYLES, MIN_BOX_WIDTH, BoxRender, render_box
from .picker import (
    BoxPicker,
    MultiPickResult,
    PickerStateMachine,
    PickResult,
    multi_pick_box,
    pick_box,
)

__all__ = [
    # Entry points
    "pick_box",
    "multi_pick_box",
    "PickResult",
    "MultiPickResult",
    # Configuration
    "PromptConfig",
    "BorderStyle",
    "DescriptionDisplay",
    "DescriptionPlacement",
    "load_picker_config",
    # Building blocks
    "ChoiceEntry",
    "normalize_choices",
    "BoxPicker",
    "PickerStateMachine",
    "render_box",
    "BoxRender",
    "BORDER_STYLES",
    "MIN_BOX_WIDTH",
    "make_highlight",
    # Errors
    "PickerError",
    "InvalidQuestion",
    "InvalidChoices",
    "InvalidWidth",
]
