"""Boxed selection prompts.

This module provides:
- PickerStateMachine: Cursor, multi-select set and confirmation phase
- compose_footer: Footer and inline-description content for a state
- BoxPicker: ActiveElement that draws the box and feeds keys to the machine
- pick_box / multi_pick_box: Async entry points

Usage:
    result = await pick_box(
        question="What are you doing now?",
        choices={"c": "Coding", "r": "Reviewing", "s": "Sleeping"},
    )
    print(result.value)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from .choices import ChoiceEntry, build_hotkey_index
from .config import DescriptionDisplay, DescriptionPlacement, PromptConfig
from .elements.base import ActiveElement, InputEvent
from .elements.manager import ElementManager
from .highlight import Highlighter, make_highlight
from .keys import KeyAction, classify_key
from .layout import BoxRender, render_box

__all__ = [
    "BoxPicker",
    "MultiPickResult",
    "PickResult",
    "PickerPhase",
    "PickerStateMachine",
    "PromptState",
    "compose_footer",
    "multi_pick_box",
    "pick_box",
]

logger = logging.getLogger(__name__)

SINGLE_HINT = "Use arrows or hotkeys, Enter to choose."
MULTI_HINT = "Space to toggle, arrows/hotkeys to move, Enter to confirm."
CONFIRM_PROMPT = "Confirm? (Enter/y = yes, n = back)"
TOGGLE_KEY = " "


class PickerPhase(Enum):
    BROWSING = auto()
    CONFIRMING = auto()
    FINISHED = auto()


@dataclass
class PromptState:
    """Mutable session state, owned by PickerStateMachine."""

    current_index: int = 0
    selected: set[int] = field(default_factory=set)
    confirming: bool = False
    finished: bool = False


@dataclass(frozen=True)
class PickResult:
    index: int
    value: Any


@dataclass(frozen=True)
class MultiPickResult:
    indices: list[int]
    values: list[Any]


class PickerStateMachine:
    """Input state machine for single- and multi-select prompts.

    State Diagram:
        BROWSING ──submit──► CONFIRMING ──submit / y──► FINISHED
            ▲                    │
            └────────── n ───────┘

        With confirm=False, submit goes straight from BROWSING to FINISHED.

    Every event method returns True when the state changed (the caller should
    re-render). Once finished, every event is a no-op.
    """

    def __init__(
        self,
        entries: Sequence[ChoiceEntry],
        confirm: bool = True,
        multi: bool = False,
        initial_index: int = 0,
    ) -> None:
        self.entries = list(entries)
        self.confirm = confirm
        self.multi = multi
        self.state = PromptState(current_index=initial_index % len(self.entries))
        self._hotkeys = build_hotkey_index(self.entries)

    @property
    def phase(self) -> PickerPhase:
        if self.state.finished:
            return PickerPhase.FINISHED
        if self.state.confirming:
            return PickerPhase.CONFIRMING
        return PickerPhase.BROWSING

    @property
    def current_entry(self) -> ChoiceEntry:
        return self.entries[self.state.current_index]

    def move(self, delta: int) -> bool:
        """Move the cursor by delta, wrapping around both ends."""
        if self.phase is not PickerPhase.BROWSING:
            return False
        self.state.current_index = (self.state.current_index + delta) % len(self.entries)
        return True

    def submit(self) -> bool:
        """Enter: ask for confirmation, or finish."""
        if self.state.finished:
            return False
        if self.state.confirming or not self.confirm:
            self._finish()
        else:
            self.state.confirming = True
            logger.debug("confirming index %d", self.state.current_index)
        return True

    def hotkey(self, char: str) -> bool:
        """Handle a printable key.

        While confirming, only y/Y (finish) and n/N (back) mean anything.
        While browsing, a matching hotkey moves the cursor to its entry and
        then submits (single-select) or toggles it (multi-select).
        """
        if self.state.finished:
            return False
        if self.state.confirming:
            if char in ("y", "Y"):
                self._finish()
                return True
            if char in ("n", "N"):
                self.state.confirming = False
                logger.debug("back to browsing")
                return True
            return False

        index = self._hotkeys.get(char.lower())
        if index is None:
            if self.multi and char == TOGGLE_KEY:
                return self.toggle()
            return False

        self.state.current_index = index
        if self.multi:
            return self.toggle(index)
        return self.submit()

    def toggle(self, index: int | None = None) -> bool:
        """Flip membership of index (default: the cursor) in the selected set."""
        if not self.multi or self.phase is not PickerPhase.BROWSING:
            return False
        if index is None:
            index = self.state.current_index
        if index in self.state.selected:
            self.state.selected.remove(index)
        else:
            self.state.selected.add(index)
        return True

    def _finish(self) -> None:
        self.state.confirming = False
        self.state.finished = True
        logger.debug("finished at index %d", self.state.current_index)

    def result(self) -> PickResult | MultiPickResult:
        """Resolve the final state. Multi-select indices come back ascending."""
        if not self.state.finished:
            raise RuntimeError("Picker has not finished")
        if self.multi:
            indices = sorted(self.state.selected)
            return MultiPickResult(
                indices=indices, values=[self.entries[i].value for i in indices]
            )
        index = self.state.current_index
        return PickResult(index=index, value=self.entries[index].value)


def _shows_description(
    entry: ChoiceEntry, index: int, current_index: int, display: DescriptionDisplay
) -> bool:
    if display == DescriptionDisplay.NONE or not entry.description:
        return False
    return display == DescriptionDisplay.ALWAYS or index == current_index


def compose_footer(
    machine: PickerStateMachine,
    description_display: DescriptionDisplay = DescriptionDisplay.SELECTED,
    description_placement: DescriptionPlacement = DescriptionPlacement.INLINE,
    show_footer_hint: bool = True,
) -> tuple[list[str], list[list[str] | None]]:
    """Build (footer_lines, inline_descriptions) for the machine's state."""
    entries = machine.entries
    state = machine.state
    shown = [
        _shows_description(entry, i, state.current_index, description_display)
        for i, entry in enumerate(entries)
    ]

    inline: list[list[str] | None] = [None] * len(entries)
    footer: list[str] = []
    if description_placement == DescriptionPlacement.INLINE:
        inline = [
            entry.description.split("\n") if show and entry.description else None
            for entry, show in zip(entries, shown)
        ]
    elif description_display == DescriptionDisplay.ALWAYS:
        footer = [
            f"{entry.label}: {entry.description}"
            for entry, show in zip(entries, shown)
            if show
        ]
    elif shown[state.current_index]:
        footer = [machine.current_entry.description or ""]

    if state.confirming:
        if machine.multi:
            summary = f"Selected items: {len(state.selected)}"
        else:
            summary = f"Selected: {machine.current_entry.value}"
        footer = [summary]
        if (
            description_placement == DescriptionPlacement.FOOTER
            and shown[state.current_index]
        ):
            footer.append(machine.current_entry.description or "")
        footer.append(CONFIRM_PROMPT)
    elif show_footer_hint:
        footer.append(MULTI_HINT if machine.multi else SINGLE_HINT)

    return footer, inline


@dataclass
class BoxPicker(ActiveElement[Any]):
    """Boxed choice list driven by PickerStateMachine.

    Navigate with up/down arrows or hotkeys.
    - Single-select: a hotkey or Enter chooses the entry.
    - Multi-select: Space or a hotkey toggles, Enter submits.
    Ctrl+C raises KeyboardInterrupt.
    """

    config: PromptConfig
    multi: bool = False
    machine: PickerStateMachine = field(init=False)
    _highlight: Highlighter = field(init=False, repr=False)
    _last_render: BoxRender | None = field(default=None, init=False, repr=False)
    _changed: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        self.machine = PickerStateMachine(
            self.config.entries,
            confirm=self.config.confirm,
            multi=self.multi,
            initial_index=self.config.initial_index(),
        )
        self._highlight = make_highlight(self.config.selected_color)

    def render(self, columns: int | None = None) -> BoxRender:
        """Lay out the box for the current state."""
        footer, inline = compose_footer(
            self.machine,
            self.config.description_display,
            self.config.description_placement,
            self.config.show_footer_hint,
        )
        state = self.machine.state
        rendered = render_box(
            self.config.question,
            self.machine.entries,
            selected_index=state.current_index,
            border_style=self.config.border_style.value,
            footer_lines=footer,
            inline_descriptions=inline,
            box_width=self.config.box_width,
            highlight=self._highlight,
            checked=state.selected if self.multi else None,
            columns=columns,
        )
        if self._last_render is not None and rendered.is_narrow != self._last_render.is_narrow:
            logger.debug("narrow terminal: %s", rendered.is_narrow)
        self._last_render = rendered
        return rendered

    def get_lines(self) -> list[str]:
        return self.render().text.split("\n")

    def wants_refresh(self) -> bool:
        """Keep redrawing while the terminal is too narrow to draw the prompt."""
        return self._last_render is not None and self._last_render.is_narrow

    def handle_input(self, event: InputEvent) -> tuple[bool, Any]:
        action, char = classify_key(event)
        if action is KeyAction.INTERRUPT:
            raise KeyboardInterrupt
        changed = False
        if action is KeyAction.MOVE_UP:
            changed = self.machine.move(-1)
        elif action is KeyAction.MOVE_DOWN:
            changed = self.machine.move(1)
        elif action is KeyAction.SUBMIT:
            changed = self.machine.submit()
        elif action is KeyAction.HOTKEY and char is not None:
            changed = self.machine.hotkey(char)
        self._changed = changed

        if self.machine.state.finished:
            return (True, self.machine.result())
        return (False, None)

    def wants_render(self) -> bool:
        return self._changed


async def _run_picker(picker: BoxPicker, manager: ElementManager | None) -> Any:
    manager = manager or ElementManager()
    try:
        return await manager.run(picker)
    except KeyboardInterrupt:
        # The manager has already restored the terminal
        raise SystemExit(1) from None
    except EOFError:
        logger.debug("input closed before a choice was made")
        raise SystemExit(1) from None


async def pick_box(
    question: str,
    choices: Any,
    *,
    default_index: int = 0,
    border_style: str = "round",
    selected_color: str | Callable[[str], str] | None = None,
    confirm: bool = True,
    description_display: str = "selected",
    description_placement: str = "inline",
    show_footer_hint: bool = True,
    box_width: int | None = None,
    manager: ElementManager | None = None,
) -> PickResult:
    """Show a boxed single-choice prompt and return the chosen entry.

    Args:
        question: The question text shown at the top.
        choices: A list (hotkeys "1", "2", ...) or a mapping whose keys become
            hotkeys. Each choice is a plain value or a mapping with "value",
            and optional "label" and "description".
        default_index: Initial cursor position, wrapped into range.
        border_style: "round", "single" or "double".
        selected_color: rich style name or str -> str function for the line
            under the cursor.
        confirm: Ask for confirmation before resolving.
        description_display: "always", "selected" or "none".
        description_placement: "inline" or "footer".
        show_footer_hint: Show the usage hint below the choices.
        box_width: Fixed content width (min 15), clamped to the terminal.
        manager: ElementManager to run on (a fresh one by default).

    Returns:
        PickResult with the chosen index and value.

    Raises:
        InvalidQuestion, InvalidChoices, InvalidWidth: Before anything is drawn.
        SystemExit: With status 1 when the user presses Ctrl+C or input closes.
    """
    config = PromptConfig(
        question=question,
        choices=choices,
        default_index=default_index,
        border_style=border_style,
        selected_color=selected_color,
        confirm=confirm,
        description_display=description_display,
        description_placement=description_placement,
        show_footer_hint=show_footer_hint,
        box_width=box_width,
    )
    return await _run_picker(BoxPicker(config), manager)


async def multi_pick_box(
    question: str,
    choices: Any,
    *,
    default_index: int = 0,
    border_style: str = "round",
    selected_color: str | Callable[[str], str] | None = None,
    confirm: bool = True,
    description_display: str = "selected",
    description_placement: str = "inline",
    show_footer_hint: bool = True,
    box_width: int | None = None,
    manager: ElementManager | None = None,
) -> MultiPickResult:
    """Show a boxed multi-choice prompt and return the toggled entries.

    Takes the same options as pick_box. Space or an entry's hotkey toggles
    it; Enter submits (an empty selection is allowed).

    Returns:
        MultiPickResult with ascending indices and their values.
    """
    config = PromptConfig(
        question=question,
        choices=choices,
        default_index=default_index,
        border_style=border_style,
        selected_color=selected_color,
        confirm=confirm,
        description_display=description_display,
        description_placement=description_placement,
        show_footer_hint=show_footer_hint,
        box_width=box_width,
    )
    return await _run_picker(BoxPicker(config, multi=True), manager)
