"""Box layout engine.

Turns a question, choice entries, footer lines and inline description lines
into a bordered block of text that fits the terminal:

    ╭──────────────────────────────╮
    │ What are you doing now?      │
    │                              │
    │ > c) Coding                  │
    │   s) Sleeping                │
    │                              │
    │ Use arrows or hotkeys, Enter │
    │ to choose.                   │
    ╰──────────────────────────────╯

Every logical line is word-wrapped on its own. Widths are measured in
terminal cells, so wide characters take two columns and ANSI escape codes
take none. When the terminal cannot fit the minimum box, a small fallback
box asks the user to widen it.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence
from typing import NamedTuple

from .choices import ChoiceEntry
from .elements.terminal import ANSI
from .errors import InvalidWidth

__all__ = [
    "BORDER_STYLES",
    "MIN_BOX_WIDTH",
    "BoxBorders",
    "BoxRender",
    "render_box",
    "wrap_with_lead",
    "wrap_words",
]

# Smallest usable content width (excluding borders and padding)
MIN_BOX_WIDTH = 15
# Two border glyphs plus one space of padding on each side
BORDER_ALLOWANCE = 4
# Content width floor for the "too narrow" fallback box
MIN_NARROW_WIDTH = 3

CURSOR_LEAD = "> "
BLANK_LEAD = "  "
DESCRIPTION_LEAD = " " * 8
NARROW_MESSAGE = "Too narrow - widen the terminal"

TAB_SIZE = 4


class BoxBorders(NamedTuple):
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str


BORDER_STYLES: dict[str, BoxBorders] = {
    "round": BoxBorders("╭", "╮", "╰", "╯", "─", "│"),
    "single": BoxBorders("┌", "┐", "└", "┘", "─", "│"),
    "double": BoxBorders("╔", "╗", "╚", "╝", "═", "║"),
}


class BoxRender(NamedTuple):
    """Result of a render.

    width is the effective content width every interior line is padded to.
    is_narrow is True when the terminal was too small and the fallback box
    was drawn instead of the prompt.
    """

    text: str
    is_narrow: bool
    width: int


def _identity(text: str) -> str:
    return text


def _hard_split(token: str, width: int) -> list[str]:
    """Split a token into pieces no wider than width cells."""
    pieces: list[str] = []
    piece = ""
    piece_len = 0
    for char in token:
        char_len = ANSI.visual_len(char)
        if piece and piece_len + char_len > width:
            pieces.append(piece)
            piece, piece_len = "", 0
        piece += char
        piece_len += char_len
    pieces.append(piece)
    return pieces


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap of one logical line.

    Whitespace-delimited tokens are packed onto a line while they fit. A token
    wider than the line on its own is hard-split at the width boundary. Text
    that already fits is returned untouched, inner spacing included.

    Always returns at least one (possibly empty) line.
    """
    text = text.expandtabs(TAB_SIZE)
    if "\n" not in text and ANSI.visual_len(text) <= width:
        return [text]

    width = max(1, width)
    lines: list[str] = []
    current = ""
    current_len = 0
    for token in text.split():
        token_len = ANSI.visual_len(token)
        if token_len > width:
            if current:
                lines.append(current)
            pieces = _hard_split(token, width)
            lines.extend(pieces[:-1])
            current = pieces[-1]
            current_len = ANSI.visual_len(current)
        elif not current:
            current, current_len = token, token_len
        elif current_len + 1 + token_len <= width:
            current += " " + token
            current_len += 1 + token_len
        else:
            lines.append(current)
            current, current_len = token, token_len

    if current or not lines:
        lines.append(current)
    return lines


def wrap_with_lead(lead: str, text: str, width: int) -> list[str]:
    """Wrap text behind a leading indicator.

    The text is wrapped against width minus the lead's width. Continuation
    lines get a blank lead of the same width so they line up under the text.
    """
    lead_width = ANSI.visual_len(lead)
    chunks = wrap_words(text, width - lead_width)
    blank = " " * lead_width
    return [lead + chunks[0]] + [blank + chunk for chunk in chunks[1:]]


def _description_lines(raw: str | Sequence[str] | None) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split("\n")
    return [str(line) for line in raw]


def _draw(
    borders: BoxBorders,
    body: list[tuple[str, bool]],
    width: int,
    highlight: Callable[[str], str],
) -> str:
    horizontal = borders.horizontal * (width + 2)
    out = [f"{borders.top_left}{horizontal}{borders.top_right}"]
    for line, highlighted in body:
        padded = ANSI.pad_to_width(line, width)
        if highlighted:
            padded = highlight(padded)
        out.append(f"{borders.vertical} {padded} {borders.vertical}")
    out.append(f"{borders.bottom_left}{horizontal}{borders.bottom_right}")
    return "\n".join(out)


def _render_narrow(borders: BoxBorders, available: int) -> BoxRender:
    width = max(MIN_NARROW_WIDTH, available)
    body = [(line, False) for line in wrap_words(NARROW_MESSAGE, width)]
    return BoxRender(_draw(borders, body, width, _identity), True, width)


def render_box(
    question: str,
    entries: Sequence[ChoiceEntry],
    selected_index: int = 0,
    border_style: str = "round",
    footer_lines: Sequence[str] = (),
    inline_descriptions: Sequence[str | Sequence[str] | None] = (),
    box_width: int | None = None,
    highlight: Callable[[str], str] | None = None,
    checked: Collection[int] | None = None,
    columns: int | None = None,
) -> BoxRender:
    """Render the prompt box.

    Args:
        question: Question text; embedded newlines start new lines.
        entries: Normalized choices, in display order.
        selected_index: Index of the entry under the cursor.
        border_style: "round", "single" or "double" (others fall back to round).
        footer_lines: Lines drawn after the choices, behind a blank separator.
        inline_descriptions: Per-entry description (string or list of lines),
            None for entries that show nothing. Aligned with entries.
        box_width: Fixed content width, clamped to the terminal. None sizes
            the box to its content.
        highlight: Transform applied to the selected entry's padded lines.
        checked: Indices toggled on. When given, labels get "[x]"/"[ ]" marks.
        columns: Terminal width; read from the terminal when None.

    Raises:
        InvalidWidth: If box_width is below MIN_BOX_WIDTH.
    """
    if box_width is not None and box_width < MIN_BOX_WIDTH:
        raise InvalidWidth(box_width, MIN_BOX_WIDTH)

    borders = BORDER_STYLES.get(border_style, BORDER_STYLES["round"])
    if columns is None:
        columns = ANSI.get_terminal_width()
    available = columns - BORDER_ALLOWANCE
    if available < MIN_BOX_WIDTH:
        return _render_narrow(borders, available)

    wrap_width = min(box_width, available) if box_width is not None else available

    body: list[tuple[str, bool]] = []
    for line in str(question).split("\n"):
        body.extend((wrapped, False) for wrapped in wrap_words(line, wrap_width))
    body.append(("", False))

    for i, entry in enumerate(entries):
        is_selected = i == selected_index
        text = f"{entry.key}) {entry.label}"
        if checked is not None:
            text = f"[{'x' if i in checked else ' '}] {text}"
        lead = CURSOR_LEAD if is_selected else BLANK_LEAD
        body.extend(
            (wrapped, is_selected) for wrapped in wrap_with_lead(lead, text, wrap_width)
        )
        if i < len(inline_descriptions):
            for desc_line in _description_lines(inline_descriptions[i]):
                body.extend(
                    (wrapped, False)
                    for wrapped in wrap_with_lead(DESCRIPTION_LEAD, desc_line, wrap_width)
                )

    if footer_lines:
        body.append(("", False))
        for line in "\n".join(footer_lines).split("\n"):
            body.extend((wrapped, False) for wrapped in wrap_words(line, wrap_width))

    if box_width is not None:
        width = wrap_width
    else:
        width = min(available, max(ANSI.visual_len(line) for line, _ in body))

    text = _draw(borders, body, width, highlight or _identity)
    return BoxRender(text, False, width)
