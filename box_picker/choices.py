"""Choice normalization.

Turns the caller's choices (a list, or a mapping keyed by hotkey) into an
ordered list of immutable ChoiceEntry records.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import InvalidChoices

__all__ = ["ChoiceEntry", "normalize_choices", "build_hotkey_index"]


@dataclass(frozen=True)
class ChoiceEntry:
    """A single selectable item.

    key is the hotkey, matched case-insensitively. value is handed back to the
    caller untouched.
    """

    key: str
    label: str
    value: Any
    description: str | None = None


def _entry_from_raw(raw: Any, key: str) -> ChoiceEntry:
    if isinstance(raw, Mapping):
        if "value" in raw:
            value = raw["value"]
        elif "label" in raw:
            value = raw["label"]
        else:
            value = str(dict(raw))
        label = str(raw["label"]) if raw.get("label") is not None else str(value)
        description = raw.get("description")
        return ChoiceEntry(
            key=key,
            label=label,
            value=value,
            description=str(description) if description is not None else None,
        )
    return ChoiceEntry(key=key, label=str(raw), value=raw)


def normalize_choices(choices: Any) -> list[ChoiceEntry]:
    """Normalize list or mapping choices into ordered entries.

    List items get positional hotkeys ("1", "2", ...). Mapping keys become the
    hotkeys and the mapping's iteration order is the display order.

    Raises:
        InvalidChoices: If choices is empty or not a list/tuple/mapping.
    """
    if isinstance(choices, Mapping):
        entries = [_entry_from_raw(raw, str(key)) for key, raw in choices.items()]
    elif isinstance(choices, Sequence) and not isinstance(choices, (str, bytes)):
        entries = [_entry_from_raw(raw, str(i + 1)) for i, raw in enumerate(choices)]
    else:
        raise InvalidChoices()

    if not entries:
        raise InvalidChoices()
    return entries


def build_hotkey_index(entries: Sequence[ChoiceEntry]) -> dict[str, int]:
    """Map lower-cased hotkeys to entry indices.

    Keys that collide case-insensitively ("a" and "A") resolve to the last
    entry carrying them.
    """
    index: dict[str, int] = {}
    for i, entry in enumerate(entries):
        index[entry.key.lower()] = i
    return index
