"""Configuration errors raised by the picker entry points.

This module provides:
- PickerError: Base exception carrying the name of the offending option
- InvalidQuestion, InvalidChoices, InvalidWidth: One subclass per check

All of them are raised synchronously, before the prompt touches the terminal.
A terminal that is too narrow is not an error (see layout.render_box).
"""

from __future__ import annotations

__all__ = ["PickerError", "InvalidQuestion", "InvalidChoices", "InvalidWidth"]


class PickerError(Exception):
    """Base class for picker configuration errors.

    Example:
        >>> try:
        ...     await pick_box(question=123, choices=["a"])
        ... except PickerError as e:
        ...     print(e.field, e)
        question question must be a string
    """

    def __init__(self, message: str, field: str | None = None):
        """Initialize PickerError.

        Args:
            message: Human-readable error description
            field: Name of the option that failed validation (e.g., "choices")
        """
        self.field = field
        super().__init__(message)


class InvalidQuestion(PickerError):
    """The question is not a string."""

    def __init__(self, message: str = "question must be a string"):
        super().__init__(message, field="question")


class InvalidChoices(PickerError):
    """Choices are empty or neither a sequence nor a mapping."""

    def __init__(self, message: str = "choices must be a non-empty list or mapping"):
        super().__init__(message, field="choices")


class InvalidWidth(PickerError):
    """A fixed box width below the minimum was requested."""

    def __init__(self, width: object, minimum: int):
        self.width = width
        self.minimum = minimum
        super().__init__(
            f"box_width must be at least {minimum} (got {width!r})", field="box_width"
        )
