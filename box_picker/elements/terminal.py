"""Terminal control for interactive elements.

This module provides:
- ANSI: Centralized terminal escape sequences and width helpers
- TerminalScreen: Clear-and-redraw output sink
- RawInputReader: Reads single keystrokes in raw mode
"""

from __future__ import annotations

import asyncio
import fcntl
import os
import re
import shutil
import sys
import termios
import tty
from typing import Any, TextIO

import wcwidth

from .base import InputEvent


class ANSI:
    """Centralized ANSI escape sequences and terminal helpers.

    Usage:
        from .terminal import ANSI

        width = ANSI.get_terminal_width()
        padded = ANSI.pad_to_width(text, width)
    """

    RESET = "\033[0m"

    # Cursor visibility
    HIDE_CURSOR = "\033[?25l"
    SHOW_CURSOR = "\033[?25h"

    # Screen control
    CLEAR_SCREEN = "\033[2J"  # Clear entire screen
    MOVE_HOME = "\033[H"  # Move cursor to home position (1,1)

    # Pattern to match ANSI escape sequences (for stripping)
    _ANSI_PATTERN = re.compile(r"\033\[[0-9;]*m")

    @classmethod
    def get_terminal_width(cls) -> int:
        """Get current terminal width in columns.

        Never cached: the user may resize between two renders.
        """
        return shutil.get_terminal_size().columns

    @classmethod
    def _get_char_width(cls, char: str) -> int:
        """Get visual width of character (0 for control, 1-2 for normal).

        Uses wcwidth for proper handling of:
        - Wide characters (CJK, emoji): return 2
        - Normal characters: return 1
        - Control characters, combining marks: return 0
        """
        w = wcwidth.wcwidth(char)
        return w if w > 0 else 0

    @classmethod
    def strip_ansi(cls, s: str) -> str:
        """Remove ANSI escape sequences from string."""
        return cls._ANSI_PATTERN.sub("", s)

    @classmethod
    def visual_len(cls, s: str) -> int:
        """Calculate visual length of string, excluding ANSI escape codes."""
        stripped = cls.strip_ansi(s)
        width = 0
        for char in stripped:
            width += cls._get_char_width(char)
        return width

    @classmethod
    def pad_to_width(cls, s: str, width: int) -> str:
        """Right-pad s with spaces until it covers width terminal cells."""
        return s + " " * max(0, width - cls.visual_len(s))


class RawInputReader:
    """Reads single keystrokes from terminal in raw mode.

    start() and stop() bracket an exclusive raw-input session. Both are
    idempotent so they can sit in a finally block unconditionally.
    """

    def __init__(self) -> None:
        self.fd = sys.stdin.fileno()
        self.old_settings: list[Any] | None = None

    def start(self) -> None:
        """Enter raw mode and flush any pending input."""
        if self.old_settings is not None:
            return  # Already started - no-op
        self.old_settings = termios.tcgetattr(self.fd)
        # Flush any pending input to avoid stale keystrokes
        termios.tcflush(self.fd, termios.TCIFLUSH)
        tty.setraw(self.fd)
        # Re-enable output post-processing so '\n' moves to column 1.
        attrs = termios.tcgetattr(self.fd)
        attrs[1] |= termios.OPOST | termios.ONLCR
        termios.tcsetattr(self.fd, termios.TCSADRAIN, attrs)

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None

    async def read(self) -> InputEvent:
        """Read a single input event (async-friendly)."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._read_sync)

    def _read_sync(self) -> InputEvent:
        """Synchronous read of a single key.

        Raises:
            EOFError: If input is closed; no key can ever arrive.
        """
        raw = os.read(self.fd, 1)
        if not raw:
            raise EOFError("input closed")
        if raw[0] >= 0xC0:
            # Lead byte of a multi-byte UTF-8 character
            raw += os.read(self.fd, 1 if raw[0] < 0xE0 else 2 if raw[0] < 0xF0 else 3)
        ch = raw.decode("utf-8", errors="ignore")

        if ch in ("\r", "\n"):
            return InputEvent(key="Enter", char=None)
        elif ch == "\x1b":  # Escape - check for sequences
            # Set non-blocking mode to check for more chars
            flags = fcntl.fcntl(self.fd, fcntl.F_GETFL)
            fcntl.fcntl(self.fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)

            try:
                seq = self._read_escape_sequence()
                if seq in ("[A", "OA"):
                    return InputEvent(key="Up", char=None)
                if seq in ("[B", "OB"):
                    return InputEvent(key="Down", char=None)
                if seq and os.environ.get("BOX_PICKER_DEBUG_KEYS") == "1":
                    sys.stderr.write(f"[debug] unknown escape seq: {seq!r}\n")
                    sys.stderr.flush()
                return InputEvent(key="Escape", char=None)
            finally:
                # Restore blocking mode
                fcntl.fcntl(self.fd, fcntl.F_SETFL, flags)
        elif ch == "\x03":  # Ctrl+C
            return InputEvent(key="c", char="c", ctrl=True)
        elif ch == "":
            # Undecodable bytes
            return InputEvent(key="", char=None)
        elif ord(ch) < 32 or ch == "\x7f":
            return InputEvent(key=ch, char=None, ctrl=True)
        else:
            return InputEvent(key=ch, char=ch)

    def _read_escape_sequence(self) -> str | None:
        """Read an escape sequence after ESC in non-blocking mode."""
        try:
            ch2 = os.read(self.fd, 1)
        except (BlockingIOError, OSError):
            return None
        if ch2 == b"[":
            seq = bytearray()
            # CSI: read until final byte in 0x40..0x7E
            while True:
                try:
                    b = os.read(self.fd, 1)
                except (BlockingIOError, OSError):
                    break
                seq.extend(b)
                if 0x40 <= b[0] <= 0x7E:
                    break
                if len(seq) >= 12:
                    break
            return "[" + seq.decode("utf-8", errors="ignore")
        if ch2 == b"O":
            try:
                ch3 = os.read(self.fd, 1)
            except (BlockingIOError, OSError):
                return "O"
            return "O" + ch3.decode("utf-8", errors="ignore")
        return ch2.decode("utf-8", errors="ignore")


class TerminalScreen:
    """Clear-and-redraw output sink.

    Every render erases the visible screen and writes the whole block again;
    nothing is diffed. The last block stays on screen after deactivate().

    output defaults to sys.stdout, looked up on every write. Callers whose
    stdout carries data (e.g. the command line tool) pass sys.stderr.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output
        self._active = False

    def _write(self, s: str) -> None:
        out = self._output or sys.stdout
        out.write(s)
        out.flush()

    def activate(self) -> None:
        """Hide the terminal cursor for the duration of the prompt."""
        self._active = True
        self._write(ANSI.HIDE_CURSOR)

    def clear(self) -> None:
        """Erase the visible output."""
        self._write(ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME)

    def write(self, lines: list[str]) -> None:
        """Write a block of lines starting at the cursor."""
        self._write("\n".join(lines))

    def render(self, lines: list[str]) -> None:
        """Clear, then write lines."""
        if not self._active:
            return
        self.clear()
        self.write(lines)

    def deactivate(self) -> None:
        """Leave the last render in place and restore the cursor."""
        if not self._active:
            return
        self._write("\n" + ANSI.SHOW_CURSOR)
        self._active = False
