"""Tests for terminal helpers in box_picker/elements/terminal.py."""

from __future__ import annotations

import io
import os

import pytest

from box_picker.elements.base import InputEvent
from box_picker.elements.terminal import ANSI, RawInputReader, TerminalScreen


def test_ansi_visual_len_strips_escape_codes() -> None:
    assert ANSI.visual_len("\033[31mred\033[0m") == 3
    assert ANSI.visual_len("plain") == 5


def test_ansi_visual_len_wide_characters() -> None:
    assert ANSI.visual_len("日本") == 4


def test_pad_to_width() -> None:
    assert ANSI.pad_to_width("ab", 4) == "ab  "
    assert ANSI.pad_to_width("abcdef", 4) == "abcdef"
    assert ANSI.pad_to_width("\033[1mab\033[0m", 3) == "\033[1mab\033[0m "


def test_screen_render_clears_then_writes(capsys: pytest.CaptureFixture[str]) -> None:
    screen = TerminalScreen()
    screen.activate()
    screen.render(["one", "two"])
    out = capsys.readouterr().out
    assert out == ANSI.HIDE_CURSOR + ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME + "one\ntwo"


def test_screen_inactive_render_is_noop(capsys: pytest.CaptureFixture[str]) -> None:
    screen = TerminalScreen()
    screen.render(["one"])
    screen.deactivate()
    assert capsys.readouterr().out == ""


def test_screen_deactivate_restores_cursor_once(capsys: pytest.CaptureFixture[str]) -> None:
    screen = TerminalScreen()
    screen.activate()
    capsys.readouterr()
    screen.deactivate()
    screen.deactivate()
    assert capsys.readouterr().out == "\n" + ANSI.SHOW_CURSOR


def test_screen_writes_to_given_output(capsys: pytest.CaptureFixture[str]) -> None:
    output = io.StringIO()
    screen = TerminalScreen(output)
    screen.activate()
    screen.render(["box"])
    screen.deactivate()
    assert output.getvalue() == (
        ANSI.HIDE_CURSOR + ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME + "box\n" + ANSI.SHOW_CURSOR
    )
    assert capsys.readouterr().out == ""


def _reader_on_pipe(data: bytes) -> RawInputReader:
    read_fd, write_fd = os.pipe()
    os.write(write_fd, data)
    os.close(write_fd)
    reader = RawInputReader.__new__(RawInputReader)
    reader.fd = read_fd
    reader.old_settings = None
    return reader


def test_reader_decodes_keys() -> None:
    reader = _reader_on_pipe("a\ré\x03".encode("utf-8"))
    try:
        assert reader._read_sync() == InputEvent(key="a", char="a")
        assert reader._read_sync() == InputEvent(key="Enter")
        assert reader._read_sync() == InputEvent(key="é", char="é")
        assert reader._read_sync() == InputEvent(key="c", char="c", ctrl=True)
    finally:
        os.close(reader.fd)


def test_reader_raises_on_closed_input() -> None:
    reader = _reader_on_pipe(b"")
    try:
        with pytest.raises(EOFError):
            reader._read_sync()
    finally:
        os.close(reader.fd)
