"""Tests for the box layout engine in box_picker/layout.py.

Covers:
- Greedy word wrapping and hard splits
- Box composition and exact rendering
- Fixed and automatic widths, equal line widths
- Narrow-terminal fallback
"""

from __future__ import annotations

import re

import pytest

from box_picker.choices import normalize_choices
from box_picker.elements.terminal import ANSI
from box_picker.errors import InvalidWidth
from box_picker.layout import (
    BORDER_STYLES,
    MIN_BOX_WIDTH,
    render_box,
    wrap_with_lead,
    wrap_words,
)


def _interior(text: str) -> list[str]:
    """Content lines with borders and one-space padding stripped."""
    lines = ANSI.strip_ansi(text).split("\n")
    return [line[2:-2] for line in lines[1:-1]]


class TestWrapWords:
    """Tests for wrap_words()."""

    def test_short_text_is_untouched(self) -> None:
        assert wrap_words("a  b", 10) == ["a  b"]

    def test_empty_text_is_one_empty_line(self) -> None:
        assert wrap_words("", 10) == [""]

    def test_greedy_word_boundaries(self) -> None:
        assert wrap_words("the quick brown fox", 10) == ["the quick", "brown fox"]

    def test_long_token_is_hard_split(self) -> None:
        assert wrap_words("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_hard_split_between_words(self) -> None:
        assert wrap_words("xx abcdefghij yy", 4) == ["xx", "abcd", "efgh", "ij", "yy"]

    def test_wide_characters_count_two_cells(self) -> None:
        assert wrap_words("日本語", 4) == ["日本", "語"]

    def test_tabs_are_expanded(self) -> None:
        assert wrap_words("a\tb", 10) == ["a   b"]


class TestWrapWithLead:
    """Tests for wrap_with_lead()."""

    def test_continuation_aligns_under_text(self) -> None:
        assert wrap_with_lead("> ", "1) alpha beta gamma", 12) == [
            "> 1) alpha",
            "  beta gamma",
        ]

    def test_single_line(self) -> None:
        assert wrap_with_lead("  ", "1) A", 20) == ["  1) A"]


class TestRenderBox:
    """Tests for render_box() composition."""

    def test_exact_render(self) -> None:
        """Question, blank separator, cursor lead on the selected entry."""
        entries = normalize_choices({"a": "Alpha", "b": "Beta"})
        result = render_box("Pick", entries, 0, columns=80)
        assert result.text == "\n".join(
            [
                "╭────────────╮",
                "│ Pick       │",
                "│            │",
                "│ > a) Alpha │",
                "│   b) Beta  │",
                "╰────────────╯",
            ]
        )
        assert result.is_narrow is False
        assert result.width == 10

    def test_footer_gets_blank_separator(self) -> None:
        entries = normalize_choices(["A"])
        lines = _interior(render_box("Q", entries, footer_lines=["hint"], columns=80).text)
        assert lines[-2].strip() == ""
        assert lines[-1].rstrip() == "hint"

    def test_no_footer_means_no_trailing_blank(self) -> None:
        entries = normalize_choices(["A", "B"])
        lines = _interior(render_box("Q", entries, columns=80).text)
        assert lines[-1].rstrip() == "  2) B"

    def test_question_newlines_split_lines(self) -> None:
        entries = normalize_choices(["A"])
        lines = _interior(render_box("Line one\nLine two", entries, columns=80).text)
        assert lines[0].rstrip() == "Line one"
        assert lines[1].rstrip() == "Line two"

    def test_inline_descriptions_wrap_with_indent(self) -> None:
        """Description lines keep an 8-space indent inside the box."""
        entries = normalize_choices({"a": "Alpha"})
        text = render_box(
            "Q:",
            entries,
            0,
            inline_descriptions=[
                ["This description is long enough to wrap to the next line"]
            ],
            columns=30,
        ).text
        desc_lines = [
            line for line in text.split("\n") if "description" in line or "wrap" in line
        ]
        assert len(desc_lines) >= 2
        for line in desc_lines:
            assert re.match(r"^│ {9}\S", line)

    def test_description_follows_its_entry(self) -> None:
        entries = normalize_choices(["A", "B"])
        lines = _interior(
            render_box("Q", entries, 1, inline_descriptions=[None, "about B"], columns=80).text
        )
        assert [line.rstrip() for line in lines[2:]] == [
            "  1) A",
            "> 2) B",
            "        about B",
        ]

    def test_checked_marks(self) -> None:
        entries = normalize_choices({"a": "Alpha", "b": "Beta"})
        lines = _interior(render_box("Q", entries, 1, checked={1}, columns=80).text)
        assert lines[2].rstrip() == "  [ ] a) Alpha"
        assert lines[3].rstrip() == "> [x] b) Beta"

    def test_highlight_applies_after_padding(self) -> None:
        """Only the selected line is highlighted, and padding sits inside it."""
        entries = normalize_choices({"a": "Alpha", "b": "Beta"})
        text = render_box("Q", entries, 1, highlight=lambda s: f"<{s}>", columns=80).text
        lines = text.split("\n")
        assert lines[3] == "│   a) Alpha │"
        assert lines[4] == "│ <> b) Beta > │"

    def test_long_label_wraps_and_highlights_every_line(self) -> None:
        entries = normalize_choices(["a fairly long label that must wrap", "B"])
        text = render_box("Q", entries, 0, highlight=lambda s: f"<{s}>", columns=24).text
        highlighted = [line for line in text.split("\n") if "<" in line]
        assert len(highlighted) >= 2

    @pytest.mark.parametrize("style", ["round", "single", "double"])
    def test_border_glyphs(self, style: str) -> None:
        borders = BORDER_STYLES[style]
        entries = normalize_choices(["A"])
        text = render_box("Q", entries, border_style=style, columns=80).text
        lines = text.split("\n")
        assert lines[0][0] == borders.top_left
        assert lines[0][-1] == borders.top_right
        assert lines[-1][0] == borders.bottom_left
        assert lines[-1][-1] == borders.bottom_right
        assert all(line[0] == borders.vertical for line in lines[1:-1])

    def test_unknown_border_style_falls_back_to_round(self) -> None:
        text = render_box("Q", normalize_choices(["A"]), border_style="fancy", columns=80).text
        assert text.startswith("╭")


class TestRenderBoxWidth:
    """Tests for width selection and equal line widths."""

    @pytest.mark.parametrize("width", [15, 30, 80])
    def test_every_interior_line_has_the_effective_width(self, width: int) -> None:
        entries = normalize_choices(
            {
                "c": {"value": "Coding", "description": "Writing code all day long"},
                "s": "Sleeping through the entire afternoon without interruption",
            }
        )
        result = render_box(
            "What are you doing now? Pick the option that describes it best.",
            entries,
            0,
            footer_lines=["Use arrows or hotkeys, Enter to choose."],
            inline_descriptions=[["Writing code all day long"], None],
            box_width=width,
            highlight=lambda s: f"\033[36m{s}\033[0m",
            columns=200,
        )
        assert result.width == width
        for line in _interior(result.text):
            assert ANSI.visual_len(line) == width

    def test_width_below_minimum_raises(self) -> None:
        with pytest.raises(InvalidWidth):
            render_box("Q", normalize_choices(["A"]), box_width=MIN_BOX_WIDTH - 1, columns=80)

    def test_fixed_width_clamps_to_terminal(self) -> None:
        result = render_box("Q", normalize_choices(["A"]), box_width=100, columns=40)
        assert result.width == 36
        assert all(len(line) == 40 for line in result.text.split("\n"))

    def test_auto_width_is_capped_by_terminal(self) -> None:
        result = render_box(
            "A question that is much longer than the terminal is wide",
            normalize_choices(["A"]),
            columns=30,
        )
        assert result.width <= 26
        assert all(len(line) == result.width + 4 for line in result.text.split("\n"))

    def test_auto_width_fits_content(self) -> None:
        result = render_box("Q", normalize_choices(["Alpha"]), columns=80)
        assert result.width == len("> 1) Alpha")


class TestNarrowFallback:
    """Tests for the too-narrow fallback box."""

    def test_narrow_box_message_and_flag(self) -> None:
        result = render_box("Q", normalize_choices(["A"]), border_style="double", columns=14)
        assert result.is_narrow is True
        assert "too narrow" in result.text.lower()
        lines = result.text.split("\n")
        assert lines[0].startswith("╔") and lines[0].endswith("╗")
        assert lines[-1].startswith("╚") and lines[-1].endswith("╝")
        for line in _interior(result.text):
            assert len(line) == result.width == 10

    def test_tiny_terminal_hard_splits_message(self) -> None:
        """Below ten usable cells the message cannot stay on one line."""
        result = render_box("Q", normalize_choices(["A"]), columns=5)
        lines = result.text.split("\n")
        assert lines[0] == "╭─────╮"
        assert lines[-1] == "╰─────╯"
        assert lines[1:4] == ["│ Too │", "│ nar │", "│ row │"]
        contents = "".join(line[2:-2].strip() for line in lines[1:-1])
        assert contents == "Toonarrow-widentheterminal"

    def test_phrase_kept_whole_from_ten_cells(self) -> None:
        for columns in range(14, 19):
            text = render_box("Q", normalize_choices(["A"]), columns=columns).text
            assert "too narrow" in text.lower()

    def test_narrow_ignores_content(self) -> None:
        result = render_box("Secret question", normalize_choices(["A"]), columns=18)
        assert result.is_narrow is True
        assert "Secret" not in result.text

    def test_minimum_narrow_width(self) -> None:
        result = render_box("Q", normalize_choices(["A"]), columns=5)
        assert result.is_narrow is True
        assert result.width == 3
        assert result.text.split("\n")[0] == "╭─────╮"

    def test_narrow_even_with_fixed_width(self) -> None:
        result = render_box("Q", normalize_choices(["A"]), box_width=40, columns=12)
        assert result.is_narrow is True

    def test_threshold(self) -> None:
        """Fifteen usable columns (19 total) is enough for the real box."""
        assert render_box("Q", normalize_choices(["A"]), columns=19).is_narrow is False
        assert render_box("Q", normalize_choices(["A"]), columns=18).is_narrow is True

    def test_reads_terminal_width_when_not_given(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(ANSI, "get_terminal_width", lambda: 10)
        assert render_box("Q", normalize_choices(["A"])).is_narrow is True
        monkeypatch.setattr(ANSI, "get_terminal_width", lambda: 80)
        assert render_box("Q", normalize_choices(["A"])).is_narrow is False
