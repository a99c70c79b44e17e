"""
Tests for the documentation formatter.

Covers line wrapping, wrapped blocks, flower lines and the XML
documentation elements.
"""

import pytest

from cscodegen.codegen.core.docformat import (
    CONTINUATION_PREFIX,
    join_parameter_names,
)
from cscodegen.codegen.core.model import ExceptionInfo, ParameterInfo

from .conftest import make_formatter


def _rejoin(lines, lead):
    """Rebuild the wrapped text from its lines (text without hyphens)."""
    text = ""
    for line in lines:
        assert line.startswith(lead)
        piece = line[len(lead):]
        if text.endswith("-"):
            text = text[:-1] + piece
        elif text:
            text += " " + piece
        else:
            text = piece
    return text


class TestWrap:
    """Tests for DocFormatter.wrap."""

    def test_text_that_fits_is_returned_whole(self):
        formatter = make_formatter(width=20)
        assert formatter.wrap("hello world", 0) == ("hello world", None)

    def test_breaks_on_last_space(self):
        formatter = make_formatter(width=15)
        assert formatter.wrap("The quick brown fox", 0) == ("The quick", "brown fox")

    def test_second_call_wraps_remainder(self):
        formatter = make_formatter(width=15)
        assert formatter.wrap("brown fox", 0) == ("brown fox", None)

    def test_hyphenates_when_no_space(self):
        formatter = make_formatter(width=10)
        line, rest = formatter.wrap("supercalifragilisticexpialidocious", 0)

        assert line == "supercal-"
        assert len(line) == 9
        assert rest == "ifragilisticexpialidocious"

    def test_empty_text(self):
        formatter = make_formatter(width=10)
        assert formatter.wrap("", 0) == ("", None)
        assert formatter.wrap("   ", 3) == ("", None)

    def test_no_remaining_space(self):
        formatter = make_formatter(width=3)
        assert formatter.wrap("some text", 5) == ("", "some text")

    def test_single_column_fits_one_letter_word(self):
        formatter = make_formatter(width=10)
        assert formatter.wrap("a bc", 8) == ("a", "bc")

    def test_single_column_rejects_longer_word(self):
        formatter = make_formatter(width=10)
        assert formatter.wrap("ab c", 8) == ("", "ab c")

    def test_trims_text(self):
        formatter = make_formatter(width=20)
        assert formatter.wrap("   hi   ", 0) == ("hi", None)

    def test_offset_reduces_space(self):
        formatter = make_formatter(width=20)
        # 20 - 10 - 1 = 9 columns
        assert formatter.wrap("alpha beta gamma", 10) == ("alpha", "beta gamma")

    def test_none_text_raises(self):
        with pytest.raises(TypeError):
            make_formatter().wrap(None, 0)

    def test_negative_offset_raises(self):
        with pytest.raises(ValueError):
            make_formatter().wrap("text", -1)


class TestEmitWrappedBlock:
    """Tests for DocFormatter.emit_wrapped_block."""

    def test_wraps_with_indent_and_prefix(self):
        formatter = make_formatter(width=20)
        lines = formatter.emit_wrapped_block(
            "alpha beta gamma delta epsilon", 1, "// ", first_line_prefix="// "
        )

        assert lines == [
            "    // alpha beta",
            "    // gamma delta",
            "    // epsilon",
        ]

    def test_first_line_without_prefix(self):
        formatter = make_formatter(width=16)
        lines = formatter.emit_wrapped_block("one two three four", 0, ">> ")

        # First line starts at column 0 (15 columns), continuations at 3 (12 columns)
        assert lines == ["one two three", ">> four"]

    def test_tabs_count_as_tab_size(self):
        formatter = make_formatter(width=20, use_tabs=True, tab_size=4)
        lines = formatter.emit_wrapped_block("alpha beta gamma delta", 2, "")

        # 20 - 8 - 1 = 11 columns per line
        assert lines == ["\t\talpha beta", "\t\tgamma delta"]

    def test_empty_text_gives_no_lines(self):
        assert make_formatter().emit_wrapped_block("", 3, "///   ") == []

    def test_narrow_line_emits_unbroken(self):
        formatter = make_formatter(width=3)
        lines = formatter.emit_wrapped_block("hello world", 2, "")

        assert lines == ["        hello world"]

    def test_narrow_prefix_retries_on_continuation_line(self):
        formatter = make_formatter(width=12)
        # The first line prefix leaves no room; continuation lines do.
        lines = formatter.emit_wrapped_block(
            "abc def", 0, "> ", first_line_prefix="#" * 11
        )

        assert lines == ["#" * 11, "> abc def"]

    def test_narrow_shared_prefix_is_written_once(self):
        formatter = make_formatter(width=5)
        lines = formatter.emit_wrapped_block(
            "abc def", 0, "///   ", first_line_prefix="///   "
        )

        assert lines == ["///   abc def"]

    def test_no_text_is_lost(self):
        text = (
            "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do "
            "eiusmod tempor incididunt ut labore et dolore magna aliqua"
        )
        for width in range(12, 60, 7):
            formatter = make_formatter(width=width)
            lines = formatter.emit_wrapped_block(text, 1, "// ", first_line_prefix="// ")
            assert _rejoin(lines, "    // ") == text

    def test_long_words_survive_hyphenation(self):
        text = "pneumonoultramicroscopicsilicovolcanoconiosis is long"
        formatter = make_formatter(width=12)
        lines = formatter.emit_wrapped_block(text, 0, "")

        assert _rejoin(lines, "") == text

    def test_lines_respect_width(self):
        text = "word " * 40 + "extraordinarilylongwordwithoutanyspaces"
        for width in (15, 33, 80):
            formatter = make_formatter(width=width)
            for line in formatter.emit_wrapped_block(text, 1, "/// ", first_line_prefix="/// "):
                assert len(line) <= width

    def test_single_line_when_text_fits(self):
        formatter = make_formatter(width=40)
        assert formatter.emit_wrapped_block("  short text  ", 0, "// ") == ["short text"]


class TestFlowerLine:
    """Tests for flower box lines."""

    def test_full_width(self):
        formatter = make_formatter(width=20)
        assert formatter.flower_line(0) == "//" + "*" * 18

    def test_indented(self):
        formatter = make_formatter(width=20)
        line = formatter.flower_line(1)

        assert line == "    //" + "*" * 14
        assert len(line) == 20

    def test_no_flower_character(self):
        assert make_formatter(flower=None).flower_line(0) is None

    def test_no_room(self):
        formatter = make_formatter(width=6)
        assert formatter.flower_line(1) == "    "


class TestDocumentationElements:
    """Tests for the XML documentation elements."""

    def test_single_line_element(self):
        formatter = make_formatter(use_tabs=True)
        assert formatter.documentation_element("summary", "Short.", 1) == [
            "\t/// <summary>Short.</summary>"
        ]

    def test_block_element(self):
        formatter = make_formatter(width=40)
        lines = formatter.documentation_element(
            "summary", "This summary is long enough to wrap around", 0
        )

        assert lines == [
            "/// <summary>",
            "///   This summary is long enough to",
            "///   wrap around",
            "/// </summary>",
        ]

    def test_param_element(self, formatter):
        assert formatter.param_element("name", " The name. ", 0) == [
            '/// <param name="name">The name.</param>'
        ]

    def test_param_element_wraps(self):
        formatter = make_formatter(width=40)
        lines = formatter.param_element("value", "A description of the value.", 0)

        assert lines[0] == '/// <param name="value">'
        assert lines[-1] == "/// </param>"
        assert all(line.startswith(CONTINUATION_PREFIX) for line in lines[1:-1])

    def test_exception_element(self, formatter):
        assert formatter.exception_element("IOException", "Failed.", 0) == [
            '/// <exception cref="IOException">Failed.</exception>'
        ]


class TestComponentHeader:
    """Tests for component documentation headers."""

    def test_summary_only(self):
        formatter = make_formatter(width=40)
        assert formatter.component_header("Does things.", 0) == [
            "//" + "*" * 38,
            "/// <summary>Does things.</summary>",
            "//" + "*" * 38,
        ]

    def test_full_header(self, formatter):
        parameters = [
            ParameterInfo("string", "path", "Path to use.", can_be_null=False, can_be_empty=False),
            ParameterInfo("int[]", "items", "Items to add.", can_be_null=True, can_be_empty=False),
        ]
        lines = formatter.component_header(
            "Adds items.",
            0,
            remarks="Remarks.",
            returns="Number added.",
            parameters=parameters,
            exceptions=[ExceptionInfo("IOException", "Disk failed.")],
        )

        assert lines == [
            "/// <summary>Adds items.</summary>",
            "///",
            '/// <param name="path">Path to use.</param>',
            '/// <param name="items">Items to add. Can be null.</param>',
            "///",
            "/// <returns>Number added.</returns>",
            "///",
            "/// <remarks>Remarks.</remarks>",
            "///",
            '/// <exception cref="ArgumentNullException"><i>path</i> is a null reference.</exception>',
            '/// <exception cref="ArgumentException"><i>path</i>, or <i>items</i> is an empty array.</exception>',
            '/// <exception cref="IOException">Disk failed.</exception>',
        ]

    def test_overloads(self, formatter):
        lines = formatter.component_header("Runs.", 0, overloads="Runs in several ways.")
        assert lines[1] == "/// <overloads>Runs in several ways.</overloads>"

    def test_negative_indent_clamps(self, formatter):
        assert formatter.component_header("Hi.", -2) == formatter.component_header("Hi.", 0)

    def test_empty_summary_raises(self, formatter):
        with pytest.raises(ValueError):
            formatter.component_header("   ", 0)


class TestJoinParameterNames:
    """Tests for join_parameter_names."""

    def test_one(self):
        assert join_parameter_names(["a"]) == "<i>a</i>"

    def test_two(self):
        assert join_parameter_names(["a", "b"]) == "<i>a</i>, or <i>b</i>"

    def test_three(self):
        assert join_parameter_names(["a", "b", "c"]) == "<i>a</i>, <i>b</i>, or <i>c</i>"
