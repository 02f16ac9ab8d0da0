"""Tests for the lesson markdown tokenizer."""

import random

import pytest

from lexitap.markdown import (
    Bold,
    Heading,
    Image,
    Italic,
    Link,
    Newline,
    Separator,
    Table,
    Text,
    Underline,
    tokenize,
)
from lexitap.markdown.tokenizer import split_cells


def source_of(el) -> str:
    """Markdown text an element was read from, up to whitespace."""
    if isinstance(el, Heading):
        return "#" * el.level + " " + el.content
    if isinstance(el, Bold):
        return f"**{el.content}**"
    if isinstance(el, Italic):
        return f"*{el.content}*"
    if isinstance(el, Underline):
        return f"_{el.content}_"
    if isinstance(el, Link):
        return f"[{el.content}]({el.url})"
    if isinstance(el, Image):
        return f"![{el.alt}]({el.url})"
    if isinstance(el, Table):
        return "|" + "|".join(el.cells) + "|"
    if isinstance(el, Separator):
        return "---"
    if isinstance(el, Newline):
        return "\n"
    return el.content


def visible(text: str) -> str:
    return "".join(text.split())


def random_lesson(seed: int) -> str:
    rng = random.Random(seed)
    alphabet = ["a", "б", "#", "# ", "*", "**", "_", "[", "]", "(", ")", "![", "|", "---",
                " ", "\t", "\n", "\r", "\r\n", ".", "!"]
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))


MALFORMED = [
    "**unclosed *also",
    "[text](no-close",
    "![alt](",
    "![",
    "**",
    "|",
    "| lone",
    "|a|b|   \n|c",
    "a\r\nb\rc",
    "\tindent\t\tword\t",
    "\n\n\n",
    "# \n",
    "#\tx",
    "####### deep",
    "*a\nb*",
    "_x_y_",
    "---\n- - -",
    "   ",
]


class TestTokenize:
    def test_empty_and_none(self):
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_words_split_on_whitespace(self):
        assert tokenize("Я  люблю\tчай") == [Text("Я"), Text("люблю"), Text("чай")]

    def test_punctuation_stays_attached(self):
        assert tokenize("Дом.") == [Text("Дом.")]

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        source = "#" * level + " Урок первый"
        assert tokenize(source) == [Heading(level, "Урок первый")]

    def test_heading_needs_space(self):
        assert tokenize("#tag") == [Text("#tag")]

    def test_heading_only_at_line_start(self):
        assert tokenize("word # not heading") == [
            Text("word"), Text("#"), Text("not"), Text("heading"),
        ]

    def test_heading_then_body(self):
        assert tokenize("# Title\nbody") == [Heading(1, "Title"), Newline(), Text("body")]

    def test_inline_emphasis(self):
        assert tokenize("**жирный** *курсив* _подчёркнутый_") == [
            Bold("жирный"), Italic("курсив"), Underline("подчёркнутый"),
        ]

    def test_bold_with_spaces(self):
        assert tokenize("**два слова**") == [Bold("два слова")]

    def test_bold_wins_over_italic(self):
        assert tokenize("**a**") == [Bold("a")]

    def test_unmatched_markers_become_text(self):
        assert tokenize("**open") == [Text("**open")]
        assert tokenize("[half") == [Text("[half")]

    def test_link(self):
        assert tokenize("[сайт](https://example.com)") == [Link("сайт", "https://example.com")]

    def test_image(self):
        assert tokenize("![кот](cat.png)") == [Image("кот", "cat.png")]

    def test_image_with_empty_alt(self):
        assert tokenize("![](cat.png)") == [Image("", "cat.png")]

    def test_separator(self):
        assert tokenize("a\n---\nb") == [Text("a"), Newline(), Separator(), Newline(), Text("b")]

    def test_separator_must_fill_the_line(self):
        assert tokenize("--- x") == [Text("---"), Text("x")]

    def test_table_row(self):
        assert tokenize("| дом | **кот** |") == [Table(("дом", "**кот**"))]

    def test_table_rows_with_newlines(self):
        assert tokenize("|a|b|\n|c|d|") == [Table(("a", "b")), Newline(), Table(("c", "d"))]

    def test_table_must_start_the_line(self):
        result = tokenize("x |a|b|")
        assert Table(("a", "b")) not in result

    def test_blank_lines_preserved(self):
        assert tokenize("a\n\nb") == [Text("a"), Newline(), Newline(), Text("b")]

    def test_crlf_normalized(self):
        assert tokenize("# T\r\nbody") == [Heading(1, "T"), Newline(), Text("body")]

    def test_mixed_line(self):
        assert tokenize("Это **мой** [дом](x.md).") == [
            Text("Это"), Bold("мой"), Link("дом", "x.md"), Text("."),
        ]


class TestSplitCells:
    def test_trims_cells_and_drops_outer_segments(self):
        assert split_cells("|  a | b  |c|") == ["a", "b", "c"]

    def test_empty_cells_kept(self):
        assert split_cells("| a || b |") == ["a", "", "b"]

    def test_trailing_whitespace(self):
        assert split_cells("| a | b |   ") == ["a", "b"]


class TestCoverage:
    @pytest.mark.parametrize("source", MALFORMED)
    def test_malformed_input_keeps_every_character(self, source):
        elements = tokenize(source)
        assert visible("".join(source_of(el) for el in elements)) == visible(source)

    @pytest.mark.parametrize("seed", range(30))
    def test_generated_input_keeps_every_character(self, seed):
        source = random_lesson(seed)
        elements = tokenize(source)
        assert visible("".join(source_of(el) for el in elements)) == visible(source)


class TestTextRoundTrip:
    @pytest.mark.parametrize("source", [
        "Я люблю чай.",
        "word # not heading",
        "**open [half ![ |",
        "a*b* snake_case",
        "x |a|b|",
        "--- x",
    ])
    def test_joined_text_tokenizes_to_same_sequence(self, source):
        elements = tokenize(source)
        assert all(isinstance(el, Text) for el in elements)
        assert tokenize(" ".join(el.content for el in elements)) == elements
