import pytest

import tinct.ansi
import tinct.color
import tinct.style

Style = tinct.style.Style


def decode(terminal_text):
    decoder = tinct.ansi.AnsiDecoder()
    return [
        (line.plain, [(span.start, span.end, str(span.style)) for span in line.spans])
        for line in decoder.decode(terminal_text)
    ]


@pytest.mark.parametrize(
    ("terminal_text", "expect"),
    [
        ("plain", [("plain", [])]),
        ("\x1b[1mbold\x1b[0m", [("bold", [(0, 4, "bold")])]),
        ("\x1b[1;31mx", [("x", [(0, 1, "bold color(1)")])]),
        ("\x1b[91mx", [("x", [(0, 1, "color(9)")])]),
        ("\x1b[44mx", [("x", [(0, 1, "on color(4)")])]),
        ("\x1b[104mx", [("x", [(0, 1, "on color(12)")])]),
        ("\x1b[38;5;100mx", [("x", [(0, 1, "color(100)")])]),
        ("\x1b[48;5;100mx", [("x", [(0, 1, "on color(100)")])]),
        ("\x1b[38;2;255;99;71mx", [("x", [(0, 1, "#ff6347")])]),
        ("\x1b[48;2;1;2;3mx", [("x", [(0, 1, "on #010203")])]),
        ("\x1b[58;5;1mx", [("x", [(0, 1, "underline_color(color(1))")])]),
        ("\x1b[4:3mx", [("x", [(0, 1, "curly")])]),
        ("\x1b[4;4:3mx", [("x", [(0, 1, "underline curly")])]),
        ("\x1b[1mx\x1b[22my", [("xy", [(0, 1, "bold"), (1, 2, "not bold not dim")])]),
        ("\x1b[31mx\x1b[39my", [("xy", [(0, 1, "color(1)"), (1, 2, "default")])]),
        ("\x1b[1mx\x1b[my", [("xy", [(0, 1, "bold")])]),
        ("\x1b[1;mx", [("x", [])]),
        ("a\x1b[2Jb\x1b[Hc", [("abc", [])]),
        ("a\x1b(Bb", [("ab", [])]),
        ("\x1b]0;title\x07x", [("x", [])]),
        ("line1\nline2", [("line1", []), ("line2", [])]),
    ],
)
def test_decode(terminal_text, expect):
    assert decode(terminal_text) == expect


def test_style_carries_between_lines():
    assert decode("\x1b[1ma\nb\x1b[0m\nc") == [
        ("a", [(0, 1, "bold")]),
        ("b", [(0, 1, "bold")]),
        ("c", []),
    ]


def test_style_carries_between_calls():
    decoder = tinct.ansi.AnsiDecoder()
    decoder.decode_line("\x1b[3m")
    assert decoder.style == Style.parse("italic")
    line = decoder.decode_line("x")
    assert line.spans[0].style == Style.parse("italic")


@pytest.mark.parametrize(
    "terminal_text",
    [
        "\x1b]8;;https://example.com\x1b\\link\x1b]8;;\x1b\\",
        "\x1b]8;id=1;https://example.com\x07link\x1b]8;;\x07",
    ],
)
def test_hyperlink(terminal_text):
    decoder = tinct.ansi.AnsiDecoder()
    [line] = decoder.decode(terminal_text)
    assert line.plain == "link"
    assert [span.style.link for span in line.spans] == ["https://example.com"]
    assert decoder.style.link is None


def test_incomplete_color_is_ignored():
    assert decode("\x1b[38;5mx") == [("x", [])]
    assert decode("\x1b[38;2;1;2mx") == [("x", [])]


def test_large_numbers_are_clamped():
    assert decode("\x1b[38;5;999mx") == [("x", [(0, 1, "color(255)")])]


def test_round_trip_through_style_render():
    style = Style.parse("bold italic #ff6347 on color(100)")
    [line] = tinct.ansi.AnsiDecoder().decode(style.render("hello"))
    assert line.plain == "hello"
    assert line.spans[0].style == style


def test_colors_are_colors():
    [line] = tinct.ansi.AnsiDecoder().decode("\x1b[31mx")
    assert line.spans[0].style.color == tinct.color.Color.parse("red")


def test_carriage_return_overwrites_line():
    line = tinct.ansi.AnsiDecoder().decode_line("progress 10%\rprogress 100%")
    assert line.plain == "progress 100%"
