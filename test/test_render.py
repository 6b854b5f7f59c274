import dataclasses

import pytest

import tinct.cells
import tinct.color
import tinct.markup
import tinct.render
import tinct.segment
import tinct.style
import tinct.text
import tinct.theme
from tinct.render import RenderOptions
from tinct.segment import Segment

ColorSystem = tinct.color.ColorSystem


def lines(renderable, options=None):
    segments = tinct.render.render(renderable, options)
    return [
        "".join(segment.text for segment in line)
        for line in Segment.split_lines(segments)
    ]


class TestOptions:
    def test_defaults(self):
        options = RenderOptions()
        assert options.width == 80
        assert options.justify is None
        assert options.overflow is None
        assert options.markup is True
        assert options.color_system == ColorSystem.TRUECOLOR

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            RenderOptions().width = 10  # type: ignore

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            RenderOptions(10, None)  # type: ignore

    def test_update(self):
        options = RenderOptions(width=10)
        updated = options.update(width=20, no_wrap=True)
        assert updated.width == 20
        assert updated.no_wrap is True
        assert options.width == 10


class TestRender:
    def test_markup_string(self):
        segments = tinct.render.render("[bold]a[/bold]b")
        assert segments == [
            Segment("a", tinct.style.Style.parse("bold")),
            Segment("b"),
            Segment("\n"),
        ]

    def test_plain_string(self):
        segments = tinct.render.render("[bold]a", RenderOptions(markup=False))
        assert segments == [Segment("[bold]a"), Segment("\n")]

    def test_theme(self):
        theme = tinct.theme.Theme({"warning": "yellow"})
        segments = tinct.render.render("[warning]a", RenderOptions(theme=theme))
        assert segments[0].style == tinct.style.Style.parse("yellow")

    def test_wraps(self):
        assert lines("foo bar baz", RenderOptions(width=7)) == ["foo bar", "baz"]

    def test_lines_fit_width(self):
        text = "The quick brown fox jumps over the lazy dog. " * 3
        for width in (3, 10, 17):
            for line in lines(text, RenderOptions(width=width)):
                assert tinct.cells.cell_len(line) <= width

    def test_justify_option(self):
        options = RenderOptions(width=7, justify=tinct.text.JustifyMethod.RIGHT)
        assert lines("foo bar baz", options) == ["foo bar", "    baz"]

    def test_text_justify_is_used(self):
        text = tinct.text.Text("foo bar baz", justify="center")
        assert lines(text, RenderOptions(width=7)) == ["foo bar", "  baz  "]

    def test_option_overrides_text(self):
        text = tinct.text.Text("foo bar baz", justify="center")
        options = RenderOptions(width=7, justify=tinct.text.JustifyMethod.LEFT)
        assert lines(text, options) == ["foo bar", "baz    "]

    def test_overflow_option(self):
        options = RenderOptions(width=4, overflow=tinct.text.OverflowMethod.ELLIPSIS)
        assert lines("abcdefgh", options) == ["abc…"]

    def test_ascii_only(self):
        options = RenderOptions(
            width=5, overflow=tinct.text.OverflowMethod.ELLIPSIS, ascii_only=True
        )
        assert lines("abcdefgh", options) == ["ab..."]

    def test_no_wrap(self):
        options = RenderOptions(width=4, no_wrap=True)
        assert lines("abcdefgh", options) == ["abcd"]

    def test_tab_size(self):
        assert lines("a\tb", RenderOptions(tab_size=4)) == ["a   b"]
        text = tinct.text.Text("a\tb", tab_size=2)
        assert lines(text, RenderOptions(tab_size=4)) == ["a b"]

    def test_text_end(self):
        text = tinct.text.Text("a", end="")
        assert tinct.render.render(text) == [Segment("a")]

    def test_custom_renderable(self):
        class Banner:
            def __tinct_render__(self, options):
                return [Segment("=" * options.width), Segment.line()]

        assert isinstance(Banner(), tinct.render.Renderable)
        assert lines(Banner(), RenderOptions(width=3)) == ["==="]

    def test_not_renderable(self):
        with pytest.raises(TypeError):
            tinct.render.render(42)  # type: ignore

    def test_markup_error(self):
        with pytest.raises(tinct.markup.MarkupError):
            tinct.render.render("[/]")


class TestRenderLines:
    def test_pads(self):
        result = tinct.render.render_lines("ab\ncdef", RenderOptions(width=4))
        assert [[s.text for s in line] for line in result] == [
            ["ab", "  "],
            ["cdef"],
        ]

    def test_pad_style(self):
        style = tinct.style.Style.parse("on blue")
        result = tinct.render.render_lines("ab", RenderOptions(width=3), style=style)
        assert result == [[Segment("ab"), Segment(" ", style)]]

    def test_no_pad(self):
        result = tinct.render.render_lines("ab", RenderOptions(width=4), pad=False)
        assert [[s.text for s in line] for line in result] == [["ab"]]


class TestRenderAnsi:
    def test_styles(self):
        segments = tinct.render.render("[bold]a[/bold]b")
        assert tinct.render.render_ansi(segments) == "\x1b[1ma\x1b[0mb\n"

    def test_merges_segments(self):
        bold = tinct.style.Style.parse("bold")
        segments = [Segment("a", bold), Segment("b", bold)]
        assert tinct.render.render_ansi(segments) == "\x1b[1mab\x1b[0m"

    def test_downgrades(self):
        segments = [Segment("a", tinct.style.Style.parse("#ff6347"))]
        assert (
            tinct.render.render_ansi(segments, ColorSystem.EIGHT_BIT)
            == "\x1b[38;5;203ma\x1b[0m"
        )

    def test_no_colors(self):
        segments = tinct.render.render("[bold]a[/bold]b")
        assert tinct.render.render_ansi(segments, None) == "ab\n"

    def test_control_segments(self):
        control = Segment.control_segment(
            tinct.segment.ControlCode(tinct.segment.ControlType.HOME)
        )
        assert tinct.render.render_ansi([control, Segment("a")]) == "\x1b[Ha"

    def test_round_trip(self):
        text = tinct.text.Text.from_markup("[bold red]Hello[/bold red], [italic]world[/]!")
        ansi = tinct.render.render_ansi(text.render(end=""))
        assert tinct.text.Text.from_ansi(ansi) == text
