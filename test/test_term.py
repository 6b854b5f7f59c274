import gc
import weakref

import pytest

import tinct.color
import tinct.palette
import tinct.term


@pytest.mark.parametrize(
    ("background", "expect"),
    [
        ((0, 0, 0), tinct.term.Lightness.DARK),
        ((12, 12, 12), tinct.term.Lightness.DARK),
        ((255, 255, 255), tinct.term.Lightness.LIGHT),
        ((128, 128, 128), tinct.term.Lightness.UNKNOWN),
    ],
)
def test_lightness(background, expect):
    theme = tinct.term.TerminalTheme.from_rgb(background, (0, 0, 0), [(0, 0, 0)] * 8)
    assert theme.lightness == expect


def test_builtin_themes():
    assert tinct.term.DEFAULT_TERMINAL_THEME.lightness == tinct.term.Lightness.LIGHT
    assert tinct.term.MONOKAI.lightness == tinct.term.Lightness.DARK
    assert len(tinct.term.MONOKAI.ansi_colors) == 16


def test_from_rgb_reuses_normal_colors():
    normal = [(i, i, i) for i in range(8)]
    theme = tinct.term.TerminalTheme.from_rgb((0, 0, 0), (255, 255, 255), normal)
    assert theme.ansi_colors[3] == (3, 3, 3)
    assert theme.ansi_colors[11] == (3, 3, 3)
    assert isinstance(theme.background, tinct.color.ColorTriplet)


def test_from_rgb_checks_size():
    with pytest.raises(ValueError):
        tinct.term.TerminalTheme.from_rgb((0, 0, 0), (0, 0, 0), [(0, 0, 0)] * 3)


class TestPalette:
    def test_sizes(self):
        assert len(tinct.palette.STANDARD_PALETTE) == 16
        assert len(tinct.palette.WINDOWS_PALETTE) == 16
        assert len(tinct.palette.EIGHT_BIT_PALETTE) == 256

    def test_item_is_triplet(self):
        assert tinct.palette.EIGHT_BIT_PALETTE[196] == (255, 0, 0)
        assert isinstance(
            tinct.palette.EIGHT_BIT_PALETTE[196], tinct.color.ColorTriplet
        )

    @pytest.mark.parametrize(
        ("color", "expect"),
        [
            ((0, 0, 0), 0),
            ((255, 255, 255), 15),
            ((255, 0, 0), 1),
            ((255, 90, 80), 9),
            ((170, 170, 170), 7),
        ],
    )
    def test_match(self, color, expect):
        assert tinct.palette.STANDARD_PALETTE.match(color) == expect

    def test_match_exact(self):
        for i in range(16):
            color = tinct.palette.WINDOWS_PALETTE[i]
            assert tinct.palette.WINDOWS_PALETTE.match(color) == i

    def test_match_does_not_keep_palette_alive(self):
        palette = tinct.palette.Palette([(0, 0, 0), (255, 255, 255)])
        assert palette.match((200, 200, 200)) == 1
        ref = weakref.ref(palette)
        del palette
        gc.collect()
        assert ref() is None

    def test_match_list_colors(self):
        palette = tinct.palette.Palette([[0, 0, 0], [255, 0, 0]])
        assert palette.match((200, 10, 10)) == 1

    def test_color_names(self):
        assert tinct.palette.ANSI_COLOR_NAMES["red"] == 1
        assert tinct.palette.ANSI_COLOR_NAMES["bright_white"] == 15
