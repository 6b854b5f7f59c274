import pytest

import tinct.cache
import tinct.color
import tinct.term

Color = tinct.color.Color
ColorType = tinct.color.ColorType
ColorSystem = tinct.color.ColorSystem
ColorTriplet = tinct.color.ColorTriplet


@pytest.mark.parametrize(
    ("spec", "type", "number", "triplet"),
    [
        ("default", ColorType.DEFAULT, None, None),
        ("red", ColorType.STANDARD, 1, None),
        ("RED", ColorType.STANDARD, 1, None),
        ("  red  ", ColorType.STANDARD, 1, None),
        ("bright_red", ColorType.STANDARD, 9, None),
        ("color(3)", ColorType.STANDARD, 3, None),
        ("color(15)", ColorType.STANDARD, 15, None),
        ("color(16)", ColorType.EIGHT_BIT, 16, None),
        ("color(255)", ColorType.EIGHT_BIT, 255, None),
        ("#ff6347", ColorType.TRUECOLOR, None, (255, 99, 71)),
        ("#FF6347", ColorType.TRUECOLOR, None, (255, 99, 71)),
        ("rgb(10,20,30)", ColorType.TRUECOLOR, None, (10, 20, 30)),
        ("rgb( 10, 20 , 30 )", ColorType.TRUECOLOR, None, (10, 20, 30)),
    ],
)
def test_parse(spec, type, number, triplet):
    color = Color.parse(spec)
    assert color.type == type
    assert color.number == number
    assert color.triplet == triplet


@pytest.mark.parametrize(
    ("spec", "error"),
    [
        ("", tinct.color.InvalidColorSpec),
        ("   ", tinct.color.InvalidColorSpec),
        ("not_a_color", tinct.color.UnknownColorName),
        ("#ff63", tinct.color.InvalidHexFormat),
        ("#gg0000", tinct.color.InvalidHexFormat),
        ("color(256)", tinct.color.InvalidColorSpec),
        ("color(-1)", tinct.color.InvalidColorSpec),
        ("color(x)", tinct.color.InvalidColorSpec),
        ("rgb(1,2)", tinct.color.InvalidRgbFormat),
        ("rgb(1,2,3,4)", tinct.color.InvalidRgbFormat),
        ("rgb(1,2,256)", tinct.color.ComponentOutOfRange),
        ("rgb(1,x,3)", tinct.color.ComponentOutOfRange),
    ],
)
def test_parse_errors(spec, error):
    with pytest.raises(error):
        Color.parse(spec)


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        Color.parse("nope")


def test_parse_uses_cache():
    cache = tinct.cache.LruCache(4)
    first = Color.parse("red", cache=cache)
    second = Color.parse("red", cache=cache)
    assert first is second
    assert cache.hits == 1
    assert cache.misses == 1


def test_parse_uses_registry(registry):
    Color.parse("blue")
    Color.parse("blue")
    assert "blue" in registry.color_cache
    assert registry.color_cache.hits == 1


def test_equality_ignores_name():
    assert Color.parse("red") == Color.parse("color(1)")
    assert hash(Color.parse("red")) == hash(Color.parse("color(1)"))
    assert Color.parse("#ff0000") == Color.parse("rgb(255,0,0)")
    assert Color.parse("red") != Color.parse("#aa0000")
    assert Color.parse("default") == Color.default()


@pytest.mark.parametrize(
    ("color", "system"),
    [
        (Color.default(), ColorSystem.STANDARD),
        (Color.parse("red"), ColorSystem.STANDARD),
        (Color.from_ansi(100), ColorSystem.EIGHT_BIT),
        (Color.from_rgb(1, 2, 3), ColorSystem.TRUECOLOR),
    ],
)
def test_system(color, system):
    assert color.system == system


def test_predicates():
    assert Color.default().is_default
    assert Color.default().is_system_defined
    assert Color.parse("red").is_system_defined
    assert not Color.parse("red").is_default
    assert not Color.from_ansi(100).is_system_defined
    assert not Color.from_rgb(1, 2, 3).is_system_defined


def test_from_ansi():
    assert Color.from_ansi(3).type == ColorType.STANDARD
    assert Color.from_ansi(3).name == "color(3)"
    assert Color.from_ansi(16).type == ColorType.EIGHT_BIT
    with pytest.raises(ValueError):
        Color.from_ansi(256)
    with pytest.raises(ValueError):
        Color.from_ansi(-1)


def test_from_rgb_truncates():
    assert Color.from_rgb(10.7, 20.2, 30.9).triplet == (10, 20, 30)


@pytest.mark.parametrize(
    ("spec", "foreground", "expect"),
    [
        ("default", True, ["39"]),
        ("default", False, ["49"]),
        ("red", True, ["31"]),
        ("red", False, ["41"]),
        ("bright_red", True, ["91"]),
        ("bright_red", False, ["101"]),
        ("color(100)", True, ["38", "5", "100"]),
        ("color(100)", False, ["48", "5", "100"]),
        ("#ff6347", True, ["38", "2", "255", "99", "71"]),
        ("#ff6347", False, ["48", "2", "255", "99", "71"]),
    ],
)
def test_get_ansi_codes(spec, foreground, expect):
    assert Color.parse(spec).get_ansi_codes(foreground) == expect


def test_get_ansi_codes_downgrades():
    color = Color.parse("#ff6347")
    assert color.get_ansi_codes(True, ColorSystem.EIGHT_BIT) == ["38", "5", "203"]
    assert color.get_ansi_codes(True, ColorSystem.TRUECOLOR) == [
        "38",
        "2",
        "255",
        "99",
        "71",
    ]


class TestDowngrade:
    def test_default_never_changes(self):
        for system in ColorSystem:
            assert Color.default().downgrade(system).is_default

    def test_truecolor_to_eight_bit(self):
        color = Color.parse("#ff6347").downgrade(ColorSystem.EIGHT_BIT)
        assert color.type == ColorType.EIGHT_BIT
        assert color.number == 203

    def test_truecolor_to_eight_bit_skips_standard(self):
        color = Color.parse("#000000").downgrade(ColorSystem.EIGHT_BIT)
        assert color.number == 16

    def test_truecolor_to_standard(self):
        color = Color.parse("#ff0000").downgrade(ColorSystem.STANDARD)
        assert color.type == ColorType.STANDARD
        assert color.number == 1

    def test_eight_bit_to_standard(self):
        color = Color.from_ansi(196).downgrade(ColorSystem.STANDARD)
        assert color.type == ColorType.STANDARD
        assert color.number < 16

    def test_standard_stays_in_eight_bit(self):
        color = Color.parse("red")
        assert color.downgrade(ColorSystem.EIGHT_BIT) is color

    def test_windows(self):
        color = Color.parse("red").downgrade(ColorSystem.WINDOWS)
        assert color.type == ColorType.WINDOWS
        assert color.number == 1
        assert color.downgrade(ColorSystem.STANDARD).type == ColorType.STANDARD

    def test_truecolor_unchanged(self):
        color = Color.parse("#123456")
        assert color.downgrade(ColorSystem.TRUECOLOR) is color

    @pytest.mark.parametrize("system", list(ColorSystem))
    @pytest.mark.parametrize(
        "spec", ["default", "red", "bright_cyan", "color(123)", "#ff6347", "#010203"]
    )
    def test_idempotent(self, spec, system):
        once = Color.parse(spec).downgrade(system)
        assert once.downgrade(system) == once
        assert once.system <= system or system == ColorSystem.WINDOWS


class TestTruecolor:
    def test_truecolor(self):
        assert Color.parse("#ff6347").get_truecolor() == (255, 99, 71)

    def test_eight_bit(self):
        assert Color.from_ansi(16).get_truecolor() == (0, 0, 0)
        assert Color.from_ansi(231).get_truecolor() == (255, 255, 255)
        assert Color.from_ansi(232).get_truecolor() == (8, 8, 8)

    def test_standard_uses_theme(self):
        theme = tinct.term.MONOKAI
        assert Color.parse("red").get_truecolor(theme) == theme.ansi_colors[1]

    def test_default_uses_theme(self):
        theme = tinct.term.DEFAULT_TERMINAL_THEME
        assert Color.default().get_truecolor(theme) == theme.foreground
        assert Color.default().get_truecolor(theme, False) == theme.background


class TestTriplet:
    def test_hex(self):
        assert ColorTriplet(255, 99, 71).hex == "#ff6347"
        assert ColorTriplet(0, 0, 0).hex == "#000000"

    def test_rgb(self):
        assert ColorTriplet(255, 99, 71).rgb == "rgb(255,99,71)"

    def test_normalized(self):
        assert ColorTriplet(255, 0, 51).normalized == (1.0, 0.0, 0.2)

    @pytest.mark.parametrize("value", ["#ff6347", "ff6347", "#FF6347"])
    def test_from_hex(self, value):
        assert ColorTriplet.from_hex(value) == (255, 99, 71)

    def test_from_hex_error(self):
        with pytest.raises(tinct.color.InvalidHexFormat):
            ColorTriplet.from_hex("#12345")


@pytest.mark.parametrize(
    ("cross_fade", "expect"),
    [
        (0.0, (0, 0, 0)),
        (1.0, (200, 100, 50)),
        (0.5, (100, 50, 25)),
    ],
)
def test_blend_rgb(cross_fade, expect):
    assert (
        tinct.color.blend_rgb(ColorTriplet(0, 0, 0), ColorTriplet(200, 100, 50), cross_fade)
        == expect
    )


def test_str_and_repr():
    assert str(Color.parse("red")) == "red"
    assert repr(Color.parse("red")) == "<Color 'red' (standard, 1)>"
    assert repr(Color.default()) == "<Color 'default' (default)>"
    assert repr(Color.parse("#ff6347")) == "<Color '#ff6347' (truecolor, #ff6347)>"
