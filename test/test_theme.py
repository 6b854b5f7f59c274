import pytest

import tinct
import tinct.style
import tinct.theme

Style = tinct.style.Style


class TestTheme:
    def test_inherits_defaults(self):
        theme = tinct.theme.Theme()
        assert theme.get_style("repr.number") == Style.parse("bold not italic cyan")
        assert len(theme) == len(tinct.theme.DEFAULT_STYLES)

    def test_no_inherit(self):
        theme = tinct.theme.Theme({"a": "bold"}, inherit=False)
        assert len(theme) == 1
        assert "repr.number" not in theme

    def test_override(self):
        theme = tinct.theme.Theme({"repr.number": "red"})
        assert theme.get_style("repr.number") == Style.parse("red")
        assert tinct.theme.DEFAULT_STYLES["repr.number"] == Style.parse(
            "bold not italic cyan"
        )

    def test_style_objects(self):
        style = Style.parse("italic")
        theme = tinct.theme.Theme({"x": style})
        assert theme.get_style("x") is style

    def test_case_insensitive(self):
        theme = tinct.theme.Theme({"Warning": "yellow"})
        assert theme.get_style("WARNING") == Style.parse("yellow")
        assert " warning " in theme

    def test_missing(self):
        theme = tinct.theme.Theme()
        with pytest.raises(tinct.style.MissingStyle, match="nope"):
            theme.get_style("nope")
        assert theme.get_style("nope", None) is None
        assert theme.get_style("nope", Style.parse("bold")) == Style.parse("bold")

    def test_contains(self):
        theme = tinct.theme.Theme({"x": "bold"})
        assert "x" in theme
        assert "y" not in theme
        assert 1 not in theme

    def test_invalid_definition(self):
        with pytest.raises(tinct.style.StyleError):
            tinct.theme.Theme({"x": "bold on"})

    def test_styles_are_read_only(self):
        theme = tinct.theme.Theme({"x": "bold"})
        with pytest.raises(TypeError):
            theme.styles["x"] = Style.parse("red")  # type: ignore
        assert theme.styles["x"] == Style.parse("bold")

    def test_repr(self):
        assert repr(tinct.theme.Theme({"x": "bold"}, inherit=False)) == (
            "<Theme with 1 styles>"
        )


def test_default_styles_are_parsed():
    for name, style in tinct.theme.DEFAULT_STYLES.items():
        assert isinstance(style, Style), name
        assert name == name.lower()


def test_default_styles_are_read_only():
    with pytest.raises(TypeError):
        tinct.theme.DEFAULT_STYLES["x"] = Style.null()  # type: ignore


def test_theme_warning_category():
    assert issubclass(tinct.theme.ThemeWarning, tinct.TinctWarning)
    assert issubclass(tinct.theme.ThemeWarning, Warning)
