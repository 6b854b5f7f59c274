# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Text styles: colors, attributes and hyperlinks.

A :class:`Style` stores foreground and background colors, a set of attributes
like bold or italic, an optional underline color and underline style,
and an optional hyperlink. Every attribute is tri-state: it can be enabled,
explicitly disabled, or left unset. Unset attributes are inherited when
styles are combined::

    >>> base = Style.parse("bold red")
    >>> base + Style.parse("not bold on black")
    <Style 'not bold red on black'>
    >>> base + Style.parse("italic")
    <Style 'bold italic red'>

Style definitions are space-separated words:

- attribute names (``bold``, ``dim``, ``italic``, ``underline``, ``blink``,
  ``blink2``, ``reverse``, ``conceal``, ``strike``, ``underline2``, ``frame``,
  ``encircle``, ``overline``) and their short aliases (``b``, ``d``, ``i``, ``u``,
  ``r``, ``c``, ``s``, ``uu``, ``o``);
- ``not <attribute>`` to explicitly disable an attribute;
- a color to set foreground, ``on <color>`` to set background;
- ``link <url>`` or ``link=<url>`` to make a hyperlink;
- underline styles ``single``, ``double``, ``curly``, ``dotted``, ``dashed``,
  and ``underline_color(<color>)``;
- ``none``, or an empty string, for the null style.


Styles
------

.. autoclass:: Style
   :members:

.. autoclass:: UnderlineStyle
   :members:

.. autoclass:: StyleStack
   :members:


Errors
------

.. autoclass:: StyleError

.. autoclass:: InvalidSyntax

.. autoclass:: UnknownAttribute

.. autoclass:: MissingStyle

.. autoclass:: InvalidCombination

.. autoclass:: StackError

"""

from __future__ import annotations

import enum
import functools
import operator
import re

import tinct.cache
import tinct.color
from tinct import _typing as _t

if _t.TYPE_CHECKING:
    import tinct.term

__all__ = [
    "InvalidCombination",
    "InvalidSyntax",
    "MissingStyle",
    "StackError",
    "Style",
    "StyleError",
    "StyleStack",
    "UnderlineStyle",
    "UnknownAttribute",
]


class StyleError(ValueError):
    """
    Base class for style errors.

    """


class InvalidSyntax(StyleError):
    """
    Style definition can't be parsed.

    """


class UnknownAttribute(StyleError):
    """
    Attribute after ``not`` is unknown.

    """


class MissingStyle(StyleError):
    """
    Named style is not found in a theme.

    """


class InvalidCombination(StyleError):
    """
    Style settings contradict each other.

    """


class StackError(StyleError):
    """
    Attempt to pop the base style from a :class:`StyleStack`.

    """


class UnderlineStyle(enum.Enum):
    """
    Shape of an underline, rendered with extended SGR code ``4:n``.

    """

    SINGLE = 1
    DOUBLE = 2
    CURLY = 3
    DOTTED = 4
    DASHED = 5


_ATTRIBUTE_NAMES = (
    "bold",
    "dim",
    "italic",
    "underline",
    "blink",
    "blink2",
    "reverse",
    "conceal",
    "strike",
    "underline2",
    "frame",
    "encircle",
    "overline",
)
_ATTRIBUTE_SGR = ("1", "2", "3", "4", "5", "6", "7", "8", "9", "21", "51", "52", "53")
_ATTRIBUTE_BITS = {name: 1 << i for i, name in enumerate(_ATTRIBUTE_NAMES)}
_ATTRIBUTE_ALIASES = {
    "b": "bold",
    "d": "dim",
    "i": "italic",
    "u": "underline",
    "r": "reverse",
    "c": "conceal",
    "s": "strike",
    "uu": "underline2",
    "o": "overline",
}
_UNDERLINE_STYLES = {style.name.lower(): style for style in UnderlineStyle}

_BOLD = _ATTRIBUTE_BITS["bold"]
_DIM = _ATTRIBUTE_BITS["dim"]
_ITALIC = _ATTRIBUTE_BITS["italic"]
_UNDERLINE = _ATTRIBUTE_BITS["underline"]
_REVERSE = _ATTRIBUTE_BITS["reverse"]
_STRIKE = _ATTRIBUTE_BITS["strike"]
_OVERLINE = _ATTRIBUTE_BITS["overline"]


def _attribute_bit(name: str) -> int | None:
    name = name.lower()
    return _ATTRIBUTE_BITS.get(_ATTRIBUTE_ALIASES.get(name, name))


def _attribute(name: str) -> property:
    bit = _ATTRIBUTE_BITS[name]

    def getter(self: Style) -> bool | None:
        if self._set_attributes & bit:
            return bool(self._attributes & bit)
        return None

    return property(getter, doc=f"State of the ``{name}`` attribute.")


def _to_color(
    value: tinct.color.Color | str | None, what: str
) -> tinct.color.Color | None:
    if value is None or isinstance(value, tinct.color.Color):
        return value
    try:
        return tinct.color.Color.parse(value)
    except tinct.color.ColorParseError as e:
        raise InvalidSyntax(f"invalid {what} color {value!r}: {e}") from e


class Style:
    """
    An immutable text style.

    Styles are combined with the ``+`` operator: settings of the right style
    override the left one, unset settings are inherited.

    :param color:
        foreground color, or a string that will be parsed as one.
    :param bgcolor:
        background color.
    :param link:
        hyperlink URL.
    :param underline_color:
        color of the underline, if terminal supports it.
    :param underline_style:
        shape of the underline, if terminal supports it.
    :param bold, dim, ...:
        attributes; ``True`` enables, ``False`` disables, ``None`` leaves unset.
    :raises:
        :class:`InvalidSyntax` if a color string is invalid.

    """

    __slots__ = (
        "_color",
        "_bgcolor",
        "_set_attributes",
        "_attributes",
        "_link",
        "_underline_color",
        "_underline_style",
        "_hash",
        "_ansi",
    )

    _color: tinct.color.Color | None
    _bgcolor: tinct.color.Color | None
    _set_attributes: int
    _attributes: int
    _link: str | None
    _underline_color: tinct.color.Color | None
    _underline_style: UnderlineStyle | None
    _hash: int | None
    _ansi: dict[tinct.color.ColorSystem, str]

    def __init__(
        self,
        *,
        color: tinct.color.Color | str | None = None,
        bgcolor: tinct.color.Color | str | None = None,
        bold: bool | None = None,
        dim: bool | None = None,
        italic: bool | None = None,
        underline: bool | None = None,
        blink: bool | None = None,
        blink2: bool | None = None,
        reverse: bool | None = None,
        conceal: bool | None = None,
        strike: bool | None = None,
        underline2: bool | None = None,
        frame: bool | None = None,
        encircle: bool | None = None,
        overline: bool | None = None,
        link: str | None = None,
        underline_color: tinct.color.Color | str | None = None,
        underline_style: UnderlineStyle | None = None,
    ):
        values = (
            bold,
            dim,
            italic,
            underline,
            blink,
            blink2,
            reverse,
            conceal,
            strike,
            underline2,
            frame,
            encircle,
            overline,
        )
        set_attributes = attributes = 0
        for i, value in enumerate(values):
            if value is not None:
                set_attributes |= 1 << i
                if value:
                    attributes |= 1 << i
        self._init(
            _to_color(color, "foreground"),
            _to_color(bgcolor, "background"),
            set_attributes,
            attributes,
            link or None,
            _to_color(underline_color, "underline"),
            underline_style,
        )

    def _init(
        self,
        color: tinct.color.Color | None,
        bgcolor: tinct.color.Color | None,
        set_attributes: int,
        attributes: int,
        link: str | None,
        underline_color: tinct.color.Color | None,
        underline_style: UnderlineStyle | None,
    ):
        self._color = color
        self._bgcolor = bgcolor
        self._set_attributes = set_attributes
        self._attributes = attributes & set_attributes
        self._link = link
        self._underline_color = underline_color
        self._underline_style = underline_style
        self._hash = None
        self._ansi = {}

    @classmethod
    def _make(
        cls,
        color: tinct.color.Color | None = None,
        bgcolor: tinct.color.Color | None = None,
        set_attributes: int = 0,
        attributes: int = 0,
        link: str | None = None,
        underline_color: tinct.color.Color | None = None,
        underline_style: UnderlineStyle | None = None,
    ) -> Style:
        style = cls.__new__(cls)
        style._init(
            color,
            bgcolor,
            set_attributes,
            attributes,
            link,
            underline_color,
            underline_style,
        )
        return style

    @classmethod
    def null(cls) -> Style:
        """
        Style that changes nothing.

        """

        return _NULL_STYLE

    @classmethod
    def from_color(
        cls,
        color: tinct.color.Color | None = None,
        bgcolor: tinct.color.Color | None = None,
    ) -> Style:
        """
        Create a style with only colors set.

        """

        return cls._make(color, bgcolor)

    @classmethod
    def parse(
        cls,
        definition: str,
        /,
        *,
        cache: tinct.cache.LruCache[str, Style] | None = None,
    ) -> Style:
        """
        Parse a style definition.

        Results are memoized in the given cache, or in the style cache
        of the current :class:`~tinct.cache.CacheRegistry`.

        :param definition:
            style definition, see module documentation for syntax.
        :param cache:
            cache to use instead of the registry's one.
        :raises:
            :class:`InvalidSyntax` or :class:`UnknownAttribute`.
        :example:
            ::

                >>> style = Style.parse("bold red on black")
                >>> style.bold, style.color, style.bgcolor
                (True, <Color 'red' (standard, 1)>, <Color 'black' (standard, 0)>)

        """

        if cache is None:
            cache = tinct.cache.get_registry().style_cache
        return cache.get(definition, cls._parse)

    @classmethod
    def _parse(cls, definition: str, /) -> Style:
        if definition.strip().lower() in ("", "none"):
            return cls.null()

        color = bgcolor = underline_color = None
        link = underline_style = None
        set_attributes = attributes = 0

        words = iter(definition.split())
        for original_word in words:
            word = original_word.lower()
            if word == "on":
                word = next(words, None)
                if word is None:
                    raise InvalidSyntax(f"expected a color after 'on' in {definition!r}")
                bgcolor = cls.__parse_color(word, "background", definition)
            elif word == "not":
                word = next(words, None)
                if word is None:
                    raise InvalidSyntax(
                        f"expected an attribute after 'not' in {definition!r}"
                    )
                bit = _attribute_bit(word)
                if bit is None:
                    raise UnknownAttribute(
                        f"unknown attribute 'not {word}' in {definition!r}"
                    )
                set_attributes |= bit
                attributes &= ~bit
            elif word == "link":
                link = next(words, None)
                if link is None:
                    raise InvalidSyntax(f"expected an URL after 'link' in {definition!r}")
            elif word.startswith("link="):
                link = original_word[len("link=") :]
                if not link:
                    raise InvalidSyntax(f"expected an URL after 'link=' in {definition!r}")
            elif word in _UNDERLINE_STYLES:
                underline_style = _UNDERLINE_STYLES[word]
            elif match := re.fullmatch(r"underline_color\((.*)\)", word):
                underline_color = cls.__parse_color(match.group(1), "underline", definition)
            elif (bit := _attribute_bit(word)) is not None:
                set_attributes |= bit
                attributes |= bit
            else:
                color = cls.__parse_color(word, "foreground", definition)
        return cls._make(
            color,
            bgcolor,
            set_attributes,
            attributes,
            link,
            underline_color,
            underline_style,
        )

    @staticmethod
    def __parse_color(word: str, what: str, definition: str) -> tinct.color.Color:
        try:
            return tinct.color.Color.parse(word)
        except tinct.color.ColorParseError as e:
            raise InvalidSyntax(
                f"unable to parse {word!r} as {what} color in {definition!r}: {e}"
            ) from e

    @classmethod
    def combine(cls, styles: _t.Iterable[Style], /) -> Style:
        """
        Merge styles left to right.

        """

        return functools.reduce(operator.add, styles, _NULL_STYLE)

    @classmethod
    def chain(cls, *styles: Style) -> Style:
        """
        Merge styles left to right.

        """

        return cls.combine(styles)

    bold = _attribute("bold")
    dim = _attribute("dim")
    italic = _attribute("italic")
    underline = _attribute("underline")
    blink = _attribute("blink")
    blink2 = _attribute("blink2")
    reverse = _attribute("reverse")
    conceal = _attribute("conceal")
    strike = _attribute("strike")
    underline2 = _attribute("underline2")
    frame = _attribute("frame")
    encircle = _attribute("encircle")
    overline = _attribute("overline")

    @property
    def color(self) -> tinct.color.Color | None:
        """
        Foreground color.

        """

        return self._color

    @property
    def bgcolor(self) -> tinct.color.Color | None:
        """
        Background color.

        """

        return self._bgcolor

    @property
    def link(self) -> str | None:
        """
        Hyperlink URL.

        """

        return self._link

    @property
    def underline_color(self) -> tinct.color.Color | None:
        """
        Color of the underline.

        """

        return self._underline_color

    @property
    def underline_style(self) -> UnderlineStyle | None:
        """
        Shape of the underline.

        """

        return self._underline_style

    def is_null(self) -> bool:
        """
        Check if this style changes nothing.

        """

        return (
            self._color is None
            and self._bgcolor is None
            and not self._set_attributes
            and self._link is None
            and self._underline_color is None
            and self._underline_style is None
        )

    def __bool__(self) -> bool:
        return not self.is_null()

    def copy(self) -> Style:
        """
        Make a new style equal to this one.

        """

        return self._make(*self.__key())

    def without_color(self) -> Style:
        """
        Drop all colors, keep attributes and link.

        """

        return self._make(
            None,
            None,
            self._set_attributes,
            self._attributes,
            self._link,
            None,
            self._underline_style,
        )

    def background_style(self) -> Style:
        """
        Style that only has this style's background color.

        """

        return self._make(None, self._bgcolor)

    def update_link(self, link: str | None = None, /) -> Style:
        """
        Return a copy of this style with the given hyperlink.

        """

        return self._make(
            self._color,
            self._bgcolor,
            self._set_attributes,
            self._attributes,
            link or None,
            self._underline_color,
            self._underline_style,
        )

    def __add__(self, other: Style | None, /) -> Style:
        if other is None:
            return self
        if not isinstance(other, Style):
            return NotImplemented
        if other.is_null():
            return self
        if self.is_null():
            return other

        return self._make(
            other._color if other._color is not None else self._color,
            other._bgcolor if other._bgcolor is not None else self._bgcolor,
            self._set_attributes | other._set_attributes,
            (self._attributes & ~other._set_attributes)
            | (other._attributes & other._set_attributes),
            other._link if other._link is not None else self._link,
            (
                other._underline_color
                if other._underline_color is not None
                else self._underline_color
            ),
            (
                other._underline_style
                if other._underline_style is not None
                else self._underline_style
            ),
        )

    def render(
        self,
        text: str,
        color_system: tinct.color.ColorSystem | None = tinct.color.ColorSystem.TRUECOLOR,
    ) -> str:
        """
        Wrap text into escape sequences that apply this style.

        :param text:
            text to style.
        :param color_system:
            colors are downgraded to this color system. If ``None``,
            text is returned as is.
        :example:
            ::

                >>> Style.parse("bold red").render("hi")
                '\\x1b[1;31mhi\\x1b[0m'

        """

        if not text or color_system is None:
            return text
        codes = self._ansi.get(color_system)
        if codes is None:
            codes = self._ansi[color_system] = ";".join(
                self.get_sgr_codes(color_system)
            )
        rendered = f"\x1b[{codes}m{text}\x1b[0m" if codes else text
        if self._link:
            rendered = f"\x1b]8;;{self._link}\x1b\\{rendered}\x1b]8;;\x1b\\"
        return rendered

    def get_sgr_codes(
        self,
        color_system: tinct.color.ColorSystem = tinct.color.ColorSystem.TRUECOLOR,
    ) -> list[str]:
        """
        Get SGR parameters for this style, in order: attributes, underline style,
        foreground, background, underline color.

        """

        codes = []
        enabled = self._attributes & self._set_attributes
        if enabled:
            for i, code in enumerate(_ATTRIBUTE_SGR):
                if enabled & (1 << i):
                    codes.append(code)
        if self._underline_style is not None:
            codes.append(f"4:{self._underline_style.value}")
        if self._color is not None:
            codes.extend(self._color.get_ansi_codes(True, color_system))
        if self._bgcolor is not None:
            codes.extend(self._bgcolor.get_ansi_codes(False, color_system))
        if self._underline_color is not None:
            codes.extend(_underline_codes(self._underline_color, color_system))
        return codes

    def get_html_style(self, theme: tinct.term.TerminalTheme | None = None) -> str:
        """
        Convert this style to CSS declarations.

        :param theme:
            terminal theme used to resolve default and standard colors.
        :example:
            ::

                >>> Style.parse("bold #ff0000").get_html_style()
                'color: #ff0000; text-decoration-color: #ff0000; font-weight: bold'

        """

        if theme is None:
            from tinct.term import DEFAULT_TERMINAL_THEME

            theme = DEFAULT_TERMINAL_THEME

        color, bgcolor = self._color, self._bgcolor
        if self.reverse:
            color, bgcolor = bgcolor, color

        fg = color.get_truecolor(theme, True) if color is not None else None
        bg = bgcolor.get_truecolor(theme, False) if bgcolor is not None else None

        if self.dim:
            fg = tinct.color.blend_rgb(
                fg if fg is not None else theme.foreground,
                bg if bg is not None else theme.background,
                0.5,
            )

        css = []
        if fg is not None:
            css.append(f"color: {fg.hex}")
            css.append(f"text-decoration-color: {fg.hex}")
        if bg is not None:
            css.append(f"background-color: {bg.hex}")
        if self.bold:
            css.append("font-weight: bold")
        if self.italic:
            css.append("font-style: italic")
        decorations = []
        if self.underline:
            decorations.append("underline")
        if self.strike:
            decorations.append("line-through")
        if self.overline:
            decorations.append("overline")
        if decorations:
            css.append(f"text-decoration: {' '.join(decorations)}")
        return "; ".join(css)

    def __key(self):
        return (
            self._color,
            self._bgcolor,
            self._set_attributes,
            self._attributes,
            self._link,
            self._underline_color,
            self._underline_style,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return self.__key() == other.__key()

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self.__key())
        return self._hash

    def __str__(self) -> str:
        words = []
        for i, name in enumerate(_ATTRIBUTE_NAMES):
            bit = 1 << i
            if self._set_attributes & bit:
                words.append(name if self._attributes & bit else f"not {name}")
        if self._color is not None:
            words.append(self._color.name)
        if self._bgcolor is not None:
            words.extend(("on", self._bgcolor.name))
        if self._underline_style is not None:
            words.append(self._underline_style.name.lower())
        if self._underline_color is not None:
            words.append(f"underline_color({self._underline_color.name})")
        if self._link is not None:
            words.extend(("link", self._link))
        return " ".join(words) or "none"

    def __repr__(self) -> str:
        return f"<Style {str(self)!r}>"


_NULL_STYLE = Style()


def _underline_codes(
    color: tinct.color.Color, color_system: tinct.color.ColorSystem
) -> list[str]:
    codes = color.get_ansi_codes(True, color_system)
    if codes[0] == "38":
        return ["58", *codes[1:]]
    elif codes[0] == "39":
        return ["59"]
    number = int(codes[0])
    if number >= 90:
        number = number - 90 + 8
    else:
        number -= 30
    return ["58", "5", str(number)]


class StyleStack:
    """
    A stack of styles where each pushed style is merged with the one below it.

    :param default:
        base style, it can't be popped.
    :example:
        ::

            >>> stack = StyleStack(Style.parse("red"))
            >>> stack.push(Style.parse("bold"))
            >>> stack.current
            <Style 'bold red'>
            >>> stack.pop()
            <Style 'red'>

    """

    def __init__(self, default: Style, /):
        self._stack: list[Style] = [default]

    @property
    def current(self) -> Style:
        """
        Style on top of the stack.

        """

        return self._stack[-1]

    def push(self, style: Style, /):
        """
        Merge style with the current one and push the result.

        """

        self._stack.append(self._stack[-1] + style)

    def pop(self) -> Style:
        """
        Remove the top style, return the new current style.

        :raises:
            :class:`StackError` if only the base style is left.

        """

        if len(self._stack) == 1:
            raise StackError("can't pop the base style")
        self._stack.pop()
        return self._stack[-1]

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self):
        return f"StyleStack({self._stack!r})"
