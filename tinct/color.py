# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Colors and color systems.

A :class:`Color` is a color as the user wrote it: a terminal default,
one of the 16 standard colors, an entry of the 256-color palette,
or a 24-bit RGB value. When rendering, it is downgraded to whatever
:class:`ColorSystem` the terminal supports.

Colors are usually parsed from strings::

    >>> Color.parse("red")
    <Color 'red' (standard, 1)>
    >>> Color.parse("#ff6347")
    <Color '#ff6347' (truecolor, #ff6347)>
    >>> Color.parse("#ff6347").downgrade(ColorSystem.EIGHT_BIT)
    <Color 'color(203)' (eight_bit, 203)>

Supported formats are ``default``, color names (see
:data:`~tinct.palette.ANSI_COLOR_NAMES`), ``#rrggbb``, ``color(N)``
and ``rgb(r,g,b)``.


Colors
------

.. autoclass:: Color
   :members:

.. autoclass:: ColorTriplet
   :members:

.. autoclass:: ColorSystem
   :members:

.. autoclass:: ColorType
   :members:

.. autofunction:: blend_rgb


Errors
------

.. autoclass:: ColorParseError

.. autoclass:: InvalidHexFormat

.. autoclass:: InvalidRgbFormat

.. autoclass:: ComponentOutOfRange

.. autoclass:: UnknownColorName

.. autoclass:: InvalidColorSpec

"""

from __future__ import annotations

import enum
import functools
import re
from dataclasses import dataclass

import tinct.cache
import tinct.palette
from tinct import _typing as _t

if _t.TYPE_CHECKING:
    import tinct.term

__all__ = [
    "Color",
    "ColorParseError",
    "ColorSystem",
    "ColorTriplet",
    "ColorType",
    "ComponentOutOfRange",
    "InvalidColorSpec",
    "InvalidHexFormat",
    "InvalidRgbFormat",
    "UnknownColorName",
    "blend_rgb",
]


class ColorParseError(ValueError):
    """
    Raised when a color string can't be parsed.

    """


class InvalidHexFormat(ColorParseError):
    """
    Hex color is not in ``#rrggbb`` format.

    """


class InvalidRgbFormat(ColorParseError):
    """
    ``rgb(...)`` color doesn't have exactly three components.

    """


class ComponentOutOfRange(ColorParseError):
    """
    Color component or color number is not an integer in range ``0..255``.

    """


class UnknownColorName(ColorParseError):
    """
    Color name is not in the list of known colors.

    """


class InvalidColorSpec(ColorParseError):
    """
    Color string is malformed.

    """


class ColorSystem(enum.IntEnum):
    """
    Color capabilities of a terminal.

    """

    STANDARD = 1
    """
    16 standard ANSI colors.

    """

    EIGHT_BIT = 2
    """
    256-color palette.

    """

    TRUECOLOR = 3
    """
    24-bit RGB colors.

    """

    WINDOWS = 4
    """
    16 standard colors of the legacy Windows console.

    """


class ColorType(enum.IntEnum):
    """
    Kind of a :class:`Color`.

    """

    DEFAULT = 0
    """
    Terminal's default foreground or background.

    """

    STANDARD = 1
    """
    One of the 16 standard colors.

    """

    EIGHT_BIT = 2
    """
    Entry of the 256-color palette.

    """

    TRUECOLOR = 3
    """
    24-bit RGB color.

    """

    WINDOWS = 4
    """
    One of the 16 colors of the legacy Windows console.

    """


class ColorTriplet(_t.NamedTuple):
    """
    RGB components of a color, each in range ``0..255``.

    """

    red: int
    green: int
    blue: int

    @classmethod
    def from_hex(cls, value: str, /) -> ColorTriplet:
        """
        Parse ``#rrggbb`` or ``rrggbb``.

        :raises:
            :class:`InvalidHexFormat` if string is malformed.

        """

        value = value.removeprefix("#")
        if not re.fullmatch(r"[0-9a-fA-F]{6}", value):
            raise InvalidHexFormat(f"invalid hex color '#{value}', expected '#rrggbb'")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @property
    def hex(self) -> str:
        """
        CSS-style hex representation, i.e. ``#ff6347``.

        """

        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @property
    def rgb(self) -> str:
        """
        CSS-style RGB representation, i.e. ``rgb(255,99,71)``.

        """

        return f"rgb({self.red},{self.green},{self.blue})"

    @property
    def normalized(self) -> tuple[float, float, float]:
        """
        Components scaled to range ``0.0..1.0``.

        """

        return self.red / 255, self.green / 255, self.blue / 255


def blend_rgb(
    color1: ColorTriplet, color2: ColorTriplet, cross_fade: float = 0.5
) -> ColorTriplet:
    """
    Linearly interpolate between two colors.

    :param cross_fade:
        ``0.0`` returns `color1`, ``1.0`` returns `color2`.
    :example:
        ::

            >>> blend_rgb(ColorTriplet(0, 0, 0), ColorTriplet(255, 255, 255))
            ColorTriplet(red=128, green=128, blue=128)

    """

    r1, g1, b1 = color1
    r2, g2, b2 = color2
    return ColorTriplet(
        int(r1 + (r2 - r1) * cross_fade + 0.5),
        int(g1 + (g2 - g1) * cross_fade + 0.5),
        int(b1 + (b2 - b1) * cross_fade + 0.5),
    )


@dataclass(frozen=True, slots=True, eq=False)
class Color:
    """
    A terminal color.

    Two colors are equal when they have the same type, number and triplet;
    their names are not compared.

    """

    name: str
    """
    Name of the color, as it was parsed.

    """

    type: ColorType
    """
    Kind of this color.

    """

    number: int | None = None
    """
    Color number for standard, Windows and 8-bit colors.

    """

    triplet: ColorTriplet | None = None
    """
    RGB value for truecolor colors.

    """

    @classmethod
    def parse(
        cls,
        color: str,
        /,
        *,
        cache: tinct.cache.LruCache[str, Color] | None = None,
    ) -> Color:
        """
        Parse a color from string.

        Results are memoized in the given cache, or in the color cache
        of the current :class:`~tinct.cache.CacheRegistry`.

        :param color:
            color string, case-insensitive.
        :param cache:
            cache to use instead of the registry's one.
        :raises:
            :class:`ColorParseError`.

        """

        if cache is None:
            cache = tinct.cache.get_registry().color_cache
        return cache.get(color, cls._parse)

    @classmethod
    def _parse(cls, original: str, /) -> Color:
        color = original.lower().strip()

        if not color:
            raise InvalidColorSpec("empty color")

        if color == "default":
            return cls(color, ColorType.DEFAULT)

        if (number := tinct.palette.ANSI_COLOR_NAMES.get(color)) is not None:
            return cls(
                color,
                ColorType.STANDARD if number < 16 else ColorType.EIGHT_BIT,
                number,
            )

        if color.startswith("#"):
            return cls.from_triplet(ColorTriplet.from_hex(color))

        if match := re.fullmatch(r"color\((.*)\)", color):
            number_str = match.group(1).strip()
            try:
                number = int(number_str, 10)
            except ValueError:
                raise InvalidColorSpec(
                    f"invalid color number {number_str!r} in {original!r}"
                ) from None
            if not 0 <= number <= 255:
                raise InvalidColorSpec(
                    f"color number {number} in {original!r} is out of range 0..255"
                )
            return cls.from_ansi(number)

        if match := re.fullmatch(r"rgb\((.*)\)", color):
            parts = match.group(1).split(",")
            if len(parts) != 3:
                raise InvalidRgbFormat(
                    f"expected three components in {original!r}, got {len(parts)}"
                )
            components = []
            for part in parts:
                part = part.strip()
                try:
                    component = int(part, 10)
                except ValueError:
                    raise ComponentOutOfRange(
                        f"color component {part!r} in {original!r} is not a number"
                    ) from None
                if not 0 <= component <= 255:
                    raise ComponentOutOfRange(
                        f"color component {component} in {original!r} "
                        "is out of range 0..255"
                    )
                components.append(component)
            triplet = ColorTriplet(*components)
            return cls(triplet.rgb, ColorType.TRUECOLOR, triplet=triplet)

        raise UnknownColorName(f"unknown color {original!r}")

    @classmethod
    def default(cls) -> Color:
        """
        Terminal's default color.

        """

        return cls("default", ColorType.DEFAULT)

    @classmethod
    def from_ansi(cls, number: int, /) -> Color:
        """
        Create a color from number in the 256-color palette.

        Numbers below 16 give standard colors.

        """

        if not 0 <= number <= 255:
            raise ValueError(f"color number {number} is out of range 0..255")
        return cls(
            f"color({number})",
            ColorType.STANDARD if number < 16 else ColorType.EIGHT_BIT,
            number,
        )

    @classmethod
    def from_triplet(cls, triplet: ColorTriplet, /) -> Color:
        """
        Create a truecolor color.

        """

        return cls(triplet.hex, ColorType.TRUECOLOR, triplet=triplet)

    @classmethod
    def from_rgb(cls, red: float, green: float, blue: float) -> Color:
        """
        Create a truecolor color from components; fractional parts are truncated.

        """

        return cls.from_triplet(ColorTriplet(int(red), int(green), int(blue)))

    @property
    def system(self) -> ColorSystem:
        """
        The minimal color system that can display this color.

        """

        if self.type == ColorType.DEFAULT:
            return ColorSystem.STANDARD
        return ColorSystem(int(self.type))

    @property
    def is_default(self) -> bool:
        """
        Whether this is the terminal's default color.

        """

        return self.type == ColorType.DEFAULT

    @property
    def is_system_defined(self) -> bool:
        """
        Whether actual RGB value of this color depends on the terminal's theme.

        """

        return self.type in (ColorType.DEFAULT, ColorType.STANDARD, ColorType.WINDOWS)

    def get_truecolor(
        self, theme: tinct.term.TerminalTheme | None = None, foreground: bool = True
    ) -> ColorTriplet:
        """
        Get RGB value of this color.

        :param theme:
            terminal theme that defines default and standard colors,
            :data:`~tinct.term.DEFAULT_TERMINAL_THEME` by default.
        :param foreground:
            for default colors, whether to use theme's foreground or background.

        """

        if self.type == ColorType.TRUECOLOR:
            assert self.triplet is not None
            return self.triplet
        elif self.type == ColorType.EIGHT_BIT:
            assert self.number is not None
            return tinct.palette.EIGHT_BIT_PALETTE[self.number]

        if theme is None:
            from tinct.term import DEFAULT_TERMINAL_THEME

            theme = DEFAULT_TERMINAL_THEME

        if self.type == ColorType.DEFAULT:
            return theme.foreground if foreground else theme.background
        else:
            assert self.number is not None
            return theme.ansi_colors[self.number]

    def get_ansi_codes(
        self, foreground: bool = True, color_system: ColorSystem | None = None
    ) -> list[str]:
        """
        Get SGR parameters that select this color.

        :param foreground:
            whether to select foreground or background color.
        :param color_system:
            if given, color is downgraded to this system first.
        :example:
            ::

                >>> Color.parse("bright_red").get_ansi_codes()
                ['91']
                >>> Color.parse("#ff6347").get_ansi_codes(False)
                ['48', '2', '255', '99', '71']

        """

        color = self.downgrade(color_system) if color_system is not None else self

        if color.type == ColorType.DEFAULT:
            return ["39" if foreground else "49"]
        elif color.type in (ColorType.STANDARD, ColorType.WINDOWS):
            assert color.number is not None
            if color.number < 8:
                base = 30 if foreground else 40
                return [str(base + color.number)]
            else:
                base = 90 if foreground else 100
                return [str(base + color.number - 8)]
        elif color.type == ColorType.EIGHT_BIT:
            assert color.number is not None
            return ["38" if foreground else "48", "5", str(color.number)]
        else:
            assert color.triplet is not None
            r, g, b = color.triplet
            return ["38" if foreground else "48", "2", str(r), str(g), str(b)]

    def downgrade(self, system: ColorSystem, /) -> Color:
        """
        Convert this color to one that can be displayed in the given color system.

        Default colors are never changed. Downgrading is idempotent:
        downgrading a result again gives the same color.

        """

        if self.type == ColorType.DEFAULT or system == ColorSystem.TRUECOLOR:
            return self

        if system == ColorSystem.EIGHT_BIT:
            if self.type == ColorType.TRUECOLOR:
                assert self.triplet is not None
                return Color.from_ansi(_match_eight_bit(self.triplet))
            return self

        if system == ColorSystem.STANDARD:
            if self.type == ColorType.STANDARD:
                return self
            if self.type == ColorType.WINDOWS:
                assert self.number is not None
                return Color.from_ansi(self.number)
            if self.type == ColorType.EIGHT_BIT:
                assert self.number is not None
                return Color.from_ansi(_eight_bit_to_standard()[self.number])
            assert self.triplet is not None
            return Color.from_ansi(tinct.palette.STANDARD_PALETTE.match(self.triplet))

        if system == ColorSystem.WINDOWS:
            if self.type == ColorType.WINDOWS:
                return self
            if self.type == ColorType.STANDARD:
                assert self.number is not None
                number = self.number
            elif self.type == ColorType.EIGHT_BIT:
                assert self.number is not None
                number = _eight_bit_to_windows()[self.number]
            else:
                assert self.triplet is not None
                number = tinct.palette.WINDOWS_PALETTE.match(self.triplet)
            return Color(f"color({number})", ColorType.WINDOWS, number)

        raise ValueError(f"unknown color system {system!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (self.type, self.number, self.triplet) == (
            other.type,
            other.number,
            other.triplet,
        )

    def __hash__(self) -> int:
        return hash((self.type, self.number, self.triplet))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self.type == ColorType.TRUECOLOR:
            assert self.triplet is not None
            detail = f"{self.type.name.lower()}, {self.triplet.hex}"
        elif self.number is not None:
            detail = f"{self.type.name.lower()}, {self.number}"
        else:
            detail = self.type.name.lower()
        return f"<Color {self.name!r} ({detail})>"


@functools.lru_cache(maxsize=4096)
def _match_eight_bit(triplet: ColorTriplet) -> int:
    # Standard colors 0..15 depend on terminal theme, so they're never a target.
    red, green, blue = triplet
    best_index = 16
    best_distance = None
    for index in range(16, 256):
        r, g, b = tinct.palette.EIGHT_BIT_PALETTE[index]
        distance = (red - r) ** 2 + (green - g) ** 2 + (blue - b) ** 2
        if best_distance is None or distance < best_distance:
            best_index, best_distance = index, distance
    return best_index


@functools.cache
def _eight_bit_to_standard() -> tuple[int, ...]:
    palette = tinct.palette.EIGHT_BIT_PALETTE
    return tuple(
        number if number < 16 else tinct.palette.STANDARD_PALETTE.match(palette[number])
        for number in range(256)
    )


@functools.cache
def _eight_bit_to_windows() -> tuple[int, ...]:
    palette = tinct.palette.EIGHT_BIT_PALETTE
    return tuple(
        number if number < 16 else tinct.palette.WINDOWS_PALETTE.match(palette[number])
        for number in range(256)
    )
