# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Description of terminal colors.

Tinct doesn't query the terminal. Instead, code that needs actual RGB values
for "default" and the 16 standard colors (for example, when converting styles
to CSS or downgrading colors) takes a :class:`TerminalTheme`.

.. autoclass:: TerminalTheme
   :members:

.. autoclass:: Lightness
   :members:

.. autodata:: DEFAULT_TERMINAL_THEME

.. autodata:: MONOKAI

"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import tinct.color
import tinct.palette
from tinct import _typing as _t

__all__ = [
    "DEFAULT_TERMINAL_THEME",
    "MONOKAI",
    "Lightness",
    "TerminalTheme",
]


class Lightness(enum.Enum):
    """
    Overall color theme of a terminal.

    Can help with deciding which colors to use when printing output.

    """

    UNKNOWN = enum.auto()
    """
    Terminal background is not dark or bright enough
    to fall in one category or another.

    """

    DARK = enum.auto()
    """
    Terminal background is dark.

    """

    LIGHT = enum.auto()
    """
    Terminal background is light.

    """


@dataclass(frozen=True, slots=True)
class TerminalTheme:
    """
    Colors and theme of a terminal.

    """

    background: tinct.color.ColorTriplet
    """
    Background color of a terminal.

    """

    foreground: tinct.color.ColorTriplet
    """
    Foreground color of a terminal.

    """

    ansi_colors: tinct.palette.Palette
    """
    Values for the 16 standard colors.

    """

    @classmethod
    def from_rgb(
        cls,
        background: tuple[int, int, int],
        foreground: tuple[int, int, int],
        normal: _t.Sequence[tuple[int, int, int]],
        bright: _t.Sequence[tuple[int, int, int]] | None = None,
    ) -> TerminalTheme:
        """
        Build a theme from RGB tuples.

        :param normal:
            values for colors 0 through 7.
        :param bright:
            values for colors 8 through 15. If not given, `normal` colors are reused.

        """

        colors = list(normal) + list(bright if bright is not None else normal)
        if len(colors) != 16:
            raise ValueError(f"terminal theme needs 16 colors, got {len(colors)}")
        return cls(
            tinct.color.ColorTriplet(*background),
            tinct.color.ColorTriplet(*foreground),
            tinct.palette.Palette(colors),
        )

    @property
    def lightness(self) -> Lightness:
        """
        Overall color theme, i.e. dark or light, derived from the background.

        """

        r, g, b = self.background
        luma = (0.2627 * r + 0.6780 * g + 0.0593 * b) / 256
        if luma <= 0.2:
            return Lightness.DARK
        elif luma >= 0.85:
            return Lightness.LIGHT
        else:
            return Lightness.UNKNOWN


DEFAULT_TERMINAL_THEME = TerminalTheme.from_rgb(
    (255, 255, 255),
    (0, 0, 0),
    [
        (0, 0, 0),
        (128, 0, 0),
        (0, 128, 0),
        (128, 128, 0),
        (0, 0, 128),
        (128, 0, 128),
        (0, 128, 128),
        (192, 192, 192),
    ],
    [
        (128, 128, 128),
        (255, 0, 0),
        (0, 255, 0),
        (255, 255, 0),
        (0, 0, 255),
        (255, 0, 255),
        (0, 255, 255),
        (255, 255, 255),
    ],
)
"""
Black on white theme, used when no other theme is given.

"""

MONOKAI = TerminalTheme.from_rgb(
    (12, 12, 12),
    (217, 217, 217),
    [
        (26, 26, 26),
        (244, 0, 95),
        (152, 224, 36),
        (253, 151, 31),
        (157, 101, 255),
        (244, 0, 95),
        (88, 209, 235),
        (196, 197, 181),
    ],
    [
        (98, 94, 76),
        (244, 0, 95),
        (152, 224, 36),
        (224, 213, 97),
        (157, 101, 255),
        (244, 0, 95),
        (88, 209, 235),
        (246, 246, 239),
    ],
)
"""
Dark theme with Monokai colors.

"""
