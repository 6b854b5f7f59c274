# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Named styles for markup.

A markup tag that isn't a valid style definition, like ``[warning]``,
is looked up in a :class:`Theme`::

    >>> import tinct.markup
    >>> theme = Theme({"warning": "bold yellow"})
    >>> tinct.markup.render("[warning]Careful![/warning]", theme=theme).spans
    [Span(start=0, end=8, style=<Style 'bold yellow'>)]

Style names are case-insensitive.

.. autoclass:: Theme
   :members:

.. autodata:: DEFAULT_STYLES

.. autoclass:: ThemeWarning

"""

from __future__ import annotations

import types

import tinct
import tinct.cache
import tinct.style
from tinct import _typing as _t

__all__ = [
    "DEFAULT_STYLES",
    "Theme",
    "ThemeWarning",
]


class ThemeWarning(tinct.TinctWarning):
    """
    Issued when a markup tag can't be resolved in the given theme.

    """


_DEFAULT_STYLE_DEFINITIONS = {
    "none": "none",
    "reset": "default on default not dim not bold not italic not underline not blink not blink2 not reverse not conceal not strike",
    "dim": "dim",
    "bright": "not dim",
    "bold": "bold",
    "strong": "bold",
    "code": "reverse bold",
    "italic": "italic",
    "emphasize": "italic",
    "underline": "underline",
    "blink": "blink",
    "blink2": "blink2",
    "reverse": "reverse",
    "strike": "strike",
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
    "logging.keyword": "bold yellow",
    "logging.level.notset": "dim",
    "logging.level.debug": "green",
    "logging.level.info": "blue",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold reverse red",
    "log.time": "dim cyan",
    "log.path": "dim",
    "repr.ellipsis": "yellow",
    "repr.error": "bold red",
    "repr.str": "not italic not bold green",
    "repr.brace": "bold",
    "repr.comma": "bold",
    "repr.number": "bold not italic cyan",
    "repr.bool_true": "italic bright_green",
    "repr.bool_false": "italic bright_red",
    "repr.none": "italic magenta",
    "repr.url": "underline not italic not bold bright_blue",
    "repr.path": "magenta",
    "repr.filename": "bright_magenta",
    "rule.line": "bright_green",
    "prompt": "none",
    "prompt.choices": "magenta bold",
    "prompt.default": "cyan bold",
    "prompt.invalid": "red",
    "markdown.strong": "bold",
    "markdown.em": "italic",
    "markdown.code": "bold cyan on black",
    "markdown.link": "bright_blue",
    "markdown.link_url": "blue underline",
    "markdown.h1": "bold",
    "markdown.h2": "bold underline",
    "iso8601.date": "blue",
    "iso8601.time": "magenta",
}


def _normalize(name: str) -> str:
    return name.strip().lower()


def _build_default_styles() -> dict[str, tinct.style.Style]:
    # Parsed with a private cache so that defaults don't fill the shared one.
    cache = tinct.cache.LruCache(len(_DEFAULT_STYLE_DEFINITIONS))
    return {
        name: tinct.style.Style.parse(definition, cache=cache)
        for name, definition in _DEFAULT_STYLE_DEFINITIONS.items()
    }


DEFAULT_STYLES: _t.Mapping[str, tinct.style.Style] = types.MappingProxyType(
    _build_default_styles()
)
"""
Styles available in every theme that inherits defaults.

"""


class Theme:
    """
    A collection of named styles.

    :param styles:
        mapping from names to styles or style definitions.
    :param inherit:
        start from :data:`DEFAULT_STYLES`.
    :raises:
        :class:`~tinct.style.StyleError` if a style definition is invalid.

    """

    def __init__(
        self,
        styles: _t.Mapping[str, tinct.style.Style | str] | None = None,
        /,
        *,
        inherit: bool = True,
    ):
        self.__styles: dict[str, tinct.style.Style] = (
            dict(DEFAULT_STYLES) if inherit else {}
        )
        for name, style in (styles or {}).items():
            if isinstance(style, str):
                style = tinct.style.Style.parse(style)
            self.__styles[_normalize(name)] = style

    @property
    def styles(self) -> _t.Mapping[str, tinct.style.Style]:
        """
        All styles in this theme, read-only.

        """

        return types.MappingProxyType(self.__styles)

    @_t.overload
    def get_style(self, name: str, /) -> tinct.style.Style: ...
    @_t.overload
    def get_style(
        self, name: str, default: tinct.style.Style, /
    ) -> tinct.style.Style: ...
    @_t.overload
    def get_style(
        self, name: str, default: tinct.style.Style | None, /
    ) -> tinct.style.Style | None: ...
    def get_style(
        self,
        name: str,
        default: tinct.style.Style | None | tinct.Missing = tinct.MISSING,
        /,
    ) -> tinct.style.Style | None:
        """
        Look up a style by name.

        :param name:
            style name, case-insensitive.
        :param default:
            returned if style is not found.
        :raises:
            :class:`~tinct.style.MissingStyle` if style is not found
            and no default is given.
        :example:
            ::

                >>> Theme().get_style("repr.number")
                <Style 'bold not italic cyan'>

        """

        style = self.__styles.get(_normalize(name))
        if style is not None:
            return style
        if default is tinct.MISSING:
            raise tinct.style.MissingStyle(f"no style named {name!r}")
        return default

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize(name) in self.__styles

    def __len__(self) -> int:
        return len(self.__styles)

    def __repr__(self) -> str:
        return f"<Theme with {len(self.__styles)} styles>"
