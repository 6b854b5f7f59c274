# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Turning renderable objects into segments and escape codes.

A renderable is anything that implements ``__tinct_render__``: a method that
takes :class:`RenderOptions` and returns a list of
:class:`~tinct.segment.Segment`\\ s. :class:`~tinct.text.Text` is a renderable,
and plain strings are converted to texts automatically::

    >>> options = RenderOptions(width=5, color_system=tinct.color.ColorSystem.STANDARD)
    >>> segments = render("[green]Hello[/green] world", options)
    >>> print(render_ansi(segments, options.color_system).replace("\\x1b", "ESC"))
    ESC[32mHelloESC[0m
    world
    <BLANKLINE>

Segments that :func:`render` returns never exceed ``options.width`` cells
per line, unless overflow is :attr:`~tinct.text.OverflowMethod.IGNORE`
or wrapping is disabled.

.. autoclass:: RenderOptions
   :members:

.. autoclass:: Renderable
   :members:

.. autofunction:: render

.. autofunction:: render_lines

.. autofunction:: render_ansi

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import tinct.color
import tinct.markup
import tinct.segment
import tinct.style
import tinct.text
import tinct.theme
from tinct import _typing as _t

__all__ = [
    "RenderOptions",
    "Renderable",
    "render",
    "render_ansi",
    "render_lines",
]


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """
    Settings for rendering.

    Settings of a renderable itself, like :attr:`Text.justify <tinct.text.Text.justify>`,
    are used when the corresponding option is not given.

    """

    width: int = 80
    """
    Maximum width of a line, in cells.

    """

    _: dataclasses.KW_ONLY

    justify: tinct.text.JustifyMethod | None = None
    """
    Justification of wrapped lines.

    """

    overflow: tinct.text.OverflowMethod | None = None
    """
    How to handle text that doesn't fit.

    """

    no_wrap: bool = False
    """
    Disable word wrapping.

    """

    ascii_only: bool = False
    """
    Only use ASCII characters for decorations, like ellipsis.

    """

    markup: bool = True
    """
    Parse strings as markup.

    """

    color_system: tinct.color.ColorSystem | None = tinct.color.ColorSystem.TRUECOLOR
    """
    Color system for escape codes, ``None`` disables colors.

    """

    tab_size: int = 8
    """
    Tab size for renderables that don't set their own.

    """

    theme: tinct.theme.Theme | None = None
    """
    Theme for markup tags that are not style definitions.

    """

    def update(self, **changes: _t.Any) -> RenderOptions:
        """
        Make a copy of these options with some fields changed.

        :example:
            ::

                >>> RenderOptions(width=80).update(width=40).width
                40

        """

        return dataclasses.replace(self, **changes)


@_t.runtime_checkable
class Renderable(_t.Protocol):
    """
    Protocol for objects that can be rendered.

    """

    def __tinct_render__(
        self, options: RenderOptions, /
    ) -> list[tinct.segment.Segment]: ...


def _to_renderable(renderable: Renderable | str, options: RenderOptions) -> Renderable:
    if isinstance(renderable, str):
        if options.markup:
            return tinct.markup.render(renderable, theme=options.theme)
        return tinct.text.Text(renderable)
    if not isinstance(renderable, Renderable):
        raise TypeError(f"{renderable!r} is not renderable")
    return renderable


def render(
    renderable: Renderable | str, options: RenderOptions | None = None, /
) -> list[tinct.segment.Segment]:
    """
    Render an object to segments.

    :param renderable:
        object to render. Strings are parsed as markup if
        :attr:`RenderOptions.markup` is set.
    :param options:
        rendering settings.
    :raises:
        :class:`~tinct.markup.MarkupError` if markup is invalid,
        :class:`TypeError` if object is not renderable.
    :example:
        ::

            >>> segments = render("[bold]Hello[/bold], world!", RenderOptions(width=20))
            >>> [segment.text for segment in segments]
            ['Hello', ', world!', '\\n']

    """

    if options is None:
        options = RenderOptions()
    return _to_renderable(renderable, options).__tinct_render__(options)


def render_lines(
    renderable: Renderable | str,
    options: RenderOptions | None = None,
    /,
    *,
    style: tinct.style.Style | None = None,
    pad: bool = True,
) -> list[list[tinct.segment.Segment]]:
    """
    Render an object and split the result into lines of exactly
    ``options.width`` cells.

    :param style:
        style for padding.
    :param pad:
        pad short lines.

    """

    if options is None:
        options = RenderOptions()
    segments = render(renderable, options)
    return tinct.segment.Segment.split_and_crop_lines(
        segments, options.width, style, pad, include_new_lines=False
    )


def render_ansi(
    segments: _t.Iterable[tinct.segment.Segment],
    color_system: tinct.color.ColorSystem | None = tinct.color.ColorSystem.TRUECOLOR,
    /,
) -> str:
    """
    Convert segments to a string with escape codes.

    Adjacent segments with the same style are merged first,
    so that the output has as few escape codes as possible.

    :param color_system:
        colors are downgraded to this color system. If ``None``,
        styles are dropped.

    """

    output = []
    for segment in tinct.segment.Segment.simplify(segments):
        if segment.control is not None or segment.style is None:
            output.append(segment.text)
        else:
            output.append(segment.style.render(segment.text, color_system))
    return "".join(output)
