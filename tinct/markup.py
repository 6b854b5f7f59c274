# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Bracket markup for styled text.

Markup is a string with tags in square brackets. A tag opens a style,
a closing tag with a slash closes it::

    >>> text = render("[bold red]Hello[/bold red], [italic]world[/]!")
    >>> text.plain
    'Hello, world!'
    >>> for span in text.spans:
    ...     print(span.start, span.end, span.style)
    0 5 bold red
    7 12 italic

Tag contents is a style definition, see :mod:`tinct.style`, or a name
from a :class:`~tinct.theme.Theme`. ``[/]`` closes the most recently opened tag;
a tag with a name closes the most recent tag with the same name.
``[link=https://example.com]`` makes a hyperlink. Tags that start with ``@``
are event handlers in other libraries; they are parsed but don't
produce styles.

Tags that are not closed by the end of the string are closed automatically.

To print a literal tag, escape it with a backslash. Use :func:`escape`
to escape arbitrary strings::

    >>> render("\\\\[bold]").plain
    '[bold]'
    >>> escape("[bold]")
    '\\\\[bold]'


Rendering
---------

.. autofunction:: render

.. autofunction:: escape


Parsing
-------

.. autofunction:: parse

.. autoclass:: Tag
   :members:


Errors
------

.. autoclass:: MarkupError

.. autoclass:: MismatchedTag
   :members:

.. autoclass:: NothingToClose
   :members:

"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass

import tinct
import tinct.style
import tinct.text
import tinct.theme
from tinct import _typing as _t

__all__ = [
    "MarkupError",
    "MismatchedTag",
    "NothingToClose",
    "Tag",
    "escape",
    "parse",
    "render",
]

_TAGS_RE = re.compile(r"((\\*)\[([a-z#/@][^[]*?)])")
_ESCAPE_RE = re.compile(r"(\\*)(\[[a-z#/@][^[]*?])")


class MarkupError(ValueError):
    """
    Raised when markup is invalid.

    """


class MismatchedTag(MarkupError):
    """
    Raised when a closing tag doesn't match any open tag.

    """

    def __init__(self, tag: str, position: int):
        super().__init__(
            f"closing tag '[/{tag}]' at position {position} doesn't match any open tag"
        )

        self.tag: str = tag
        """
        Name of the closing tag, without the slash.

        """

        self.position: int = position
        """
        Offset of the closing tag in the markup string.

        """


class NothingToClose(MarkupError):
    """
    Raised when ``[/]`` appears while no tags are open.

    """

    def __init__(self, position: int):
        super().__init__(f"closing tag '[/]' at position {position} has nothing to close")

        self.position: int = position
        """
        Offset of the closing tag in the markup string.

        """


@dataclass(frozen=True, slots=True)
class Tag:
    """
    A parsed markup tag.

    """

    name: str
    """
    Tag name, i.e. everything before the first ``=``.

    """

    parameters: str | None = None
    """
    Everything after the first ``=``, if there is one.

    """

    def __str__(self) -> str:
        if self.parameters is None:
            return self.name
        return f"{self.name} {self.parameters}"

    @property
    def markup(self) -> str:
        """
        Tag in markup form.

        :example:
            ::

                >>> Tag("link", "https://example.com").markup
                '[link=https://example.com]'

        """

        if self.parameters is None:
            return f"[{self.name}]"
        return f"[{self.name}={self.parameters}]"


def escape(markup: str, /) -> str:
    """
    Escape a string so that it renders as is.

    Only text that looks like a tag is escaped. Backslashes at the end
    of the string are doubled, so that the result can be followed by a tag::

        >>> escape("C:\\\\dir\\\\")
        'C:\\\\dir\\\\\\\\'

    """

    def escape_backslashes(match: re.Match[str]) -> str:
        backslashes, text = match.groups()
        return f"{backslashes}{backslashes}\\{text}"

    escaped = _ESCAPE_RE.sub(escape_backslashes, markup)
    trailing = len(escaped) - len(escaped.rstrip("\\"))
    return escaped + "\\" * trailing


def parse(markup: str, /) -> _t.Iterator[tuple[int, str | None, Tag | None]]:
    """
    Split markup into text and tags.

    Yields tuples of ``(position, text, tag)``, where exactly one of `text`
    and `tag` is not ``None``. Escaped tags are yielded as text.

    :example:
        ::

            >>> list(parse("[bold]hi"))
            [(0, None, Tag(name='bold', parameters=None)), (6, 'hi', None)]

    """

    position = 0
    for match in _TAGS_RE.finditer(markup):
        full_text, escapes, tag_text = match.groups()
        start, end = match.span()
        if start > position:
            yield position, markup[position:start], None
        if escapes:
            backslashes, escaped = divmod(len(escapes), 2)
            if backslashes:
                yield start, "\\" * backslashes, None
                start += backslashes * 2
            if escaped:
                yield start, full_text[len(escapes) :], None
                position = end
                continue
        name, equals, parameters = tag_text.partition("=")
        yield start, None, Tag(name, parameters if equals else None)
        position = end
    if position < len(markup):
        plain = markup[position:].rstrip("\\")
        # Trailing backslashes are escaped as if a tag followed them.
        trailing = len(markup) - position - len(plain)
        plain += "\\" * (trailing - trailing // 2)
        yield position, plain, None


def _normalize(name: str) -> str:
    return name.strip().lower()


def _resolve(tag: Tag, theme: tinct.theme.Theme | None) -> tinct.style.Style:
    definition = str(tag)
    try:
        return tinct.style.Style.parse(definition)
    except tinct.style.StyleError:
        pass
    if theme is not None:
        style = theme.get_style(definition, None)
        if style is not None:
            return style
        warnings.warn(
            f"markup tag {tag.markup} is not a style and is not in the theme",
            tinct.theme.ThemeWarning,
        )
    else:
        tinct._logger.debug("unresolved markup tag %s", tag.markup)
    return tinct.style.Style.null()


def render(
    markup: str,
    style: tinct.style.Style | str | None = None,
    /,
    *,
    theme: tinct.theme.Theme | None = None,
) -> tinct.text.Text:
    """
    Render markup into a :class:`~tinct.text.Text`.

    :param markup:
        string with markup.
    :param style:
        base style for the text.
    :param theme:
        theme for tags that are not style definitions. Without a theme,
        such tags produce no style.
    :raises:
        :class:`MismatchedTag` or :class:`NothingToClose`.
    :example:
        ::

            >>> render("[bold]X[/]Y").spans
            [Span(start=0, end=1, style=<Style 'bold'>)]
            >>> render("[/italic]")
            Traceback (most recent call last):
            ...
            tinct.markup.MismatchedTag: closing tag '[/italic]' at position 0 doesn't match any open tag

    """

    if "[" not in markup and not markup.endswith("\\"):
        return tinct.text.Text(markup, style)

    text = tinct.text.Text(style=style)
    spans: list[tinct.text.Span] = []
    stack: list[tuple[int, Tag]] = []

    def pop_named(name: str) -> tuple[int, Tag] | None:
        for index in range(len(stack) - 1, -1, -1):
            if _normalize(stack[index][1].name) == name:
                return stack.pop(index)
        return None

    def close(start: int, open_tag: Tag):
        if open_tag.name.startswith("@") or len(text) <= start:
            return
        if span_style := _resolve(open_tag, theme):
            spans.append(tinct.text.Span(start, len(text), span_style))

    for position, plain, tag in parse(markup):
        if plain is not None:
            text.append(plain)
            continue
        assert tag is not None
        if tag.name.startswith("/"):
            name = _normalize(tag.name[1:])
            if name:
                opened = pop_named(name)
                if opened is None:
                    raise MismatchedTag(name, position)
            else:
                if not stack:
                    raise NothingToClose(position)
                opened = stack.pop()
            close(*opened)
        else:
            stack.append((len(text), Tag(tag.name.strip(), tag.parameters)))

    while stack:
        close(*stack.pop())

    text.spans = sorted(spans[::-1], key=lambda span: span.start)
    return text
