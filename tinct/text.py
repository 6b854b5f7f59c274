# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Text with styled spans, and its layout.

A :class:`Text` is a plain string, a base style, and a list of :class:`Span`\\ s.
Each span applies a style to a range of the string. Spans can overlap;
when they do, they are merged in the order they were added::

    >>> text = Text("Hello, world!")
    >>> text.stylize("bold", 0, 5)
    >>> text.stylize("red", 3, 9)
    >>> text.get_style_at_offset(4)
    <Style 'bold red'>

Offsets are indices of code points in :attr:`Text.plain`. Layout operations
(wrapping, padding, truncation) measure text in terminal cells instead,
see :mod:`tinct.cells`.

:class:`Text` is mutable; methods like :meth:`~Text.append` change it in place.
Layout methods that produce several lines return a new :class:`Lines` object.

When text is ready, it is turned into :class:`~tinct.segment.Segment`\\ s
by :meth:`Text.render`.


Text
----

.. autoclass:: Text
   :members:

.. autoclass:: Span
   :members:

.. autoclass:: Lines
   :members:


Layout settings
---------------

.. autoclass:: JustifyMethod
   :members:

.. autoclass:: OverflowMethod
   :members:


Word wrapping
-------------

.. autofunction:: divide_line

.. autofunction:: strip_control_codes

"""

from __future__ import annotations

import bisect
import enum
import functools
import math
import re
from dataclasses import dataclass
from operator import itemgetter

import tinct.ansi
import tinct.cells
import tinct.markup
import tinct.segment
import tinct.style
from tinct import _typing as _t

if _t.TYPE_CHECKING:
    import tinct.render
    import tinct.theme

__all__ = [
    "JustifyMethod",
    "Lines",
    "OverflowMethod",
    "Span",
    "Text",
    "divide_line",
    "strip_control_codes",
]


class JustifyMethod(enum.Enum):
    """
    How lines are aligned when text is wrapped.

    """

    DEFAULT = "default"
    """
    Lines are left as is, without padding.

    """

    LEFT = "left"
    """
    Lines are padded on the right.

    """

    CENTER = "center"
    """
    Lines are padded on both sides.

    """

    RIGHT = "right"
    """
    Lines are padded on the left.

    """

    FULL = "full"
    """
    Spaces between words are widened so that every line but the last one
    takes the full width.

    """


class OverflowMethod(enum.Enum):
    """
    What happens to text that doesn't fit into the available width.

    """

    FOLD = "fold"
    """
    Long words are broken into several lines.

    """

    CROP = "crop"
    """
    Text is cut at the line's end.

    """

    ELLIPSIS = "ellipsis"
    """
    Text is cut, and an ellipsis is added to indicate it.

    """

    IGNORE = "ignore"
    """
    Text is left as is, it may overflow the available width.

    """


_DEFAULT_JUSTIFY = JustifyMethod.DEFAULT
_DEFAULT_OVERFLOW = OverflowMethod.FOLD

_CONTROL_CODES = str.maketrans(dict.fromkeys(map(ord, "\x07\x08\x0b\x0c\x0d")))
_WORDS_RE = re.compile(r"\s*\S+\s*")
_TRAILING_WHITESPACE_RE = re.compile(r"\s+$")


def strip_control_codes(text: str, /) -> str:
    """
    Remove control codes that move the cursor: bell, backspace, vertical tab,
    form feed and carriage return.

    """

    return text.translate(_CONTROL_CODES)


def _to_style(style: tinct.style.Style | str | None) -> tinct.style.Style:
    if style is None:
        return tinct.style.Style.null()
    if isinstance(style, str):
        return tinct.style.Style.parse(style)
    return style


@dataclass(frozen=True, slots=True)
class Span:
    """
    A style applied to a range of text.

    A span covers code points from `start` up to, but not including, `end`.
    A span with ``end <= start`` is empty and applies to nothing.

    """

    start: int
    """
    Offset of the first code point.

    """

    end: int
    """
    Offset past the last code point.

    """

    style: tinct.style.Style
    """
    Style applied to the range.

    """

    def __bool__(self) -> bool:
        return self.end > self.start

    def split(self, offset: int, /) -> tuple[Span, Span | None]:
        """
        Split span in two at the given offset.

        If offset is outside of the span, the second part is ``None``.

        """

        if offset < self.start or offset >= self.end:
            return self, None
        return (
            Span(self.start, offset, self.style),
            Span(offset, self.end, self.style),
        )

    def move(self, offset: int, /) -> Span:
        """
        Shift span by the given number of code points.

        """

        return Span(self.start + offset, self.end + offset, self.style)

    def right_crop(self, offset: int, /) -> Span:
        """
        Make sure span doesn't extend past the given offset.

        """

        if offset >= self.end:
            return self
        return Span(self.start, min(offset, self.end), self.style)

    def extend(self, cells: int, /) -> Span:
        """
        Extend span's end.

        """

        if cells:
            return Span(self.start, self.end + cells, self.style)
        return self


class Text:
    """
    A string with styled spans.

    :param text:
        initial plain text. Control codes from :func:`strip_control_codes`
        are removed from it.
    :param style:
        base style that applies to the entire text, below all spans.
        Strings are parsed with :meth:`Style.parse <tinct.style.Style.parse>`.
    :param justify:
        default justification for :meth:`~Text.wrap`.
    :param overflow:
        default overflow handling for :meth:`~Text.wrap` and :meth:`~Text.truncate`.
    :param no_wrap:
        disables wrapping by default.
    :param end:
        string that is emitted after the text when it is rendered.
    :param tab_size:
        number of cells between tab stops, ``8`` if not given.
    :param spans:
        initial spans.

    """

    def __init__(
        self,
        text: str = "",
        /,
        style: tinct.style.Style | str | None = None,
        *,
        justify: JustifyMethod | str | None = None,
        overflow: OverflowMethod | str | None = None,
        no_wrap: bool | None = None,
        end: str = "\n",
        tab_size: int | None = None,
        spans: _t.Iterable[Span] | None = None,
    ):
        self._text = strip_control_codes(text)
        self._style = _to_style(style)
        self._spans: list[Span] = list(spans) if spans else []

        self.justify: JustifyMethod | None = (
            JustifyMethod(justify) if justify is not None else None
        )
        """
        Default justification for :meth:`~Text.wrap`.

        """

        self.overflow: OverflowMethod | None = (
            OverflowMethod(overflow) if overflow is not None else None
        )
        """
        Default overflow handling.

        """

        self.no_wrap: bool | None = no_wrap
        """
        Disables wrapping by default.

        """

        self.end: str = end
        """
        String that is emitted after the text when it is rendered.

        """

        self.tab_size: int | None = tab_size
        """
        Number of cells between tab stops.

        """

    @classmethod
    def from_markup(
        cls,
        markup: str,
        /,
        *,
        style: tinct.style.Style | str | None = None,
        theme: tinct.theme.Theme | None = None,
        justify: JustifyMethod | str | None = None,
        overflow: OverflowMethod | str | None = None,
        no_wrap: bool | None = None,
        end: str = "\n",
    ) -> Text:
        """
        Create text from bracket markup, see :mod:`tinct.markup`.

        :raises:
            :class:`~tinct.markup.MarkupError`.
        :example:
            ::

                >>> text = Text.from_markup("[bold]Hello[/bold], world!")
                >>> text.plain
                'Hello, world!'
                >>> text.spans
                [Span(start=0, end=5, style=<Style 'bold'>)]

        """

        text = tinct.markup.render(markup, _to_style(style), theme=theme)
        text.justify = JustifyMethod(justify) if justify is not None else None
        text.overflow = OverflowMethod(overflow) if overflow is not None else None
        text.no_wrap = no_wrap
        text.end = end
        return text

    @classmethod
    def from_ansi(
        cls,
        text: str,
        /,
        *,
        style: tinct.style.Style | str | None = None,
        justify: JustifyMethod | str | None = None,
        overflow: OverflowMethod | str | None = None,
        no_wrap: bool | None = None,
        end: str = "\n",
        tab_size: int | None = 8,
    ) -> Text:
        """
        Create text from a string with ANSI escape codes, see :mod:`tinct.ansi`.

        :example:
            ::

                >>> text = Text.from_ansi("\\x1b[1mHello\\x1b[0m, world!")
                >>> text.plain
                'Hello, world!'
                >>> text.spans
                [Span(start=0, end=5, style=<Style 'bold'>)]

        """

        joiner = cls(
            "\n",
            style,
            justify=justify,
            overflow=overflow,
            no_wrap=no_wrap,
            end=end,
            tab_size=tab_size,
        )
        decoder = tinct.ansi.AnsiDecoder()
        return joiner.join(decoder.decode(text))

    @classmethod
    def styled(
        cls,
        text: str,
        style: tinct.style.Style | str | None = None,
        /,
    ) -> Text:
        """
        Create text with a span that covers all of it.

        Unlike passing `style` to the constructor, the style
        becomes a span rather than the base style.

        """

        styled_text = cls(text)
        styled_text.stylize(style)
        return styled_text

    @classmethod
    def assemble(
        cls,
        *parts: str | Text | tuple[str, tinct.style.Style | str | None],
        style: tinct.style.Style | str | None = None,
        justify: JustifyMethod | str | None = None,
        overflow: OverflowMethod | str | None = None,
        no_wrap: bool | None = None,
        end: str = "\n",
        tab_size: int | None = None,
    ) -> Text:
        """
        Create text by concatenating strings, texts, and ``(string, style)`` pairs.

        :example:
            ::

                >>> text = Text.assemble("Hello, ", ("world", "bold"), "!")
                >>> text.plain
                'Hello, world!'
                >>> text.spans
                [Span(start=7, end=12, style=<Style 'bold'>)]

        """

        text = cls(
            style=style,
            justify=justify,
            overflow=overflow,
            no_wrap=no_wrap,
            end=end,
            tab_size=tab_size,
        )
        for part in parts:
            if isinstance(part, (str, Text)):
                text.append(part)
            else:
                text.append(*part)
        return text

    @property
    def plain(self) -> str:
        """
        Text without styles.

        Assigning a shorter string crops spans that no longer fit.

        """

        return self._text

    @plain.setter
    def plain(self, new_text: str, /):
        new_text = strip_control_codes(new_text)
        if new_text != self._text:
            self._text = new_text
            self._trim_spans()

    @property
    def spans(self) -> list[Span]:
        """
        Spans, in order of application.

        """

        return self._spans

    @spans.setter
    def spans(self, spans: _t.Iterable[Span], /):
        self._spans = list(spans)

    @property
    def style(self) -> tinct.style.Style:
        """
        Base style that applies to the entire text.

        """

        return self._style

    @style.setter
    def style(self, style: tinct.style.Style | str | None, /):
        self._style = _to_style(style)

    @property
    def cell_len(self) -> int:
        """
        Width of the text in terminal cells.

        """

        return tinct.cells.cell_len(self._text)

    @property
    def markup(self) -> str:
        """
        Markup that produces this text.

        :example:
            ::

                >>> Text.assemble(("Hello", "bold"), ", [world]!").markup
                '[bold]Hello[/bold], \\\\[world]!'

        """

        plain = self._text
        markup_spans = [
            (offset, closing, style)
            for offset, closing, style in [
                (0, False, self._style),
                *((span.start, False, span.style) for span in self._spans),
                *((span.end, True, span.style) for span in self._spans),
                (len(plain), True, self._style),
            ]
            if style
        ]
        markup_spans.sort(key=itemgetter(0, 1))
        position = 0
        output = []
        for offset, closing, style in markup_spans:
            if offset > position:
                output.append(tinct.markup.escape(plain[position:offset]))
                position = offset
            output.append(f"[/{style}]" if closing else f"[{style}]")
        if position < len(plain):
            output.append(tinct.markup.escape(plain[position:]))
        return "".join(output)

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"<text {self._text!r} {self._spans!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self._text == other._text and self._spans == other._spans

    __hash__ = None  # type: ignore

    def __contains__(self, other: object) -> bool:
        if isinstance(other, str):
            return other in self._text
        elif isinstance(other, Text):
            return other._text in self._text
        return False

    def __add__(self, other: object) -> Text:
        if isinstance(other, (str, Text)):
            result = self.copy()
            result.append(other)
            return result
        return NotImplemented

    def __radd__(self, other: object) -> Text:
        if isinstance(other, str):
            result = self.blank_copy(other)
            result.append(self)
            return result
        return NotImplemented

    def __iadd__(self, other: object) -> Text:
        if isinstance(other, (str, Text)):
            return self.append(other)
        return NotImplemented

    def __getitem__(self, key: int | slice) -> Text:
        if isinstance(key, int):
            index = range(len(self._text))[key]
            return self.slice(index, index + 1)
        start, stop, step = key.indices(len(self._text))
        if step != 1:
            raise TypeError("slices with step are not supported")
        return self.slice(start, stop)

    def blank_copy(self, plain: str = "", /) -> Text:
        """
        Make a new text with the same settings and base style,
        but with different content and no spans.

        """

        return Text(
            plain,
            self._style,
            justify=self.justify,
            overflow=self.overflow,
            no_wrap=self.no_wrap,
            end=self.end,
            tab_size=self.tab_size,
        )

    def copy(self) -> Text:
        """
        Make a copy of this text.

        """

        copy = self.blank_copy(self._text)
        copy._spans = self._spans[:]
        return copy

    def append(
        self,
        text: str | Text,
        style: tinct.style.Style | str | None = None,
        /,
    ) -> Text:
        """
        Add a string or another text to the end of this text.

        :param text:
            string or text to append.
        :param style:
            style for the appended string. Can't be given when appending a text.
        :returns:
            this text, for chaining.

        """

        if isinstance(text, Text):
            if style is not None:
                raise ValueError("style can't be given when appending a Text")
            return self.append_text(text)
        if not isinstance(text, str):
            raise TypeError(f"expected str or Text, got {text!r}")
        if text:
            text = strip_control_codes(text)
            offset = len(self._text)
            self._text += text
            style = _to_style(style)
            if style and text:
                self._spans.append(Span(offset, offset + len(text), style))
        return self

    def append_text(self, text: Text, /) -> Text:
        """
        Add another text to the end of this text.

        Base style of the appended text becomes a span.

        :returns:
            this text, for chaining.

        """

        offset = len(self._text)
        self._text += text._text
        if text._style and text._text:
            self._spans.append(Span(offset, offset + len(text._text), text._style))
        self._spans.extend(span.move(offset) for span in text._spans)
        return self

    def append_tokens(
        self, tokens: _t.Iterable[tuple[str, tinct.style.Style | str | None]], /
    ) -> Text:
        """
        Add ``(string, style)`` pairs to the end of this text.

        :returns:
            this text, for chaining.

        """

        for content, style in tokens:
            self.append(content, style)
        return self

    def _normalize_range(self, start: int, end: int | None) -> tuple[int, int]:
        length = len(self._text)
        if start < 0:
            start = max(0, length + start)
        if end is None:
            end = length
        elif end < 0:
            end = max(0, length + end)
        return min(start, length), min(end, length)

    def stylize(
        self,
        style: tinct.style.Style | str | None,
        start: int = 0,
        end: int | None = None,
    ):
        """
        Apply a style to a range of text, on top of existing spans.

        Negative offsets count from the end of the text. Offsets are clamped
        to text length, empty ranges are ignored.

        """

        style = _to_style(style)
        start, end = self._normalize_range(start, end)
        if style and start < end:
            self._spans.append(Span(start, end, style))

    def stylize_before(
        self,
        style: tinct.style.Style | str | None,
        start: int = 0,
        end: int | None = None,
    ):
        """
        Apply a style to a range of text, below existing spans.

        """

        style = _to_style(style)
        start, end = self._normalize_range(start, end)
        if style and start < end:
            self._spans.insert(0, Span(start, end, style))

    def copy_styles(self, text: Text, /):
        """
        Add spans from another text, without moving them.

        """

        self._spans.extend(text._spans)

    def get_style_at_offset(self, offset: int, /) -> tinct.style.Style:
        """
        Get style of a code point at the given offset.

        Negative offsets count from the end of the text.

        """

        if offset < 0:
            offset += len(self._text)
        style = self._style
        for span in self._spans:
            if span.start <= offset < span.end:
                style += span.style
        return style

    def flatten_spans(self) -> list[Span]:
        """
        Get non-overlapping spans that cover the whole text.

        Every resulting span has the merged style of all spans that cover it;
        the base style is not included.

        :example:
            ::

                >>> text = Text("abcd")
                >>> text.stylize("bold", 0, 3)
                >>> text.stylize("red", 2)
                >>> for span in text.flatten_spans():
                ...     print(span.start, span.end, span.style)
                0 2 bold
                2 3 bold red
                3 4 red

        """

        length = len(self._text)
        if not length:
            return []

        boundaries = {0, length}
        for span in self._spans:
            if span:
                boundaries.add(max(0, min(span.start, length)))
                boundaries.add(max(0, min(span.end, length)))
        points = sorted(boundaries)

        result = []
        for start, end in zip(points, points[1:]):
            style = tinct.style.Style.combine(
                span.style
                for span in self._spans
                if span.start <= start and span.end >= end
            )
            result.append(Span(start, end, style))
        return result

    def _trim_spans(self):
        max_offset = len(self._text)
        self._spans[:] = [
            span if span.end <= max_offset else span.right_crop(max_offset)
            for span in self._spans
            if span.start < max_offset
        ]

    def divide(self, offsets: _t.Iterable[int], /) -> Lines:
        """
        Cut text at the given offsets.

        Offsets should be sorted; they're clamped to text length. Spans
        that cross a cut are split, spans in every piece are rebased.

        :example:
            ::

                >>> [line.plain for line in Text("abcdef").divide([2, 4])]
                ['ab', 'cd', 'ef']

        """

        length = len(self._text)
        divide_offsets = [0]
        for offset in offsets:
            divide_offsets.append(max(divide_offsets[-1], min(offset, length)))
        if len(divide_offsets) == 1:
            return Lines([self.copy()])
        divide_offsets.append(length)

        ranges = list(zip(divide_offsets, divide_offsets[1:]))
        lines = Lines(self.blank_copy(self._text[start:end]) for start, end in ranges)
        if not self._spans:
            return lines

        starts = [start for start, _ in ranges]
        for span in self._spans:
            span = Span(max(0, span.start), min(span.end, length), span.style)
            if not span:
                continue
            index = bisect.bisect_right(starts, span.start) - 1
            while True:
                line_start, line_end = ranges[index]
                left, right = span.split(line_end)
                if left:
                    lines[index]._spans.append(left.move(-line_start))
                if right is None or index + 1 >= len(ranges):
                    break
                span = right
                index += 1
        return lines

    def split(
        self,
        separator: str = "\n",
        /,
        *,
        include_separator: bool = False,
        allow_blank: bool = False,
    ) -> Lines:
        """
        Split text by the given separator.

        :param include_separator:
            keep separators at the end of each line.
        :param allow_blank:
            keep an empty line after a trailing separator.

        """

        if not separator:
            raise ValueError("separator must not be empty")

        text = self._text
        if separator not in text:
            return Lines([self.copy()])

        if include_separator:
            lines = self.divide(
                match.end() for match in re.finditer(re.escape(separator), text)
            )
        else:

            def offsets():
                for match in re.finditer(re.escape(separator), text):
                    start, end = match.span()
                    yield start
                    yield end

            lines = Lines(
                line for line in self.divide(offsets()) if line.plain != separator
            )

        if not allow_blank and text.endswith(separator):
            lines.pop()

        return lines

    def slice(self, start: int, end: int | None = None, /) -> Text:
        """
        Get a part of this text, with spans clipped and rebased.

        """

        start, end = self._normalize_range(start, end)
        if start >= end:
            return self.blank_copy()
        return self.divide([start, end])[1]

    def right_crop(self, amount: int = 1, /):
        """
        Remove a number of code points from the end of the text.

        """

        if amount <= 0:
            return
        max_offset = max(0, len(self._text) - amount)
        self._text = self._text[:max_offset]
        self._trim_spans()

    def truncate(
        self,
        max_width: int,
        /,
        *,
        overflow: OverflowMethod | str | None = None,
        pad: bool = False,
        ellipsis: str = "…",
    ):
        """
        Make text fit into `max_width` cells.

        :param overflow:
            what to do if text is too long. Defaults to text's :attr:`~Text.overflow`,
            then to :attr:`OverflowMethod.FOLD`, which acts like crop here.
        :param pad:
            pad short text with spaces so that it takes exactly `max_width` cells.
        :param ellipsis:
            string that marks truncated text for :attr:`OverflowMethod.ELLIPSIS`.
        :example:
            ::

                >>> text = Text("Hello")
                >>> text.truncate(3, overflow=OverflowMethod.ELLIPSIS)
                >>> text.plain == "He\\u2026"
                True

        """

        overflow = OverflowMethod(overflow or self.overflow or _DEFAULT_OVERFLOW)
        if overflow != OverflowMethod.IGNORE:
            length = tinct.cells.cell_len(self._text)
            if length > max_width:
                if overflow == OverflowMethod.ELLIPSIS:
                    ellipsis_len = tinct.cells.cell_len(ellipsis)
                    if max_width <= ellipsis_len:
                        self.plain = tinct.cells.set_cell_size(ellipsis, max_width)
                    else:
                        self.plain = (
                            tinct.cells.set_cell_size(
                                self._text, max_width - ellipsis_len
                            )
                            + ellipsis
                        )
                else:
                    self.plain = tinct.cells.set_cell_size(self._text, max_width)
        if pad:
            length = tinct.cells.cell_len(self._text)
            if length < max_width:
                self._text += " " * (max_width - length)

    def pad(self, count: int, character: str = " ", /):
        """
        Add padding on both sides.

        """

        self.pad_left(count, character)
        self.pad_right(count, character)

    def pad_left(self, count: int, character: str = " ", /):
        """
        Add padding on the left, shifting all spans.

        """

        if count > 0:
            self._text = character * count + self._text
            self._spans[:] = [span.move(count) for span in self._spans]

    def pad_right(self, count: int, character: str = " ", /):
        """
        Add padding on the right.

        """

        if count > 0:
            self._text += character * count

    def align(
        self, align: JustifyMethod | str, width: int, character: str = " ", /
    ):
        """
        Truncate or pad text so that it takes exactly `width` cells,
        and align it within that width.

        """

        align = JustifyMethod(align)
        self.truncate(width)
        excess = width - tinct.cells.cell_len(self._text)
        if excess > 0:
            if align in (JustifyMethod.LEFT, JustifyMethod.DEFAULT, JustifyMethod.FULL):
                self.pad_right(excess, character)
            elif align == JustifyMethod.CENTER:
                left = excess // 2
                self.pad_left(left, character)
                self.pad_right(excess - left, character)
            else:
                self.pad_left(excess, character)

    def rstrip(self):
        """
        Remove trailing whitespace.

        """

        self.plain = self._text.rstrip()

    def rstrip_end(self, size: int, /):
        """
        Remove trailing whitespace that extends beyond `size` cells.

        """

        excess = tinct.cells.cell_len(self._text) - size
        if excess > 0:
            if match := _TRAILING_WHITESPACE_RE.search(self._text):
                self.right_crop(min(len(match.group(0)), excess))

    def set_length(self, new_length: int, /):
        """
        Pad or crop text so that it has exactly `new_length` code points.

        """

        length = len(self._text)
        if length < new_length:
            self.pad_right(new_length - length)
        elif length > new_length:
            self.right_crop(length - new_length)

    def remove_suffix(self, suffix: str, /):
        """
        Remove suffix if text ends with it.

        """

        if suffix and self._text.endswith(suffix):
            self.right_crop(len(suffix))

    def expand_tabs(self, tab_size: int | None = None, /):
        """
        Replace tabs with spaces up to the next tab stop.

        Spans that cover a tab cover all spaces that replace it.

        :example:
            ::

                >>> text = Text("a\\tbc\\td")
                >>> text.expand_tabs(4)
                >>> text.plain
                'a   bc  d'

        """

        text = self._text
        if "\t" not in text:
            return
        if tab_size is None:
            tab_size = self.tab_size if self.tab_size is not None else 8
        tab_size = max(tab_size, 1)

        pieces = []
        mapping = [0] * (len(text) + 1)
        pos = column = 0
        for i, (char, width) in enumerate(zip(text, tinct.cells.cell_widths(text))):
            mapping[i] = pos
            if char == "\t":
                spaces = tab_size - column % tab_size
                pieces.append(" " * spaces)
                pos += spaces
                column += spaces
            else:
                pieces.append(char)
                pos += 1
                column = 0 if char == "\n" else column + width
        mapping[len(text)] = pos

        length = len(text)
        self._text = "".join(pieces)
        self._spans[:] = [
            Span(
                mapping[max(0, min(span.start, length))],
                mapping[max(0, min(span.end, length))],
                span.style,
            )
            for span in self._spans
        ]

    def extend_style(self, spaces: int, /):
        """
        Add spaces at the end of the text, extending spans that reach the end.

        """

        if spaces <= 0:
            return
        end_offset = len(self._text)
        self._spans[:] = [
            span.extend(spaces) if span.end >= end_offset else span
            for span in self._spans
        ]
        self._text += " " * spaces

    def highlight_regex(
        self,
        pattern: str | re.Pattern[str],
        style: tinct.style.Style | str,
        /,
        *,
        flags: int = 0,
    ) -> int:
        """
        Apply a style to every match of a regular expression.

        :returns:
            number of matches.

        """

        style = _to_style(style)
        count = 0
        for match in re.finditer(pattern, self._text, flags):
            start, end = match.span()
            if style and end > start:
                self._spans.append(Span(start, end, style))
            count += 1
        return count

    def highlight_words(
        self,
        words: _t.Iterable[str],
        style: tinct.style.Style | str,
        /,
        *,
        case_sensitive: bool = True,
    ) -> int:
        """
        Apply a style to every occurrence of the given words.

        :returns:
            number of occurrences.
        :example:
            ::

                >>> Text("Hello hello").highlight_words(["hello"], "bold", case_sensitive=False)
                2

        """

        words = [word for word in words if word]
        if not words:
            return 0
        pattern = "|".join(re.escape(word) for word in words)
        return self.highlight_regex(
            pattern, style, flags=0 if case_sensitive else re.IGNORECASE
        )

    def join(self, lines: _t.Iterable[Text], /) -> Text:
        """
        Concatenate texts using this text as a separator.

        """

        new_text = self.blank_copy()

        def iter_text():
            if self._text:
                first = True
                for line in lines:
                    if not first:
                        yield self
                    first = False
                    yield line
            else:
                yield from lines

        for text in iter_text():
            new_text.append_text(text)
        return new_text

    def fit(self, width: int, /) -> Lines:
        """
        Split text into lines, and pad or crop every line
        to exactly `width` cells.

        """

        lines = Lines()
        for line in self.split(allow_blank=True):
            line.truncate(width, overflow=OverflowMethod.CROP, pad=True)
            lines.append(line)
        return lines

    def detect_indentation(self) -> int:
        """
        Guess indentation step of the text, ``1`` if there is none.

        """

        indentations = {
            len(match.group(1))
            for match in re.finditer(r"^( *)(.*)$", self._text, flags=re.MULTILINE)
        }
        even = [indent for indent in indentations if indent and not indent % 2]
        if not even:
            return 1
        return functools.reduce(math.gcd, even)

    def wrap(
        self,
        width: int,
        /,
        *,
        justify: JustifyMethod | str | None = None,
        overflow: OverflowMethod | str | None = None,
        tab_size: int | None = None,
        no_wrap: bool | None = None,
        ellipsis: str = "…",
    ) -> Lines:
        """
        Break text into lines that take at most `width` cells.

        Text is first split by newlines; then every paragraph is broken
        between words, justified, and truncated.

        :param justify:
            defaults to text's :attr:`~Text.justify`, then to :attr:`JustifyMethod.DEFAULT`.
        :param overflow:
            defaults to text's :attr:`~Text.overflow`, then to :attr:`OverflowMethod.FOLD`.
            With :attr:`~OverflowMethod.FOLD`, long words are broken between lines.
            With :attr:`~OverflowMethod.IGNORE`, text isn't wrapped at all.
        :param tab_size:
            defaults to text's :attr:`~Text.tab_size`, then to ``8``.
        :param no_wrap:
            only split paragraphs, don't break them.
        :param ellipsis:
            string that marks truncated lines.
        :example:
            ::

                >>> [line.plain for line in Text("abcdefghijklmnop").wrap(4)]
                ['abcd', 'efgh', 'ijkl', 'mnop']
                >>> [line.plain for line in Text("foo bar baz").wrap(7)]
                ['foo bar', 'baz']

        """

        wrap_justify = JustifyMethod(justify or self.justify or _DEFAULT_JUSTIFY)
        wrap_overflow = OverflowMethod(overflow or self.overflow or _DEFAULT_OVERFLOW)
        if no_wrap is None:
            no_wrap = bool(self.no_wrap)
        no_wrap = no_wrap or wrap_overflow == OverflowMethod.IGNORE
        if tab_size is None:
            tab_size = self.tab_size if self.tab_size is not None else 8

        lines = Lines()
        for line in self.split(allow_blank=True):
            if "\t" in line._text:
                line.expand_tabs(tab_size)
            if no_wrap:
                new_lines = Lines([line])
            else:
                offsets = divide_line(
                    line._text, width, fold=wrap_overflow == OverflowMethod.FOLD
                )
                new_lines = line.divide(offsets)
            for new_line in new_lines:
                new_line.rstrip_end(width)
            new_lines.justify(
                width, justify=wrap_justify, overflow=wrap_overflow, ellipsis=ellipsis
            )
            for new_line in new_lines:
                new_line.truncate(width, overflow=wrap_overflow, ellipsis=ellipsis)
            lines.extend(new_lines)
        return lines

    def render(self, *, end: str | None = None) -> list[tinct.segment.Segment]:
        """
        Convert text to segments.

        Every segment gets the base style merged with all spans
        that cover it, in order of application.

        :param end:
            string to emit after the text, defaults to :attr:`~Text.end`.
        :example:
            ::

                >>> text = Text("Hello, world!")
                >>> text.stylize("bold", 0, 5)
                >>> for segment in text.render(end=""):
                ...     print(repr(segment.text), segment.style)
                'Hello' bold
                ', world!' None

        """

        Segment = tinct.segment.Segment
        end = self.end if end is None else end
        text = self._text
        segments: list[tinct.segment.Segment] = []

        if not self._spans:
            if text:
                segments.append(Segment(text, self._style or None))
        else:
            length = len(text)
            style_map = {0: self._style}
            events = [(0, False, 0), (length, True, 0)]
            for index, span in enumerate(self._spans, 1):
                start, stop = max(0, span.start), min(length, span.end)
                if start < stop:
                    style_map[index] = span.style
                    events.append((start, False, index))
                    events.append((stop, True, index))
            events.sort(key=itemgetter(0, 1))

            stack: list[int] = []
            style_cache: dict[tuple[int, ...], tinct.style.Style] = {}
            for (offset, leaving, style_id), (next_offset, _, _) in zip(
                events, events[1:]
            ):
                if leaving:
                    stack.remove(style_id)
                else:
                    stack.append(style_id)
                if next_offset > offset:
                    key = tuple(sorted(stack))
                    style = style_cache.get(key)
                    if style is None:
                        style = style_cache[key] = tinct.style.Style.combine(
                            style_map[style_id] for style_id in key
                        )
                    segments.append(Segment(text[offset:next_offset], style or None))

        if end:
            segments.append(Segment(end))
        return segments

    def __tinct_render__(
        self, options: tinct.render.RenderOptions, /
    ) -> list[tinct.segment.Segment]:
        tab_size = self.tab_size if self.tab_size is not None else options.tab_size
        lines = self.wrap(
            options.width,
            justify=options.justify or self.justify,
            overflow=options.overflow or self.overflow,
            tab_size=tab_size,
            no_wrap=options.no_wrap or bool(self.no_wrap),
            ellipsis="..." if options.ascii_only else "…",
        )
        return Text("\n").join(lines).render(end=self.end)


class Lines:
    """
    A list of lines produced by wrapping or splitting a :class:`Text`.

    """

    def __init__(self, lines: _t.Iterable[Text] = (), /):
        self._lines: list[Text] = list(lines)

    def __repr__(self) -> str:
        return f"Lines({self._lines!r})"

    def __iter__(self) -> _t.Iterator[Text]:
        return iter(self._lines)

    @_t.overload
    def __getitem__(self, index: int) -> Text: ...
    @_t.overload
    def __getitem__(self, index: slice) -> list[Text]: ...
    def __getitem__(self, index: int | slice) -> Text | list[Text]:
        return self._lines[index]

    def __setitem__(self, index: int, value: Text) -> None:
        self._lines[index] = value

    def __len__(self) -> int:
        return len(self._lines)

    def append(self, line: Text, /):
        self._lines.append(line)

    def extend(self, lines: _t.Iterable[Text], /):
        self._lines.extend(lines)

    def pop(self, index: int = -1, /) -> Text:
        return self._lines.pop(index)

    def justify(
        self,
        width: int,
        /,
        justify: JustifyMethod | str = JustifyMethod.LEFT,
        overflow: OverflowMethod | str = OverflowMethod.FOLD,
        *,
        ellipsis: str = "…",
    ):
        """
        Justify all lines in place.

        With :attr:`JustifyMethod.FULL`, the last line is justified to the left.

        """

        justify = JustifyMethod(justify)
        overflow = OverflowMethod(overflow)

        if justify == JustifyMethod.LEFT:
            for line in self._lines:
                line.truncate(width, overflow=overflow, pad=True, ellipsis=ellipsis)
        elif justify == JustifyMethod.CENTER:
            for line in self._lines:
                line.rstrip()
                line.truncate(width, overflow=overflow, ellipsis=ellipsis)
                excess = width - line.cell_len
                line.pad_left(excess // 2)
                line.pad_right(width - line.cell_len)
        elif justify == JustifyMethod.RIGHT:
            for line in self._lines:
                line.rstrip()
                line.truncate(width, overflow=overflow, ellipsis=ellipsis)
                line.pad_left(width - line.cell_len)
        elif justify == JustifyMethod.FULL:
            for index, line in enumerate(self._lines):
                if index == len(self._lines) - 1:
                    line.truncate(width, overflow=overflow, pad=True, ellipsis=ellipsis)
                    break
                self._lines[index] = _justify_full(line, width)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lines):
            return NotImplemented
        return self._lines == other._lines

    __hash__ = None  # type: ignore


def _justify_full(line: Text, width: int) -> Text:
    words = line.split(" ")
    words_size = sum(word.cell_len for word in words)
    num_spaces = len(words) - 1
    spaces = [1] * num_spaces

    # Extra spaces go to gaps starting from the right.
    index = 0
    if spaces:
        while words_size + num_spaces < width:
            spaces[len(spaces) - index - 1] += 1
            num_spaces += 1
            index = (index + 1) % len(spaces)

    tokens = []
    for index, word in enumerate(words):
        tokens.append(word)
        if index < len(spaces):
            style = word.get_style_at_offset(-1) if word else line.style
            next_word = words[index + 1]
            next_style = next_word.get_style_at_offset(0) if next_word else line.style
            space_style = style if style == next_style else line.style
            tokens.append(Text(" " * spaces[index], space_style))
    return line.blank_copy().join(tokens)


def divide_line(text: str, width: int, /, *, fold: bool = True) -> list[int]:
    """
    Find offsets where a line should be broken so that
    no part is longer than `width` cells.

    Line is broken between words; trailing whitespace of a part
    is not counted towards its width.

    :param fold:
        if ``True``, words that are longer than `width` are broken
        between several lines. Otherwise, they overflow.
    :example:
        ::

            >>> divide_line("foo bar baz", 7)
            [8]
            >>> divide_line("abcdefghij", 4)
            [4, 8]

    """

    break_positions: list[int] = []
    cell_offset = 0
    for match in _WORDS_RE.finditer(text):
        start = match.start()
        word = match.group(0)
        word_length = tinct.cells.cell_len(word.rstrip())
        remaining_space = width - cell_offset
        if remaining_space >= word_length:
            cell_offset += tinct.cells.cell_len(word)
        elif word_length > width:
            if fold:
                folded_word = tinct.cells.chop_cells(word, width)
                for i, piece in enumerate(folded_word):
                    if start:
                        break_positions.append(start)
                    if i == len(folded_word) - 1:
                        cell_offset = tinct.cells.cell_len(piece)
                    else:
                        start += len(piece)
            else:
                if start:
                    break_positions.append(start)
                cell_offset = tinct.cells.cell_len(word)
        elif cell_offset and start:
            break_positions.append(start)
            cell_offset = tinct.cells.cell_len(word)
    return break_positions
