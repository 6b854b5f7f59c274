# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Segments are the output of rendering: pieces of text with a fully resolved style.

A :class:`Segment` is either a run of text, or a control segment that carries
terminal commands (cursor movement, screen clearing, etc). Control segments
take no space on screen, so layout functions never measure, crop or pad them.

Functions in this module work on lists of segments, i.e. on lines
and on lists of lines::

    >>> from tinct.style import Style
    >>> segments = [Segment("Hello", Style.parse("bold")), Segment(", world!\\nBye")]
    >>> for line in Segment.split_lines(segments):
    ...     print([segment.text for segment in line])
    ['Hello', ', world!']
    ['Bye']

.. autoclass:: Segment
   :members:


Control codes
-------------

.. autoclass:: ControlType
   :members:

.. autoclass:: ControlCode
   :members:

"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import tinct.cells
import tinct.style
from tinct import _typing as _t

__all__ = [
    "ControlCode",
    "ControlType",
    "Segment",
]


class ControlType(enum.IntEnum):
    """
    Kinds of terminal commands.

    """

    BELL = 1
    CARRIAGE_RETURN = 2
    HOME = 3
    CLEAR = 4
    SHOW_CURSOR = 5
    HIDE_CURSOR = 6
    ENABLE_ALT_SCREEN = 7
    DISABLE_ALT_SCREEN = 8
    CURSOR_UP = 9
    CURSOR_DOWN = 10
    CURSOR_FORWARD = 11
    CURSOR_BACKWARD = 12
    CURSOR_MOVE_TO_COLUMN = 13
    CURSOR_MOVE_TO = 14
    ERASE_IN_LINE = 15
    SET_WINDOW_TITLE = 16
    BEGIN_SYNC = 17
    END_SYNC = 18
    SET_CLIPBOARD = 19
    REQUEST_CLIPBOARD = 20


_SIMPLE_CODES: dict[ControlType, str] = {
    ControlType.BELL: "\x07",
    ControlType.CARRIAGE_RETURN: "\r",
    ControlType.HOME: "\x1b[H",
    ControlType.CLEAR: "\x1b[2J",
    ControlType.SHOW_CURSOR: "\x1b[?25h",
    ControlType.HIDE_CURSOR: "\x1b[?25l",
    ControlType.ENABLE_ALT_SCREEN: "\x1b[?1049h",
    ControlType.DISABLE_ALT_SCREEN: "\x1b[?1049l",
    ControlType.BEGIN_SYNC: "\x1b[?2026h",
    ControlType.END_SYNC: "\x1b[?2026l",
    ControlType.REQUEST_CLIPBOARD: "\x1b]52;c;?\x07",
}

_CURSOR_CODES: dict[ControlType, str] = {
    ControlType.CURSOR_UP: "A",
    ControlType.CURSOR_DOWN: "B",
    ControlType.CURSOR_FORWARD: "C",
    ControlType.CURSOR_BACKWARD: "D",
    ControlType.ERASE_IN_LINE: "K",
}


@dataclass(frozen=True, slots=True)
class ControlCode:
    """
    A terminal command with its parameters.

    Cursor positions are zero-based.

    :example:
        ::

            >>> ControlCode(ControlType.CURSOR_MOVE_TO, (4, 2)).escape()
            '\\x1b[3;5H'

    """

    type: ControlType
    """
    Kind of the command.

    """

    params: tuple[int | str, ...] = ()
    """
    Command parameters: a count for cursor movement and line erasing,
    ``(x, y)`` for :attr:`~ControlType.CURSOR_MOVE_TO`, a column for
    :attr:`~ControlType.CURSOR_MOVE_TO_COLUMN`, a string for window title
    and clipboard.

    """

    def escape(self) -> str:
        """
        Get escape sequence that executes this command.

        """

        if self.type in _SIMPLE_CODES:
            return _SIMPLE_CODES[self.type]
        elif self.type in _CURSOR_CODES:
            n = self.params[0] if self.params else 0
            return f"\x1b[{n}{_CURSOR_CODES[self.type]}"
        elif self.type == ControlType.CURSOR_MOVE_TO_COLUMN:
            x = int(self.params[0]) if self.params else 0
            return f"\x1b[{x + 1}G"
        elif self.type == ControlType.CURSOR_MOVE_TO:
            x, y = (int(p) for p in self.params) if self.params else (0, 0)
            return f"\x1b[{y + 1};{x + 1}H"
        elif self.type == ControlType.SET_WINDOW_TITLE:
            return f"\x1b]0;{self.params[0]}\x07" if self.params else ""
        elif self.type == ControlType.SET_CLIPBOARD:
            return f"\x1b]52;c;{self.params[0]}\x07" if self.params else ""
        else:
            raise ValueError(f"unknown control type {self.type!r}")


@dataclass(frozen=True, slots=True)
class Segment:
    """
    A piece of rendered text with a resolved style.

    """

    text: str = ""
    """
    Text of the segment. For control segments, this is the escape sequence
    that executes :attr:`~Segment.control`.

    """

    style: tinct.style.Style | None = None
    """
    Style of the segment, ``None`` means no style.

    """

    control: tuple[ControlCode, ...] | None = None
    """
    Terminal commands, if this is a control segment.

    """

    @property
    def cell_length(self) -> int:
        """
        Width of the segment in terminal cells, always ``0`` for control segments.

        """

        if self.control is not None:
            return 0
        return tinct.cells.cell_len(self.text)

    @property
    def is_control(self) -> bool:
        """
        Check if this is a control segment.

        """

        return self.control is not None

    def __bool__(self) -> bool:
        return bool(self.text)

    @classmethod
    def line(cls) -> Segment:
        """
        Segment with a single newline.

        """

        return cls("\n")

    @classmethod
    def control_segment(cls, *codes: ControlCode) -> Segment:
        """
        Make a control segment with the given commands.

        :example:
            ::

                >>> Segment.control_segment(ControlCode(ControlType.HOME)).text
                '\\x1b[H'

        """

        return cls("".join(code.escape() for code in codes), None, codes)

    def split_cells(self, cut: int, /) -> tuple[Segment, Segment]:
        """
        Split segment at the given cell offset.

        A wide character that crosses the cut goes to the right part,
        so the left part may be one cell shorter than `cut`.

        """

        if self.control is not None:
            return self, Segment("", self.style, self.control)
        left, right = tinct.cells.split_text_cells(self.text, cut)
        return Segment(left, self.style), Segment(right, self.style)

    @classmethod
    def apply_style(
        cls,
        segments: _t.Iterable[Segment],
        style: tinct.style.Style | None = None,
        post_style: tinct.style.Style | None = None,
    ) -> list[Segment]:
        """
        Apply styles to non-control segments.

        :param style:
            style applied below segment's own style.
        :param post_style:
            style applied on top of segment's own style.

        """

        if not style and not post_style:
            return list(segments)
        result = []
        for segment in segments:
            if segment.control is not None:
                result.append(segment)
                continue
            new_style = segment.style
            if style:
                new_style = style + new_style
            if post_style:
                new_style = (new_style or tinct.style.Style.null()) + post_style
            result.append(cls(segment.text, new_style or None))
        return result

    @classmethod
    def filter_control(
        cls, segments: _t.Iterable[Segment], is_control: bool = False
    ) -> list[Segment]:
        """
        Keep only control or only non-control segments.

        """

        return [segment for segment in segments if segment.is_control == is_control]

    @classmethod
    def split_lines(cls, segments: _t.Iterable[Segment]) -> list[list[Segment]]:
        """
        Split segments into lines by newlines. Newlines themselves are dropped.

        A trailing newline doesn't produce an empty line after it.

        """

        lines = []
        line: list[Segment] = []
        for segment in segments:
            if "\n" in segment.text and segment.control is None:
                text, style = segment.text, segment.style
                while text:
                    part, newline, text = text.partition("\n")
                    if part:
                        line.append(cls(part, style))
                    if newline:
                        lines.append(line)
                        line = []
            else:
                line.append(segment)
        if line:
            lines.append(line)
        return lines

    @classmethod
    def split_and_crop_lines(
        cls,
        segments: _t.Iterable[Segment],
        length: int,
        style: tinct.style.Style | None = None,
        pad: bool = True,
        include_new_lines: bool = True,
    ) -> list[list[Segment]]:
        """
        Split segments into lines, and crop or pad every line to `length` cells.

        :param style:
            style for padding.
        :param pad:
            pad short lines.
        :param include_new_lines:
            add a newline segment at the end of every line that had one.

        """

        lines = []
        line: list[Segment] = []
        for segment in segments:
            if "\n" in segment.text and segment.control is None:
                text, segment_style = segment.text, segment.style
                while text:
                    part, newline, text = text.partition("\n")
                    if part:
                        line.append(cls(part, segment_style))
                    if newline:
                        cropped = cls.adjust_line_length(line, length, style, pad)
                        if include_new_lines:
                            cropped.append(cls.line())
                        lines.append(cropped)
                        line = []
            else:
                line.append(segment)
        if line:
            lines.append(cls.adjust_line_length(line, length, style, pad))
        return lines

    @classmethod
    def adjust_line_length(
        cls,
        line: list[Segment],
        length: int,
        style: tinct.style.Style | None = None,
        pad: bool = True,
    ) -> list[Segment]:
        """
        Crop or pad a line so that it takes exactly `length` cells.

        When a wide character is cut, its remaining cell is filled with a space.

        :param style:
            style for padding.
        :param pad:
            pad short lines. If ``False``, short lines are returned as is.

        """

        line_length = cls.get_line_length(line)
        if line_length < length:
            if pad:
                return line + [cls(" " * (length - line_length), style)]
            return line[:]
        elif line_length == length:
            return line[:]

        new_line = []
        line_length = 0
        for segment in line:
            segment_length = segment.cell_length
            if segment.control is not None or line_length + segment_length <= length:
                new_line.append(segment)
                line_length += segment_length
                continue
            remaining = length - line_length
            left, _ = segment.split_cells(remaining)
            if left:
                new_line.append(left)
            gap = remaining - left.cell_length
            if gap:
                new_line.append(cls(" " * gap, segment.style))
            break
        return new_line

    @classmethod
    def get_line_length(cls, line: _t.Iterable[Segment]) -> int:
        """
        Width of a line in terminal cells.

        """

        return sum(segment.cell_length for segment in line)

    @classmethod
    def get_shape(cls, lines: list[list[Segment]]) -> tuple[int, int]:
        """
        Get maximum width and the number of lines.

        """

        return max((cls.get_line_length(line) for line in lines), default=0), len(
            lines
        )

    @classmethod
    def set_shape(
        cls,
        lines: list[list[Segment]],
        width: int,
        height: int | None = None,
        style: tinct.style.Style | None = None,
        new_lines: bool = False,
    ) -> list[list[Segment]]:
        """
        Make every line exactly `width` cells, and crop or pad lines to `height`.

        :param new_lines:
            padding lines end with a newline.

        """

        if height is None:
            height = len(lines)
        shaped = [
            cls.adjust_line_length(line, width, style) for line in lines[:height]
        ]
        blank = cls._blank_line(width, style, new_lines)
        shaped.extend(blank[:] for _ in range(height - len(shaped)))
        return shaped

    @classmethod
    def _blank_line(
        cls, width: int, style: tinct.style.Style | None, new_lines: bool
    ) -> list[Segment]:
        return [cls(" " * width + ("\n" if new_lines else ""), style)]

    @classmethod
    def align_top(
        cls,
        lines: list[list[Segment]],
        width: int,
        height: int,
        style: tinct.style.Style | None = None,
        new_lines: bool = False,
    ) -> list[list[Segment]]:
        """
        Shape lines to `width` and `height`, adding blank lines at the bottom.

        """

        return cls.set_shape(lines, width, height, style, new_lines)

    @classmethod
    def align_bottom(
        cls,
        lines: list[list[Segment]],
        width: int,
        height: int,
        style: tinct.style.Style | None = None,
        new_lines: bool = False,
    ) -> list[list[Segment]]:
        """
        Shape lines to `width` and `height`, adding blank lines at the top.

        """

        extra = height - len(lines)
        if extra <= 0:
            return cls.set_shape(lines, width, height, style, new_lines)
        blank = cls._blank_line(width, style, new_lines)
        return [blank[:] for _ in range(extra)] + cls.set_shape(
            lines, width, None, style, new_lines
        )

    @classmethod
    def align_middle(
        cls,
        lines: list[list[Segment]],
        width: int,
        height: int,
        style: tinct.style.Style | None = None,
        new_lines: bool = False,
    ) -> list[list[Segment]]:
        """
        Shape lines to `width` and `height`, adding blank lines on both sides.
        An odd blank line goes to the bottom.

        """

        extra = height - len(lines)
        if extra <= 0:
            return cls.set_shape(lines, width, height, style, new_lines)
        top = extra // 2
        blank = cls._blank_line(width, style, new_lines)
        return (
            [blank[:] for _ in range(top)]
            + cls.set_shape(lines, width, None, style, new_lines)
            + [blank[:] for _ in range(extra - top)]
        )

    @classmethod
    def simplify(cls, segments: _t.Iterable[Segment]) -> list[Segment]:
        """
        Merge adjacent non-control segments that have the same style.

        :example:
            ::

                >>> Segment.simplify([Segment("a"), Segment("b"), Segment("c")])
                [Segment(text='abc', style=None, control=None)]

        """

        result: list[Segment] = []
        for segment in segments:
            if (
                result
                and segment.control is None
                and result[-1].control is None
                and result[-1].style == segment.style
            ):
                last = result[-1]
                result[-1] = cls(last.text + segment.text, last.style)
            else:
                result.append(segment)
        return result

    @classmethod
    def divide(
        cls, segments: _t.Iterable[Segment], cuts: _t.Iterable[int]
    ) -> list[list[Segment]]:
        """
        Divide segments into portions that end at the given cell offsets.

        Returns one portion per cut; text after the last cut is dropped.

        :example:
            ::

                >>> portions = Segment.divide([Segment("Hello"), Segment("World")], [3, 7, 10])
                >>> [[segment.text for segment in portion] for portion in portions]
                [['Hel'], ['lo', 'Wo'], ['rld']]

        """

        cut_iter = iter(cuts)
        cut = next(cut_iter, None)
        result: list[list[Segment]] = []
        portion: list[Segment] = []
        pos = 0

        for segment in segments:
            if cut is None:
                break
            if segment.control is not None:
                portion.append(segment)
                continue
            while segment.text and cut is not None:
                end = pos + segment.cell_length
                if end < cut:
                    portion.append(segment)
                    pos = end
                    break
                elif end == cut:
                    portion.append(segment)
                    pos = end
                    result.append(portion)
                    portion = []
                    cut = next(cut_iter, None)
                    break
                before, segment = segment.split_cells(cut - pos)
                if before:
                    portion.append(before)
                    pos += before.cell_length
                result.append(portion)
                portion = []
                cut = next(cut_iter, None)

        while cut is not None:
            result.append(portion)
            portion = []
            cut = next(cut_iter, None)
        return result

    @classmethod
    def strip_links(cls, segments: _t.Iterable[Segment]) -> list[Segment]:
        """
        Remove hyperlinks from segment styles.

        """

        return [
            (
                cls(segment.text, segment.style.update_link(None), segment.control)
                if segment.style is not None and segment.style.link
                else segment
            )
            for segment in segments
        ]

    @classmethod
    def strip_styles(cls, segments: _t.Iterable[Segment]) -> list[Segment]:
        """
        Remove all styles.

        """

        return [cls(segment.text, None, segment.control) for segment in segments]

    @classmethod
    def remove_color(cls, segments: _t.Iterable[Segment]) -> list[Segment]:
        """
        Remove colors, keep other attributes.

        """

        return [
            (
                cls(segment.text, segment.style.without_color(), segment.control)
                if segment.style is not None
                else segment
            )
            for segment in segments
        ]

    @classmethod
    def join_lines(cls, lines: _t.Iterable[list[Segment]]) -> list[Segment]:
        """
        Concatenate lines, putting a newline segment between them.

        """

        result: list[Segment] = []
        for i, line in enumerate(lines):
            if i:
                result.append(cls.line())
            result.extend(line)
        return result
