# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Measuring and cutting strings by terminal cells.

A terminal displays most characters in one cell, East-Asian wide
and fullwidth characters (and most emojis) in two cells, and combining
marks and control characters in zero cells.

On top of per-character widths, a few emoji sequences are recognized:

- a character after ``ZERO WIDTH JOINER`` is a part of the preceding emoji
  and takes no space if it is wide;
- a skin tone modifier after a wide character takes no space;
- two regional indicators form a flag which takes two cells.

This is still not full grapheme cluster segmentation; terminals themselves
rarely implement one, so results will differ for exotic sequences.

.. autofunction:: cell_len

.. autofunction:: char_width

.. autofunction:: cell_widths

.. autofunction:: set_cell_size

.. autofunction:: split_text_cells

.. autofunction:: chop_cells

"""

from __future__ import annotations

import functools
import unicodedata


__all__ = [
    "cell_len",
    "cell_widths",
    "char_width",
    "chop_cells",
    "set_cell_size",
    "split_text_cells",
]

_ZWJ = "\u200d"
_REGIONAL_INDICATORS = range(0x1F1E6, 0x1F200)
_EMOJI_MODIFIERS = range(0x1F3FB, 0x1F400)


@functools.lru_cache(maxsize=4096)
def char_width(char: str, /) -> int:
    """
    Width of a single code point, without regard to its neighbors.

    :example:
        ::

            >>> char_width("a"), char_width("\\u3042"), char_width("\\u0301")
            (1, 2, 0)

    """

    if unicodedata.category(char)[0] in "MC":
        return 0
    return 2 if unicodedata.east_asian_width(char) in "WF" else 1


def _is_single_cell(text: str) -> bool:
    return text.isascii() and text.isprintable()


def cell_widths(text: str, /) -> list[int]:
    """
    Width of every code point in a string, taking emoji sequences into account.

    Sum of the result equals :func:`cell_len`.

    """

    if _is_single_cell(text):
        return [1] * len(text)

    widths = []
    prev = ""
    prev_width = 0
    paired_indicator = False
    for i, char in enumerate(text):
        code = ord(char)
        if code in _REGIONAL_INDICATORS:
            if paired_indicator:
                width = 0
                paired_indicator = False
            elif i + 1 < len(text) and ord(text[i + 1]) in _REGIONAL_INDICATORS:
                width = 2
                paired_indicator = True
            else:
                width = 1
        else:
            paired_indicator = False
            width = char_width(char)
            if prev == _ZWJ and width == 2:
                width = 0
            elif code in _EMOJI_MODIFIERS and prev_width == 2:
                width = 0
        widths.append(width)
        prev_width = width
        prev = char
    return widths


@functools.lru_cache(maxsize=4096)
def _cached_cell_len(text: str, /) -> int:
    return sum(cell_widths(text))


def cell_len(text: str, /) -> int:
    """
    Calculates string width when the string is displayed in a terminal.

    :example:
        ::

            >>> cell_len("hello")
            5
            >>> cell_len("\\u3053\\u3093\\u306b\\u3061\\u306f")
            10
            >>> cell_len("\\U0001f469\\u200d\\U0001f4bb")
            2

    """

    if _is_single_cell(text):
        return len(text)
    if len(text) < 512:
        return _cached_cell_len(text)
    return sum(cell_widths(text))


def _find_cut(text: str, widths: list[int], cut: int) -> tuple[int, int]:
    # Returns index of the first code point that doesn't fit into `cut` cells,
    # and width of everything before it. Zero-width code points stick
    # to the left part.
    pos = 0
    for i, width in enumerate(widths):
        if pos + width > cut:
            return i, pos
        pos += width
    return len(text), pos


def set_cell_size(text: str, total: int, /) -> str:
    """
    Crop or pad a string with spaces so that it takes exactly `total` cells.

    A wide character that doesn't fit into the remaining space
    is replaced with a space.

    :example:
        ::

            >>> set_cell_size("hello", 3)
            'hel'
            >>> set_cell_size("hi", 4)
            'hi  '
            >>> set_cell_size("\\u3042\\u3044", 3) == "\\u3042 "
            True

    """

    if total <= 0:
        return ""
    if _is_single_cell(text):
        size = len(text)
        if size < total:
            return text + " " * (total - size)
        return text[:total]

    widths = cell_widths(text)
    size = sum(widths)
    if size == total:
        return text
    if size < total:
        return text + " " * (total - size)
    index, pos = _find_cut(text, widths, total)
    return text[:index] + " " * (total - pos)


def split_text_cells(text: str, cut: int, /) -> tuple[str, str]:
    """
    Split a string at the given cell offset.

    A wide character that crosses the cut goes entirely to the right part,
    so the left part may be one cell shorter than `cut`.

    :example:
        ::

            >>> split_text_cells("hello", 2)
            ('he', 'llo')
            >>> split_text_cells("\\u3042\\u3044", 1) == ("", "\\u3042\\u3044")
            True

    """

    if cut <= 0:
        return "", text
    if _is_single_cell(text):
        return text[:cut], text[cut:]
    index, _ = _find_cut(text, cell_widths(text), cut)
    return text[:index], text[index:]


def chop_cells(text: str, width: int, /) -> list[str]:
    """
    Break a string into pieces that take at most `width` cells each.

    A wide character is never split; if `width` is less than two,
    such character takes a piece of its own.

    :example:
        ::

            >>> chop_cells("abcdefgh", 3)
            ['abc', 'def', 'gh']

    """

    if _is_single_cell(text):
        width = max(width, 1)
        return [text[i : i + width] for i in range(0, len(text), width)]

    lines: list[str] = []
    current: list[str] = []
    current_width = 0
    for char, char_w in zip(text, cell_widths(text)):
        if current and char_w and current_width + char_w > width:
            lines.append("".join(current))
            current = []
            current_width = 0
        current.append(char)
        current_width += char_w
    if current:
        lines.append("".join(current))
    return lines

