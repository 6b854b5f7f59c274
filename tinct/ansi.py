# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Decoding text with ANSI escape sequences.

:class:`AnsiDecoder` turns terminal output back into styled text. It understands
SGR sequences (colors and attributes) and OSC 8 hyperlinks; other escape
sequences are dropped::

    >>> decoder = AnsiDecoder()
    >>> [line] = decoder.decode("\\x1b[1;31mError:\\x1b[0m file not found")
    >>> line.plain
    'Error: file not found'
    >>> line.spans
    [Span(start=0, end=6, style=<Style 'bold color(1)'>)]

Decoder keeps its style between calls, so a long output can be decoded
line by line.

.. autoclass:: AnsiDecoder
   :members:

"""

from __future__ import annotations

import re

import tinct
import tinct.color
import tinct.style
import tinct.text
from tinct import _typing as _t

__all__ = [
    "AnsiDecoder",
]

_ANSI_RE = re.compile(
    r"""
    (?:\x1b[0-?])|
    (?:\x1b\](.*?)(?:\x1b\\|\x07))|
    (?:\x1b([(@-Z\\-_]|\[[0-?]*[ -/]*[@-~]))
    """,
    re.VERBOSE,
)

_SGR_STYLES: dict[int, str] = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    6: "blink2",
    7: "reverse",
    8: "conceal",
    9: "strike",
    21: "underline2",
    22: "not dim not bold",
    23: "not italic",
    24: "not underline",
    25: "not blink",
    26: "not blink2",
    27: "not reverse",
    28: "not conceal",
    29: "not strike",
    39: "default",
    49: "on default",
    51: "frame",
    52: "encircle",
    53: "overline",
    54: "not frame not encircle",
    55: "not overline",
    59: "underline_color(default)",
}
_SGR_STYLES.update({30 + i: f"color({i})" for i in range(8)})
_SGR_STYLES.update({40 + i: f"on color({i})" for i in range(8)})
_SGR_STYLES.update({90 + i: f"color({i + 8})" for i in range(8)})
_SGR_STYLES.update({100 + i: f"on color({i + 8})" for i in range(8)})

_UNDERLINE_STYLES = {
    "4:0": "not underline",
    "4:1": "single",
    "4:2": "double",
    "4:3": "curly",
    "4:4": "dotted",
    "4:5": "dashed",
}

_COLOR_TARGETS = {38: "color", 48: "bgcolor", 58: "underline_color"}


def _tokenize(
    ansi_text: str,
) -> _t.Iterator[tuple[str | None, str | None, str | None]]:
    # Yields (plain, sgr, osc); exactly one of them is not None.
    position = 0
    for match in _ANSI_RE.finditer(ansi_text):
        start, end = match.span()
        osc, sequence = match.groups()
        if start > position:
            yield ansi_text[position:start], None, None
        position = end
        if sequence == "(":
            # Character set designation takes one more character.
            position += 1
        elif sequence is not None and sequence.startswith("[") and sequence.endswith("m"):
            yield None, sequence[1:-1], None
        elif osc is not None:
            yield None, None, osc
        else:
            tinct._logger.debug("skipped escape sequence %r", match.group(0))
    if position < len(ansi_text):
        yield ansi_text[position:], None, None


class AnsiDecoder:
    """
    Converts text with ANSI escape sequences to :class:`~tinct.text.Text`.

    """

    def __init__(self):
        self.style: tinct.style.Style = tinct.style.Style.null()
        """
        Current style, it carries over to the next decoded line.

        """

    def decode(self, terminal_text: str, /) -> _t.Iterator[tinct.text.Text]:
        """
        Decode a multiline string, yield a text for every line.

        """

        for line in terminal_text.splitlines():
            yield self.decode_line(line)

    def decode_line(self, line: str, /) -> tinct.text.Text:
        """
        Decode a single line.

        Only text after the last carriage return is kept, as it would
        overwrite everything before it in a terminal.

        """

        text = tinct.text.Text()
        line = line.rsplit("\r", 1)[-1]
        for plain, sgr, osc in _tokenize(line):
            if plain is not None:
                text.append(plain, self.style or None)
            elif osc is not None:
                self._handle_osc(osc)
            elif sgr is not None:
                self._handle_sgr(sgr)
        return text

    def _handle_osc(self, osc: str):
        if not osc.startswith("8;"):
            tinct._logger.debug("skipped OSC sequence %r", osc)
            return
        _, _, link = osc[2:].partition(";")
        self.style = self.style.update_link(link or None)

    def _handle_sgr(self, sgr: str):
        codes: list[int] = []
        for part in sgr.split(";"):
            if part in _UNDERLINE_STYLES:
                self._apply_codes(codes)
                codes = []
                self.style += tinct.style.Style.parse(_UNDERLINE_STYLES[part])
            elif not part:
                codes.append(0)
            elif part.isdigit():
                codes.append(min(int(part), 255))
            else:
                tinct._logger.debug("skipped SGR parameter %r", part)
        self._apply_codes(codes)

    def _apply_codes(self, codes: list[int]):
        Style = tinct.style.Style
        iter_codes = iter(codes)
        for code in iter_codes:
            if code == 0:
                self.style = Style.null()
            elif code in _SGR_STYLES:
                self.style += Style.parse(_SGR_STYLES[code])
            elif code in _COLOR_TARGETS:
                color_type = next(iter_codes, None)
                color = None
                if color_type == 5:
                    number = next(iter_codes, None)
                    if number is not None:
                        color = tinct.color.Color.from_ansi(number)
                elif color_type == 2:
                    r, g, b = (next(iter_codes, None) for _ in range(3))
                    if r is not None and g is not None and b is not None:
                        color = tinct.color.Color.from_rgb(r, g, b)
                if color is not None:
                    self.style += Style(**{_COLOR_TARGETS[code]: color})
