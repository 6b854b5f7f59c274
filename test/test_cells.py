import pytest

import tinct.cells


@pytest.mark.parametrize(
    ("text", "expect"),
    [
        ("", 0),
        ("hello", 5),
        ("こんにちは", 10),
        ("aあb", 4),
        ("e\u0301", 1),
        ("\x1b", 0),
        ("\U0001f600", 2),
        ("\U0001f469\u200d\U0001f4bb", 2),
        ("\U0001f44d\U0001f3fd", 2),
        ("\U0001f1fa\U0001f1e6", 2),
        ("\U0001f1fa", 1),
    ],
)
def test_cell_len(text, expect):
    assert tinct.cells.cell_len(text) == expect


def test_cell_len_long_string():
    text = "あ" * 1000
    assert tinct.cells.cell_len(text) == 2000


@pytest.mark.parametrize(
    ("text", "expect"),
    [
        ("abc", [1, 1, 1]),
        ("aあ", [1, 2]),
        ("e\u0301", [1, 0]),
        ("\U0001f1fa\U0001f1e6", [2, 0]),
    ],
)
def test_cell_widths(text, expect):
    widths = tinct.cells.cell_widths(text)
    assert widths == expect
    assert sum(widths) == tinct.cells.cell_len(text)


@pytest.mark.parametrize(
    ("text", "total", "expect"),
    [
        ("hello", 3, "hel"),
        ("hello", 5, "hello"),
        ("hi", 4, "hi  "),
        ("hi", 0, ""),
        ("hi", -1, ""),
        ("あい", 3, "あ "),
        ("あい", 4, "あい"),
        ("あい", 5, "あい "),
        ("あい", 1, " "),
    ],
)
def test_set_cell_size(text, total, expect):
    result = tinct.cells.set_cell_size(text, total)
    assert result == expect
    assert tinct.cells.cell_len(result) == max(total, 0)


@pytest.mark.parametrize(
    ("text", "cut", "expect"),
    [
        ("hello", 0, ("", "hello")),
        ("hello", 2, ("he", "llo")),
        ("hello", 10, ("hello", "")),
        ("あい", 1, ("", "あい")),
        ("あい", 2, ("あ", "い")),
        ("あい", 3, ("あ", "い")),
        ("e\u0301x", 1, ("e\u0301", "x")),
    ],
)
def test_split_text_cells(text, cut, expect):
    assert tinct.cells.split_text_cells(text, cut) == expect


@pytest.mark.parametrize(
    ("text", "width", "expect"),
    [
        ("abcdefgh", 3, ["abc", "def", "gh"]),
        ("abc", 5, ["abc"]),
        ("", 3, []),
        ("あいう", 4, ["あい", "う"]),
        ("あいう", 3, ["あ", "い", "う"]),
        ("aあb", 2, ["a", "あ", "b"]),
    ],
)
def test_chop_cells(text, width, expect):
    assert tinct.cells.chop_cells(text, width) == expect


@pytest.mark.parametrize(
    ("char", "expect"),
    [("a", 1), ("あ", 2), ("\uff21", 2), ("\u0301", 0), ("\x07", 0)],
)
def test_char_width(char, expect):
    assert tinct.cells.char_width(char) == expect
