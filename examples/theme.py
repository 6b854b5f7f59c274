import sys

import tinct.render
import tinct.theme
from tinct.render import RenderOptions

THEME = tinct.theme.Theme(
    {
        # Accent colors.
        "accent": "bold magenta",
        "heading": "bold magenta underline",
        # Override a default style.
        "code": "italic cyan",
    }
)

if __name__ == "__main__":
    options = RenderOptions(width=40, theme=THEME)

    for line in [
        "[heading]Theme with custom styles[/heading]",
        "",
        "File [code]example.txt[/code] does not exist.",
        "[accent]Accents[/accent] can be used in long paragraphs, "
        "and they are wrapped to fit the terminal width.",
    ]:
        segments = tinct.render.render(line, options)
        sys.stdout.write(tinct.render.render_ansi(segments))
