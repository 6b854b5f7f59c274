import sys

import tinct.color
import tinct.render
import tinct.text
from tinct.render import RenderOptions

if __name__ == "__main__":
    system = tinct.color.ColorSystem.TRUECOLOR
    if "--256" in sys.argv:
        system = tinct.color.ColorSystem.EIGHT_BIT
    elif "--16" in sys.argv:
        system = tinct.color.ColorSystem.STANDARD

    text = tinct.text.Text()
    for step in range(0, 256, 8):
        color = tinct.color.Color.from_rgb(step, 255 - step, 128)
        text.append(" ", f"on {color.name}")
    text.append("\n")

    text.append_text(tinct.text.Text.from_markup("Message colors:\n", "bold"))
    text.append_text(tinct.text.Text.from_markup("  [green]success[/] is green\n"))
    text.append_text(tinct.text.Text.from_markup("  [yellow]warning[/] is yellow\n"))
    text.append_text(tinct.text.Text.from_markup("  [bold red]error[/] is bold red\n"))

    segments = tinct.render.render(text, RenderOptions(color_system=system))
    sys.stdout.write(tinct.render.render_ansi(segments, system))
