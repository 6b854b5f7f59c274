import subprocess
import sys

import tinct.render
import tinct.text
from tinct.render import RenderOptions

if __name__ == "__main__":
    # Re-wrap colored output of a command to 30 columns.
    cmd = sys.argv[1:] or ["git", "-c", "color.ui=always", "log", "-n", "3"]
    output = subprocess.run(cmd, capture_output=True, text=True).stdout

    text = tinct.text.Text.from_ansi(output)
    print(repr(text.markup[:200]))

    options = RenderOptions(width=30, overflow=tinct.text.OverflowMethod.ELLIPSIS)
    sys.stdout.write(tinct.render.render_ansi(tinct.render.render(text, options)))
