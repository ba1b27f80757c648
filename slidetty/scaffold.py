"""``slidetty init`` — create a starter deck."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

from .commands import format_commands
from .deck import AUTHOR_FILE, THEME_FILE, TITLE_FILE

logger = logging.getLogger(__name__)

EXAMPLE_SLIDES = {
    "01-welcome.md": textwrap.dedent("""\
        # Welcome to slidetty

        Present markdown straight from your terminal.

        - `j`/`k` or arrows to move through the deck
        - `e` to edit the current slide, `r` to reload it from disk
        - `q` to quit
        """),
    "02-reveal.md": textwrap.dedent("""\
        # Progressive reveal

        Put `:reveal:` on its own line above a list:

        :reveal:
        - The first point shows straight away
        - Press `j` to reveal the next one
        - Each item can carry indented detail
          like this continuation line
        """),
    "03-commands.md": "# Copyable commands\n\n"
        "Press `a`, `s`, `d`... to copy a command to the clipboard.\n\n"
        + format_commands(["echo 'hello from slidetty'", "ls -la"]),
}


def scaffold_deck(directory: Path) -> list[Path]:
    """Create *directory* with metadata files and example slides.

    Raises FileExistsError if *directory* already exists.
    """
    if directory.exists():
        raise FileExistsError(f"{directory} already exists")

    directory.mkdir(parents=True)
    files = {
        TITLE_FILE: "My Presentation\n",
        AUTHOR_FILE: "Your Name\n",
        THEME_FILE: "auto\n",
        **EXAMPLE_SLIDES,
    }
    created = []
    for name, content in files.items():
        path = directory / name
        path.write_text(content, encoding="utf-8")
        created.append(path)

    logger.info("Scaffolded deck at %s (%d files)", directory, len(created))
    return created
