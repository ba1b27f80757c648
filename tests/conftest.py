"""Shared fixtures for slidetty tests."""

from __future__ import annotations

import textwrap

import pytest


# ---------------------------------------------------------------------------
# Slide texts used across multiple test modules
# ---------------------------------------------------------------------------

PLAIN_SLIDE = textwrap.dedent("""\
    # Plain

    Just some text.
    """)

REVEAL_SLIDE = textwrap.dedent("""\
    # Agenda

    :reveal:
    - First
    - Second
    - Third
    """)

COMMANDS_SLIDE = textwrap.dedent("""\
    # Demo

    ```commands
    echo one

      ls -la
    ```
    """)


@pytest.fixture
def slides_dir(tmp_path):
    """A deck directory with metadata and three slides."""
    d = tmp_path / "slides"
    d.mkdir()
    (d / "_title.md").write_text("  Test Deck\n")
    (d / "_author.md").write_text("Ada\n")
    (d / "01-plain.md").write_text(PLAIN_SLIDE)
    (d / "02-reveal.md").write_text(REVEAL_SLIDE)
    (d / "03-commands.md").write_text(COMMANDS_SLIDE)
    return d
