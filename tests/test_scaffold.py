"""Tests for slidetty.scaffold — ``slidetty init`` deck creation."""

from __future__ import annotations

import pytest

from slidetty.deck import load_deck
from slidetty.scaffold import scaffold_deck


class TestScaffoldDeck:
    def test_creates_metadata_and_slides(self, tmp_path):
        target = tmp_path / "talk"
        created = scaffold_deck(target)
        names = sorted(p.name for p in created)
        assert "_title.md" in names
        assert "_author.md" in names
        assert "_theme.md" in names
        assert len([n for n in names if not n.startswith("_")]) == 3

    def test_scaffolded_deck_loads(self, tmp_path):
        target = tmp_path / "talk"
        scaffold_deck(target)
        deck = load_deck(target)
        assert deck.title == "My Presentation"
        assert deck.theme == "auto"
        assert len(deck.slides) == 3
        assert deck.slides[1].reveal.total_items == 3
        assert deck.slides[2].commands == ["echo 'hello from slidetty'", "ls -la"]

    def test_existing_target_rejected(self, tmp_path):
        with pytest.raises(FileExistsError):
            scaffold_deck(tmp_path)

    def test_existing_target_left_untouched(self, tmp_path):
        (tmp_path / "keep.md").write_text("mine")
        with pytest.raises(FileExistsError):
            scaffold_deck(tmp_path)
        assert [p.name for p in tmp_path.iterdir()] == ["keep.md"]
