"""Tests for the highlight palette and color picker."""

from __future__ import annotations

import random
import re

from wiki_highlighter.core.palette import PALETTE, pick_color

HEX_COLOR = re.compile(r"^#[0-9a-f]{6}$")


class TestPalette:

    def test_has_at_least_sixteen_entries(self):
        assert len(PALETTE) >= 16

    def test_entries_are_distinct(self):
        assert len(set(PALETTE)) == len(PALETTE)

    def test_entries_are_hex_colors(self):
        for color in PALETTE:
            assert len(color) == 7
            assert HEX_COLOR.match(color), color


class TestPickColor:

    def test_always_returns_palette_entry(self):
        for _ in range(200):
            color = pick_color()
            assert color in PALETTE
            assert len(color) == 7
            assert color.startswith("#")

    def test_seeded_rng_is_reproducible(self):
        first = [pick_color(random.Random(42)) for _ in range(5)]
        second = [pick_color(random.Random(42)) for _ in range(5)]
        assert first == second

    def test_picks_vary(self):
        rng = random.Random(7)
        picks = {pick_color(rng) for _ in range(200)}
        assert len(picks) > 1
