"""Tests for questtab.ui.colors – palette and color markup."""

from __future__ import annotations

from questtab.ui.colors import PanelColors, int_to_hex, markup_to_html


class TestPanelColors:
    def test_bg_is_hex(self):
        assert PanelColors.BG.startswith("#")
        assert len(PanelColors.BG) == 7

    def test_title_is_hex(self):
        assert PanelColors.TITLE.startswith("#")


class TestIntToHex:
    def test_complete_green(self):
        assert int_to_hex(0x0DC10D) == "#0DC10D"

    def test_zero(self):
        assert int_to_hex(0) == "#000000"

    def test_clamped(self):
        assert int_to_hex(-5) == "#000000"
        assert int_to_hex(0x1FFFFFF) == "#FFFFFF"


class TestMarkupToHtml:
    def test_plain_text_escaped(self):
        assert markup_to_html("Romeo & Juliet") == "Romeo &amp; Juliet"

    def test_single_code(self):
        html = markup_to_html("<col=FF0000>V</col> Monkey Madness")
        assert html == '<span style="color:#FF0000">V</span> Monkey Madness'

    def test_short_color_zero_padded(self):
        assert markup_to_html("<col=DC10D>S</col> x").startswith('<span style="color:#0DC10D">S</span>')

    def test_two_codes(self):
        html = markup_to_html("<col=DC10D>N</col> <col=FFFF00>M</col> Demon Slayer")
        assert html.count("<span") == 2
        assert html.endswith(" Demon Slayer")

    def test_apostrophe_escaped(self):
        assert markup_to_html("Cook's Assistant") == "Cook&#x27;s Assistant"
