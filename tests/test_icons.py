import pytest

from barshell.icons import ICON_FONT, Icons, icon


def test_none_has_empty_glyph():
    assert Icons.NONE.glyph() == ""


def test_refresh_and_reboot_share_glyph_but_stay_distinct():
    assert Icons.REFRESH.glyph() == Icons.REBOOT.glyph()
    assert Icons.REFRESH is not Icons.REBOOT
    assert len(set(Icons)) == len(list(Icons))


@pytest.mark.parametrize("kind", list(Icons))
def test_every_icon_has_a_glyph(kind):
    glyph, font = icon(kind)
    assert font == ICON_FONT
    assert glyph == kind.glyph()
    assert isinstance(glyph, str)
    assert len(glyph) <= 1


def test_distinct_glyphs_for_battery_levels():
    levels = [Icons.BATTERY0, Icons.BATTERY1, Icons.BATTERY2, Icons.BATTERY3, Icons.BATTERY4]
    glyphs = {icon(level)[0] for level in levels}
    assert len(glyphs) == len(levels)
    assert "" not in glyphs


def test_icon_uses_symbol_font():
    assert icon(Icons.CPU) == (Icons.CPU.glyph(), "Symbols Nerd Font")
    assert ICON_FONT == "Symbols Nerd Font"


def test_icon_default_is_empty():
    assert icon() == ("", ICON_FONT)