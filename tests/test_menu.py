import pytest

from barshell.centerbox import Alignment, Point
from barshell.config import Position
from barshell.menu import (
    ButtonRef,
    KeyboardInteractivity,
    Layer,
    Menu,
    MenuKind,
    MenuSize,
    MenuType,
    SetKeyboardInteractivity,
    SetLayer,
    menu_left_offset,
    menu_vertical_anchor,
)

SETTINGS = MenuType(MenuKind.SETTINGS)
UPDATES = MenuType(MenuKind.UPDATES)
BUTTON = ButtonRef(Point(500.0, 10.0), (1000.0, 800.0))
OTHER_BUTTON = ButtonRef(Point(100.0, 10.0), (1000.0, 800.0))


def test_open_raises_layer_and_records_menu():
    menu = Menu("main")
    commands = menu.open(SETTINGS, BUTTON)
    assert commands == [
        SetLayer("main", Layer.OVERLAY),
        SetKeyboardInteractivity("main", KeyboardInteractivity.NONE),
    ]
    assert menu.menu_info == (SETTINGS, BUTTON)


def test_close_lowers_layer_and_clears():
    menu = Menu("main")
    menu.open(SETTINGS, BUTTON)
    commands = menu.close()
    assert commands == [
        SetLayer("main", Layer.BACKGROUND),
        SetKeyboardInteractivity("main", KeyboardInteractivity.NONE),
    ]
    assert menu.menu_info is None


def test_close_when_closed_does_nothing():
    assert Menu("main").close() == []


def test_toggle_same_menu_closes():
    menu = Menu("main")
    assert menu.toggle(SETTINGS, BUTTON)[0] == SetLayer("main", Layer.OVERLAY)
    assert menu.toggle(SETTINGS, OTHER_BUTTON)[0] == SetLayer("main", Layer.BACKGROUND)
    assert menu.menu_info is None


def test_toggle_other_menu_switches_without_commands():
    menu = Menu("main")
    menu.open(SETTINGS, BUTTON)
    assert menu.toggle(UPDATES, OTHER_BUTTON) == []
    assert menu.menu_info == (UPDATES, OTHER_BUTTON)


def test_tray_menus_differ_by_name():
    menu = Menu("main")
    menu.open(MenuType(MenuKind.TRAY, "net"), BUTTON)
    assert menu.toggle(MenuType(MenuKind.TRAY, "audio"), BUTTON) == []
    assert menu.menu_info[0].tray_name == "audio"


def test_close_if_only_matches_current_type():
    menu = Menu("main")
    menu.open(SETTINGS, BUTTON)
    assert menu.close_if(UPDATES) == []
    assert menu.menu_info == (SETTINGS, BUTTON)
    assert menu.close_if(SETTINGS)[0] == SetLayer("main", Layer.BACKGROUND)
    assert menu.menu_info is None


def test_keyboard_requests():
    menu = Menu(7)
    assert menu.request_keyboard() == [SetKeyboardInteractivity(7, KeyboardInteractivity.ON_DEMAND)]
    assert menu.release_keyboard() == [SetKeyboardInteractivity(7, KeyboardInteractivity.NONE)]


def test_tray_type_requires_name():
    with pytest.raises(ValueError):
        MenuType(MenuKind.TRAY)
    with pytest.raises(ValueError):
        MenuType(MenuKind.SETTINGS, "net")


def test_menu_sizes():
    assert MenuSize.NORMAL.width() == 250.0
    assert MenuSize.LARGE.width() == 350.0


def test_left_offset_centres_under_button():
    size = MenuSize.NORMAL.width()
    assert menu_left_offset(MenuSize.NORMAL, BUTTON) == BUTTON.position.x - size / 2


def test_left_offset_clamps_to_left_margin():
    button = ButtonRef(Point(10.0, 0.0), (1000.0, 800.0))
    assert menu_left_offset(MenuSize.LARGE, button) == 8.0


def test_left_offset_clamps_to_right_edge():
    button = ButtonRef(Point(990.0, 0.0), (1000.0, 800.0))
    size = MenuSize.LARGE.width()
    assert menu_left_offset(MenuSize.LARGE, button) == button.viewport[0] - size - 8.0


def test_vertical_anchor_follows_bar_position():
    assert menu_vertical_anchor(Position.TOP) is Alignment.START
    assert menu_vertical_anchor(Position.BOTTOM) is Alignment.END