"""Popup menu state and placement for the bar's overlay surface."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from barshell.centerbox import Alignment, Point
from barshell.config import Position

_EDGE_MARGIN = 8.0


class MenuKind(Enum):
    UPDATES = "updates"
    SETTINGS = "settings"
    TRAY = "tray"
    MEDIA_PLAYER = "media_player"


@dataclass(frozen=True)
class MenuType:
    """Which menu is shown; tray menus carry the tray item's name."""

    kind: MenuKind
    tray_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is MenuKind.TRAY and self.tray_name is None:
            raise ValueError("a tray menu needs the tray item's name")
        if self.kind is not MenuKind.TRAY and self.tray_name is not None:
            raise ValueError(f"{self.kind.value} menus take no tray name")


@dataclass(frozen=True)
class ButtonRef:
    """Where the button that opened a menu sits, and the size of its viewport."""

    position: Point
    viewport: tuple[float, float]


class Layer(Enum):
    BACKGROUND = "background"
    BOTTOM = "bottom"
    TOP = "top"
    OVERLAY = "overlay"


class KeyboardInteractivity(Enum):
    NONE = "none"
    EXCLUSIVE = "exclusive"
    ON_DEMAND = "on_demand"


@dataclass(frozen=True)
class SetLayer:
    surface_id: Hashable
    layer: Layer


@dataclass(frozen=True)
class SetKeyboardInteractivity:
    surface_id: Hashable
    mode: KeyboardInteractivity


Command = Union[SetLayer, SetKeyboardInteractivity]


@dataclass
class Menu:
    """The menu surface of one output; commands returned are for the compositor."""

    id: Hashable
    menu_info: Optional[tuple[MenuType, ButtonRef]] = None

    def open(self, menu_type: MenuType, button_ref: ButtonRef) -> list[Command]:
        self.menu_info = (menu_type, button_ref)
        return [
            SetLayer(self.id, Layer.OVERLAY),
            SetKeyboardInteractivity(self.id, KeyboardInteractivity.NONE),
        ]

    def close(self) -> list[Command]:
        if self.menu_info is None:
            return []
        self.menu_info = None
        return [
            SetLayer(self.id, Layer.BACKGROUND),
            SetKeyboardInteractivity(self.id, KeyboardInteractivity.NONE),
        ]

    def toggle(self, menu_type: MenuType, button_ref: ButtonRef) -> list[Command]:
        """Open the menu, close it if it already shows ``menu_type``, or switch to it."""
        if self.menu_info is None:
            return self.open(menu_type, button_ref)
        current_type, _ = self.menu_info
        if current_type == menu_type:
            return self.close()
        self.menu_info = (menu_type, button_ref)
        return []

    def close_if(self, menu_type: MenuType) -> list[Command]:
        if self.menu_info is not None and self.menu_info[0] == menu_type:
            return self.close()
        return []

    def request_keyboard(self) -> list[Command]:
        return [SetKeyboardInteractivity(self.id, KeyboardInteractivity.ON_DEMAND)]

    def release_keyboard(self) -> list[Command]:
        return [SetKeyboardInteractivity(self.id, KeyboardInteractivity.NONE)]


class MenuSize(Enum):
    NORMAL = 250.0
    LARGE = 350.0

    def width(self) -> float:
        return self.value


def menu_left_offset(menu_size: MenuSize, button_ref: ButtonRef) -> float:
    """Left padding placing the menu under its button while keeping it on screen."""
    size = menu_size.width()
    return min(
        max(button_ref.position.x - size / 2.0, _EDGE_MARGIN),
        button_ref.viewport[0] - size - _EDGE_MARGIN,
    )


def menu_vertical_anchor(position: Position) -> Alignment:
    """Menus hang from the edge the bar is attached to."""
    return Alignment.START if position is Position.TOP else Alignment.END