"""Three-slot horizontal layout: left and right pinned to the edges, centre centred."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Protocol


@dataclass(frozen=True)
class Length:
    """A sizing strategy: fill (weighted by ``portion``), shrink to content, or fixed pixels."""

    portion: int = 0
    pixels: Optional[float] = None

    FILL: ClassVar[Length]
    SHRINK: ClassVar[Length]

    def __post_init__(self) -> None:
        if self.portion < 0:
            raise ValueError(f"fill portion must not be negative: {self.portion}")
        if self.portion and self.pixels is not None:
            raise ValueError("a length is either a fill portion or a fixed size")

    def fill_factor(self) -> int:
        """How much of the free space this length claims; zero for non-filling lengths."""
        return self.portion


Length.FILL = Length(portion=1)
Length.SHRINK = Length()


class Alignment(Enum):
    START = "start"
    CENTER = "center"
    END = "end"


@dataclass(frozen=True)
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    ZERO: ClassVar[Padding]

    def horizontal(self) -> float:
        """Total padding along the horizontal axis."""
        return self.left + self.right

    def vertical(self) -> float:
        """Total padding along the vertical axis."""
        return self.top + self.bottom


Padding.ZERO = Padding()


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


def _expand(size: Size, padding: Padding) -> Size:
    return Size(size.width + padding.horizontal(), size.height + padding.vertical())


def _resolve_axis(length: Length, intrinsic: float, low: float, high: float) -> float:
    if length.fill_factor():
        return high
    if length.pixels is not None:
        return max(min(length.pixels, high), low)
    return max(min(intrinsic, high), low)


@dataclass(frozen=True)
class Limits:
    """Minimum and maximum sizes a layout may take."""

    min: Size
    max: Size

    def width(self, width: Length) -> Limits:
        """Pin the width when ``width`` is fixed; other lengths leave the limits alone."""
        if width.pixels is None:
            return self
        pinned = max(min(width.pixels, self.max.width), self.min.width)
        return Limits(Size(pinned, self.min.height), Size(pinned, self.max.height))

    def height(self, height: Length) -> Limits:
        """Pin the height when ``height`` is fixed; other lengths leave the limits alone."""
        if height.pixels is None:
            return self
        pinned = max(min(height.pixels, self.max.height), self.min.height)
        return Limits(Size(self.min.width, pinned), Size(self.max.width, pinned))

    def shrink(self, padding: Padding) -> Limits:
        """Remove the padding from both bounds, never going below zero."""
        dw, dh = padding.horizontal(), padding.vertical()
        return Limits(
            Size(max(self.min.width - dw, 0.0), max(self.min.height - dh, 0.0)),
            Size(max(self.max.width - dw, 0.0), max(self.max.height - dh, 0.0)),
        )

    def resolve(self, width: Length, height: Length, intrinsic: Size) -> Size:
        """The final size for the given lengths and content size, within these limits."""
        return Size(
            _resolve_axis(width, intrinsic.width, self.min.width, self.max.width),
            _resolve_axis(height, intrinsic.height, self.min.height, self.max.height),
        )


@dataclass
class Node:
    """A laid-out box: its size, its position and the boxes inside it."""

    size: Size
    position: Point = field(default_factory=Point)
    children: list[Node] = field(default_factory=list)

    def move_to(self, point: Point) -> None:
        self.position = point

    def align(self, horizontal: Alignment, vertical: Alignment, space: Size) -> None:
        """Shift the node so that it sits aligned within ``space``."""
        x, y = self.position.x, self.position.y
        if horizontal is Alignment.CENTER:
            x += (space.width - self.size.width) / 2.0
        elif horizontal is Alignment.END:
            x += space.width - self.size.width
        if vertical is Alignment.CENTER:
            y += (space.height - self.size.height) / 2.0
        elif vertical is Alignment.END:
            y += space.height - self.size.height
        self.position = Point(x, y)


class _Child(Protocol):
    height_length: Length

    def layout(self, limits: Limits) -> Node: ...


@dataclass(frozen=True)
class FixedChild:
    """A leaf with a fixed content size and the lengths it asks for."""

    width: float
    height: float
    width_length: Length = Length.SHRINK
    height_length: Length = Length.SHRINK

    def layout(self, limits: Limits) -> Node:
        return Node(limits.resolve(self.width_length, self.height_length,
                                   Size(self.width, self.height)))


@dataclass
class Centerbox:
    """Lays out exactly three children: left edge, centre and right edge."""

    children: tuple[_Child, _Child, _Child]
    spacing: float = 0.0
    padding: Padding = Padding.ZERO
    width: Length = Length.SHRINK
    height: Length = Length.SHRINK
    align_items: Alignment = Alignment.START

    def __post_init__(self) -> None:
        self.children = tuple(self.children)
        if len(self.children) != 3:
            raise ValueError(f"a centerbox holds exactly three children, got {len(self.children)}")

    def layout(self, limits: Limits) -> Node:
        pad = self.padding
        limits = limits.width(self.width).height(self.height).shrink(pad)
        total_spacing = self.spacing * (len(self.children) - 1)
        max_cross = limits.max.height
        cross = 0.0 if self.height == Length.SHRINK else max_cross
        available = limits.max.width - total_spacing
        remaining = 0.0 if self.width == Length.SHRINK else max(available, 0.0)

        def place(child: _Child) -> Node:
            nonlocal remaining, cross
            max_height = cross if child.height_length.fill_factor() != 0 else max_cross
            node = child.layout(Limits(Size(0.0, 0.0), Size(remaining, max_height)))
            remaining -= node.size.width
            cross = max(cross, node.size.height)
            return node

        left_child, center_child, right_child = self.children
        left = place(left_child)
        right = place(right_child)
        center = place(center_child)

        left.move_to(Point(pad.left, pad.top))
        left.align(Alignment.START, self.align_items, Size(0.0, cross))
        right.move_to(Point(limits.max.width, pad.top))
        right.align(Alignment.END, self.align_items, Size(0.0, cross))

        half_available = available / 2.0
        half_center = center.size.width / 2.0
        if (half_available - left.size.width < half_center
                or half_available - right.size.width < half_center):
            x = (limits.max.width - right.size.width - left.size.width) / 2.0 + left.size.width
        else:
            x = limits.max.width / 2.0 + pad.horizontal() / 2.0
        center.move_to(Point(x, pad.top))
        center.align(Alignment.CENTER, self.align_items, Size(0.0, cross))

        main = left.size.width + center.size.width + right.size.width + total_spacing
        size = limits.resolve(self.width, self.height, Size(main, cross))
        return Node(_expand(size, pad), children=[left, center, right])