import pytest

from barshell.centerbox import (
    Alignment,
    Centerbox,
    FixedChild,
    Length,
    Limits,
    Node,
    Padding,
    Point,
    Size,
)

LIMITS = Limits(Size(0.0, 0.0), Size(1000.0, 100.0))


def _bar(left, center, right, **options):
    children = (FixedChild(*left), FixedChild(*center), FixedChild(*right))
    return Centerbox(children, width=Length.FILL, **options)


def test_fill_factor():
    assert Length.FILL.fill_factor() == 1
    assert Length(portion=3).fill_factor() == 3
    assert Length.SHRINK.fill_factor() == 0
    assert Length(pixels=34).fill_factor() == 0


def test_padding_totals():
    padding = Padding(1, 2, 3, 4)
    assert padding.horizontal() == 6
    assert padding.vertical() == 4


def test_limits_fixed_width_pins_both_bounds():
    limits = Limits(Size(0, 0), Size(200, 100)).width(Length(pixels=50))
    assert limits.min.width == 50
    assert limits.max.width == 50
    assert limits.max.height == 100


def test_limits_fill_width_is_unchanged():
    limits = Limits(Size(0, 0), Size(200, 100))
    assert limits.width(Length.FILL) == limits
    assert limits.height(Length.SHRINK) == limits


def test_limits_shrink_removes_padding_and_clamps():
    limits = Limits(Size(0, 0), Size(200, 100))
    padding = Padding(10, 20, 10, 20)
    shrunk = limits.shrink(padding)
    assert shrunk.max.width == 200 - padding.horizontal()
    assert shrunk.max.height == 100 - padding.vertical()
    huge = limits.shrink(Padding(500, 500, 500, 500))
    assert huge.max == Size(0, 0)


def test_limits_resolve():
    limits = Limits(Size(10, 10), Size(200, 100))
    assert limits.resolve(Length.FILL, Length.FILL, Size(5, 5)) == limits.max
    assert limits.resolve(Length.SHRINK, Length.SHRINK, Size(500, 50)) == Size(200, 50)
    assert limits.resolve(Length(pixels=1), Length(pixels=1), Size(0, 0)) == limits.min


def test_node_align_against_zero_space():
    node = Node(Size(10, 20))
    node.align(Alignment.CENTER, Alignment.END, Size(0, 0))
    assert node.position == Point(-node.size.width / 2, -node.size.height)


def test_edges_are_pinned_and_center_is_centred():
    root = _bar((100, 20), (50, 20), (100, 20)).layout(LIMITS)
    left, center, right = root.children
    assert left.position.x == 0
    assert right.position.x + right.size.width == LIMITS.max.width
    assert center.position.x + center.size.width / 2 == LIMITS.max.width / 2
    assert root.size.width == LIMITS.max.width


def test_overflowing_sides_shift_center_into_free_gap():
    root = _bar((400, 20), (300, 20), (100, 20)).layout(LIMITS)
    left, center, right = root.children
    gap_start = left.position.x + left.size.width
    gap_end = right.position.x
    assert center.position.x + center.size.width / 2 == (gap_start + gap_end) / 2


def test_shrink_width_gives_children_no_room():
    children = (FixedChild(100, 20), FixedChild(50, 20), FixedChild(100, 20))
    root = Centerbox(children).layout(LIMITS)
    assert root.size.width == 0
    assert [child.size.width for child in root.children] == [0, 0, 0]


def test_fixed_height_with_padding_centres_vertically():
    padding = Padding(4, 4, 4, 4)
    box = _bar((100, 20), (50, 20), (100, 20), height=Length(pixels=34), padding=padding,
               align_items=Alignment.CENTER)
    root = box.layout(LIMITS)
    cross = 34 - padding.vertical()
    assert root.size == Size(LIMITS.max.width, 34)
    for child in root.children:
        assert child.position.y == padding.top + (cross - child.size.height) / 2
    center = root.children[1]
    assert center.position.x + center.size.width / 2 == LIMITS.max.width / 2


def test_fill_height_child_takes_the_cross_size():
    padding = Padding(4, 4, 4, 4)
    children = (
        FixedChild(10, 5, height_length=Length.FILL),
        FixedChild(50, 20),
        FixedChild(100, 20),
    )
    box = Centerbox(children, width=Length.FILL, height=Length(pixels=34), padding=padding)
    left = box.layout(LIMITS).children[0]
    assert left.size.height == 34 - padding.vertical()


def test_centerbox_requires_three_children():
    with pytest.raises(ValueError):
        Centerbox((FixedChild(1, 1), FixedChild(1, 1)))


def test_negative_fill_portion_is_rejected():
    with pytest.raises(ValueError):
        Length(portion=-1)