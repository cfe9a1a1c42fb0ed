import pytest

from glyphsolve import (
    ElementStateError,
    GlyphInstance,
    LineHandle,
    PointHandle,
    collect_guides,
    create_chart,
    create_glyph,
    create_mark,
    get_alignment_guides,
    get_class,
    get_handles,
    solve_glyph,
)
from glyphsolve.guides import UNBOUNDED_SPAN


@pytest.mark.parametrize(
    "factory",
    [
        lambda: create_glyph(),
        lambda: create_mark("mark.anchor"),
        lambda: create_mark("mark.rect"),
        lambda: create_mark("mark.symbol"),
        lambda: create_chart(),
    ],
)
def test_guides_report_current_attribute_values(factory):
    element = factory()

    guides = element.get_alignment_guides()

    assert guides
    for guide in guides:
        assert guide.axis in ("x", "y")
        assert guide.value == element.attributes[guide.attribute]
        assert guide.visible


def test_rectangle_glyph_guides_use_intrinsic_frame():
    glyph = create_glyph()

    guides = {(guide.axis, guide.attribute): guide.value for guide in get_alignment_guides(glyph)}

    assert guides == {
        ("x", "ix1"): -30.0,
        ("x", "ix2"): 30.0,
        ("x", "icx"): 0.0,
        ("y", "iy1"): -50.0,
        ("y", "iy2"): 50.0,
        ("y", "icy"): 0.0,
    }


def test_rectangle_glyph_handles():
    glyph = create_glyph()

    handles = get_handles(glyph)

    assert len(handles) == 4
    assert all(isinstance(handle, LineHandle) for handle in handles)
    assert [handle.axis for handle in handles] == ["x", "x", "y", "y"]
    assert [handle.actions[0].attribute for handle in handles] == ["ix1", "ix2", "iy1", "iy2"]
    assert all(handle.span == UNBOUNDED_SPAN for handle in handles)
    assert all(handle.type == "line" for handle in handles)
    assert all(handle.actions[0].type == "attribute" for handle in handles)


def test_guides_follow_solved_values():
    glyph = create_glyph()
    glyph.attributes["width"] = 90.0

    solve_glyph(glyph)

    values = {guide.attribute: guide.value for guide in glyph.get_alignment_guides()}
    assert values["ix1"] == pytest.approx(-45.0, abs=1e-9)
    assert values["ix2"] == pytest.approx(45.0, abs=1e-9)
    lines = {handle.actions[0].attribute: handle.value for handle in glyph.get_handles()}
    assert lines["ix2"] == pytest.approx(45.0, abs=1e-9)


def test_rect_mark_handles_span_the_opposite_extent():
    mark = create_mark("mark.rect")

    handles = {handle.actions[0].attribute: handle for handle in mark.get_handles()}

    assert handles["x1"].axis == "x"
    assert handles["x1"].value == -10.0
    assert handles["x1"].span == (-10.0, 10.0)
    assert handles["y2"].axis == "y"
    assert handles["y2"].span == (-10.0, 10.0)


def test_point_marks_expose_point_handles():
    mark = create_mark("mark.symbol")

    (handle,) = mark.get_handles()

    assert isinstance(handle, PointHandle)
    assert handle.type == "point"
    assert (handle.x, handle.y) == (0.0, 0.0)
    assert [action.attribute for action in handle.actions] == ["x", "y"]


def test_collect_guides_tags_elements():
    glyph = create_glyph(marks=["mark.rect"])
    chart = create_chart(glyphs=[glyph])

    guides = collect_guides(chart)

    ids = [guide.element_id for guide in guides]
    # chart 6, glyph 6, anchor 2, rect 6
    assert len(guides) == 20
    assert ids.count(chart.id) == 6
    assert ids.count(glyph.id) == 6
    assert ids.count(glyph.marks[0].id) == 2
    assert ids.count(glyph.marks[1].id) == 6


def test_uninitialized_elements_have_no_guides_or_handles():
    glyph = GlyphInstance(get_class("glyph.rectangle"))

    with pytest.raises(ElementStateError):
        get_alignment_guides(glyph)
    with pytest.raises(ElementStateError):
        get_handles(glyph)
