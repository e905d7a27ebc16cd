import pytest

from models import Position
from solver.layout import Layout, unify
from solver.layout_generator import find_all_layouts


def P(length, row, col, horizontal):
    return Position(row=row, col=col, horizontal=horizontal, length=length)


def _variants_layout():
    # - - - | |
    # - - - | |
    # | | ^ | |
    # | | v < >
    # | | - - -
    return Layout(5, [
        P(3, 0, 0, True),
        P(3, 1, 0, True),
        P(3, 2, 0, False),
        P(3, 2, 1, False),
        P(3, 0, 3, False),
        P(3, 0, 4, False),
        P(3, 4, 2, True),
        P(2, 2, 2, False),
        P(2, 3, 3, True),
    ])


def _medium_layout():
    return Layout(4, [
        P(3, 0, 1, True),
        P(3, 1, 1, True),
        P(3, 2, 1, True),
        P(3, 0, 0, False),
        P(2, 3, 0, True),
        P(2, 3, 2, True),
    ])


def test_complete_layout_is_sorted_canonically():
    layout = _medium_layout()
    assert layout.is_full()
    assert list(layout.positions) == sorted(layout.positions)
    assert layout.positions[0] == P(3, 0, 0, False)
    assert layout.positions[1] == P(3, 0, 1, True)


def test_equal_layouts_regardless_of_insertion_order():
    a = _medium_layout()
    b = Layout(4, reversed(a.positions))
    assert a == b
    assert a.signature() == b.signature()
    assert hash(a) == hash(b)


def test_add_rejects_overlap_and_out_of_bounds():
    layout = Layout(3, [P(3, 0, 0, True)])
    with pytest.raises(ValueError):
        layout.add(P(2, 0, 1, False))
    with pytest.raises(ValueError):
        layout.add(P(3, 1, 1, True))


def test_signature_marks_positions_in_canonical_order():
    layout = Layout(2, [P(2, 0, 0, True), P(2, 1, 0, True)])
    assert layout.signature() == "AABB"
    assert layout.rotate90().signature() == "ABAB"


def test_rotate90_turns_rows_into_columns():
    layout = Layout(2, [P(2, 0, 0, True), P(2, 1, 0, True)])
    rotated = layout.rotate90()
    assert rotated.positions == (P(2, 0, 0, False), P(2, 0, 1, False))


def test_flip_horizontal_mirrors_rows():
    layout = Layout(3, [P(2, 0, 0, False), P(2, 0, 1, True), P(2, 1, 1, True), P(3, 2, 0, True)])
    flipped = layout.flip_horizontal()
    assert flipped.positions == (
        P(3, 0, 0, True),
        P(2, 1, 0, False),
        P(2, 1, 1, True),
        P(2, 2, 1, True),
    )
    assert flipped.is_full()


def test_flip_vertical_mirrors_columns():
    layout = Layout(3, [P(2, 0, 0, False), P(2, 0, 1, True), P(2, 1, 1, True), P(3, 2, 0, True)])
    flipped = layout.flip_vertical()
    assert flipped.positions == (
        P(2, 0, 0, True),
        P(2, 0, 2, False),
        P(2, 1, 0, True),
        P(3, 2, 0, True),
    )


def test_variants_return_to_original():
    layout = _variants_layout()
    assert layout.is_full()
    signature_0 = layout.signature()

    worker = layout
    for _ in range(4):
        worker = worker.rotate90()
    assert worker == layout

    worker = layout.flip_horizontal().flip_horizontal()
    assert worker == layout
    assert worker.signature() == signature_0

    worker = layout.flip_vertical().flip_vertical()
    assert worker == layout
    assert worker.signature() == signature_0


def test_orbit_covers_the_eight_symmetries():
    layout = _variants_layout()
    signatures = layout.orbit_signatures()
    assert len(signatures) == 16
    # This layout has no symmetry of its own, so all eight images differ.
    assert len(set(signatures)) == 8
    assert layout.signature() in signatures


def test_unify_reduces_mirror_images_to_one():
    layout = _medium_layout()
    images = [layout, layout.rotate90(), layout.flip_vertical(), layout.rotate90().flip_horizontal()]
    assert unify(images) == [layout]


def test_unify_properties_on_generated_layouts():
    layouts, err = find_all_layouts([3, 2, 2, 1, 1])
    assert err is None
    unique = unify(layouts)

    assert 0 < len(unique) <= len(layouts)
    orbits = [set(u.orbit_signatures()) for u in unique]
    for layout in layouts:
        assert any(layout.signature() in orbit for orbit in orbits)
    for i, u in enumerate(unique):
        for j, orbit in enumerate(orbits):
            if i != j:
                assert u.signature() not in orbit


def test_unify_keeps_first_seen_order():
    a = Layout(2, [P(2, 0, 0, False), P(2, 0, 1, False)])
    b = Layout(2, [P(2, 0, 0, True), P(2, 1, 0, True)])
    c = Layout(2, [P(1, 0, 0, True), P(1, 0, 1, True), P(2, 1, 0, True)])
    assert unify([a, c, b]) == [a, c]
