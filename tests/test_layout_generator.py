from collections import Counter

from models import Position, Stone
from solver.layout import Layout, unify
from solver.layout_generator import check_lengths, find_all_layouts, iter_layouts


def P(length, row, col, horizontal):
    return Position(row=row, col=col, horizontal=horizontal, length=length)


def test_non_square_total_is_rejected():
    layouts, err = find_all_layouts([3, 3, 4])
    assert layouts == []
    assert "squared board" in err


def test_stone_longer_than_board_is_rejected():
    layouts, err = find_all_layouts([5, 4])
    assert layouts == []
    assert "does not fit" in err
    assert list(iter_layouts([5, 4])) == []


def test_empty_input_is_rejected():
    layouts, err = find_all_layouts([])
    assert layouts == []
    assert err


def test_check_lengths_sizes_board():
    assert check_lengths([3, 3, 2, 2, 3, 3]) == (4, None)


def test_two_dominoes_give_two_layouts_vertical_first():
    layouts, err = find_all_layouts([2, 2])
    assert err is None
    assert layouts == [
        Layout(2, [P(2, 0, 0, False), P(2, 0, 1, False)]),
        Layout(2, [P(2, 0, 0, True), P(2, 1, 0, True)]),
    ]
    assert len(unify(layouts)) == 1


def test_three_bars_fill_rows_or_columns():
    layouts, err = find_all_layouts([3, 3, 3])
    assert err is None
    assert len(layouts) == 2
    assert all(len({p.horizontal for p in layout.positions}) == 1 for layout in layouts)


def test_single_cells_count_both_orientations():
    # A length-1 stone may be recorded as horizontal or vertical; all 16
    # variants share one signature and unify to a single layout.
    layouts, err = find_all_layouts([1, 1, 1, 1])
    assert err is None
    assert len(layouts) == 16
    assert len(set(layouts)) == 16
    assert len(unify(layouts)) == 1


def test_layouts_cover_board_exactly_with_given_lengths():
    lengths = [3, 2, 2, 1, 1]
    layouts, err = find_all_layouts(lengths)
    assert err is None
    assert layouts
    for layout in layouts:
        assert layout.is_full()
        assert Counter(layout.lengths()) == Counter(lengths)
        cells = [cell for p in layout.positions for cell in p.cells()]
        assert len(cells) == len(set(cells)) == 9


def test_medium_game_layout_is_enumerated():
    expected = Layout(4, [
        P(3, 0, 1, True),
        P(3, 1, 1, True),
        P(3, 2, 1, True),
        P(3, 0, 0, False),
        P(2, 3, 0, True),
        P(2, 3, 2, True),
    ])
    stones = [Stone(s) for s in ("GBD", "RGB", "DRG", "RDB", "GB", "DR")]
    layouts, err = find_all_layouts(stones)
    assert err is None
    assert expected in layouts
    assert len(set(layouts)) == len(layouts)


def test_iter_layouts_is_lazy():
    gen = iter_layouts([3, 3, 3])
    first = next(gen)
    assert first == Layout(3, [P(3, 0, 0, False), P(3, 0, 1, False), P(3, 0, 2, False)])
    gen.close()
