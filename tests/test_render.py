from models import Position, Stone
from render import (
    color_name, render_board, render_layout, render_solution, render_svg, solution_to_dicts,
)
from solver.board import Board
from solver.layout import Layout


def _solution():
    return [
        (Position(row=0, col=0, horizontal=True, length=2), Stone("RG")),
        (Position(row=1, col=0, horizontal=True, length=2, reverse=True), Stone("RG")),
    ]


def test_color_names_fall_back_to_symbol():
    assert color_name("D") == "black"
    assert color_name("B") == "blue"
    assert color_name("x") == "x"


def test_solution_lines_are_one_based_and_follow_reading_order():
    text = render_solution(_solution())
    lines = text.splitlines()
    assert lines[0] == "Solution:"
    assert lines[1].startswith("(1,1, horizontal)")
    assert lines[1].endswith("red green")
    assert lines[2].startswith("(2,1, horizontal)")
    assert lines[2].endswith("green red")
    assert lines[-1].startswith("Rotate and mirror")


def test_solution_dicts():
    rows = solution_to_dicts(_solution())
    assert rows[1] == {
        "row": 1,
        "col": 0,
        "orientation": "horizontal",
        "length": 2,
        "reverse": True,
        "stone": "RG",
        "colors": ["green", "red"],
    }


def test_board_rendering_reports_validity():
    board = Board.from_solution(2, _solution())
    text = render_board(board)
    assert text.splitlines() == [
        "--------",
        "| R | G |",
        "| G | R |",
        "--------",
        "Board is valid and full.",
    ]

    partial = Board(2)
    partial.set_cell(0, 0, "R")
    assert render_board(partial).endswith("Board is valid.")

    partial.set_cell(0, 1, "R")
    assert render_board(partial).endswith("BOARD IS NOT VALID.")


def test_layout_rendering_marks_orientation_and_length():
    layout = Layout(3, [
        Position(row=0, col=0, horizontal=True, length=3),
        Position(row=1, col=0, horizontal=False, length=2),
        Position(row=1, col=1, horizontal=True, length=2),
        Position(row=2, col=1, horizontal=True, length=2),
    ])
    lines = render_layout(layout).splitlines()
    assert lines[0] == "At (0,0): HHH"
    assert "At (1,0): VV" in lines
    assert lines[-3:] == ["DDD", "cCC", "cCC"]


def test_svg_has_one_rect_per_cell_plus_frame():
    svg, legend = render_svg(Board.from_solution(2, _solution()))
    assert svg.startswith("<svg")
    assert svg.count("<rect") == 5
    assert 'fill="red"' in svg
    assert "green" in legend and "red" in legend
