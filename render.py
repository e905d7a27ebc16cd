from typing import Dict, List, Tuple
from models import Solution
from solver.board import Board
from solver.layout import Layout

COLOR_NAMES: Dict[str, str] = {
    "B": "blue",
    "C": "cyan",
    "D": "black",
    "F": "fuchsia",
    "G": "green",
    "I": "indigo",
    "K": "khaki",
    "L": "lime",
    "M": "magenta",
    "O": "orange",
    "P": "pink",
    "R": "red",
    "S": "silver",
    "T": "teal",
    "V": "violet",
    "W": "white",
    "Y": "yellow",
}

def color_name(symbol: str) -> str:
    return COLOR_NAMES.get(symbol, symbol)

def _reading(position, stone) -> List[str]:
    values = list(stone.value)
    if position.reverse:
        values.reverse()
    return values

def solution_to_dicts(solution: Solution) -> List[Dict[str, object]]:
    return [
        {
            "row": p.row,
            "col": p.col,
            "orientation": p.orientation,
            "length": p.length,
            "reverse": p.reverse,
            "stone": stone.value,
            "colors": [color_name(v) for v in _reading(p, stone)],
        }
        for p, stone in solution
    ]

def render_solution(solution: Solution) -> str:
    lines = ["Solution:"]
    for p, stone in solution:
        where = f"({p.row + 1},{p.col + 1}, {p.orientation})"
        lines.append(f"{where:<18} " + " ".join(color_name(v) for v in _reading(p, stone)))
    lines.append("Rotate and mirror this solution to produce variants of it.")
    return "\n".join(lines)

def render_board(board: Board) -> str:
    n = board.size
    rule = "-" * (4 * n)
    lines = [rule]
    for row in range(n):
        lines.append("|" + "".join(f" {board.at(row, col)} |" for col in range(n)))
    lines.append(rule)
    if board.is_valid():
        lines.append("Board is valid and full." if board.is_full() else "Board is valid.")
    else:
        lines.append("BOARD IS NOT VALID.")
    return "\n".join(lines)

def render_layout(layout: Layout) -> str:
    lines = []
    for p in layout.positions:
        lines.append(f"At ({p.row},{p.col}): " + ("H" if p.horizontal else "V") * p.length)
    n = layout.board_size
    grid = [[" "] * n for _ in range(n)]
    for p in layout.positions:
        marker = chr((ord("A") if p.horizontal else ord("a")) + p.length)
        for row, col in p.cells():
            grid[row][col] = marker
    lines.extend("".join(r) for r in grid)
    return "\n".join(lines)

def render_svg(board: Board) -> Tuple[str, str]:
    scale = 48
    n = board.size
    svg_w = svg_h = n * scale + 2

    palette: Dict[str, str] = {}
    cells = []
    for row in range(n):
        for col in range(n):
            symbol = board.at(row, col)
            if symbol == " ":
                continue
            fill = palette.setdefault(symbol, color_name(symbol) if symbol in COLOR_NAMES else "lightgray")
            x = col * scale + 1
            y = row * scale + 1
            cells.append(
                f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="{fill}" stroke="black" stroke-width="1"/>'
                f'<text x="{x+4}" y="{y+14}" font-size="12" fill="gray">{symbol}</text>'
            )
    frame = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="board-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{"".join(cells)}{frame}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{c}'></span>{s} {color_name(s)}</li>"
        for s, c in sorted(palette.items())
    )
    return svg, legend
