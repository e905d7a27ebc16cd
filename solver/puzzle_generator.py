# solver/puzzle_generator.py
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from config import CFG
from models import Solution, Stone
from solver.assignment import AssignmentSolver
from solver.board import Board, SymbolCounter
from solver.layout import Layout
from solver.layout_generator import find_all_layouts


@dataclass
class Puzzle:
    layout: Layout
    solution: Solution
    board: Board
    solution_count: int

    @property
    def stones(self) -> List[Stone]:
        return [stone for _, stone in self.solution]


def latin_board(size: int, palette: str) -> Board:
    """Board where color (row + col + 1) % size sits in every cell."""

    board = Board(size)
    for row in range(size):
        for col in range(size):
            board.set_cell(row, col, palette[(row + col + 1) % size])
    return board


def shuffle_board(board: Board, rng: random.Random, rounds: int) -> None:
    # Row and column swaps keep every row and column free of duplicates.
    size = board.size
    for _ in range(rounds):
        if rng.randint(0, size - 1) > size // 2:
            board.swap_rows(rng.randint(0, size - 1), rng.randint(0, size - 1))
        else:
            board.swap_cols(rng.randint(0, size - 1), rng.randint(0, size - 1))


def cut_stones(board: Board, layout: Layout) -> Solution:
    """Read the stones a layout cuts out of a colored board."""

    solution: Solution = []
    for position in layout.positions:
        counter = SymbolCounter()
        fields = []
        for row, col in position.cells():
            value = board.at(row, col)
            counter.add(value)
            fields.append(value)
        if position.reverse:
            fields.reverse()
        solution.append((position, Stone("".join(fields))))
    return solution


def count_solutions(solution: Solution, layouts: Iterable[Layout]) -> int:
    stones = [stone for _, stone in solution]
    return sum(len(AssignmentSolver(layout, stones).find_assignment()) for layout in layouts)


def is_nice(solution: Solution, layouts: Sequence[Layout]) -> Tuple[bool, int]:
    """A puzzle is nice when all its stones differ and it can be solved."""

    values = {stone.value for _, stone in solution}
    if len(values) != len(solution):
        return False, 0
    num_solutions = count_solutions(solution, layouts)
    return num_solutions > 0, num_solutions


def generate_puzzles(
    lengths: Iterable[int],
    *,
    seed: Optional[int] = None,
    palette: Optional[str] = None,
    rounds: Optional[int] = None,
) -> Tuple[List[Puzzle], Optional[str]]:
    """
    Returns (puzzles, error_message_or_None).
    One candidate puzzle is built per layout of ``lengths``: a shuffled latin
    board is cut along the layout, and kept when it is nice.
    """
    layouts, err = find_all_layouts(list(lengths))
    if err:
        return [], err

    palette = CFG.PUZZLE_PALETTE if palette is None else palette
    seed = CFG.PUZZLE_SEED if seed is None else seed
    rounds = CFG.PUZZLE_SHUFFLES if rounds is None else rounds

    puzzles: List[Puzzle] = []
    for layout in layouts:
        size = layout.board_size
        if size >= len(palette):
            return puzzles, (
                f"Board is too large: {size} exceeds maximum board size {len(palette)}."
            )
        board = latin_board(size, palette)
        shuffle_board(board, random.Random(seed), rounds)
        solution = cut_stones(board, layout)
        nice, num_solutions = is_nice(solution, layouts)
        if nice:
            puzzles.append(Puzzle(layout, solution, board, num_solutions))
    return puzzles, None
