# solver/assignment.py
from __future__ import annotations

from collections import Counter
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from models import Position, Solution, Stone
from solver.board import Board
from solver.layout import Layout


def _bag_by_length(stones: Iterable[Stone]) -> Dict[int, Dict[Stone, int]]:
    bag: Dict[int, Dict[Stone, int]] = {}
    for stone in stones:
        entry = bag.setdefault(len(stone), {})
        entry[stone] = entry.get(stone, 0) + 1
    return bag


def _readings(position: Position, stone: Stone) -> Tuple[Position, ...]:
    # A palindrome reads the same both ways; one reading is enough.
    if stone.value == stone.value[::-1]:
        return (position,)
    return (position, position.reversed())


class AssignmentSolver:
    """Brute force search for colorings of one layout with a given set of stones.

    Stones are kept in a bag keyed by length, identical stones sharing one
    entry.  Each position takes every fitting stone in natural and reversed
    reading order (a palindrome only once); the board is re-validated on
    entry to every search node so a duplicate color in a row or column cuts
    the branch immediately.
    """

    def __init__(self, layout: Layout, stones: Iterable[Stone]):
        self.layout = layout
        self.stones = [s if isinstance(s, Stone) else Stone(str(s)) for s in stones]
        stone_lengths = Counter(len(s) for s in self.stones)
        slot_lengths = Counter(layout.lengths())
        if stone_lengths != slot_lengths:
            raise ValueError(
                "Stones do not match the layout: "
                f"stone lengths {dict(sorted(stone_lengths.items()))}, "
                f"layout lengths {dict(sorted(slot_lengths.items()))}"
            )

    def iter_assignments(self) -> Iterator[Solution]:
        """Yield each valid coloring in discovery order."""

        positions = self.layout.positions
        board = Board(self.layout.board_size)
        bag = _bag_by_length(self.stones)
        solution: Solution = []
        remaining = len(self.stones)

        def _search(index: int) -> Iterator[Solution]:
            nonlocal remaining
            if not board.is_valid():
                return
            if remaining == 0:
                yield list(solution)
                return

            position = positions[index]
            candidates = bag.get(position.length, {})
            for stone in list(candidates):
                if candidates[stone] == 0:
                    continue
                candidates[stone] -= 1
                remaining -= 1
                try:
                    for oriented in _readings(position, stone):
                        with board.placed(oriented, stone):
                            solution.append((oriented, stone))
                            try:
                                yield from _search(index + 1)
                            finally:
                                solution.pop()
                finally:
                    candidates[stone] += 1
                    remaining += 1

        yield from _search(0)

    def find_assignment(self, limit: Optional[int] = None) -> List[Solution]:
        """Collect colorings; ``limit`` stops the search after that many."""

        found = self.iter_assignments()
        if limit is not None and limit >= 0:
            found = islice(found, limit)
        return list(found)
