# solver/board.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from config import CFG
from models import EMPTY, AlphabetOverflowError, Position, Solution, Stone


class SymbolCounter:
    """Tracks which symbols of a line were seen, using a fixed presence table."""

    __slots__ = ("_min", "_seen", "_valid")

    def __init__(self, minimum: Optional[str] = None, capacity: Optional[int] = None):
        self._min = ord(minimum if minimum is not None else CFG.ALPHABET_MIN)
        size = int(capacity if capacity is not None else CFG.ALPHABET_SIZE)
        self._seen = [False] * size
        self._valid = True

    def add(self, value: str) -> None:
        idx = ord(value) - self._min
        if idx < 0 or idx >= len(self._seen):
            raise AlphabetOverflowError(value, chr(self._min), len(self._seen))
        if self._valid:
            if self._seen[idx]:
                self._valid = False
            else:
                self._seen[idx] = True

    def is_valid(self) -> bool:
        return self._valid


def _line_is_unique(cells: Iterable[str], minimum: str, capacity: int) -> bool:
    counter = SymbolCounter(minimum, capacity)
    for cell in cells:
        if cell != EMPTY:
            counter.add(cell)
    return counter.is_valid()


class Board:
    """Square game board holding one color symbol (or EMPTY) per cell."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Board size must not be negative, got {size}")
        self._size = int(size)
        self._data: List[List[str]] = [[EMPTY] * self._size for _ in range(self._size)]
        self._fill = 0

    @classmethod
    def from_solution(cls, size: int, solution: Solution) -> "Board":
        board = cls(size)
        for position, stone in solution:
            board.assign(position, stone)
        return board

    @property
    def size(self) -> int:
        return self._size

    def at(self, row: int, col: int) -> str:
        return self._data[row][col]

    def rows(self) -> List[List[str]]:
        return [list(r) for r in self._data]

    def is_empty(self, row: int, col: int) -> bool:
        return self._data[row][col] == EMPTY

    def set_cell(self, row: int, col: int, value: str) -> None:
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise ValueError(f"Cell ({row},{col}) is outside a {self._size}x{self._size} board")
        current = self._data[row][col]
        if value != EMPTY and current != EMPTY:
            raise ValueError(f"Cell ({row},{col}) already holds {current!r}")
        if value == current:
            return
        self._data[row][col] = value
        self._fill += -1 if value == EMPTY else 1

    def can_assign(self, position: Position, stone: Stone) -> bool:
        if len(stone) != position.length:
            return False
        n = self._size
        for row, col in position.cells():
            if row >= n or col >= n or row < 0 or col < 0:
                return False
            if self._data[row][col] != EMPTY:
                return False
        return True

    def assign(self, position: Position, stone: Stone) -> None:
        if len(stone) != position.length:
            raise ValueError(
                f"Stone {stone} has length {len(stone)}, position expects {position.length}"
            )
        if not self.can_assign(position, stone):
            raise ValueError(f"Cannot place {stone} at {position}")
        values = reversed(stone.value) if position.reverse else stone.value
        for (row, col), value in zip(position.cells(), values):
            self._data[row][col] = value
        self._fill += position.length

    def unassign(self, position: Position, stone: Stone) -> None:
        for row, col in position.cells():
            if self._data[row][col] != EMPTY:
                self._data[row][col] = EMPTY
                self._fill -= 1

    @contextmanager
    def placed(self, position: Position, stone: Stone) -> Iterator["Board"]:
        """Assign ``stone`` for the duration of the block; always undone on exit."""
        self.assign(position, stone)
        try:
            yield self
        finally:
            self.unassign(position, stone)

    def is_valid(self) -> bool:
        minimum = CFG.ALPHABET_MIN
        capacity = CFG.ALPHABET_SIZE
        for row in self._data:
            if not _line_is_unique(row, minimum, capacity):
                return False
        for col in zip(*self._data):
            if not _line_is_unique(col, minimum, capacity):
                return False
        return True

    def is_full(self) -> bool:
        return self._fill == self._size * self._size

    def swap_rows(self, a: int, b: int) -> None:
        self._data[a], self._data[b] = self._data[b], self._data[a]

    def swap_cols(self, a: int, b: int) -> None:
        for row in self._data:
            row[a], row[b] = row[b], row[a]

    def signature(self) -> str:
        return "".join("".join(row) for row in self._data)

    def __str__(self) -> str:
        return self.signature()

    def __repr__(self) -> str:
        return f"Board(size={self._size}, fill={self._fill}, cells={self.signature()!r})"
