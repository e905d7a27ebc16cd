# solver/layout.py
from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from models import Position, Stone
from solver.board import Board


class Layout:
    """Stone positions on a square board, ignoring colors.

    Positions are added one by one; once they cover every cell the layout is
    sorted into canonical order so that equal layouts compare equal and give
    equal signatures.  The symmetry operations return new layouts.
    """

    def __init__(self, board_size: int, positions: Iterable[Position] = ()):
        self._size = int(board_size)
        self._positions: List[Position] = []
        self._covered: Set[Tuple[int, int]] = set()
        for position in positions:
            self.add(position)

    @classmethod
    def _transformed(cls, board_size: int, positions: Iterable[Position]) -> "Layout":
        layout = cls(board_size, positions)
        layout._normalize()
        return layout

    @property
    def board_size(self) -> int:
        return self._size

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(self._positions)

    def lengths(self) -> List[int]:
        return [p.length for p in self._positions]

    def add(self, position: Position) -> None:
        if self.is_full():
            raise ValueError("Layout is already complete")
        cells = list(position.cells())
        for row, col in cells:
            if not (0 <= row < self._size and 0 <= col < self._size):
                raise ValueError(f"{position} leaves the {self._size}x{self._size} board")
            if (row, col) in self._covered:
                raise ValueError(f"{position} overlaps cell ({row},{col})")
        self._covered.update(cells)
        self._positions.append(position)
        if self.is_full():
            self._normalize()

    def is_full(self) -> bool:
        return len(self._covered) == self._size * self._size

    def _normalize(self) -> None:
        self._positions.sort()

    # ---------- structure fingerprint ----------

    def signature(self) -> str:
        board = Board(self._size)
        for idx, position in enumerate(self._positions):
            marker = chr(ord("A") + idx)
            board.assign(position, Stone(marker * position.length))
        return board.signature()

    # ---------- symmetry operations ----------

    def rotate90(self) -> "Layout":
        n = self._size
        rotated = []
        for p in self._positions:
            row = p.row if p.horizontal else p.row + p.length - 1
            rotated.append(
                Position(row=p.col, col=n - 1 - row, horizontal=not p.horizontal,
                         length=p.length, reverse=p.reverse)
            )
        return Layout._transformed(n, rotated)

    def flip_horizontal(self) -> "Layout":
        n = self._size
        flipped = []
        for p in self._positions:
            shift = 1 if p.horizontal else p.length
            flipped.append(Position(row=n - (p.row + shift), col=p.col, horizontal=p.horizontal,
                                    length=p.length, reverse=p.reverse))
        return Layout._transformed(n, flipped)

    def flip_vertical(self) -> "Layout":
        n = self._size
        flipped = []
        for p in self._positions:
            shift = p.length if p.horizontal else 1
            flipped.append(Position(row=p.row, col=n - (p.col + shift), horizontal=p.horizontal,
                                    length=p.length, reverse=p.reverse))
        return Layout._transformed(n, flipped)

    def orbit_signatures(self) -> List[str]:
        """Signatures of every rotation/reflection of this layout.

        Walks rotate x4 / flip_horizontal twice, then flip_vertical, and all of
        that twice; the walk must come back to the starting layout.
        """
        signatures: List[str] = []
        worker = self
        for _ in range(2):
            for _ in range(2):
                for _ in range(4):
                    signatures.append(worker.signature())
                    worker = worker.rotate90()
                worker = worker.flip_horizontal()
            worker = worker.flip_vertical()
        if worker != self:
            raise RuntimeError(f"Symmetry walk did not return to the original layout: {self!r}")
        return signatures

    # ---------- comparison ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self._size == other._size and self._positions == other._positions

    def __hash__(self) -> int:
        return hash((self._size, tuple(self._positions)))

    def __repr__(self) -> str:
        parts = ", ".join(
            f"({p.length},{p.row},{p.col},{'H' if p.horizontal else 'V'})" for p in self._positions
        )
        return f"Layout({self._size}, [{parts}])"


def unify(layouts: Iterable[Layout]) -> List[Layout]:
    """Keep one layout per rotation/reflection class, in first-seen order."""

    unique: List[Layout] = []
    known: Set[str] = set()
    for layout in layouts:
        if layout.signature() in known:
            continue
        unique.append(layout)
        known.update(layout.orbit_signatures())
    return unique
