# solver/layout_generator.py
from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from models import Position, Stone
from solver.board import Board
from solver.layout import Layout

LengthsLike = Union[Iterable[int], Iterable[Stone]]


def _as_lengths(items: LengthsLike) -> List[int]:
    out: List[int] = []
    for item in items:
        if isinstance(item, Stone):
            out.append(len(item))
        else:
            out.append(int(item))
    return out


def check_lengths(lengths: Sequence[int]) -> Tuple[int, Optional[str]]:
    """Pre-flight sizing: returns (board_size, error_message_or_None)."""

    if not lengths:
        return 0, "No stones given."
    for k in lengths:
        if k < 1:
            return 0, f"Stone length {k} is not positive."
    total = sum(lengths)
    board_size = math.isqrt(total)
    if board_size * board_size != total:
        return 0, f"Stones do not fit into a squared board (total length {total})."
    for k in lengths:
        if k > board_size:
            return board_size, f"Stone of length {k} does not fit into the {board_size}x{board_size} board."
    return board_size, None


def iter_layouts(items: LengthsLike) -> Iterator[Layout]:
    """Yield every layout that covers the board exactly with the given lengths.

    Cells are visited in row-major order.  A filled cell is skipped; an empty
    one must become the anchor of a new stone, tried for every available
    length, vertical first.  Horizontal stones let the scan jump past their
    own span.  Input that cannot form a square board yields nothing; call
    :func:`check_lengths` (or :func:`find_all_layouts`) for the reason.
    """

    lengths = _as_lengths(items)
    board_size, err = check_lengths(lengths)
    if err:
        return

    reserve = [0] * (board_size + 1)
    for k in lengths:
        reserve[k] += 1
    placeholders = [None] + [Stone("A" * k) for k in range(1, board_size + 1)]

    board = Board(board_size)
    layout: List[Position] = []
    cells = board_size * board_size

    def _search(step: int) -> Iterator[Layout]:
        if step >= cells:
            return
        row, col = divmod(step, board_size)
        if not board.is_empty(row, col):
            yield from _search(step + 1)
            return
        for k in range(1, board_size + 1):
            if reserve[k] == 0:
                continue
            stone = placeholders[k]
            for horizontal in (False, True):
                position = Position(row=row, col=col, horizontal=horizontal, length=k)
                if not board.can_assign(position, stone):
                    continue
                with board.placed(position, stone):
                    layout.append(position)
                    reserve[k] -= 1
                    try:
                        if board.is_full():
                            yield Layout(board_size, layout)
                        else:
                            yield from _search(step + (k if horizontal else 1))
                    finally:
                        reserve[k] += 1
                        layout.pop()

    yield from _search(0)


def find_all_layouts(items: LengthsLike) -> Tuple[List[Layout], Optional[str]]:
    """Returns (layouts, error_message_or_None); layouts is empty on error."""

    lengths = _as_lengths(items)
    _board_size, err = check_lengths(lengths)
    if err:
        return [], err
    return list(iter_layouts(lengths)), None
