from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

EMPTY = " "

@dataclass(frozen=True)
class Stone:
    """A strip of colored cells; each character of ``value`` is one color."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError(f"A stone needs at least one color, got {self.value!r}")
        if any(ch.isspace() for ch in self.value):
            raise ValueError(f"Stone {self.value!r} contains whitespace")

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value

# Field order doubles as the canonical sort key: (row, col, horizontal, length, reverse).
@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int
    horizontal: bool
    length: int
    reverse: bool = False

    def cells(self) -> Iterator[Tuple[int, int]]:
        dr, dc = (0, 1) if self.horizontal else (1, 0)
        for i in range(self.length):
            yield self.row + dr * i, self.col + dc * i

    def reversed(self) -> "Position":
        return replace(self, reverse=not self.reverse)

    @property
    def orientation(self) -> str:
        return "horizontal" if self.horizontal else "vertical"

Solution = List[Tuple[Position, Stone]]


class AlphabetOverflowError(ValueError):
    """A color symbol fell outside the range the duplicate detector supports.

    This is a configuration error rather than a property of the puzzle, so the
    command line front end turns it into a dedicated exit code (3 when the
    symbol is below the window, 5 when above).
    """

    def __init__(self, symbol: str, minimum: str, capacity: int):
        super().__init__(symbol, minimum, capacity)
        self.symbol = symbol
        self.minimum = minimum
        self.capacity = capacity

    @property
    def too_small(self) -> bool:
        return ord(self.symbol) < ord(self.minimum)

    @property
    def exit_code(self) -> int:
        return 3 if self.too_small else 5

    def __str__(self) -> str:
        if self.too_small:
            return (
                f"Character {self.symbol!r} is too small, please decrease "
                f"SQ_ALPHABET_MIN from now {self.minimum!r} to (at least) {self.symbol!r}"
            )
        needed = ord(self.symbol) - ord(self.minimum) + 1
        return (
            f"Character {self.symbol!r} is too large, please increase "
            f"SQ_ALPHABET_SIZE from now {self.capacity} to (at least) {needed}"
        )
