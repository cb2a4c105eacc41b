"""Sparse engine storing only the coordinates of living cells."""

from collections import Counter
from typing import TYPE_CHECKING, FrozenSet, Iterator, Optional, Set, Tuple

from .engine import LifeEngine

if TYPE_CHECKING:
    from .grid import DenseGrid

COORD_MIN = -(2**31)
COORD_MAX = 2**31 - 1
_LOW_MASK = 0xFFFFFFFF

NEIGHBOR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


def in_range(x: int, y: int) -> bool:
    """Check whether (x, y) fits in signed 32-bit coordinates."""
    return COORD_MIN <= x <= COORD_MAX and COORD_MIN <= y <= COORD_MAX


def encode(x: int, y: int) -> int:
    """Pack a signed 32-bit coordinate pair into a single integer key.

    x occupies the high bits and y the low 32 bits in two's complement.

    Raises:
        ValueError: If either coordinate does not fit in 32 signed bits
    """
    if not in_range(x, y):
        raise ValueError(f"Coordinates ({x}, {y}) outside the signed 32-bit range")
    return (x << 32) | (y & _LOW_MASK)


def decode(key: int) -> Tuple[int, int]:
    """Unpack a key produced by encode() back into (x, y)."""
    y = key & _LOW_MASK
    if y > COORD_MAX:
        y -= 1 << 32
    return (key >> 32, y)


class SparseSet(LifeEngine):
    """Unbounded universe holding the set of live-cell keys.

    Absence from the set means dead. The universe grows in any direction as
    patterns evolve; only live cells and their neighbors are visited per
    generation.
    """

    def __init__(self) -> None:
        self._live: Set[int] = set()

    @classmethod
    def from_dense(cls, grid: "DenseGrid") -> "SparseSet":
        """Create a sparse engine seeded with a dense grid's live cells."""
        engine = cls()
        engine.prepare_from_dense(grid)
        return engine

    @property
    def keys(self) -> FrozenSet[int]:
        """Encoded keys of all living cells."""
        return frozenset(self._live)

    @property
    def population(self) -> int:
        return len(self._live)

    def insert(self, x: int, y: int) -> None:
        """Mark (x, y) alive."""
        self._live.add(encode(x, y))

    def discard(self, x: int, y: int) -> None:
        """Mark (x, y) dead."""
        self._live.discard(encode(x, y))

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        if alive:
            self.insert(x, y)
        else:
            self.discard(x, y)

    def is_alive(self, x: int, y: int) -> bool:
        if not in_range(x, y):
            return False
        return encode(x, y) in self._live

    def clear(self) -> None:
        """Remove every living cell."""
        self._live.clear()

    def prepare_from_dense(self, grid: "DenseGrid") -> None:
        """Copy every living cell of a dense grid into this engine.

        Meant to be called once while setting up a simulation.
        """
        for x, y in grid.live_cells():
            self.insert(x, y)

    def live_cells(self) -> Iterator[Tuple[int, int]]:
        for key in self._live:
            yield decode(key)

    def advance(self) -> None:
        """Apply Conway's rules to produce the next generation.

        Every live cell adds one to the count of each of its eight
        neighbors. Cells with a count of 3, or 2 while already alive, make
        up the next generation, which replaces the current set in one step.
        Coordinates beyond the 32-bit range count as permanently dead.
        """
        neighbor_counts: Counter = Counter()
        for key in self._live:
            x, y = decode(key)
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = x + dx, y + dy
                if in_range(nx, ny):
                    neighbor_counts[encode(nx, ny)] += 1

        next_live = {
            key
            for key, count in neighbor_counts.items()
            if count == 3 or (count == 2 and key in self._live)
        }
        self._live = next_live

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        if not self._live:
            return None

        xs, ys = zip(*self.live_cells())
        return (min(xs), min(ys), max(xs), max(ys))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseSet):
            return False
        return self._live == other._live
