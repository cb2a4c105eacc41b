"""Shared contract for Game of Life simulation engines."""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Tuple


class LifeEngine(ABC):
    """Base class for engines that evolve a universe under Conway's rules.

    An engine owns its own cell storage and exposes the operations a
    simulation loop and a renderer need: advance one generation, query a
    cell, and seed live cells.
    """

    @abstractmethod
    def advance(self) -> None:
        """Compute the next generation.

        The whole next state is computed from the current one before any of
        it becomes visible through ``is_alive``.
        """

    @abstractmethod
    def is_alive(self, x: int, y: int) -> bool:
        """Return whether the cell at (x, y) is alive."""

    @abstractmethod
    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of the cell at (x, y)."""

    @abstractmethod
    def live_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield the coordinates of every live cell."""

    @property
    @abstractmethod
    def population(self) -> int:
        """Number of living cells."""

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        """(width, height) of a bounded universe, or None if unbounded."""
        return None

    def stamp(self, cells: Iterable[Tuple[int, int]], offset_x: int = 0, offset_y: int = 0) -> None:
        """Set cells alive at the given offset.

        Args:
            cells: Relative (x, y) coordinates of live cells
            offset_x: Horizontal offset
            offset_y: Vertical offset
        """
        for x, y in cells:
            self.set_cell(x + offset_x, y + offset_y, True)
