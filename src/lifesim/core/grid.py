"""Dense fixed-size grid engine."""

from typing import Iterator, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .engine import LifeEngine
from .snapshot import load_snapshot, save_snapshot


class DenseGrid(LifeEngine):
    """A bounded width x height universe storing every cell explicitly.

    Cells live in numpy arrays indexed ``[x, y]``. Two buffers of identical
    shape are kept: the current generation and a scratch buffer that
    receives the next generation before the two are swapped. Cells beyond
    the edges are permanently dead; there is no wraparound.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize an all-dead grid.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells = np.zeros((width, height), dtype=np.int8)
        self._scratch = np.zeros((width, height), dtype=np.int8)

        # Reused for every neighbor count
        self._torch_input = torch.zeros(1, 1, height, width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def cells(self) -> np.ndarray:
        """Get the current cell array."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        return self.shape

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.sum(self._cells > 0))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_alive(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead or out of bounds
        """
        if not self.in_bounds(x, y):
            return False
        return bool(self._cells[x, y])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Coordinates outside the grid are ignored so that patterns stamped
        near an edge are clipped rather than rejected.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive
        """
        if not self.in_bounds(x, y):
            return
        self._cells[x, y] = 1 if alive else 0

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(0)

    def randomize(self, probability: float = 0.1, seed: Optional[int] = None) -> None:
        """Randomly populate the grid.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for a reproducible layout
        """
        rng = np.random.default_rng(seed)
        mask = rng.random((self.width, self.height)) < probability
        self._cells[mask] = 1
        self._cells[~mask] = 0

    def copy_from(self, other: "DenseGrid") -> None:
        """Copy cell states from another grid.

        Args:
            other: Source grid to copy from

        Raises:
            ValueError: If grids have different dimensions
        """
        if other.shape != self.shape:
            raise ValueError(f"Grid dimensions don't match: {other.shape} vs {self.shape}")

        self._cells[:] = other._cells

    def count_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        Neighbors outside the grid count as dead.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dy in [-1, 0, 1]:
            for dx in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    count += int(self._cells[nx, ny])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch-accelerated convolution.

        Returns:
            Array of shape (width, height) with neighbor counts for each cell
        """
        # Torch expects (height, width), so transpose on the way in and out
        self._torch_input[0, 0] = torch.from_numpy((self._cells.T > 0).astype(np.float32))

        # Zero padding keeps the edges dead
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8).T

    def advance(self) -> None:
        """Apply Conway's rules to produce the next generation.

        The next generation is written into the scratch buffer and swapped in
        only after every cell has been computed.
        """
        neighbor_counts = self.count_all_neighbors()
        alive = self._cells > 0

        # Survival: live cell with 2 or 3 neighbors
        survive = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))

        # Birth: dead cell with exactly 3 neighbors
        born = ~alive & (neighbor_counts == 3)

        self._scratch[:] = survive | born
        self._cells, self._scratch = self._scratch, self._cells

    def live_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) coordinates of living cells in column-major order."""
        for x, y in np.argwhere(self._cells > 0):
            yield (int(x), int(y))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living_coords = np.where(self._cells > 0)
        if len(living_coords[0]) == 0:
            return None

        min_x, max_x = int(living_coords[0].min()), int(living_coords[0].max())
        min_y, max_y = int(living_coords[1].min()), int(living_coords[1].max())

        return (min_x, min_y, max_x, max_y)

    def save(self, path: str) -> bool:
        """Write the current generation as a snapshot file.

        Returns:
            True on success, False if the file could not be written
        """
        return save_snapshot(self, path)

    def load(self, path: str) -> bool:
        """Replace the current generation with a snapshot file.

        The grid is left untouched if the file cannot be read, is malformed,
        or declares different dimensions.

        Returns:
            True on success, False otherwise
        """
        return load_snapshot(self, path)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, DenseGrid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                row.append("*" if self._cells[x, y] else ".")
            result.append("".join(row))
        return "\n".join(result)
