"""Plain-text snapshots of a dense grid.

A snapshot is a header line ``<width> <height>`` followed by ``height`` rows
of ``width`` space-separated ``0``/``1`` tokens, top row first. Parsing is
token based, so any whitespace layout with the right token count loads.
"""

from typing import TYPE_CHECKING, List, Tuple
import numpy as np

if TYPE_CHECKING:
    from .grid import DenseGrid


class SnapshotError(ValueError):
    """Raised when snapshot text cannot be parsed."""


def format_snapshot(cells: np.ndarray) -> str:
    """Render a (width, height) cell array as snapshot text.

    Args:
        cells: Array indexed [x, y], non-zero for living cells

    Returns:
        Snapshot text ending with a newline
    """
    width, height = cells.shape
    lines = [f"{width} {height}"]
    for y in range(height):
        lines.append(" ".join("1" if cells[x, y] else "0" for x in range(width)))
    return "\n".join(lines) + "\n"


def _read_dimensions(tokens: List[str]) -> Tuple[int, int]:
    if len(tokens) < 2:
        raise SnapshotError("missing '<width> <height>' header")

    try:
        width, height = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise SnapshotError(f"invalid header '{tokens[0]} {tokens[1]}'") from None

    if width <= 0 or height <= 0:
        raise SnapshotError(f"dimensions must be positive, got {width}x{height}")

    return width, height


def _read_cells(tokens: List[str], width: int, height: int) -> np.ndarray:
    body = tokens[2:]
    if len(body) != width * height:
        raise SnapshotError(f"expected {width * height} cell values, found {len(body)}")

    try:
        values = [int(token) for token in body]
    except ValueError as e:
        raise SnapshotError(f"invalid cell value: {e}") from None

    # Only an explicit 1 marks a living cell
    rows = (np.array(values, dtype=np.int64) == 1).astype(np.int8).reshape(height, width)
    return np.ascontiguousarray(rows.T)


def parse_snapshot(text: str) -> Tuple[int, int, np.ndarray]:
    """Parse snapshot text.

    Args:
        text: Snapshot file contents

    Returns:
        Tuple of (width, height, cells) where cells is indexed [x, y]

    Raises:
        SnapshotError: If the header or cell data is malformed
    """
    tokens = text.split()
    width, height = _read_dimensions(tokens)
    return width, height, _read_cells(tokens, width, height)


def save_snapshot(grid: "DenseGrid", path: str) -> bool:
    """Write a grid's current generation to a file.

    Args:
        grid: Source grid
        path: Destination file path

    Returns:
        True on success, False if the file could not be written
    """
    try:
        with open(path, "w") as f:
            f.write(format_snapshot(grid.cells))
    except OSError:
        print(f"Error: Could not open file '{path}' for writing.")
        return False

    return True


def load_snapshot(grid: "DenseGrid", path: str) -> bool:
    """Load a snapshot file into a grid of matching dimensions.

    Nothing is written to the grid unless the whole file parses and its
    dimensions equal the grid's.

    Args:
        grid: Target grid
        path: Snapshot file path

    Returns:
        True on success, False on any failure
    """
    try:
        with open(path, "r") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError):
        print(f"Error: Could not open file '{path}' for reading.")
        return False

    tokens = text.split()
    try:
        width, height = _read_dimensions(tokens)
        if (width, height) != grid.shape:
            print(
                f"Error: File dimensions ({width}x{height}) don't match current universe "
                f"({grid.width}x{grid.height})."
            )
            print("Create a new grid with matching dimensions.")
            return False
        cells = _read_cells(tokens, width, height)
    except SnapshotError as e:
        print(f"Error: Malformed snapshot '{path}': {e}")
        return False

    grid.cells[:] = cells
    print(f"Universe loaded from '{path}' successfully.")
    return True
