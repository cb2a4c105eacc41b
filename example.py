#!/usr/bin/env python3
"""
Example usage of the lifesim package.
"""

from lifesim import DenseGrid, SparseSet, setup_glider


def main():
    """Run a glider on both engines and compare them."""
    grid = DenseGrid(20, 20)
    setup_glider(grid, 2, 2)
    sparse = SparseSet.from_dense(grid)

    print("Initial state:")
    print(grid)
    print(f"Population: {grid.population}")
    print()

    for generation in range(1, 9):
        grid.advance()
        sparse.advance()
        print(f"Generation {generation}:")
        print(grid)
        print(f"Engines agree: {set(grid.live_cells()) == set(sparse.live_cells())}")
        print()

    # The sparse engine keeps going past where a dense grid would clip
    for _ in range(100):
        sparse.advance()
    print(f"Sparse glider bounding box after 108 generations: {sparse.get_bounding_box()}")


if __name__ == "__main__":
    main()
