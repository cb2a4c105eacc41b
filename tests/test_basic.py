"""Basic tests for the lifesim package."""

from lifesim import DenseGrid, PatternLibrary, Simulation, SparseSet, decode, encode, setup_glider


def test_grid_creation():
    """Test basic grid creation and cell operations."""
    grid = DenseGrid(10, 10)
    assert grid.width == 10
    assert grid.height == 10
    assert grid.is_alive(0, 0) is False

    grid.set_cell(5, 5, True)
    assert grid.is_alive(5, 5) is True


def test_sparse_creation():
    """Test basic sparse engine creation."""
    engine = SparseSet()
    engine.insert(-3, 8)
    assert engine.is_alive(-3, 8) is True
    assert decode(encode(-3, 8)) == (-3, 8)


def test_pattern_library():
    """Test pattern library has some patterns."""
    patterns = PatternLibrary().list_patterns()
    assert len(patterns) > 0
    assert "Glider" in patterns


def test_simulation_with_either_engine():
    """Test that one loop drives both engines the same way."""
    grid = DenseGrid(20, 20)
    setup_glider(grid, 3, 3)
    sparse = SparseSet.from_dense(grid)

    Simulation(grid, delay=0).run(max_generations=8)
    Simulation(sparse, delay=0).run(max_generations=8)

    assert set(grid.live_cells()) == set(sparse.live_cells())
