"""Conway's Game of Life with dense and sparse simulation engines."""

__version__ = "0.1.0"

from .core.engine import LifeEngine
from .core.grid import DenseGrid
from .core.sparse import SparseSet, encode, decode
from .core.patterns import Pattern, PatternLibrary, setup_glider
from .core.simulation import Simulation

__all__ = [
    "LifeEngine",
    "DenseGrid",
    "SparseSet",
    "encode",
    "decode",
    "Pattern",
    "PatternLibrary",
    "setup_glider",
    "Simulation",
]
