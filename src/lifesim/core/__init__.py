"""Core cellular automata logic."""

from .engine import LifeEngine
from .grid import DenseGrid
from .sparse import SparseSet, encode, decode
from .snapshot import SnapshotError, load_snapshot, save_snapshot
from .patterns import GLIDER, Pattern, PatternLibrary, setup_glider
from .simulation import Simulation

__all__ = [
    "LifeEngine",
    "DenseGrid",
    "SparseSet",
    "encode",
    "decode",
    "SnapshotError",
    "load_snapshot",
    "save_snapshot",
    "GLIDER",
    "Pattern",
    "PatternLibrary",
    "setup_glider",
    "Simulation",
]
