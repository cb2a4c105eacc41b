"""Frontend interfaces for the Game of Life engines."""

from .terminal import TerminalRenderer
from .cli import CLIGameOfLife

__all__ = ["TerminalRenderer", "CLIGameOfLife"]
