"""Terminal renderer for Conway's Game of Life."""

import sys
from typing import Optional, TextIO, Tuple

from ..core.engine import LifeEngine

ALIVE_GLYPH = "■"
DEAD_GLYPH = " "
CLEAR_SCREEN = "\033[2J\033[H"


class TerminalRenderer:
    """Draws frames of an engine as bordered text.

    Bounded engines are drawn in full. Unbounded engines are drawn through a
    fixed viewport anchored at the origin, so cells outside it are simulated
    but not shown.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        clear_screen: bool = True,
        sparse_viewport: Tuple[int, int] = (20, 20),
    ) -> None:
        """Initialize the renderer.

        Args:
            stream: Output stream (defaults to sys.stdout at render time)
            clear_screen: Whether to clear the terminal before each frame
            sparse_viewport: (width, height) shown for unbounded engines
        """
        self.stream = stream
        self.clear_screen = clear_screen
        self.sparse_viewport = sparse_viewport

    def viewport(self, engine: LifeEngine) -> Tuple[int, int]:
        """Get the (width, height) region drawn for an engine."""
        return engine.bounds or self.sparse_viewport

    def format_frame(self, engine: LifeEngine, generation: Optional[int] = None) -> str:
        """Format one frame.

        Args:
            engine: Engine to draw
            generation: Generation number to print under the frame, if any

        Returns:
            Frame text ending with a newline
        """
        width, height = self.viewport(engine)

        title = "Animation of Conway's Game of Life"
        if engine.bounds is None:
            title += " (Sparse algorithm)"

        lines = [title, "-" * (width + 2)]
        for y in range(height):
            row = "".join(ALIVE_GLYPH if engine.is_alive(x, y) else DEAD_GLYPH for x in range(width))
            lines.append(f"|{row}|")
        lines.append("-" * (width + 2))

        if generation is not None:
            lines.append(f"generation = {generation}")
        lines.append("Press Ctrl+C to exit")

        return "\n".join(lines) + "\n"

    def render(self, engine: LifeEngine, generation: Optional[int] = None) -> None:
        """Write a frame to the output stream."""
        stream = self.stream or sys.stdout
        if self.clear_screen:
            stream.write(CLEAR_SCREEN)
        stream.write(self.format_frame(engine, generation))
        stream.flush()
