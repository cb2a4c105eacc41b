"""Simulation loop driving an engine one generation per tick."""

import time
from typing import Any, Optional

from .engine import LifeEngine
from .grid import DenseGrid


class Simulation:
    """Runs an engine through successive generations.

    Every tick renders the current generation, pauses, saves a snapshot if
    this is the scheduled save generation, and then advances the engine.
    The frame and the snapshot for generation N therefore always show
    generation N.
    """

    IDLE = "idle"
    RUNNING = "running"
    SAVING = "saving"

    def __init__(
        self,
        engine: LifeEngine,
        renderer: Optional[Any] = None,
        delay: float = 0.1,
        verbose: bool = False,
    ) -> None:
        """Initialize the simulation.

        Args:
            engine: Engine to advance
            renderer: Object with a ``render(engine, generation)`` method, or None
            delay: Pause between generations in seconds (0 disables it)
            verbose: Whether to print progress messages
        """
        self.engine = engine
        self.renderer = renderer
        self.delay = delay
        self.verbose = verbose
        self.save_path: Optional[str] = None
        self.save_generation: Optional[int] = None
        self.last_save_ok: Optional[bool] = None
        self._generation = 0
        self._state = self.IDLE
        self._stop_requested = False

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.engine.population

    @property
    def state(self) -> str:
        """One of 'idle', 'running' or 'saving'."""
        return self._state

    def set_save_target(self, path: str, generation: int) -> None:
        """Save a snapshot to ``path`` when ``generation`` is reached."""
        self.save_path = path
        self.save_generation = generation

    def schedule_save(self, prefix: str, generation: int) -> str:
        """Save a snapshot named ``<prefix>_<generation>`` at that generation.

        Returns:
            The snapshot path that will be written
        """
        path = f"{prefix}_{generation}"
        self.set_save_target(path, generation)
        return path

    def _save_due(self) -> bool:
        return self.save_path is not None and self._generation == self.save_generation

    def _save(self) -> None:
        if not isinstance(self.engine, DenseGrid):
            # Snapshots only describe bounded grids
            if self.verbose:
                print("Warning: Snapshot saving is not supported for the sparse engine, skipping")
            return

        self._state = self.SAVING
        self.last_save_ok = self.engine.save(self.save_path)
        if self.verbose and self.last_save_ok:
            print(f"Saved generation {self._generation} to '{self.save_path}'")
        self._state = self.RUNNING

    def tick(self) -> None:
        """Render, pause, save if due, then advance one generation."""
        self._state = self.RUNNING

        if self.renderer is not None:
            self.renderer.render(self.engine, self._generation)

        if self.delay > 0:
            time.sleep(self.delay)

        if self._save_due():
            self._save()

        self.engine.advance()
        self._generation += 1

    def run(self, max_generations: Optional[int] = None) -> int:
        """Tick until stopped.

        Args:
            max_generations: Number of ticks to run, or None to run until
                stop() is called or the process is interrupted

        Returns:
            Generation number after the last tick
        """
        self._stop_requested = False
        ticks = 0
        try:
            while not self._stop_requested and (max_generations is None or ticks < max_generations):
                self.tick()
                ticks += 1
        finally:
            self._state = self.IDLE

        return self._generation

    def stop(self) -> None:
        """Ask a running loop to finish after the current tick."""
        self._stop_requested = True
