"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
from typing import Callable, Optional

from ..core.engine import LifeEngine
from ..core.grid import DenseGrid
from ..core.patterns import PatternLibrary
from ..core.simulation import Simulation
from ..core.sparse import SparseSet
from .terminal import TerminalRenderer

MODES = ["glider", "load", "save", "sparse"]
MENU_CHOICES = {"1": "glider", "2": "load", "3": "save", "4": "sparse"}

DEFAULT_OFFSET = (5, 5)
SPARSE_DEFAULT_OFFSET = (1, 1)


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self) -> None:
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_simulation(
        self,
        mode: str,
        width: int,
        height: int,
        pattern: str = "Glider",
        pattern_x: Optional[int] = None,
        pattern_y: Optional[int] = None,
        load_file: Optional[str] = None,
        save_prefix: Optional[str] = None,
        save_generation: Optional[int] = None,
        delay: float = 0.1,
        renderer: Optional[TerminalRenderer] = None,
        verbose: bool = False,
    ) -> Simulation:
        """Set up an engine for the chosen startup mode.

        Args:
            mode: One of 'glider', 'load', 'save' or 'sparse'
            width: Grid width
            height: Grid height
            pattern: Name of the pattern to seed with
            pattern_x: X offset for pattern placement (mode default if None)
            pattern_y: Y offset for pattern placement (mode default if None)
            load_file: Snapshot to load in 'load' mode
            save_prefix: Snapshot name prefix in 'save' mode
            save_generation: Generation to save in 'save' mode
            delay: Pause between generations in seconds
            renderer: Renderer used by the loop
            verbose: Whether to print progress information

        Returns:
            Simulation ready to run

        Raises:
            ValueError: If the mode or pattern is unknown
        """
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'")

        default_x, default_y = SPARSE_DEFAULT_OFFSET if mode == "sparse" else DEFAULT_OFFSET
        offset_x = default_x if pattern_x is None else pattern_x
        offset_y = default_y if pattern_y is None else pattern_y

        grid = DenseGrid(width, height)
        engine: LifeEngine = grid

        if mode == "load":
            if not load_file or not grid.load(load_file):
                print("Failed to load file. Starting with empty universe.")
        else:
            seed = self.pattern_library.get_pattern(pattern)
            if seed is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            seed.apply_to(grid, offset_x, offset_y)

            if mode == "sparse":
                engine = SparseSet.from_dense(grid)
                print(f"{seed.name} pattern loaded for sparse algorithm.")
            else:
                print(f"{seed.name} pattern loaded.")

        simulation = Simulation(engine, renderer=renderer, delay=delay, verbose=verbose)

        if mode == "save":
            path = simulation.schedule_save(save_prefix, save_generation)
            if verbose:
                print(f"Generation {save_generation} will be saved to '{path}'")

        return simulation

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def _ask(prompt: str, input_func: Callable[[str], str]) -> str:
    try:
        return input_func(prompt).strip()
    except EOFError:
        return ""


def prompt_options(args: argparse.Namespace, input_func: Optional[Callable[[str], str]] = None) -> None:
    """Fill in the startup mode from an interactive menu.

    Args:
        args: Parsed arguments, updated in place
        input_func: Function used to read a line of input (defaults to input)
    """
    input_func = input_func or input

    print("Conway's Game of Life with File I/O")
    print("====================================\n")
    print("Choose an option:")
    print("1. Start with glider pattern")
    print("2. Load universe from file")
    print("3. Start with glider pattern and save a later generation")
    print("4. Using sparse algorithm")

    choice = _ask("Enter choice (1-4): ", input_func)
    mode = MENU_CHOICES.get(choice)
    if mode is None:
        print("Invalid choice. Starting with glider pattern.")
        mode = "glider"

    if mode == "load":
        args.load = _ask("Enter filename to load: ", input_func)
    elif mode == "save":
        args.save_prefix = _ask("Enter prefix of the filename to save: ", input_func)
        generation = _ask("Enter the generation number to save: ", input_func)
        try:
            args.save_generation = int(generation)
        except ValueError:
            args.save_generation = None

        if not args.save_prefix:
            print("Warning: No filename prefix given, nothing will be saved")
            mode = "glider"
        elif args.save_generation is None or args.save_generation < 0:
            print(f"Warning: Invalid generation '{generation}', nothing will be saved")
            mode = "glider"

    args.mode = mode
    _ask("\nPress Enter to continue...", input_func)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Animate Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Choose a startup option from the menu
  lifesim-cli

  # Run a glider on the default 40x20 grid
  lifesim-cli --mode glider

  # Load a snapshot into a 40x20 grid
  lifesim-cli --mode load --load universe.txt

  # Save generation 25 to run_25
  lifesim-cli --mode save --save-prefix run --save-generation 25

  # Run the sparse engine for 200 generations without delay
  lifesim-cli --mode sparse --max-generations 200 --delay 0
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=40, help="Grid width (default: 40)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Grid height (default: 20)")

    # Startup configuration
    parser.add_argument(
        "--mode",
        choices=MODES,
        help="Startup option; shows an interactive menu when omitted",
    )

    parser.add_argument(
        "--load",
        type=str,
        help="Snapshot file to load in 'load' mode",
    )

    parser.add_argument(
        "--save-prefix",
        type=str,
        help="Snapshot name prefix in 'save' mode (file is <prefix>_<generation>)",
    )

    parser.add_argument(
        "--save-generation",
        type=int,
        help="Generation to save in 'save' mode",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        default="Glider",
        help="Pattern to seed with (default: Glider)",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        help="X offset for pattern placement (default: 5, or 1 in sparse mode)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        help="Y offset for pattern placement (default: 5, or 1 in sparse mode)",
    )

    # Simulation configuration
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=0.1,
        help="Seconds between generations (default: 0.1)",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        help="Stop after this many generations (default: run until interrupted)",
    )

    # Output configuration
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Do not clear the terminal between frames",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.max_generations is not None and args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.mode == "load" and args.load is None:
        errors.append("Load mode requires a snapshot file (--load)")

    if args.mode == "save":
        if not args.save_prefix:
            errors.append("Save mode requires a filename prefix (--save-prefix)")
        if args.save_generation is None:
            errors.append("Save mode requires a generation number (--save-generation)")
        elif args.save_generation < 0:
            errors.append("Save generation must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    try:
        if args.mode is None:
            prompt_options(args)

        if not validate_args(args):
            return 1

        if args.mode != "load" and cli.pattern_library.get_pattern(args.pattern) is None:
            available = cli.pattern_library.list_patterns()
            print(f"Error: Pattern '{args.pattern}' not found")
            print(f"Available patterns: {', '.join(available)}")
            print("Use --list-patterns to see detailed information")
            return 1

        simulation = cli.build_simulation(
            mode=args.mode,
            width=args.width,
            height=args.height,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            load_file=args.load,
            save_prefix=args.save_prefix,
            save_generation=args.save_generation,
            delay=args.delay,
            renderer=TerminalRenderer(clear_screen=not args.no_clear),
            verbose=args.verbose,
        )

        final_generation = simulation.run(args.max_generations)

        if args.verbose:
            print(f"\nSimulation stopped after {final_generation} generations")
            print(f"Final population: {simulation.population}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
