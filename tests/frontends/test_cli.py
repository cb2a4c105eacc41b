"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import Mock, patch

import pytest
from lifesim.core.grid import DenseGrid
from lifesim.core.sparse import SparseSet
from lifesim.frontends.cli import (
    CLIGameOfLife,
    create_parser,
    main,
    prompt_options,
    validate_args,
)


def scripted_input(*answers):
    """Return an input() replacement that replays answers in order."""
    replies = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    return fake_input


class TestCLIGameOfLife:
    """Test cases for building simulations."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_glider_mode(self, mock_stdout):
        """Test that glider mode seeds a dense grid at (5, 5)."""
        cli = CLIGameOfLife()

        simulation = cli.build_simulation("glider", 40, 20, delay=0)

        assert isinstance(simulation.engine, DenseGrid)
        assert simulation.engine.shape == (40, 20)
        assert sorted(simulation.engine.live_cells()) == [(5, 7), (6, 5), (6, 7), (7, 6), (7, 7)]
        assert "Glider pattern loaded." in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_custom_pattern_and_offset(self, mock_stdout):
        """Test seeding a named pattern at a chosen offset."""
        cli = CLIGameOfLife()

        simulation = cli.build_simulation("glider", 10, 10, pattern="Block", pattern_x=0, pattern_y=0, delay=0)

        assert sorted(simulation.engine.live_cells()) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    @patch("sys.stdout", new_callable=StringIO)
    def test_sparse_mode(self, mock_stdout):
        """Test that sparse mode converts a glider at (1, 1)."""
        cli = CLIGameOfLife()

        simulation = cli.build_simulation("sparse", 40, 20, delay=0)

        assert isinstance(simulation.engine, SparseSet)
        assert sorted(simulation.engine.live_cells()) == [(1, 3), (2, 1), (2, 3), (3, 2), (3, 3)]
        assert "sparse algorithm" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_save_mode(self, mock_stdout, tmp_path):
        """Test that save mode schedules a snapshot."""
        cli = CLIGameOfLife()
        prefix = str(tmp_path / "run")

        simulation = cli.build_simulation("save", 40, 20, save_prefix=prefix, save_generation=3, delay=0)

        assert simulation.save_path == prefix + "_3"
        assert simulation.save_generation == 3

        simulation.run(max_generations=4)
        assert (tmp_path / "run_3").exists()

    @patch("sys.stdout", new_callable=StringIO)
    def test_load_mode(self, mock_stdout, tmp_path):
        """Test that load mode reads a snapshot."""
        source = DenseGrid(40, 20)
        source.set_cell(10, 10, True)
        path = tmp_path / "universe.txt"
        source.save(str(path))

        simulation = CLIGameOfLife().build_simulation("load", 40, 20, load_file=str(path), delay=0)

        assert list(simulation.engine.live_cells()) == [(10, 10)]

    @patch("sys.stdout", new_callable=StringIO)
    def test_load_failure_starts_empty(self, mock_stdout, tmp_path):
        """Test the fallback to an empty universe."""
        simulation = CLIGameOfLife().build_simulation(
            "load", 40, 20, load_file=str(tmp_path / "missing.txt"), delay=0
        )

        assert simulation.engine.population == 0
        assert "Failed to load file. Starting with empty universe." in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_load_without_filename_starts_empty(self, mock_stdout):
        """Test the empty-universe fallback when no file is named."""
        simulation = CLIGameOfLife().build_simulation("load", 40, 20, load_file="", delay=0)

        assert simulation.engine.population == 0
        assert "Failed to load file. Starting with empty universe." in mock_stdout.getvalue()

    def test_unknown_mode(self):
        """Test that an unknown mode is rejected."""
        with pytest.raises(ValueError):
            CLIGameOfLife().build_simulation("warp", 10, 10)

    def test_unknown_pattern(self):
        """Test that an unknown pattern is rejected."""
        with pytest.raises(ValueError):
            CLIGameOfLife().build_simulation("glider", 10, 10, pattern="NonExistentPattern")

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test pattern listing."""
        CLIGameOfLife().list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Glider: 3x3, 5 cells" in output
        assert "Still Life:" in output


class TestPromptOptions:
    """Test cases for the interactive menu."""

    def _args(self):
        return create_parser().parse_args([])

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_glider(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("1", ""))
        assert args.mode == "glider"

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_load(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("2", "universe.txt", ""))
        assert args.mode == "load"
        assert args.load == "universe.txt"

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_save(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("3", "run", "25", ""))
        assert args.mode == "save"
        assert args.save_prefix == "run"
        assert args.save_generation == 25

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_save_bad_generation(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("3", "run", "soon", ""))
        assert args.mode == "glider"
        assert "Invalid generation" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_sparse(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("4", ""))
        assert args.mode == "sparse"

    @patch("sys.stdout", new_callable=StringIO)
    def test_invalid_choice_falls_back_to_glider(self, mock_stdout):
        """Test the fallback for unknown menu input."""
        args = self._args()
        prompt_options(args, scripted_input("9", ""))
        assert args.mode == "glider"
        assert "Invalid choice. Starting with glider pattern." in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_load_empty_filename(self, mock_stdout):
        """Test that an empty filename still passes validation."""
        args = self._args()
        prompt_options(args, scripted_input("2", "", ""))
        assert args.mode == "load"
        assert args.load == ""
        assert validate_args(args) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_save_empty_prefix(self, mock_stdout):
        """Test that a missing prefix falls back to the glider."""
        args = self._args()
        prompt_options(args, scripted_input("3", "", "10", ""))
        assert args.mode == "glider"
        assert "No filename prefix given" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_choice_save_negative_generation(self, mock_stdout):
        args = self._args()
        prompt_options(args, scripted_input("3", "run", "-4", ""))
        assert args.mode == "glider"
        assert "Invalid generation '-4'" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_end_of_input_falls_back_to_glider(self, mock_stdout):
        """Test that closed stdin behaves like an invalid choice."""
        args = self._args()
        prompt_options(args, scripted_input())
        assert args.mode == "glider"


class TestArgumentParsing:
    """Test cases for argument parsing and validation."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])

        assert args.width == 40
        assert args.height == 20
        assert args.mode is None
        assert args.pattern == "Glider"
        assert args.pattern_x is None
        assert args.delay == 0.1
        assert args.max_generations is None
        assert not args.no_clear
        assert not args.verbose

    def test_invalid_mode_choice(self):
        """Test that argparse rejects unknown modes."""
        with patch("sys.stderr", new_callable=StringIO):
            with pytest.raises(SystemExit):
                create_parser().parse_args(["--mode", "warp"])

    def test_validate_valid_args(self):
        """Test validation of valid arguments."""
        args = create_parser().parse_args(["--mode", "glider"])
        assert validate_args(args) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_invalid_args(self, mock_stdout):
        """Test validation of invalid arguments."""
        args = argparse.Namespace(
            width=0,
            height=-1,
            delay=-0.5,
            max_generations=0,
            mode="save",
            load=None,
            save_prefix=None,
            save_generation=None,
        )

        assert validate_args(args) is False

        output = mock_stdout.getvalue()
        assert "Error: Invalid arguments:" in output
        assert "Width must be positive" in output
        assert "Height must be positive" in output
        assert "Delay must be non-negative" in output
        assert "Max generations must be positive" in output
        assert "--save-prefix" in output
        assert "--save-generation" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_load_requires_file(self, mock_stdout):
        args = create_parser().parse_args(["--mode", "load"])
        assert validate_args(args) is False
        assert "--load" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_negative_save_generation(self, mock_stdout):
        args = create_parser().parse_args(["--mode", "save", "--save-prefix", "x", "--save-generation", "-1"])
        assert validate_args(args) is False
        assert "Save generation must be non-negative" in mock_stdout.getvalue()


class TestMain:
    """Test cases for the main entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_list_patterns(self, mock_stdout):
        assert main(["--list-patterns"]) == 0
        assert "Available patterns:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_runs_bounded_simulation(self, mock_stdout):
        """Test a short non-interactive dense run."""
        exit_code = main(["--mode", "glider", "--delay", "0", "--max-generations", "3", "--no-clear", "-v"])

        output = mock_stdout.getvalue()
        assert exit_code == 0
        assert output.count("Press Ctrl+C to exit") == 3
        assert "generation = 2" in output
        assert "Simulation stopped after 3 generations" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_sparse(self, mock_stdout):
        exit_code = main(["--mode", "sparse", "--delay", "0", "-m", "2", "--no-clear"])

        assert exit_code == 0
        assert "(Sparse algorithm)" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_save(self, mock_stdout, tmp_path):
        prefix = str(tmp_path / "snap")
        exit_code = main(
            ["--mode", "save", "--save-prefix", prefix, "--save-generation", "1", "--delay", "0", "-m", "2", "--no-clear"]
        )

        assert exit_code == 0
        assert (tmp_path / "snap_1").read_text().startswith("40 20\n")

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_interactive(self, mock_stdout):
        """Test that the menu is shown when no mode is given."""
        with patch("builtins.input", side_effect=["1", ""]):
            exit_code = main(["--delay", "0", "-m", "1", "--no-clear"])

        assert exit_code == 0
        assert "Choose an option:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_menu_load_without_filename(self, mock_stdout):
        """Test that an empty filename at the menu starts an empty universe."""
        with patch("builtins.input", side_effect=["2", "", ""]):
            exit_code = main(["--delay", "0", "-m", "1", "--no-clear"])

        output = mock_stdout.getvalue()
        assert exit_code == 0
        assert "Failed to load file. Starting with empty universe." in output
        assert "Press Ctrl+C to exit" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_menu_save_without_prefix(self, mock_stdout, tmp_path):
        """Test that an empty prefix at the menu runs without saving."""
        with patch("builtins.input", side_effect=["3", "", "1", ""]):
            exit_code = main(["--delay", "0", "-m", "2", "--no-clear"])

        assert exit_code == 0
        assert "nothing will be saved" in mock_stdout.getvalue()
        assert "Glider pattern loaded." in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        assert main(["--mode", "glider", "--width", "0"]) == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unknown_pattern(self, mock_stdout):
        assert main(["--mode", "glider", "--pattern", "NonExistentPattern"]) == 1
        assert "Pattern 'NonExistentPattern' not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_keyboard_interrupt(self, mock_stdout):
        """Test that interrupting the loop is a normal exit."""
        with patch("lifesim.frontends.cli.Simulation.run", Mock(side_effect=KeyboardInterrupt)):
            exit_code = main(["--mode", "glider", "--delay", "0"])

        assert exit_code == 0
        assert "Simulation interrupted by user" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unexpected_error(self, mock_stdout):
        with patch("lifesim.frontends.cli.Simulation.run", Mock(side_effect=RuntimeError("boom"))):
            exit_code = main(["--mode", "glider", "--delay", "0"])

        assert exit_code == 1
        assert "Error: boom" in mock_stdout.getvalue()
