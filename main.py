"""
Math Crossword - Command Line Entry Point

Generates puzzles and validates filled grids as JSON.

Example:
    python main.py generate --difficulty medium --seed 7
    python main.py generate --difficulty hard --count 5 --output puzzles.json
    python main.py show --difficulty easy --solution
    python main.py validate filled_grid.json
    python main.py generators
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Any, List, Optional

from src.crossword import (
    generate_puzzle,
    validate_solution,
    get_difficulty_config,
    get_difficulty_names,
    get_generator_info,
)
from src.settings import load_settings, attempt_budget


logger = logging.getLogger(__name__)


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    """
    Configure logging - output to stderr and optionally a file.

    Args:
        level: Logging level name (DEBUG, INFO, ...)
        log_file: Optional path of a log file (overwritten each run)
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]  # Console output (stderr)
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _generate(args, settings) -> List[Any]:
    """Generate args.count puzzles using configured budgets."""
    difficulty = args.difficulty or settings["default_difficulty"]
    size = get_difficulty_config(difficulty).grid_size

    puzzles = []
    for i in range(args.count):
        seed = None if args.seed is None else args.seed + i
        puzzles.append(generate_puzzle(
            difficulty,
            seed=seed,
            max_attempts=attempt_budget(settings, size),
            value_grid_attempts=settings["value_grid_attempts"],
            row_derivation_attempts=settings["row_derivation_attempts"],
        ))
    return puzzles


def cmd_generate(args, settings) -> int:
    """Handle the generate command."""
    puzzles = _generate(args, settings)
    payload = [p.to_dict() for p in puzzles]
    text = json.dumps(payload[0] if len(payload) == 1 else payload, indent=2)

    if args.output:
        Path(args.output).write_text(text, encoding='utf-8')
        logger.info(f"Wrote {len(puzzles)} puzzle(s) to {args.output}")
    else:
        print(text)
    return 0


def cmd_show(args, settings) -> int:
    """Handle the show command."""
    args.count = 1
    puzzle = _generate(args, settings)[0]
    print(f"{puzzle.difficulty} ({puzzle.size}x{puzzle.size})"
          f"{' [fallback]' if puzzle.is_fallback else ''}")
    print(puzzle.grid.render())
    if args.solution:
        print()
        print(puzzle.solution.render())
    return 0


def cmd_validate(args, settings) -> int:
    """Handle the validate command. Exit code 0 if the grid is valid."""
    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 2

    grid = data.get("grid", []) if isinstance(data, dict) else data
    result = validate_solution(grid)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.is_valid else 1


def cmd_generators(args, settings) -> int:
    """Handle the generators command: list registered generators."""
    for info in get_generator_info():
        sizes = ", ".join(f"{size}x{size}" for size in info["grid_sizes"])
        print(f"{info['name']:<10} {sizes:<12} {info['description']}")
    return 0


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Math Crossword - generate and validate arithmetic crossword puzzles"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Settings JSON file (default: crossword_config.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (overrides saved log level)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("generate", "Generate puzzles as JSON"),
                            ("show", "Print a puzzle as text")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--difficulty", "-D",
            choices=get_difficulty_names(),
            default=None,
            help="Puzzle difficulty (default from settings)"
        )
        sub.add_argument("--seed", "-s", type=int, default=None, help="Random seed")
        if name == "generate":
            sub.add_argument("--count", "-n", type=int, default=1, help="Number of puzzles")
            sub.add_argument("--output", "-o", default=None, help="Write JSON here instead of stdout")
        else:
            sub.add_argument("--solution", action="store_true", help="Also print the solution")

    validate = subparsers.add_parser("validate", help="Validate a filled grid JSON file")
    validate.add_argument("file", help='JSON file holding {"grid": [...]} or a bare grid')

    subparsers.add_parser("generators", help="List the registered puzzle generators")

    return parser.parse_args(argv)


COMMANDS = {
    "generate": cmd_generate,
    "show": cmd_show,
    "validate": cmd_validate,
    "generators": cmd_generators,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Math Crossword command line."""
    args = parse_args(argv)
    settings = load_settings(args.config)

    level = "DEBUG" if args.debug else settings.get("log_level", "INFO")
    configure_logging(level, settings.get("log_file"))

    return COMMANDS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
