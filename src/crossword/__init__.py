"""
Crossword Package - Generation and validation engine for math crossword puzzles.

A puzzle is an odd-sized square grid (5x5, 7x7 or 9x9) in which every even
row and every even column is an arithmetic equation. Some operands are
given; the rest are blank input cells for the player.

Public API:
    - generate_puzzle(): Build a puzzle for a difficulty
    - validate_solution(): Check every equation of a (partially) filled grid
    - evaluate(): Precedence-aware evaluation shared by both
    - Cell / Grid: Immutable grid representation
    - Puzzle: Player grid + solution pair
    - DifficultyConfig: Per-difficulty constraints
    - EquationStatus / ValidationResult: Validation output
    - PuzzleGenerator: Abstract base for generators
    - create_generator(): Factory function
    - get_generator_names(): List available generators

Usage:
    from src.crossword import generate_puzzle, validate_solution

    puzzle = generate_puzzle("medium", seed=7)

    # Player fills in the first blank cell
    row, col = puzzle.grid.empty_editable_positions()[0]
    grid = puzzle.grid.with_value(row, col, 12)

    result = validate_solution(grid)
    for eq in result.horizontal_equations:
        print(f"row {eq.index}: {eq.equation} valid={eq.is_valid}")
"""

# Core data structures
from .cell import Cell, CellType, Grid, parse_number, format_number
from .puzzle import Puzzle, GenerationMetrics
from .difficulty import (
    DifficultyConfig,
    DIFFICULTY_CONFIGS,
    get_difficulty_config,
    get_difficulty_names,
)
from .context import GenerationContext
from .errors import (
    CrosswordError,
    ArithmeticFailure,
    InvalidEquationInput,
    InvalidCellEntry,
    GenerationExhausted,
)

# Shared arithmetic
from .evaluator import evaluate, try_evaluate, apply_operator, results_match

# Validation
from .validator import (
    EquationStatus,
    ValidationResult,
    validate_solution,
    validate_line,
)

# Generator framework
from .base import PuzzleGenerator
from .factory import (
    create_generator,
    generator_for_size,
    get_generator_names,
    get_generator_info,
    register_generator,
)

# Import generators to register them
from . import generators
from .generators import build_fallback_puzzle

from .service import generate_puzzle

__all__ = [
    # Data structures
    "Cell",
    "CellType",
    "Grid",
    "Puzzle",
    "GenerationMetrics",
    "DifficultyConfig",
    "DIFFICULTY_CONFIGS",
    "GenerationContext",
    "parse_number",
    "format_number",
    "get_difficulty_config",
    "get_difficulty_names",
    # Errors
    "CrosswordError",
    "ArithmeticFailure",
    "InvalidEquationInput",
    "InvalidCellEntry",
    "GenerationExhausted",
    # Arithmetic
    "evaluate",
    "try_evaluate",
    "apply_operator",
    "results_match",
    # Validation
    "EquationStatus",
    "ValidationResult",
    "validate_solution",
    "validate_line",
    # Generators
    "PuzzleGenerator",
    "create_generator",
    "generator_for_size",
    "get_generator_names",
    "get_generator_info",
    "register_generator",
    "build_fallback_puzzle",
    # Operations
    "generate_puzzle",
]
