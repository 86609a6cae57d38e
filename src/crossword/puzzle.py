"""
Puzzle Module - Generated puzzle (player grid + solution) and generation metrics.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .cell import Grid


@dataclass
class GenerationMetrics:
    """
    Statistics for one generate_puzzle() call.

    Attributes:
        attempts: Candidate constructions tried
        computation_time_ms: Time taken in milliseconds
        generator_name: Name of the generator that produced the puzzle
        used_fallback: True if the fixed fallback puzzle was returned
    """
    attempts: int = 0
    computation_time_ms: float = 0.0
    generator_name: str = ""
    used_fallback: bool = False


@dataclass(frozen=True)
class Puzzle:
    """
    A generated puzzle.

    The player grid and the solution grid have identical cell types and
    positions; they differ only in the values of input cells, which are
    empty in the grid and hold the answer in the solution.

    Attributes:
        grid: Player-facing grid with blank input cells
        solution: Same grid with every input cell filled
        difficulty: Difficulty the puzzle was requested for
        is_fallback: True for the fixed fallback puzzle
        metrics: Generation statistics
    """
    grid: Grid
    solution: Grid
    difficulty: str
    is_fallback: bool = False
    metrics: GenerationMetrics = field(default_factory=GenerationMetrics, compare=False)

    @property
    def size(self) -> int:
        """Grid side length."""
        return self.grid.size

    def solved_grid(self) -> Grid:
        """
        Player grid with every input cell filled from the solution.

        Returns:
            Grid suitable for validate_solution()
        """
        grid = self.grid
        for r, c in grid.empty_editable_positions():
            grid = grid.with_value(r, c, self.solution.cells[r][c].value)
        return grid

    def hint(self, current: Grid,
             rng: Optional[random.Random] = None) -> Optional[Tuple[Grid, Tuple[int, int]]]:
        """
        Reveal the solution value of one random empty input cell.

        Args:
            current: Player's current grid
            rng: Random source (fresh random.Random if None)

        Returns:
            (new grid, (row, col) revealed), or None if no cell is empty
        """
        empty = current.empty_editable_positions()
        if not empty:
            return None
        rng = rng or random.Random()
        row, col = rng.choice(empty)
        return current.with_value(row, col, self.solution.cells[row][col].value), (row, col)

    def to_dict(self) -> Dict[str, Any]:
        """Boundary encoding: difficulty plus both grids."""
        return {
            "difficulty": self.difficulty,
            "size": self.size,
            "grid": self.grid.to_dicts(),
            "solution": self.solution.to_dicts(),
        }
