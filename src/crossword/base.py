"""
Base Generator Module - Abstract base class for puzzle generators.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .cell import Cell, Grid
from .context import GenerationContext
from .evaluator import try_evaluate
from .puzzle import Puzzle


class GridBuilder:
    """
    Fills the player grid and the solution grid side by side.

    Every cell starts blocked; operands and operators are placed into both
    grids at once so the two always share cell types and positions.
    """

    def __init__(self, size: int):
        self.size = size
        self._grid: List[List[Cell]] = [
            [Cell.blocked(r, c) for c in range(size)] for r in range(size)
        ]
        self._solution: List[List[Cell]] = [
            [Cell.blocked(r, c) for c in range(size)] for r in range(size)
        ]

    def operand(self, row: int, col: int, value: int, given: bool) -> None:
        """
        Place an operand.

        Args:
            row: Row index
            col: Column index
            value: Correct value
            given: Pre-filled number cell if True, blank input cell otherwise
        """
        if given:
            self._grid[row][col] = Cell.number(row, col, value)
            self._solution[row][col] = Cell.number(row, col, value)
        else:
            self._grid[row][col] = Cell.input(row, col)
            self._solution[row][col] = Cell.input(row, col, value)

    def operator(self, row: int, col: int, symbol: str) -> None:
        """Place an operator or equals sign in both grids."""
        self._grid[row][col] = Cell.operator(row, col, symbol)
        self._solution[row][col] = Cell.operator(row, col, symbol)

    def build(self) -> Tuple[Grid, Grid]:
        """
        Freeze both grids.

        Returns:
            (player grid, solution grid)
        """
        return Grid.from_2d_list(self._grid), Grid.from_2d_list(self._solution)


class PuzzleGenerator(ABC):
    """
    Abstract base class for all puzzle generators.

    Subclasses implement attempt(), which makes one randomized construction
    and returns None when the candidate is rejected. The orchestrating
    generate_puzzle() calls it in a bounded loop.

    Attributes:
        name: Short identifier for the generator
        description: Human-readable description
        grid_sizes: Grid sizes this generator builds
        default_attempts: Attempt budget used when none is configured
    """
    name: str = "base"
    description: str = "Base generator"
    grid_sizes: Tuple[int, ...] = ()
    default_attempts: int = 100

    @abstractmethod
    def attempt(self, context: GenerationContext) -> Optional[Puzzle]:
        """
        Make one randomized construction.

        Args:
            context: Generation context with config and random source

        Returns:
            Puzzle, or None if this attempt failed
        """
        pass

    def attempts_for(self, size: int) -> int:
        """Attempt budget for a grid size."""
        return self.default_attempts

    def find_operators(self, values: Sequence[int], result: int,
                       operators: Sequence[str]) -> Optional[List[str]]:
        """
        Search for operators making a chained equation exact.

        Tries every assignment from the operator set by plain recursive
        enumeration, in operator-set order.

        Args:
            values: Operands left of the equals sign
            result: Required result
            operators: Operator alphabet to draw from

        Returns:
            Operators (one fewer than values), or None if none works

        Example:
            find_operators([2, 3, 4], 14, "+-*")  # ['+', '*']
        """
        needed = len(values) - 1

        def search(chosen: List[str]) -> Optional[List[str]]:
            if len(chosen) == needed:
                computed = try_evaluate(values, chosen, integer_division=True)
                return list(chosen) if computed is not None and computed == result else None
            for op in operators:
                found = search(chosen + [op])
                if found is not None:
                    return found
            return None

        return search([])

    def find_operator(self, left: int, right: int, result: int,
                      operators: Sequence[str]) -> Optional[str]:
        """Single-operator form of find_operators()."""
        found = self.find_operators([left, right], result, operators)
        return found[0] if found else None
