"""
Dual Equation Generator - 9x9 grids with two chained mini-equations per line.

Every even row and every even column reads

    v0 op1 v1 = r1 op2 v2 = r2

The generator works on a 5x5 value grid (one value per even row / even
column crossing) and expands it to the full 9x9 cell grid:

    value grid row k  ->  grid row 2k
    grid rows 1, 5    ->  vertical operators
    grid rows 3, 7    ->  vertical equals signs
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..base import GridBuilder, PuzzleGenerator
from ..cell import EQUALS
from ..context import GenerationContext
from ..difficulty import DifficultyConfig
from ..errors import ArithmeticFailure
from ..evaluator import ALL_OPERATORS, apply_operator
from ..factory import register_generator
from ..puzzle import Puzzle

logger = logging.getLogger(__name__)

VALUE_GRID_SIZE = 5

# Construction limits for the large grid
VALUE_CAP = 50
LARGE_GRID_MAX_NUMBER = 10
CONSTRUCTION_OPERATORS = ("+", "-")

# Given cells as value-grid row -> value indices
GIVEN_POSITIONS: Dict[int, Tuple[int, ...]] = {
    0: (1, 3),
    1: (4,),
    2: (0, 2, 4),
    3: (0, 3),
    4: (1,),
}

# Odd grid row -> index into a column's (op1, op2), or None for equals rows
VERTICAL_SEPARATOR_ROWS: Dict[int, Optional[int]] = {1: 0, 3: None, 5: 1, 7: None}


@register_generator
class DualEquationGenerator(PuzzleGenerator):
    """
    Constraint propagation over a 5x5 value grid.

    Algorithm:
        1. Rows 0 and 1: random dual rows [v0, v1, r1, v2, r2]
        2. Row 2: row0[c] op row1[c] per column, redrawn until row 2 also
           admits a horizontal dual equation
        3. Row 3: random dual row
        4. Row 4: derived from rows 2 and 3 like row 2
        5. Recover horizontal and vertical operators from the values
        6. Expand to 9x9

    Construction only uses + and - over a small range; operator recovery
    tries all of + - * /.
    """
    name = "dual"
    description = "Dual equations (9x9) - two chained mini-equations per row and column"
    grid_sizes = (9,)
    default_attempts = 1000

    def construction_config(self, config: DifficultyConfig) -> DifficultyConfig:
        """Narrow a difficulty config to the range and operators used for construction."""
        return config.narrowed(
            max_number=min(VALUE_CAP, LARGE_GRID_MAX_NUMBER, config.max_number),
            operators=CONSTRUCTION_OPERATORS,
            allow_negative_results=True,
        )

    def attempt(self, context: GenerationContext) -> Optional[Puzzle]:
        config = self.construction_config(context.config)

        value_grid = self.build_value_grid(context, config)
        if value_grid is None:
            logger.debug(
                f"No value grid after {context.value_grid_attempts} constructions"
            )
            return None

        horizontal_ops = [self.line_operators(value_grid[r, :]) for r in range(VALUE_GRID_SIZE)]
        vertical_ops = [self.line_operators(value_grid[:, c]) for c in range(VALUE_GRID_SIZE)]
        if any(ops is None for ops in horizontal_ops + vertical_ops):
            logger.debug(f"Operator recovery failed for value grid:\n{value_grid}")
            return None

        grid, solution = self._expand(value_grid, horizontal_ops, vertical_ops)
        logger.info("Generated 9x9 puzzle with dual mini-equations")
        return Puzzle(grid=grid, solution=solution, difficulty=context.difficulty)

    def build_value_grid(self, context: GenerationContext,
                         config: DifficultyConfig) -> Optional[np.ndarray]:
        """
        Construct a 5x5 value grid whose rows and columns all hold dual equations.

        Args:
            context: Generation context (random source, budgets)
            config: Narrowed construction config

        Returns:
            5x5 integer array, or None if the budget ran out
        """
        for _ in range(context.value_grid_attempts):
            grid = np.zeros((VALUE_GRID_SIZE, VALUE_GRID_SIZE), dtype=np.int64)

            for row in (0, 1):
                values = self._random_dual_row(context, config)
                if values is None:
                    break
                grid[row] = values
            else:
                row2 = self._derive_row(context, config, grid[0], grid[1])
                if row2 is None:
                    continue
                grid[2] = row2

                row3 = self._random_dual_row(context, config)
                if row3 is None:
                    continue
                grid[3] = row3

                row4 = self._derive_row(context, config, grid[2], grid[3])
                if row4 is None:
                    continue
                grid[4] = row4
                return grid

        return None

    def _random_dual_row(self, context: GenerationContext,
                         config: DifficultyConfig) -> Optional[List[int]]:
        v0 = context.random_number(config)
        v1 = context.random_number(config)
        v2 = context.random_number(config)
        try:
            r1 = apply_operator(v0, context.random_operator(config), v1, integer_division=True)
            r2 = apply_operator(r1, context.random_operator(config), v2, integer_division=True)
        except ArithmeticFailure:
            return None
        return [v0, v1, r1, v2, r2]

    def _derive_row(self, context: GenerationContext, config: DifficultyConfig,
                    upper: np.ndarray, lower: np.ndarray) -> Optional[List[int]]:
        """
        Derive a value row from the two rows above it.

        Each column gets upper[c] op lower[c] with a random op; draws repeat
        until the derived row also reads as a horizontal dual equation.
        """
        for _ in range(context.row_derivation_attempts):
            row = []
            try:
                for a, b in zip(upper, lower):
                    row.append(apply_operator(int(a), context.random_operator(config), int(b),
                                              integer_division=True))
            except ArithmeticFailure:
                continue
            if self.line_operators(row) is not None:
                return row
        return None

    def line_operators(self, line: Sequence[int]) -> Optional[Tuple[str, str]]:
        """
        Find (op1, op2) with v0 op1 v1 = r1 and r1 op2 v2 = r2.

        Args:
            line: Five values [v0, v1, r1, v2, r2]

        Returns:
            Operator pair, or None if either mini-equation has no operator
        """
        v0, v1, r1, v2, r2 = (int(value) for value in line)
        op1 = self.find_operator(v0, v1, r1, ALL_OPERATORS)
        if op1 is None:
            return None
        op2 = self.find_operator(r1, v2, r2, ALL_OPERATORS)
        if op2 is None:
            return None
        return op1, op2

    def _expand(self, value_grid: np.ndarray, horizontal_ops: List[Tuple[str, str]],
                vertical_ops: List[Tuple[str, str]]):
        size = VALUE_GRID_SIZE * 2 - 1
        builder = GridBuilder(size)

        for eq_row in range(VALUE_GRID_SIZE):
            row = eq_row * 2
            values = [int(value) for value in value_grid[eq_row]]
            op1, op2 = horizontal_ops[eq_row]
            separators = (op1, EQUALS, op2, EQUALS)
            for i, value in enumerate(values):
                builder.operand(row, i * 2, value, i in GIVEN_POSITIONS[eq_row])
                if i < len(separators):
                    builder.operator(row, i * 2 + 1, separators[i])

        for row, op_index in VERTICAL_SEPARATOR_ROWS.items():
            for i in range(VALUE_GRID_SIZE):
                symbol = EQUALS if op_index is None else vertical_ops[i][op_index]
                builder.operator(row, i * 2, symbol)

        return builder.build()
