"""
Chained Equation Generator - 5x5 and 7x7 grids with one equation per line.

Layout for a 7x7 grid (v = operand, o = operator, # = blocked):

    v o v o v o v        row 0: first equation row
    o # o # o # o        row 1: vertical operators
    v o v o v o v
    o # o # o # o
    v o v o v o v
    = # = # = # =        last odd row: vertical equals signs
    v o v o v o v        row 6: last equation row

The last operand of every row and column is its result.
"""

import logging
from typing import List, Optional, Tuple

from ..base import GridBuilder, PuzzleGenerator
from ..cell import EQUALS
from ..context import GenerationContext
from ..errors import ArithmeticFailure
from ..evaluator import evaluate
from ..factory import register_generator
from ..puzzle import Puzzle

logger = logging.getLogger(__name__)

# Vertical paths only step with these
PATH_OPERATORS = ("+", "-")


@register_generator
class ChainedEquationGenerator(PuzzleGenerator):
    """
    Constrained construction for single-equation grids.

    Algorithm:
        1. Draw the first and last equation rows at random
        2. Connect each column's top value to its bottom value with a
           path of +/- steps, which fixes every middle-row value
        3. Search an operator assignment for each middle row
        4. Assemble both grids and mark the given cells
    """
    name = "chained"
    description = "Chained equations (5x5, 7x7) - one equation per row and column"
    grid_sizes = (5, 7)
    default_attempts = 100

    ATTEMPT_BUDGETS = {5: 100, 7: 300}

    def attempts_for(self, size: int) -> int:
        return self.ATTEMPT_BUDGETS.get(size, self.default_attempts)

    def attempt(self, context: GenerationContext) -> Optional[Puzzle]:
        config = context.config
        size = config.grid_size
        num_values = size // 2 + 1
        middle_count = num_values - 2

        first = self._random_row(context, num_values)
        last = self._random_row(context, num_values)
        if first is None or last is None:
            return None
        first_values, first_ops = first
        last_values, last_ops = last

        # Column paths fix the middle-row values
        vertical_ops: List[List[str]] = []
        middle_rows: List[List[int]] = [[] for _ in range(middle_count)]
        for col in range(num_values):
            path = self._vertical_path(context, first_values[col], last_values[col], middle_count)
            if path is None:
                logger.debug(f"Column {col}: no bounded path {first_values[col]} -> {last_values[col]}")
                return None
            steps, ops = path
            vertical_ops.append(ops)
            for k, value in enumerate(steps):
                middle_rows[k].append(value)

        all_values = [first_values] + middle_rows + [last_values]
        all_ops = [first_ops]
        for values in middle_rows:
            ops = self.find_operators(values[:-1], values[-1], config.operators)
            if ops is None:
                logger.debug(f"No operators for middle row {values}")
                return None
            all_ops.append(ops)
        all_ops.append(last_ops)

        grid, solution = self._assemble(size, all_values, all_ops, vertical_ops)
        logger.info(f"Generated {size}x{size} puzzle with {num_values} equation rows")
        return Puzzle(grid=grid, solution=solution, difficulty=context.difficulty)

    def _random_row(self, context: GenerationContext,
                    num_values: int) -> Optional[Tuple[List[int], List[str]]]:
        """
        Draw a random equation row and compute its result.

        Args:
            context: Generation context
            num_values: Operands including the result

        Returns:
            (values including result, operators), or None if rejected
        """
        config = context.config
        values = [context.random_number() for _ in range(num_values - 1)]
        ops = [context.random_operator() for _ in range(num_values - 2)]
        try:
            result = evaluate(values, ops, integer_division=True)
        except ArithmeticFailure as e:
            logger.debug(f"Rejected row {values} {ops}: {e}")
            return None

        if result < 0 and not config.allow_negative_results:
            return None
        if abs(result) > config.max_result:
            return None
        return values + [int(result)], ops

    def _vertical_path(self, context: GenerationContext, top: int, bottom: int,
                       steps: int) -> Optional[Tuple[List[int], List[str]]]:
        """
        Build top op1 s1 op2 s2 ... = bottom using +/- steps.

        Intermediate steps move roughly an equal share of the remaining
        distance in a random direction; the final step lands on bottom.

        Args:
            context: Generation context
            top: Value in the first equation row
            bottom: Value in the last equation row
            steps: Number of middle rows

        Returns:
            (step values, step operators), or None if the final step is
            out of bounds
        """
        config = context.config
        current = top
        values: List[int] = []
        ops: List[str] = []

        for step in range(steps):
            remaining = steps - step
            diff = bottom - current
            if remaining == 1:
                if diff < 0 and not config.allow_negative_results:
                    op, value = "-", -diff
                else:
                    op, value = "+", diff
                if abs(value) > config.max_result:
                    return None
            else:
                value = max(1, min(config.max_number, abs(diff // remaining)))
                op = context.rng.choice(PATH_OPERATORS)
                current = current + value if op == "+" else current - value
            values.append(value)
            ops.append(op)

        return values, ops

    def _is_given(self, size: int, eq_row: int, value_idx: int,
                  num_rows: int, num_values: int) -> bool:
        last_row = num_rows - 1
        last_value = num_values - 1
        if size == 5:
            return (eq_row, value_idx) in ((0, 0), (last_row, last_value))
        middle = (num_rows // 2, num_values // 2)
        return (eq_row, value_idx) in ((0, 0), (0, last_value), middle, (last_row, last_value))

    def _assemble(self, size: int, all_values: List[List[int]], all_ops: List[List[str]],
                  vertical_ops: List[List[str]]):
        num_rows = len(all_values)
        num_values = len(all_values[0])
        builder = GridBuilder(size)

        for eq_row, (values, ops) in enumerate(zip(all_values, all_ops)):
            row = eq_row * 2
            for i, value in enumerate(values):
                col = i * 2
                builder.operand(row, col, value,
                                self._is_given(size, eq_row, i, num_rows, num_values))
                if i < num_values - 1:
                    builder.operator(row, col + 1, ops[i] if i < num_values - 2 else EQUALS)

        for row in range(1, size, 2):
            is_equals_row = row == size - 2
            for i in range(num_values):
                symbol = EQUALS if is_equals_row else vertical_ops[i][row // 2]
                builder.operator(row, i * 2, symbol)

        return builder.build()
