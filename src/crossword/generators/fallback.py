"""
Fallback Puzzle - Fixed 5x5 puzzle returned when generation runs out of attempts.

    8 - ? = ?        8 - 3 = 5
    -   -   +
    ? + 1 = ?        2 + 1 = 3
    =   =   =
    ? + ? = 8        6 + 2 = 8

Columns read 8 - 2 = 6, 3 - 1 = 2 and 5 + 3 = 8.
"""

from ..base import GridBuilder
from ..cell import EQUALS
from ..puzzle import GenerationMetrics, Puzzle

FALLBACK_SIZE = 5

# (value, given) per operand, row-major over the 3x3 operand positions
FALLBACK_VALUES = (
    ((8, True), (3, False), (5, False)),
    ((2, False), (1, True), (3, False)),
    ((6, False), (2, False), (8, True)),
)
FALLBACK_ROW_OPERATORS = ("-", "+", "+")
FALLBACK_COLUMN_OPERATORS = ("-", "-", "+")


def build_fallback_puzzle(difficulty: str) -> Puzzle:
    """
    Build the fixed fallback puzzle.

    The grid is always 5x5 whatever the requested difficulty; only the
    difficulty tag follows the request.

    Args:
        difficulty: Difficulty the caller asked for

    Returns:
        Puzzle flagged is_fallback
    """
    builder = GridBuilder(FALLBACK_SIZE)

    for eq_row, (operands, op) in enumerate(zip(FALLBACK_VALUES, FALLBACK_ROW_OPERATORS)):
        row = eq_row * 2
        for i, (value, given) in enumerate(operands):
            builder.operand(row, i * 2, value, given)
        builder.operator(row, 1, op)
        builder.operator(row, 3, EQUALS)

    for i, op in enumerate(FALLBACK_COLUMN_OPERATORS):
        builder.operator(1, i * 2, op)
        builder.operator(3, i * 2, EQUALS)

    grid, solution = builder.build()
    return Puzzle(
        grid=grid,
        solution=solution,
        difficulty=difficulty,
        is_fallback=True,
        metrics=GenerationMetrics(generator_name="fallback", used_fallback=True),
    )
