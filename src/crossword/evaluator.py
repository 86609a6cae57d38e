"""
Evaluator Module - Operator-precedence evaluation shared by generator and validator.

Both the generators (checking candidate equations) and the validator
(checking player grids) evaluate through this module, so a generated
puzzle is always accepted by its own validator.
"""

from typing import List, Optional, Sequence, Union

from .errors import ArithmeticFailure

Number = Union[int, float]

ALL_OPERATORS = ("+", "-", "*", "/")
MULTIPLICATIVE = ("*", "/")

# Results closer than this count as equal
TOLERANCE = 0.001


def apply_operator(left: Number, operator: str, right: Number,
                   integer_division: bool = False) -> Number:
    """
    Apply one binary operator.

    Args:
        left: Left operand
        operator: One of + - * /
        right: Right operand
        integer_division: Reject non-integer quotients (generation mode)

    Returns:
        Result of left <operator> right

    Raises:
        ArithmeticFailure: Division by zero, non-integer quotient in
            integer mode, or unknown operator
    """
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            raise ArithmeticFailure(f"Division by zero: {left} / {right}")
        if integer_division:
            if left % right != 0:
                raise ArithmeticFailure(f"Non-integer quotient: {left} / {right}")
            return left // right
        return left / right
    raise ArithmeticFailure(f"Unknown operator: {operator!r}")


def evaluate(values: Sequence[Number], operators: Sequence[str],
             integer_division: bool = False) -> Number:
    """
    Evaluate a chained equation with standard precedence.

    Multiplication and division collapse first, left to right; the
    remaining additions and subtractions fold strictly left to right.

    Args:
        values: Operands in order
        operators: Binary operators, one fewer than values
        integer_division: Reject non-integer quotients (generation mode)

    Returns:
        The equation result

    Raises:
        ArithmeticFailure: On any evaluation failure

    Example:
        evaluate([2, 3, 4], ["+", "*"])  # 14
    """
    if not values:
        raise ArithmeticFailure("No operands")
    if len(operators) != len(values) - 1:
        raise ArithmeticFailure(
            f"{len(values)} operands need {len(values) - 1} operators, got {len(operators)}"
        )

    nums: List[Number] = list(values)
    ops: List[str] = list(operators)

    # First pass: * and /
    i = 0
    while i < len(ops):
        if ops[i] in MULTIPLICATIVE:
            nums[i:i + 2] = [apply_operator(nums[i], ops[i], nums[i + 1], integer_division)]
            del ops[i]
        else:
            i += 1

    # Second pass: + and -
    result = nums[0]
    for i, op in enumerate(ops):
        result = apply_operator(result, op, nums[i + 1], integer_division)
    return result


def try_evaluate(values: Sequence[Number], operators: Sequence[str],
                 integer_division: bool = False) -> Optional[Number]:
    """Like evaluate(), but returns None instead of raising."""
    try:
        return evaluate(values, operators, integer_division)
    except ArithmeticFailure:
        return None


def results_match(actual: Number, expected: Number) -> bool:
    """True if two results are equal within TOLERANCE."""
    return abs(actual - expected) < TOLERANCE
