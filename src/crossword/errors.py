"""
Errors Module - Exception types raised inside the crossword engine.

Only InvalidCellEntry reaches callers, from Grid.with_value(). The others
stay inside the engine: generators catch them to reject a candidate and the
validator catches them to mark a line invalid.
"""

from typing import Optional


class CrosswordError(Exception):
    """Base class for all engine errors."""


class ArithmeticFailure(CrosswordError, ArithmeticError):
    """
    Evaluation of an equation failed.

    Raised for division by zero, non-integer quotients during generation,
    unknown operator symbols and operand/operator count mismatches.
    """


class InvalidEquationInput(CrosswordError, ValueError):
    """
    A grid line could not be parsed into an equation.

    Attributes:
        orientation: "horizontal" or "vertical"
        index: Row or column index of the line
    """

    def __init__(self, message: str, orientation: str = "", index: Optional[int] = None):
        super().__init__(message)
        self.orientation = orientation
        self.index = index


class InvalidCellEntry(CrosswordError, ValueError):
    """A player value was rejected by Grid.with_value()."""


class GenerationExhausted(CrosswordError):
    """
    Constructive search used up its attempt budget.

    Attributes:
        difficulty: Requested difficulty
        attempts: Number of attempts made
    """

    def __init__(self, difficulty: str, attempts: int):
        super().__init__(
            f"No valid {difficulty} puzzle found after {attempts} attempts"
        )
        self.difficulty = difficulty
        self.attempts = attempts
