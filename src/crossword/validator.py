"""
Validator Module - Extracts row and column equations from a grid and checks them.

Grid sizes 5 and 7 hold one chained equation per even row / column:

    v0 op v1 op ... = result

Grid size 9 holds two chained mini-equations per even row / column:

    v0 op1 v1 = r1 op2 v2 = r2      (read as v0 op1 v1 = r1, r1 op2 v2 = r2)

Operands sit at even positions of a line and separators (operators and
equals signs) at odd positions, in both orientations.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .cell import (
    Cell, CellType, Grid, EQUALS, OPERATOR_SYMBOLS, format_number,
)
from .errors import ArithmeticFailure, InvalidEquationInput
from .evaluator import evaluate, results_match

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"

DUAL_GRID_SIZE = 9
DUAL_LINE_LENGTH = 9


@dataclass(frozen=True)
class EquationStatus:
    """
    Validation status of one equation line.

    Attributes:
        orientation: HORIZONTAL (a row) or VERTICAL (a column)
        index: Row or column index in the grid
        equation: Human-readable rendering of the line
        is_valid: Arithmetically correct and complete
        is_complete: Every operand cell holds a number
    """
    orientation: str
    index: int
    equation: str
    is_valid: bool
    is_complete: bool

    def to_dict(self) -> Dict[str, Any]:
        """Boundary encoding keyed by "row" or "col"."""
        key = "row" if self.orientation == HORIZONTAL else "col"
        return {
            key: self.index,
            "equation": self.equation,
            "isValid": self.is_valid,
            "isComplete": self.is_complete,
        }


@dataclass
class ValidationResult:
    """
    Result of validating a whole grid.

    Attributes:
        is_valid: True if there is at least one equation and all are valid
        horizontal_equations: Status per even row
        vertical_equations: Status per even column
    """
    is_valid: bool = False
    horizontal_equations: List[EquationStatus] = field(default_factory=list)
    vertical_equations: List[EquationStatus] = field(default_factory=list)

    @property
    def equations(self) -> List[EquationStatus]:
        """All statuses, rows first."""
        return self.horizontal_equations + self.vertical_equations

    @property
    def is_complete(self) -> bool:
        """True if every line is complete."""
        return bool(self.equations) and all(eq.is_complete for eq in self.equations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "horizontalEquations": [eq.to_dict() for eq in self.horizontal_equations],
            "verticalEquations": [eq.to_dict() for eq in self.vertical_equations],
        }


@dataclass(frozen=True)
class ParsedLine:
    """
    Operands and separators of one line, in reading order.

    Attributes:
        operands: Operand values (None where the cell is empty)
        separators: Operator / equals symbols between operands
    """
    operands: Tuple[Optional[float], ...]
    separators: Tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        return all(value is not None for value in self.operands)


def parse_line(cells: Sequence[Optional[Cell]], orientation: str = HORIZONTAL,
               index: int = 0) -> ParsedLine:
    """
    Split a line of cells into operands and separators.

    Args:
        cells: Cells of one row or column, in reading order
        orientation: HORIZONTAL or VERTICAL (for error reporting)
        index: Row or column index (for error reporting)

    Returns:
        ParsedLine

    Raises:
        InvalidEquationInput: If the line does not alternate operand and
            separator cells
    """
    if len(cells) < 3 or len(cells) % 2 == 0:
        raise InvalidEquationInput(
            f"Line of length {len(cells)} cannot hold an equation", orientation, index
        )

    operands: List[Optional[float]] = []
    separators: List[str] = []
    for position, cell in enumerate(cells):
        if cell is None:
            raise InvalidEquationInput(f"Missing cell at position {position}", orientation, index)
        if position % 2 == 0:
            if not cell.is_operand:
                raise InvalidEquationInput(
                    f"Expected operand at position {position}, found {cell.type.value}",
                    orientation, index,
                )
            operands.append(cell.numeric_value)
        else:
            symbol = str(cell.value or "").strip()
            if cell.type != CellType.OPERATOR or (symbol not in OPERATOR_SYMBOLS and symbol != EQUALS):
                raise InvalidEquationInput(
                    f"Expected operator at position {position}, found {cell.type.value} {symbol!r}",
                    orientation, index,
                )
            separators.append(symbol)

    return ParsedLine(operands=tuple(operands), separators=tuple(separators))


def _check_chained(line: ParsedLine, orientation: str, index: int) -> Tuple[str, bool]:
    operators = line.separators[:-1]
    if line.separators[-1] != EQUALS or any(op not in OPERATOR_SYMBOLS for op in operators):
        raise InvalidEquationInput("Chained equation needs '=' before the result only",
                                   orientation, index)

    values = line.operands[:-1]
    result = line.operands[-1]

    parts = [format_number(values[0])]
    for op, value in zip(operators, values[1:]):
        parts.append(f"{op} {format_number(value)}")
    equation = " ".join(parts) + f" = {format_number(result)}"

    if not line.is_complete:
        return equation, False
    try:
        return equation, results_match(evaluate(values, operators), result)
    except ArithmeticFailure:
        return equation, False


def _mini_equation_holds(left: float, operator: str, right: float, result: float) -> bool:
    try:
        return results_match(evaluate([left, right], [operator]), result)
    except ArithmeticFailure:
        return False


def _check_dual(line: ParsedLine, orientation: str, index: int) -> Tuple[str, bool]:
    if len(line.operands) != 5:
        raise InvalidEquationInput(
            f"Dual equation needs {DUAL_LINE_LENGTH} cells", orientation, index
        )
    op1, eq1, op2, eq2 = line.separators
    if eq1 != EQUALS or eq2 != EQUALS or op1 not in OPERATOR_SYMBOLS or op2 not in OPERATOR_SYMBOLS:
        raise InvalidEquationInput("Dual equation separators must be op, =, op, =",
                                   orientation, index)

    v0, v1, r1, v2, r2 = line.operands
    f = format_number
    equation = f"{f(v0)} {op1} {f(v1)} = {f(r1)}, {f(r1)} {op2} {f(v2)} = {f(r2)}"

    if not line.is_complete:
        return equation, False
    first = _mini_equation_holds(v0, op1, v1, r1)
    second = _mini_equation_holds(r1, op2, v2, r2)
    return equation, first and second


def _render_raw(cells: Sequence[Optional[Cell]]) -> str:
    parts = []
    for cell in cells:
        if cell is None or cell.type == CellType.BLOCKED:
            parts.append("#")
        elif cell.is_operand:
            parts.append(format_number(cell.numeric_value))
        else:
            parts.append(str(cell.value or "?"))
    return " ".join(parts)


def validate_line(cells: Sequence[Optional[Cell]], orientation: str, index: int,
                  dual: bool = False, expected_length: Optional[int] = None) -> EquationStatus:
    """
    Validate one row or column.

    Malformed lines are reported incomplete and invalid rather than raised.

    Args:
        cells: Cells of the line in reading order
        orientation: HORIZONTAL or VERTICAL
        index: Row or column index
        dual: Use the two-equation layout of 9x9 grids
        expected_length: Grid size the line must match, if known

    Returns:
        EquationStatus for the line
    """
    try:
        if expected_length is not None and len(cells) != expected_length:
            raise InvalidEquationInput(
                f"Line has {len(cells)} cells, grid size is {expected_length}",
                orientation, index,
            )
        line = parse_line(cells, orientation, index)
        if dual:
            equation, holds = _check_dual(line, orientation, index)
        else:
            equation, holds = _check_chained(line, orientation, index)
    except InvalidEquationInput as e:
        logger.debug(f"Malformed {orientation} line {index}: {e}")
        return EquationStatus(
            orientation=orientation,
            index=index,
            equation=_render_raw(cells),
            is_valid=False,
            is_complete=False,
        )

    complete = line.is_complete
    return EquationStatus(
        orientation=orientation,
        index=index,
        equation=equation,
        is_valid=holds and complete,
        is_complete=complete,
    )


GridInput = Union[Grid, Sequence[Sequence[Union[Cell, Dict[str, Any]]]]]


def validate_solution(grid: GridInput) -> ValidationResult:
    """
    Check every equation row and column of a grid.

    Args:
        grid: Grid, or a 2D list of Cells / boundary dicts. Input cells may
              hold numbers, numeric strings, or be empty.

    Returns:
        ValidationResult with per-line statuses. Never raises for
        malformed grids.
    """
    if not isinstance(grid, Grid):
        try:
            grid = Grid.from_2d_list(grid)
        except TypeError as e:
            logger.warning(f"Cannot read grid for validation: {e}")
            return ValidationResult(is_valid=False)

    size = grid.size
    dual = size == DUAL_GRID_SIZE

    horizontal = [
        validate_line(grid.row(r), HORIZONTAL, r, dual, expected_length=size)
        for r in range(0, size, 2)
    ]
    vertical = [
        validate_line(grid.column(c), VERTICAL, c, dual, expected_length=size)
        for c in range(0, size, 2)
    ]

    equations = horizontal + vertical
    is_valid = bool(equations) and all(eq.is_valid for eq in equations)

    logger.debug(
        f"Validated {size}x{size} grid: "
        f"{sum(eq.is_valid for eq in equations)}/{len(equations)} equations valid"
    )
    return ValidationResult(
        is_valid=is_valid,
        horizontal_equations=horizontal,
        vertical_equations=vertical,
    )
