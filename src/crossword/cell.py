"""
Cell Module - Immutable cell and grid representation for the math crossword.
"""

import math
import numbers
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvalidCellEntry

CellValue = Union[int, float, str, None]

# Player entries outside this range are rejected
MIN_ENTRY = -99
MAX_ENTRY = 99

OPERATOR_SYMBOLS = ("+", "-", "*", "/")
EQUALS = "="


class CellType(str, Enum):
    """Kinds of grid cell. Values match the JSON boundary encoding."""
    NUMBER = "number"
    OPERATOR = "operator"
    INPUT = "input"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, raw: Any) -> "CellType":
        """
        Map a boundary type string to a CellType.

        Unknown or missing types become BLOCKED so that a malformed cell
        never counts as an operand.
        """
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.BLOCKED


def parse_number(value: Any) -> Optional[float]:
    """
    Coerce a cell value to a float.

    Accepts ints, floats and numeric strings. Empty strings, None,
    booleans, non-numeric strings, non-finite numbers and ints too large
    for a float mean "unfilled".

    Args:
        value: Raw cell value

    Returns:
        Float value, or None if the cell holds no number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def format_number(value: Optional[float]) -> str:
    """Render a number for display, dropping a trailing .0. None renders as '?'."""
    if value is None:
        return "?"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _normalize_number(number: float) -> Union[int, float]:
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class Cell:
    """
    Single grid cell.

    Attributes:
        type: Cell kind (number, operator, input, blocked)
        value: Number, operator symbol, or None when empty
        is_editable: True only for input cells
        row: Row index in the grid
        col: Column index in the grid
    """
    type: CellType
    value: CellValue
    is_editable: bool
    row: int
    col: int

    @classmethod
    def number(cls, row: int, col: int, value: int) -> "Cell":
        """Create a given (non-editable) number cell."""
        return cls(type=CellType.NUMBER, value=int(value), is_editable=False, row=row, col=col)

    @classmethod
    def input(cls, row: int, col: int, value: CellValue = None) -> "Cell":
        """Create an editable input cell, empty unless a value is given."""
        if value is not None:
            value = int(value)
        return cls(type=CellType.INPUT, value=value, is_editable=True, row=row, col=col)

    @classmethod
    def operator(cls, row: int, col: int, symbol: str) -> "Cell":
        """Create an operator or equals cell."""
        return cls(type=CellType.OPERATOR, value=symbol, is_editable=False, row=row, col=col)

    @classmethod
    def blocked(cls, row: int, col: int) -> "Cell":
        """Create a structural filler cell."""
        return cls(type=CellType.BLOCKED, value=None, is_editable=False, row=row, col=col)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], row: int, col: int) -> "Cell":
        """
        Create a Cell from its boundary (JSON) encoding.

        Args:
            data: Mapping with "type", "value" and "isEditable" keys. Any
                  "row"/"col" keys are ignored; the position in the grid wins.
            row: Row index of the cell in its grid
            col: Column index of the cell in its grid

        Returns:
            Cell instance
        """
        cell_type = CellType.parse(data.get("type"))
        value = data.get("value")
        if value == "":
            value = None
        if cell_type == CellType.OPERATOR and value is not None:
            value = str(value).strip()
        editable = data.get("isEditable", data.get("is_editable"))
        if not isinstance(editable, bool):
            editable = cell_type == CellType.INPUT
        return cls(
            type=cell_type,
            value=value,
            is_editable=editable,
            row=row,
            col=col,
        )

    @property
    def is_operand(self) -> bool:
        """True for number and input cells."""
        return self.type in (CellType.NUMBER, CellType.INPUT)

    @property
    def numeric_value(self) -> Optional[float]:
        """Cell value as a float, or None if unfilled or not numeric."""
        if not self.is_operand:
            return None
        return parse_number(self.value)

    @property
    def is_filled(self) -> bool:
        """True if an operand cell holds a number."""
        return self.numeric_value is not None

    def to_dict(self) -> Dict[str, Any]:
        """Boundary encoding. Empty values encode as an empty string."""
        value = self.value
        if value is None:
            value = ""
        elif isinstance(value, numbers.Real) and not isinstance(value, bool):
            number = parse_number(value)
            if number is not None:
                value = _normalize_number(number)
        return {
            "type": self.type.value,
            "value": value,
            "isEditable": self.is_editable,
            "row": self.row,
            "col": self.col,
        }


@dataclass(frozen=True)
class Grid:
    """
    Immutable square grid of cells.

    Uses tuple-of-tuples for hashability and immutability.

    Attributes:
        cells: Tuple of rows, each a tuple of Cell
    """
    cells: Tuple[Tuple[Cell, ...], ...]

    @classmethod
    def from_2d_list(cls, rows: Sequence[Sequence[Union[Cell, Mapping[str, Any]]]]) -> "Grid":
        """
        Create a Grid from a 2D list of Cells or boundary dicts.

        A row that is not a list or tuple becomes an empty row, and a cell
        that is neither a Cell nor a mapping becomes a blocked cell, so one
        bad entry only spoils the lines that pass through it.

        Args:
            rows: Row-major list of cells

        Returns:
            Grid instance
        """
        built = []
        for r, row in enumerate(rows):
            if not isinstance(row, (list, tuple)):
                built.append(())
                continue
            built.append(tuple(cls._coerce_cell(cell, r, c) for c, cell in enumerate(row)))
        return cls(cells=tuple(built))

    @staticmethod
    def _coerce_cell(cell: Any, row: int, col: int) -> Cell:
        if isinstance(cell, Cell):
            return replace(cell, row=row, col=col)
        if isinstance(cell, Mapping):
            return Cell.from_dict(cell, row, col)
        return Cell.blocked(row, col)

    @property
    def size(self) -> int:
        """Number of rows."""
        return len(self.cells)

    @property
    def is_square(self) -> bool:
        """True if every row has exactly size cells."""
        return all(len(row) == self.size for row in self.cells)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """
        Get the cell at a position.

        Args:
            row: Row index
            col: Column index

        Returns:
            Cell, or None if the position is outside the grid
        """
        if 0 <= row < len(self.cells) and 0 <= col < len(self.cells[row]):
            return self.cells[row][col]
        return None

    def row(self, index: int) -> Tuple[Cell, ...]:
        """Cells of one row, left to right."""
        return self.cells[index]

    def column(self, index: int) -> Tuple[Optional[Cell], ...]:
        """Cells of one column, top to bottom. Missing cells are None."""
        return tuple(self.get_cell(r, index) for r in range(self.size))

    def diff(self, other: "Grid") -> List[Tuple[int, int]]:
        """
        Find positions whose cells differ between two grids.

        Args:
            other: Grid to compare against

        Returns:
            List of (row, col) tuples where cells differ
        """
        if not isinstance(other, Grid):
            raise TypeError("Can only diff against another Grid")

        differences = []
        for r in range(max(self.size, other.size)):
            width = max(
                len(self.cells[r]) if r < self.size else 0,
                len(other.cells[r]) if r < other.size else 0,
            )
            for c in range(width):
                if self.get_cell(r, c) != other.get_cell(r, c):
                    differences.append((r, c))
        return differences

    def with_value(self, row: int, col: int, value: Any) -> "Grid":
        """
        Write a player value into an editable cell.

        Args:
            row: Row index
            col: Column index
            value: Number, numeric string, or ""/None to clear the cell

        Returns:
            New Grid with the cell updated

        Raises:
            InvalidCellEntry: If the cell is not editable or the value is
                not a number within [-99, 99]
        """
        cell = self.get_cell(row, col)
        if cell is None:
            raise InvalidCellEntry(f"No cell at ({row}, {col})")
        if not cell.is_editable:
            raise InvalidCellEntry(f"Cell ({row}, {col}) is not editable")

        if value is None or (isinstance(value, str) and not value.strip()):
            new_value = None
        else:
            number = parse_number(value)
            if number is None:
                raise InvalidCellEntry(f"Not a number: {value!r}")
            if not MIN_ENTRY <= number <= MAX_ENTRY:
                raise InvalidCellEntry(
                    f"Value {format_number(number)} outside [{MIN_ENTRY}, {MAX_ENTRY}]"
                )
            new_value = _normalize_number(number)

        return self._replace_cell(replace(cell, value=new_value))

    def cleared(self) -> "Grid":
        """Copy of the grid with every editable cell emptied."""
        return Grid(cells=tuple(
            tuple(replace(cell, value=None) if cell.is_editable else cell for cell in row)
            for row in self.cells
        ))

    def empty_editable_positions(self) -> List[Tuple[int, int]]:
        """Positions of editable cells that hold no number."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if cell.is_editable and not cell.is_filled
        ]

    def _replace_cell(self, cell: Cell) -> "Grid":
        new_grid = self.to_list()
        new_grid[cell.row][cell.col] = cell
        return Grid(cells=tuple(tuple(row) for row in new_grid))

    def to_list(self) -> List[List[Cell]]:
        """Convert to a mutable 2D list of cells."""
        return [list(row) for row in self.cells]

    def to_dicts(self) -> List[List[Dict[str, Any]]]:
        """Boundary encoding of every cell."""
        return [[cell.to_dict() for cell in row] for row in self.cells]

    def render(self) -> str:
        """Plain text rendering, one line per row. Empty inputs show '_'."""
        lines = []
        for row in self.cells:
            parts = []
            for cell in row:
                if cell.type == CellType.BLOCKED:
                    text = ""
                elif cell.type == CellType.OPERATOR:
                    text = str(cell.value or "")
                elif cell.is_filled:
                    text = format_number(cell.numeric_value)
                else:
                    text = "_"
                parts.append(text.rjust(3))
            lines.append(" ".join(parts).rstrip())
        return "\n".join(lines)
