"""
Test script for puzzle generation

Tests:
1. Every generated puzzle validates once filled in (all difficulties)
2. Grid and solution share structure; givens match the solution
3. Seeded reproducibility
4. Fallback puzzle
5. Player-side grid operations (entries, hints, clearing)
6. Generator registry

Usage:
    python test_generator.py
    pytest tests/test_generator.py
"""

import random
import sys
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.crossword import (
    CellType,
    GenerationContext,
    Grid,
    InvalidCellEntry,
    build_fallback_puzzle,
    create_generator,
    generate_puzzle,
    generator_for_size,
    get_difficulty_config,
    get_difficulty_names,
    get_generator_names,
    validate_solution,
)
from src.crossword.cell import OPERATOR_SYMBOLS

SAMPLES_PER_DIFFICULTY = 350


def test_round_trip():
    """Every puzzle's own solution passes validation."""
    print("\n" + "="*60)
    print("TEST: Round trip")
    print("="*60)

    for difficulty in get_difficulty_names():
        start = time.perf_counter()
        fallbacks = 0
        for seed in range(SAMPLES_PER_DIFFICULTY):
            puzzle = generate_puzzle(difficulty, seed=seed)
            fallbacks += puzzle.is_fallback
            result = validate_solution(puzzle.solved_grid())
            assert result.is_valid, f"{difficulty} seed {seed}: {result.to_dict()}"
            assert validate_solution(puzzle.solution).is_valid
        elapsed = (time.perf_counter() - start) * 1000
        print(f"  {difficulty}: {SAMPLES_PER_DIFFICULTY} puzzles, "
              f"{fallbacks} fallbacks, {elapsed:.0f}ms")


def test_structure():
    """Grid and solution differ only in the values of input cells."""
    for difficulty in get_difficulty_names():
        config = get_difficulty_config(difficulty)
        for seed in range(20):
            puzzle = generate_puzzle(difficulty, seed=seed)
            if puzzle.is_fallback:
                continue
            assert puzzle.size == config.grid_size
            assert puzzle.grid.is_square and puzzle.solution.is_square

            for r in range(puzzle.size):
                for c in range(puzzle.size):
                    cell = puzzle.grid.cells[r][c]
                    answer = puzzle.solution.cells[r][c]
                    assert (cell.type, cell.row, cell.col) == (answer.type, r, c)
                    assert cell.is_editable == (cell.type == CellType.INPUT)
                    if cell.type == CellType.INPUT:
                        assert cell.value is None
                        assert answer.value is not None
                    else:
                        assert cell == answer

            # Equation rows/columns hold operands at even positions only
            for r in range(0, puzzle.size, 2):
                for c in range(0, puzzle.size, 2):
                    assert puzzle.grid.cells[r][c].is_operand
            for r in range(1, puzzle.size, 2):
                for c in range(1, puzzle.size, 2):
                    assert puzzle.grid.cells[r][c].type == CellType.BLOCKED

            for r, c in puzzle.grid.diff(puzzle.solution):
                assert puzzle.grid.cells[r][c].is_editable


def test_difficulty_constraints():
    """Operators and value signs follow the difficulty table."""
    for seed in range(30):
        puzzle = generate_puzzle("easy", seed=seed)
        for row in puzzle.solution.cells:
            for cell in row:
                if cell.type == CellType.OPERATOR:
                    assert cell.value in ("+", "-", "=")
                elif cell.is_operand:
                    assert cell.numeric_value >= 0

    for seed in range(10):
        puzzle = generate_puzzle("medium", seed=seed)
        symbols = {cell.value for row in puzzle.grid.cells for cell in row
                   if cell.type == CellType.OPERATOR}
        assert symbols <= set(OPERATOR_SYMBOLS) | {"="}
        assert "/" not in symbols


def test_given_cells():
    """Chained grids fix their givens by position."""
    puzzle = generate_puzzle("easy", seed=11)
    if not puzzle.is_fallback:
        givens = [(r, c) for r, row in enumerate(puzzle.grid.cells)
                  for c, cell in enumerate(row) if cell.type == CellType.NUMBER]
        assert givens == [(0, 0), (4, 4)]

    puzzle = generate_puzzle("medium", seed=11)
    if not puzzle.is_fallback:
        givens = [(r, c) for r, row in enumerate(puzzle.grid.cells)
                  for c, cell in enumerate(row) if cell.type == CellType.NUMBER]
        assert givens == [(0, 0), (0, 6), (4, 4), (6, 6)]

    puzzle = generate_puzzle("hard", seed=11)
    if not puzzle.is_fallback:
        givens = sum(cell.type == CellType.NUMBER for row in puzzle.grid.cells for cell in row)
        assert givens == 9


def test_reproducible():
    """The same seed yields the same puzzle."""
    print("\n" + "="*60)
    print("TEST: Reproducibility")
    print("="*60)

    for difficulty in get_difficulty_names():
        first = generate_puzzle(difficulty, seed=1234)
        second = generate_puzzle(difficulty, seed=1234)
        assert first == second
        assert first.to_dict() == second.to_dict()

        third = generate_puzzle(difficulty, rng=random.Random(1234))
        assert third == first
        print(f"  {difficulty}: identical for seed 1234")


def test_fallback():
    """A spent budget yields the fixed 5x5 fallback, tagged with the request."""
    puzzle = generate_puzzle("hard", seed=3, max_attempts=0)
    assert puzzle.is_fallback
    assert puzzle.size == 5
    assert puzzle.difficulty == "hard"
    assert puzzle.metrics.used_fallback
    assert puzzle.metrics.generator_name == "fallback"
    assert validate_solution(puzzle.solved_grid()).is_valid
    assert not validate_solution(puzzle.grid).is_valid
    assert puzzle == build_fallback_puzzle("hard")


def test_metrics():
    puzzle = generate_puzzle("medium", seed=8)
    if not puzzle.is_fallback:
        assert puzzle.metrics.generator_name == "chained"
        assert 1 <= puzzle.metrics.attempts <= 300
    assert puzzle.metrics.computation_time_ms >= 0


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        generate_puzzle("impossible")
    with pytest.raises(ValueError):
        get_difficulty_config("")


def test_player_entries():
    """Entries go into editable cells only and stay within [-99, 99]."""
    puzzle = build_fallback_puzzle("easy")
    grid = puzzle.grid

    grid = grid.with_value(0, 2, "3")
    assert grid.cells[0][2].value == 3
    assert grid.with_value(0, 2, "").cells[0][2].value is None
    assert grid.with_value(0, 2, -99).cells[0][2].value == -99

    with pytest.raises(InvalidCellEntry):
        grid.with_value(0, 0, 5)        # given number
    with pytest.raises(InvalidCellEntry):
        grid.with_value(0, 1, 5)        # operator
    with pytest.raises(InvalidCellEntry):
        grid.with_value(0, 2, 100)
    with pytest.raises(InvalidCellEntry):
        grid.with_value(0, 2, "abc")
    with pytest.raises(InvalidCellEntry):
        grid.with_value(9, 9, 1)

    assert puzzle.grid.cells[0][2].value is None  # input grid untouched
    assert grid.cleared() == puzzle.grid


def test_hints():
    """Hints reveal one empty cell at a time until the grid is solved."""
    puzzle = generate_puzzle("medium", seed=21)
    rng = random.Random(5)
    grid = puzzle.grid
    empty = len(grid.empty_editable_positions())

    for revealed in range(empty):
        hint = puzzle.hint(grid, rng)
        assert hint is not None
        grid, (row, col) = hint
        assert grid.cells[row][col].value == puzzle.solution.cells[row][col].value
        assert len(grid.empty_editable_positions()) == empty - revealed - 1

    assert puzzle.hint(grid, rng) is None
    assert grid == puzzle.solved_grid()
    assert validate_solution(grid).is_valid


def test_grid_encoding():
    """Boundary dicts rebuild the same grid."""
    puzzle = generate_puzzle("hard", seed=2)
    data = puzzle.to_dict()
    assert data["difficulty"] == "hard"
    assert Grid.from_2d_list(data["grid"]) == puzzle.grid
    assert Grid.from_2d_list(data["solution"]) == puzzle.solution
    empty = data["grid"][puzzle.grid.empty_editable_positions()[0][0]]
    assert any(cell["value"] == "" and cell["isEditable"] for cell in empty)


def test_generators():
    """Registry lookups by name and by grid size."""
    assert set(get_generator_names()) >= {"chained", "dual"}
    assert generator_for_size(5).name == "chained"
    assert generator_for_size(7).name == "chained"
    assert generator_for_size(9).name == "dual"
    with pytest.raises(ValueError):
        generator_for_size(6)
    with pytest.raises(ValueError):
        create_generator("nope")

    chained = create_generator("chained")
    assert chained.attempts_for(5) == 100
    assert chained.attempts_for(7) == 300
    assert create_generator("dual").attempts_for(9) == 1000
    assert chained.find_operators([2, 3, 4], 14, ("+", "-", "*")) == ["+", "*"]
    assert chained.find_operators([2, 3], 7, ("+", "-")) is None
    assert chained.find_operator(7, 2, 3, ("+", "-", "*", "/")) is None


def test_value_grid():
    """Every row and column of a 9x9 value grid admits dual operators."""
    generator = create_generator("dual")
    context = GenerationContext(
        difficulty="hard",
        config=get_difficulty_config("hard"),
        rng=random.Random(99),
    )
    config = generator.construction_config(context.config)
    assert config.max_number == 10
    assert config.operators == ("+", "-")

    value_grid = generator.build_value_grid(context, config)
    assert value_grid is not None
    assert value_grid.shape == (5, 5)
    for i in range(5):
        assert generator.line_operators(value_grid[i, :]) is not None
        assert generator.line_operators(value_grid[:, i]) is not None


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# GENERATOR TESTS")
    print("#"*60)

    tests = [
        ("Round Trip", test_round_trip),
        ("Structure", test_structure),
        ("Difficulty Constraints", test_difficulty_constraints),
        ("Given Cells", test_given_cells),
        ("Reproducible", test_reproducible),
        ("Fallback", test_fallback),
        ("Metrics", test_metrics),
        ("Unknown Difficulty", test_unknown_difficulty),
        ("Player Entries", test_player_entries),
        ("Hints", test_hints),
        ("Grid Encoding", test_grid_encoding),
        ("Generators", test_generators),
        ("Value Grid", test_value_grid),
    ]

    all_passed = True
    for name, test in tests:
        try:
            test()
            passed = True
        except AssertionError as e:
            print(f"  ERROR: {e}")
            passed = False
        print(f"  {name}: [{'PASS' if passed else 'FAIL'}]")
        all_passed = all_passed and passed

    print()
    print("All tests PASSED!" if all_passed else "Some tests FAILED!")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
