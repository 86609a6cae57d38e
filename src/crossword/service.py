"""
Puzzle Service Module - The two operations the engine exposes to callers.

    generate_puzzle(difficulty)  ->  Puzzle (grid + solution)
    validate_solution(grid)      ->  ValidationResult

Both are synchronous and keep no state between calls. Generation retries
a randomized construction within a bounded budget and substitutes the fixed
fallback puzzle once the budget is spent, so it never fails for a known
difficulty.
"""

import logging
import random
import time
from dataclasses import replace
from typing import Optional, Tuple

from .base import PuzzleGenerator
from .context import (
    GenerationContext,
    DEFAULT_ROW_DERIVATION_ATTEMPTS,
    DEFAULT_VALUE_GRID_ATTEMPTS,
)
from .difficulty import get_difficulty_config
from .errors import GenerationExhausted
from .factory import generator_for_size
from .generators.fallback import build_fallback_puzzle
from .puzzle import GenerationMetrics, Puzzle
from .validator import validate_solution

logger = logging.getLogger(__name__)

__all__ = [
    "generate_puzzle",
    "validate_solution",
]


def _search(generator: PuzzleGenerator, context: GenerationContext,
            budget: int) -> Tuple[Puzzle, int]:
    """
    Run generator attempts until one yields a self-consistent puzzle.

    Every candidate is checked by validating its filled-in grid before it
    is accepted.

    Returns:
        (puzzle, attempts used)

    Raises:
        GenerationExhausted: If no attempt within budget succeeds
    """
    for attempt in range(1, budget + 1):
        candidate = generator.attempt(context)
        if candidate is None:
            continue

        check = validate_solution(candidate.solved_grid())
        if not check.is_valid:
            bad = [eq.equation for eq in check.equations if not eq.is_valid]
            logger.debug(f"[{generator.name}] Attempt {attempt} failed self-check: {bad}")
            continue

        return candidate, attempt

    raise GenerationExhausted(context.difficulty, budget)


def generate_puzzle(
    difficulty: str,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    value_grid_attempts: Optional[int] = None,
    row_derivation_attempts: Optional[int] = None,
) -> Puzzle:
    """
    Generate a puzzle for a difficulty.

    Args:
        difficulty: "easy" (5x5), "medium" (7x7) or "hard" (9x9)
        rng: Random source; takes precedence over seed
        seed: Seed for a fresh random.Random when rng is None
        max_attempts: Attempt budget (defaults per grid size: 100, 300, 1000).
            Zero returns the fallback puzzle immediately.
        value_grid_attempts: 9x9 value-grid constructions per attempt
        row_derivation_attempts: 9x9 operator draws per derived value row

    Returns:
        Puzzle with player grid, solution and metrics

    Raises:
        ValueError: If difficulty is unknown

    Example:
        puzzle = generate_puzzle("easy", seed=42)
        result = validate_solution(puzzle.solved_grid())
        assert result.is_valid
    """
    config = get_difficulty_config(difficulty)
    if rng is None:
        rng = random.Random(seed)

    context = GenerationContext(
        difficulty=difficulty,
        config=config,
        rng=rng,
        value_grid_attempts=(
            DEFAULT_VALUE_GRID_ATTEMPTS if value_grid_attempts is None else value_grid_attempts
        ),
        row_derivation_attempts=(
            DEFAULT_ROW_DERIVATION_ATTEMPTS if row_derivation_attempts is None
            else row_derivation_attempts
        ),
    )
    generator = generator_for_size(config.grid_size)
    budget = generator.attempts_for(config.grid_size) if max_attempts is None else max_attempts

    start_time = time.perf_counter()
    try:
        puzzle, attempts = _search(generator, context, budget)
        generator_name = generator.name
    except GenerationExhausted as e:
        logger.warning(f"{e}, using fallback puzzle")
        puzzle = build_fallback_puzzle(difficulty)
        attempts = e.attempts
        generator_name = "fallback"

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    metrics = GenerationMetrics(
        attempts=attempts,
        computation_time_ms=elapsed_ms,
        generator_name=generator_name,
        used_fallback=puzzle.is_fallback,
    )
    logger.info(
        f"[{generator_name}] {difficulty} puzzle ready: {puzzle.size}x{puzzle.size}, "
        f"{attempts} attempts, {elapsed_ms:.1f}ms"
    )
    return replace(puzzle, metrics=metrics)
