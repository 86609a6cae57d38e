"""
Difficulty Module - Read-only configuration table keyed by difficulty.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class DifficultyConfig:
    """
    Numeric and structural constraints for one difficulty.

    Attributes:
        grid_size: Side length of the grid (5, 7 or 9)
        min_number: Smallest randomly chosen operand
        max_number: Largest randomly chosen operand
        operators: Operators the generator may place
        allow_negative_results: Whether generated results may be negative
        allow_decimals: Whether non-integer values are allowed
    """
    grid_size: int
    min_number: int
    max_number: int
    operators: Tuple[str, ...]
    allow_negative_results: bool
    allow_decimals: bool = False

    @property
    def max_result(self) -> int:
        """Largest result magnitude accepted for a generated equation."""
        return self.max_number * 2

    def narrowed(self, **changes) -> "DifficultyConfig":
        """Copy with some fields replaced."""
        return replace(self, **changes)


DIFFICULTY_CONFIGS: Dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(
        grid_size=5,
        min_number=1,
        max_number=10,
        operators=("+", "-"),
        allow_negative_results=False,
    ),
    "medium": DifficultyConfig(
        grid_size=7,
        min_number=1,
        max_number=20,
        operators=("+", "-", "*"),
        allow_negative_results=True,
    ),
    "hard": DifficultyConfig(
        grid_size=9,
        min_number=1,
        max_number=50,
        operators=("+", "-", "*", "/"),
        allow_negative_results=True,
    ),
}


def get_difficulty_config(difficulty: str) -> DifficultyConfig:
    """
    Look up the configuration for a difficulty.

    Args:
        difficulty: "easy", "medium" or "hard"

    Returns:
        DifficultyConfig for that difficulty

    Raises:
        ValueError: If difficulty is not known
    """
    if difficulty not in DIFFICULTY_CONFIGS:
        available = ", ".join(DIFFICULTY_CONFIGS.keys())
        raise ValueError(f"Unknown difficulty: {difficulty}. Available: {available}")
    return DIFFICULTY_CONFIGS[difficulty]


def get_difficulty_names() -> List[str]:
    """List known difficulty names."""
    return list(DIFFICULTY_CONFIGS.keys())
