"""
Generation Context Module - Per-call state handed to generators.
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from .difficulty import DifficultyConfig

DEFAULT_VALUE_GRID_ATTEMPTS = 200
DEFAULT_ROW_DERIVATION_ATTEMPTS = 50


@dataclass
class GenerationContext:
    """
    Everything one generation call needs.

    Created fresh for every generate_puzzle() call, so concurrent calls
    share nothing.

    Attributes:
        difficulty: Requested difficulty name
        config: Constraints for that difficulty
        rng: Injected random source
        value_grid_attempts: Value-grid constructions per 9x9 attempt
        row_derivation_attempts: Operator draws when deriving a 9x9 value row
    """
    difficulty: str
    config: DifficultyConfig
    rng: random.Random = field(default_factory=random.Random)
    value_grid_attempts: int = DEFAULT_VALUE_GRID_ATTEMPTS
    row_derivation_attempts: int = DEFAULT_ROW_DERIVATION_ATTEMPTS

    def random_number(self, config: Optional[DifficultyConfig] = None) -> int:
        """
        Random operand from the numeric range.

        Args:
            config: Range to draw from (defaults to self.config)

        Returns:
            Integer in [min_number, max_number]
        """
        config = config or self.config
        return self.rng.randint(config.min_number, config.max_number)

    def random_operator(self, config: Optional[DifficultyConfig] = None) -> str:
        """Random operator from the allowed set."""
        config = config or self.config
        return self.rng.choice(config.operators)
