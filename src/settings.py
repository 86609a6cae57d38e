"""
Settings Module for Math Crossword

Provides persistent generation and logging preferences using JSON.
Settings are stored in crossword_config.json in the working directory
unless another path is given.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("crossword_config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "log_level": "INFO",
    "log_file": None,
    "default_difficulty": "easy",
    # Attempt budgets keyed by grid size
    "attempt_budgets": {"5": 100, "7": 300, "9": 1000},
    "value_grid_attempts": 200,
    "row_derivation_attempts": 50,
}


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug(f"Settings file {settings_file} not found, using defaults")
        return _defaults()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("top level must be an object")

        # Merge with defaults to handle missing keys
        result = _defaults()
        budgets = settings.pop("attempt_budgets", None)
        result.update(settings)
        if isinstance(budgets, dict):
            result["attempt_budgets"].update({str(k): v for k, v in budgets.items()})
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()


def save_settings(settings: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def attempt_budget(settings: Dict[str, Any], grid_size: int) -> Optional[int]:
    """
    Configured attempt budget for a grid size.

    Args:
        settings: Loaded settings
        grid_size: 5, 7 or 9

    Returns:
        Budget, or None to use the generator default
    """
    budget = settings.get("attempt_budgets", {}).get(str(grid_size))
    return int(budget) if budget is not None else None


def _defaults() -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    result["attempt_budgets"] = dict(DEFAULT_SETTINGS["attempt_budgets"])
    return result
