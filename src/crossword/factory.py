"""
Generator Factory Module - Registry and factory for generator instantiation.
"""

from typing import Any, Dict, List, Type

from .base import PuzzleGenerator


# Global registry of generators
_GENERATORS: Dict[str, Type[PuzzleGenerator]] = {}


def register_generator(cls: Type[PuzzleGenerator]) -> Type[PuzzleGenerator]:
    """
    Decorator to register a generator class.

    Usage:
        @register_generator
        class MyGenerator(PuzzleGenerator):
            name = "my_generator"
            grid_sizes = (5,)
            ...

    Args:
        cls: Generator class to register

    Returns:
        The same class (for decorator chaining)
    """
    _GENERATORS[cls.name] = cls
    return cls


def create_generator(name: str, **kwargs: Any) -> PuzzleGenerator:
    """
    Create a generator instance by name.

    Args:
        name: Generator name (e.g., "chained", "dual")
        **kwargs: Additional arguments passed to generator constructor

    Returns:
        Generator instance

    Raises:
        ValueError: If generator name not found
    """
    if name not in _GENERATORS:
        available = ", ".join(_GENERATORS.keys())
        raise ValueError(f"Unknown generator: {name}. Available: {available}")
    return _GENERATORS[name](**kwargs)


def generator_for_size(size: int, **kwargs: Any) -> PuzzleGenerator:
    """
    Create the generator that builds grids of a given size.

    Args:
        size: Grid side length

    Returns:
        Generator instance

    Raises:
        ValueError: If no registered generator supports the size
    """
    for cls in _GENERATORS.values():
        if size in cls.grid_sizes:
            return cls(**kwargs)
    raise ValueError(f"No generator for grid size {size}")


def get_generator_names() -> List[str]:
    """
    Get list of available generator names.

    Returns:
        List of registered generator names
    """
    return list(_GENERATORS.keys())


def get_generator_info() -> List[Dict[str, Any]]:
    """
    Get name, description and grid sizes for all registered generators.

    Returns:
        List of dicts with 'name', 'description' and 'grid_sizes' keys
    """
    return [
        {"name": cls.name, "description": cls.description, "grid_sizes": list(cls.grid_sizes)}
        for cls in _GENERATORS.values()
    ]
