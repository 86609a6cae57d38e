"""
Generators Package - Concrete generator implementations.

Import this module to register all built-in generators.
"""

from .chained import ChainedEquationGenerator
from .dual import DualEquationGenerator
from .fallback import build_fallback_puzzle

__all__ = [
    "ChainedEquationGenerator",
    "DualEquationGenerator",
    "build_fallback_puzzle",
]
