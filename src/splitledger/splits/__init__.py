"""Split calculator — разбиение суммы расхода (EQUAL / EXACT / PERCENT)."""

from .calculator import (
    SplitCalculator,
    SplitCalculatorConfig,
    compute_splits,
)

__all__ = [
    "SplitCalculator",
    "SplitCalculatorConfig",
    "compute_splits",
]
