"""Debt simplifier — жадное сведение балансов к короткому списку переводов."""

from .simplifier import (
    DebtSimplifier,
    DebtSimplifierConfig,
    SimplifierOrdering,
    simplify_debts,
)

__all__ = [
    "DebtSimplifier",
    "DebtSimplifierConfig",
    "SimplifierOrdering",
    "simplify_debts",
]
