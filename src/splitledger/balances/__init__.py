"""Balance aggregator — нетто-балансы по расходам и взаиморасчётам группы."""

from .aggregator import (
    BalanceAggregator,
    BalanceAggregatorConfig,
    compute_net_balances,
)

__all__ = [
    "BalanceAggregator",
    "BalanceAggregatorConfig",
    "compute_net_balances",
]
