"""
splitledger — ledger engine для общих расходов группы

Три чистых компонента без состояния и ввода-вывода:
- compute_splits: разбиение суммы расхода (EQUAL / EXACT / PERCENT)
- compute_net_balances: нетто-балансы по расходам и взаиморасчётам
- simplify_debts: жадное сведение балансов к короткому списку переводов
"""

from splitledger.balances import BalanceAggregator, BalanceAggregatorConfig, compute_net_balances
from splitledger.core.domain import (
    BalanceView,
    EqualShare,
    ExactShare,
    ExpenseRecord,
    NetBalanceMap,
    ParticipantSummary,
    PercentShare,
    SettlementRecord,
    SplitEntry,
    SplitMode,
    Transfer,
)
from splitledger.core.errors import (
    InvalidAmount,
    InvalidParticipantInput,
    LedgerError,
    LedgerIntegrityError,
    MalformedRecord,
    NoParticipants,
    PercentMismatch,
    SplitMismatch,
    SplitValidationError,
    UnbalancedLedger,
    UnknownSplitMode,
)
from splitledger.core.math import MONEY_EPS, money_equal
from splitledger.ledger import (
    balance_view_payload,
    build_balance_view,
    describe_transfer,
    summarize_participant,
)
from splitledger.simplify import (
    DebtSimplifier,
    DebtSimplifierConfig,
    SimplifierOrdering,
    simplify_debts,
)
from splitledger.splits import SplitCalculator, SplitCalculatorConfig, compute_splits

__version__ = "0.1.0"

__all__ = [
    # Operations
    "compute_splits",
    "compute_net_balances",
    "simplify_debts",
    "build_balance_view",
    "summarize_participant",
    "describe_transfer",
    "balance_view_payload",
    # Components & config
    "SplitCalculator",
    "SplitCalculatorConfig",
    "BalanceAggregator",
    "BalanceAggregatorConfig",
    "DebtSimplifier",
    "DebtSimplifierConfig",
    "SimplifierOrdering",
    # Models
    "SplitMode",
    "EqualShare",
    "ExactShare",
    "PercentShare",
    "SplitEntry",
    "ExpenseRecord",
    "SettlementRecord",
    "NetBalanceMap",
    "Transfer",
    "ParticipantSummary",
    "BalanceView",
    # Money policy
    "MONEY_EPS",
    "money_equal",
    # Errors
    "LedgerError",
    "SplitValidationError",
    "InvalidAmount",
    "NoParticipants",
    "SplitMismatch",
    "PercentMismatch",
    "UnknownSplitMode",
    "InvalidParticipantInput",
    "LedgerIntegrityError",
    "MalformedRecord",
    "UnbalancedLedger",
]
