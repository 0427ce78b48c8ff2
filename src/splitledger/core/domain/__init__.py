"""
Domain models and value objects.

Contains the ledger entities: split input and entries, expense and
settlement records, transfers and balance views.
"""

from splitledger.core.domain.ledger import (
    BalanceView,
    NetBalanceMap,
    ParticipantSummary,
    Transfer,
)
from splitledger.core.domain.records import ExpenseRecord, SettlementRecord
from splitledger.core.domain.split import (
    EqualShare,
    ExactShare,
    ParticipantShare,
    PercentShare,
    SplitEntry,
    SplitMode,
)

__all__ = [
    # Split models
    "SplitMode",
    "EqualShare",
    "ExactShare",
    "PercentShare",
    "ParticipantShare",
    "SplitEntry",
    # Records
    "ExpenseRecord",
    "SettlementRecord",
    # Ledger results
    "NetBalanceMap",
    "Transfer",
    "ParticipantSummary",
    "BalanceView",
]
