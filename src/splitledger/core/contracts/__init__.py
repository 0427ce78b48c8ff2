"""
Contract Validation Module

Модуль для валидации JSON контрактов ledger engine.
"""

from .validators import (
    BalanceViewValidator,
    ContractValidator,
    ExpenseRecordValidator,
    SchemaLoader,
    SettlementRecordValidator,
    TransferValidator,
    validate_balance_view,
    validate_expense_record,
    validate_settlement_record,
    validate_transfer,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ExpenseRecordValidator",
    "SettlementRecordValidator",
    "TransferValidator",
    "BalanceViewValidator",
    # Functions
    "validate_expense_record",
    "validate_settlement_record",
    "validate_transfer",
    "validate_balance_view",
]
