"""Ledger views — балансы группы и сводки для слоя представления."""

from .view import (
    balance_view_payload,
    build_balance_view,
    describe_transfer,
    summarize_participant,
)

__all__ = [
    "build_balance_view",
    "summarize_participant",
    "describe_transfer",
    "balance_view_payload",
]
