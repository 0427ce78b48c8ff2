"""Balance Aggregator — нетто-балансы группы по полной истории.

Семантика net:
    net > 0 — участнику ДОЛЖНЫ; net < 0 — он ДОЛЖЕН.

Расход: плательщик кредитуется, участник доли дебетуется на owed_amount.
Если плательщик сам участник, две операции взаимно гасятся — это штатно.

Взаиморасчёт (settlement) from → to на X — погашение долга:
from кредитуется на X (его долг уменьшился), to дебетуется на X
(ему теперь должны меньше). Направление обратно расходам.

Результат не зависит от порядка расходов и взаиморасчётов точно,
а не приблизительно: дельты копятся по участникам и суммируются
через math.fsum (корректно округлённая сумма).

Вызывающий обязан передать согласованный во времени снимок
расходов и взаиморасчётов.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from splitledger.core.contracts import ExpenseRecordValidator, SettlementRecordValidator
from splitledger.core.domain.ledger import NetBalanceMap
from splitledger.core.domain.records import ExpenseRecord, SettlementRecord
from splitledger.core.errors import (
    INTEGRITY_LOGGER_NAME,
    MalformedRecord,
    format_validation_error,
)
from splitledger.core.math.numerical_safeguards import money_sum

log = logging.getLogger(__name__)
integrity_log = logging.getLogger(INTEGRITY_LOGGER_NAME)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BalanceAggregatorConfig:
    """Конфигурация balance aggregator."""

    # Проверять mapping-записи JSON Schema контрактом до построения моделей
    validate_contracts: bool = True


# =============================================================================
# BALANCE AGGREGATOR
# =============================================================================


class BalanceAggregator:
    """Balance aggregator: история группы → NetBalanceMap.

    Входы только читаются; результат — новый словарь с ключами,
    отсортированными по ID участника.
    """

    def __init__(self, config: BalanceAggregatorConfig | None = None):
        self.config = config or BalanceAggregatorConfig()
        self._expense_contract: Optional[ExpenseRecordValidator] = None
        self._settlement_contract: Optional[SettlementRecordValidator] = None
        if self.config.validate_contracts:
            self._expense_contract = ExpenseRecordValidator()
            self._settlement_contract = SettlementRecordValidator()

    def aggregate(
        self,
        expenses: Iterable[Any],
        settlements: Iterable[Any],
        members: Optional[Iterable[str]] = None,
    ) -> NetBalanceMap:
        """Расчёт нетто-балансов.

        Args:
            expenses: ExpenseRecord или mapping-документы расходов
            settlements: SettlementRecord или mapping-документы взаиморасчётов
            members: участники группы, которые должны попасть в результат
                даже без движений (с балансом 0.0)

        Returns:
            participant → нетто-баланс

        Raises:
            MalformedRecord: любая структурно невалидная запись
                (агрегация прерывается целиком)
        """
        try:
            expense_records = [
                self._coerce_expense(i, record)
                for i, record in enumerate(self._records("expenses", expenses))
            ]
            settlement_records = [
                self._coerce_settlement(i, record)
                for i, record in enumerate(self._records("settlements", settlements))
            ]
            member_ids = self._coerce_members(members)
        except MalformedRecord as e:
            integrity_log.error("integrity fault during balance aggregation: %s", e)
            raise

        deltas: Dict[str, List[float]] = defaultdict(list)
        for member in member_ids:
            deltas.setdefault(member, [])

        for expense in expense_records:
            for entry in expense.split_entries:
                deltas[expense.payer].append(entry.owed_amount)
                deltas[entry.participant].append(-entry.owed_amount)

        for settlement in settlement_records:
            deltas[settlement.from_participant].append(settlement.amount)
            deltas[settlement.to_participant].append(-settlement.amount)

        balances = {participant: money_sum(deltas[participant]) for participant in sorted(deltas)}
        log.debug(
            "aggregated %d expenses and %d settlements into %d balances",
            len(expense_records),
            len(settlement_records),
            len(balances),
        )
        return balances

    # -------------------------------------------------------------------------
    # Проверка записей
    # -------------------------------------------------------------------------

    @staticmethod
    def _records(kind: str, records: Iterable[Any]) -> list:
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
            raise MalformedRecord(
                kind, None, f"expected a sequence of records, got {type(records).__name__}"
            )
        return list(records)

    def _coerce_expense(self, index: int, record: Any) -> ExpenseRecord:
        if isinstance(record, ExpenseRecord):
            return record
        if not isinstance(record, Mapping):
            raise MalformedRecord(
                "expense", index, f"unsupported record type {type(record).__name__}"
            )

        if self._expense_contract is not None:
            messages = self._expense_contract.error_messages(record)
            if messages:
                raise MalformedRecord("expense", index, "; ".join(messages))

        try:
            return ExpenseRecord.model_validate(record)
        except ValidationError as e:
            raise MalformedRecord("expense", index, format_validation_error(e)) from e

    def _coerce_settlement(self, index: int, record: Any) -> SettlementRecord:
        if isinstance(record, SettlementRecord):
            return record
        if not isinstance(record, Mapping):
            raise MalformedRecord(
                "settlement", index, f"unsupported record type {type(record).__name__}"
            )

        if self._settlement_contract is not None:
            messages = self._settlement_contract.error_messages(record)
            if messages:
                raise MalformedRecord("settlement", index, "; ".join(messages))

        try:
            return SettlementRecord.model_validate(record)
        except ValidationError as e:
            raise MalformedRecord("settlement", index, format_validation_error(e)) from e

    @staticmethod
    def _coerce_members(members: Optional[Iterable[str]]) -> List[str]:
        if members is None:
            return []
        if isinstance(members, (str, bytes, Mapping)) or not isinstance(members, Iterable):
            raise MalformedRecord(
                "members", None, f"expected a sequence of ids, got {type(members).__name__}"
            )

        member_ids = list(members)
        for i, member in enumerate(member_ids):
            if not isinstance(member, str) or not member:
                raise MalformedRecord("member", i, f"expected a non-empty id, got {member!r}")
        return member_ids


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def compute_net_balances(
    expenses: Iterable[Any],
    settlements: Iterable[Any],
    members: Optional[Iterable[str]] = None,
) -> NetBalanceMap:
    """
    Нетто-балансы группы с конфигурацией по умолчанию.

    Args:
        expenses: расходы группы
        settlements: взаиморасчёты группы
        members: участники, включаемые в результат с нулевым балансом

    Returns:
        participant → нетто-баланс (сумма значений ≈ 0)

    Raises:
        MalformedRecord: структурно невалидная запись
    """
    return BalanceAggregator().aggregate(expenses, settlements, members)
