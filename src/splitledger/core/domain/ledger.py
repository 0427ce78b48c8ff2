"""
Ledger — результаты расчёта балансов

- NetBalanceMap: participant → подписанный нетто-баланс
  (> 0 — группа должна участнику, < 0 — участник должен группе)
- Transfer: упрощённый перевод from → to
- ParticipantSummary: «вы должны» / «вам должны» для одного участника
- BalanceView: балансы + упрощённые переводы для экрана группы
"""

from typing import Dict, Tuple

from pydantic import AliasChoices, BaseModel, Field

from splitledger.core.domain.records import SettlementRecord

NetBalanceMap = Dict[str, float]


class Transfer(BaseModel):
    """
    Перевод, гасящий встречные позиции двух участников.

    Применённый как settlement, сдвигает баланс from вверх, а to вниз
    на amount.
    """

    from_participant: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("from", "from_participant"),
        serialization_alias="from",
        description="Должник",
    )
    to_participant: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("to", "to_participant"),
        serialization_alias="to",
        description="Кредитор",
    )
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Сумма перевода")

    model_config = {"frozen": True}

    def as_settlement(self) -> SettlementRecord:
        """Перевод как запись взаиморасчёта (после фактической оплаты)."""
        return SettlementRecord(
            from_participant=self.from_participant,
            to_participant=self.to_participant,
            amount=self.amount,
        )


class ParticipantSummary(BaseModel):
    """Сводка по участнику из списка упрощённых переводов."""

    participant: str = Field(..., min_length=1, description="ID участника")
    owes: float = Field(..., ge=0, description="Сколько участник должен заплатить")
    owed: float = Field(..., ge=0, description="Сколько должны участнику")

    model_config = {"frozen": True}

    @property
    def net(self) -> float:
        """Нетто-позиция: owed - owes."""
        return self.owed - self.owes


class BalanceView(BaseModel):
    """Балансы группы вместе с упрощённым планом переводов."""

    balances: Dict[str, float] = Field(..., description="Нетто-балансы участников")
    simplified: Tuple[Transfer, ...] = Field(..., description="Упрощённые переводы")

    model_config = {"frozen": True}
