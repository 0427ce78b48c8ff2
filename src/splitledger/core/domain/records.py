"""
Records — записи расходов и взаиморасчётов

Записи принадлежат внешнему хранилищу; ledger engine получает их как
снимок истории группы и только читает.

Инвариант ExpenseRecord (sum(split_entries.owed_amount) ≈ amount)
проверяется один раз, при создании расхода в split calculator,
и здесь повторно не навязывается.
"""

from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field

from splitledger.core.domain.split import SplitEntry, SplitMode


class ExpenseRecord(BaseModel):
    """Расход группы: кто заплатил, сколько, и как разбита сумма."""

    payer: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("payer", "paidBy"),
        description="ID участника, оплатившего расход",
    )
    amount: float = Field(
        ..., gt=0, strict=True, allow_inf_nan=False, description="Полная сумма расхода"
    )
    split_entries: Tuple[SplitEntry, ...] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("split_entries", "splitEntries", "splits"),
        description="Доли участников",
    )

    # Метаданные (на балансы не влияют)
    description: Optional[str] = Field(default=None, description="Описание расхода")
    split_mode: Optional[SplitMode] = Field(
        default=None,
        validation_alias=AliasChoices("split_mode", "splitMode", "splitType"),
        description="Режим, которым была рассчитана разбивка",
    )

    model_config = {"frozen": True}


class SettlementRecord(BaseModel):
    """
    Прямой платёж from → to вне системы расходов.

    Погашение долга: уменьшает долг плательщика и кредит получателя.
    """

    from_participant: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("from", "from_participant"),
        serialization_alias="from",
        description="Кто заплатил",
    )
    to_participant: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("to", "to_participant"),
        serialization_alias="to",
        description="Кто получил",
    )
    amount: float = Field(..., gt=0, strict=True, allow_inf_nan=False, description="Сумма платежа")

    model_config = {"frozen": True}
