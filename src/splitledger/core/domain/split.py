"""
Split — модели разбиения расхода между участниками

Immutable Pydantic модели:
- SplitMode: правило разбиения (EQUAL / EXACT / PERCENT)
- EqualShare / ExactShare / PercentShare: входные данные участника,
  по одному типу на режим
- SplitEntry: рассчитанная доля участника

Документы из HTTP-слоя и хранилища используют camelCase-имена
(userId, owedAmount), поэтому поля принимают оба варианта.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SplitMode(str, Enum):
    """Режим разбиения суммы расхода"""

    EQUAL = "EQUAL"
    EXACT = "EXACT"
    PERCENT = "PERCENT"


# =============================================================================
# PARTICIPANT INPUT
# =============================================================================

_PARTICIPANT_ALIASES = AliasChoices("participant", "userId", "user")


class EqualShare(BaseModel):
    """Участник равного разбиения."""

    participant: str = Field(
        ..., min_length=1, validation_alias=_PARTICIPANT_ALIASES, description="ID участника"
    )

    model_config = {"frozen": True}


class ExactShare(BaseModel):
    """Участник с явно заданной суммой доли."""

    participant: str = Field(
        ..., min_length=1, validation_alias=_PARTICIPANT_ALIASES, description="ID участника"
    )
    amount: float = Field(
        ..., ge=0, strict=True, allow_inf_nan=False, description="Сумма доли участника"
    )

    model_config = {"frozen": True}


class PercentShare(BaseModel):
    """Участник с долей в процентах от суммы расхода."""

    participant: str = Field(
        ..., min_length=1, validation_alias=_PARTICIPANT_ALIASES, description="ID участника"
    )
    percent: float = Field(
        ..., ge=0, strict=True, allow_inf_nan=False, description="Доля в процентах (0..100)"
    )

    model_config = {"frozen": True}


ParticipantShare = Union[EqualShare, ExactShare, PercentShare]


# =============================================================================
# SPLIT ENTRY
# =============================================================================


class SplitEntry(BaseModel):
    """
    Рассчитанная доля участника в расходе.

    owed_amount — авторитетная величина для балансов.
    percent заполняется только для PERCENT и носит информационный характер.
    """

    participant: str = Field(
        ..., min_length=1, validation_alias=_PARTICIPANT_ALIASES, description="ID участника"
    )
    owed_amount: float = Field(
        ...,
        strict=True,
        allow_inf_nan=False,
        validation_alias=AliasChoices("owed_amount", "owedAmount", "amount"),
        description="Сумма, которую участник должен плательщику",
    )
    percent: Optional[float] = Field(
        default=None, strict=True, allow_inf_nan=False, description="Процент (только PERCENT)"
    )

    model_config = {"frozen": True}
