"""Split Calculator — разбиение суммы расхода между участниками.

Вызывается при создании расхода. Проверяет запрос и возвращает
список SplitEntry, который затем сохраняется во внешнем хранилище.

Режимы:
- EQUAL: каждому total / count (остаток от деления не перераспределяется)
- EXACT: явные суммы, sum(amount) ≈ total в пределах MONEY_EPS
- PERCENT: проценты, sum(percent) ≈ 100 в пределах MONEY_EPS,
  owed_amount = total * percent / 100

Порядок проверок:
1. Сумма расхода (InvalidAmount)
2. Непустой список участников (NoParticipants)
3. Режим разбиения (UnknownSplitMode)
4. Элементы списка участников (InvalidParticipantInput)
5. Сходимость сумм/процентов (SplitMismatch / PercentMismatch)
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, List, Type

from pydantic import BaseModel, ValidationError

from splitledger.core.domain.split import (
    EqualShare,
    ExactShare,
    ParticipantShare,
    PercentShare,
    SplitEntry,
    SplitMode,
)
from splitledger.core.errors import (
    InvalidAmount,
    InvalidParticipantInput,
    NoParticipants,
    PercentMismatch,
    SplitMismatch,
    SplitValidationError,
    UnknownSplitMode,
    format_validation_error,
)
from splitledger.core.math.numerical_safeguards import (
    MONEY_EPS,
    is_real_number,
    money_equal,
    money_sum,
)

log = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SplitCalculatorConfig:
    """Конфигурация split calculator."""

    # Допуск сходимости EXACT-сумм и PERCENT-процентов
    tolerance: float = MONEY_EPS

    # Сумма процентов, которой должен соответствовать PERCENT-запрос
    percent_total: float = 100.0


_SHARE_TYPES: dict[SplitMode, Type[BaseModel]] = {
    SplitMode.EQUAL: EqualShare,
    SplitMode.EXACT: ExactShare,
    SplitMode.PERCENT: PercentShare,
}


# =============================================================================
# SPLIT CALCULATOR
# =============================================================================


class SplitCalculator:
    """Split calculator: запрос на разбиение → список SplitEntry.

    Не имеет состояния и побочных эффектов; при одинаковом порядке
    входа результат одинаков. Порядок выхода совпадает с порядком входа.
    """

    def __init__(self, config: SplitCalculatorConfig | None = None):
        """Инициализация split calculator.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or SplitCalculatorConfig()

    def compute(
        self,
        total_amount: float,
        mode: SplitMode | str,
        participants: Iterable[Any],
    ) -> List[SplitEntry]:
        """Расчёт долей участников.

        Args:
            total_amount: полная сумма расхода (конечная, > 0)
            mode: режим разбиения (SplitMode или его строковое значение)
            participants: участники; для EQUAL — ID или EqualShare,
                для EXACT — ExactShare или mapping с amount,
                для PERCENT — PercentShare или mapping с percent

        Returns:
            Список SplitEntry в порядке входа

        Raises:
            SplitValidationError: любая ошибка запроса (частичного результата нет)
        """
        try:
            return self._compute(total_amount, mode, participants)
        except SplitValidationError as e:
            log.debug("split rejected: %s", e)
            raise

    def _compute(
        self,
        total_amount: float,
        mode: SplitMode | str,
        participants: Iterable[Any],
    ) -> List[SplitEntry]:
        # 1. Сумма расхода
        if not is_real_number(total_amount) or total_amount <= 0:
            raise InvalidAmount(total_amount)
        total = float(total_amount)

        # 2. Участники
        items = self._materialize(participants)

        # 3. Режим
        split_mode = self._parse_mode(mode)

        # 4. Элементы
        shares = [self._parse_share(i, item, split_mode) for i, item in enumerate(items)]

        # 5. Расчёт
        if split_mode is SplitMode.EQUAL:
            return self._equal(total, shares)
        if split_mode is SplitMode.EXACT:
            return self._exact(total, shares)
        return self._percent(total, shares)

    # -------------------------------------------------------------------------
    # Разбор входа
    # -------------------------------------------------------------------------

    @staticmethod
    def _materialize(participants: Iterable[Any]) -> list:
        if participants is None or isinstance(participants, (str, bytes, Mapping)):
            raise NoParticipants()
        if not isinstance(participants, Iterable):
            raise NoParticipants()

        items = list(participants)
        if not items:
            raise NoParticipants()
        return items

    @staticmethod
    def _parse_mode(mode: SplitMode | str) -> SplitMode:
        if isinstance(mode, SplitMode):
            return mode
        if isinstance(mode, str):
            try:
                return SplitMode(mode)
            except ValueError:
                raise UnknownSplitMode(mode) from None
        raise UnknownSplitMode(mode)

    @staticmethod
    def _parse_share(index: int, item: Any, mode: SplitMode) -> ParticipantShare:
        share_type = _SHARE_TYPES[mode]

        if isinstance(item, share_type):
            return item

        if mode is SplitMode.EQUAL:
            # Равное разбиение: достаточно ID участника
            if isinstance(item, str):
                item = {"participant": item}
            elif isinstance(item, (ExactShare, PercentShare)):
                item = {"participant": item.participant}

        if isinstance(item, BaseModel):
            item = item.model_dump()

        if not isinstance(item, Mapping):
            raise InvalidParticipantInput(
                index, f"expected {share_type.__name__} or mapping, got {type(item).__name__}"
            )

        try:
            return share_type.model_validate(item)
        except ValidationError as e:
            raise InvalidParticipantInput(index, format_validation_error(e)) from e

    # -------------------------------------------------------------------------
    # Режимы
    # -------------------------------------------------------------------------

    @staticmethod
    def _equal(total: float, shares: List[EqualShare]) -> List[SplitEntry]:
        share = total / len(shares)
        return [SplitEntry(participant=s.participant, owed_amount=share) for s in shares]

    def _exact(self, total: float, shares: List[ExactShare]) -> List[SplitEntry]:
        actual = money_sum(s.amount for s in shares)
        if not money_equal(actual, total, self.config.tolerance):
            raise SplitMismatch(expected=total, actual=actual)

        return [SplitEntry(participant=s.participant, owed_amount=s.amount) for s in shares]

    def _percent(self, total: float, shares: List[PercentShare]) -> List[SplitEntry]:
        actual = money_sum(s.percent for s in shares)
        if not money_equal(actual, self.config.percent_total, self.config.tolerance):
            raise PercentMismatch(expected=self.config.percent_total, actual=actual)

        return [
            SplitEntry(
                participant=s.participant,
                owed_amount=total * s.percent / self.config.percent_total,
                percent=s.percent,
            )
            for s in shares
        ]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def compute_splits(
    total_amount: float,
    mode: SplitMode | str,
    participants: Iterable[Any],
) -> List[SplitEntry]:
    """
    Расчёт долей участников с конфигурацией по умолчанию.

    Args:
        total_amount: полная сумма расхода
        mode: "EQUAL" | "EXACT" | "PERCENT"
        participants: участники (см. SplitCalculator.compute)

    Returns:
        Список SplitEntry

    Raises:
        SplitValidationError: InvalidAmount, NoParticipants, SplitMismatch,
            PercentMismatch, UnknownSplitMode, InvalidParticipantInput
    """
    return SplitCalculator().compute(total_amount, mode, participants)
