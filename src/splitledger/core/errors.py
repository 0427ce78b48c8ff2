"""
Ledger Errors — таксономия ошибок ledger engine

Две ветви:
- SplitValidationError: ошибки входных данных вызывающего (при создании
  расхода). Возвращаются синхронно, частичного результата нет.
- LedgerIntegrityError: нарушения целостности данных, пришедших из
  внешнего хранилища (структурно невалидные записи, несохранённая сумма
  балансов). Логируются отдельно от ошибок валидации.

Ни одна ошибка не повторяется внутри библиотеки: все компоненты
детерминированы, повтор с тем же входом даёт ту же ошибку.
"""

from typing import Optional

from pydantic import ValidationError


INTEGRITY_LOGGER_NAME = "splitledger.integrity"


def format_validation_error(error: ValidationError) -> str:
    """Краткое описание ошибок pydantic: 'loc: msg; loc: msg'."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or error.title}: {err['msg']}"
        for err in error.errors()
    )


class LedgerError(Exception):
    """Базовая ошибка ledger engine."""


# =============================================================================
# SPLIT VALIDATION
# =============================================================================


class SplitValidationError(LedgerError):
    """Невалидный запрос на разбиение расхода (ошибка вызывающего)."""


class InvalidAmount(SplitValidationError):
    """Сумма расхода не является конечным положительным числом."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Expense amount must be a finite positive number, got {amount!r}")


class NoParticipants(SplitValidationError):
    """Список участников пуст или отсутствует."""

    def __init__(self):
        super().__init__("Participants required")


class SplitMismatch(SplitValidationError):
    """EXACT: сумма долей не совпадает с суммой расхода."""

    def __init__(self, expected: float, actual: float):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Exact amounts must sum to total: expected {expected:.2f}, got {actual:.2f}"
        )


class PercentMismatch(SplitValidationError):
    """PERCENT: сумма процентов не равна 100."""

    def __init__(self, expected: float, actual: float):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Percents must sum to {expected:g}, got {actual:g}")


class UnknownSplitMode(SplitValidationError):
    """Неизвестный режим разбиения."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Invalid split type: {mode!r}")


class InvalidParticipantInput(SplitValidationError):
    """Элемент списка участников не соответствует режиму разбиения."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid participant at index {index}: {reason}")


# =============================================================================
# INTEGRITY
# =============================================================================


class LedgerIntegrityError(LedgerError):
    """Нарушение целостности данных (ошибка интеграции, не пользователя)."""


class MalformedRecord(LedgerIntegrityError):
    """
    Структурно невалидная запись из хранилища.

    Агрегация прерывается целиком: частичный баланс не является
    допустимым результатом.
    """

    def __init__(self, kind: str, index: Optional[int], reason: str):
        self.kind = kind
        self.index = index
        self.reason = reason
        where = kind if index is None else f"{kind}[{index}]"
        super().__init__(f"Malformed {where}: {reason}")


class UnbalancedLedger(LedgerIntegrityError):
    """
    Сумма балансов существенно отлична от нуля.

    Сигнализирует о нарушении закона сохранения выше по потоку.
    Debt simplifier останавливается вместо выдачи неполного списка переводов.
    """

    def __init__(self, residual: float, participants: Optional[list] = None):
        self.residual = residual
        self.participants = list(participants or [])
        super().__init__(
            f"Ledger does not balance: residual {residual:.6f} left on "
            f"{self.participants or 'no participants'}"
        )
