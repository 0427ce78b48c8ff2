"""Debt Simplifier — сведение нетто-балансов к короткому списку переводов.

Жадный two-pointer алгоритм:
1. Сохранение суммы проверяется один раз, до сопоставления:
   |sum(balances)| > tolerance → UnbalancedLedger.
2. Кредиторы (net > tolerance) и должники (net < -tolerance, храним модуль).
   Позиция с |net| <= tolerance (граница включительная) уже рассчитана
   и в переводах не участвует.
3. Если отброшенная «пыль» оставляет среди активных позиций остаток
   больше tolerance, в сопоставление возвращаются пылевые позиции
   противоположного знака (крупные первыми), пока остаток не уложится
   в tolerance.
4. Обе очереди упорядочиваются детерминированно (SimplifierOrdering).
5. Два курсора: на каждом шаге переводим min(остаток должника, остаток
   кредитора) и уменьшаем оба остатка. Меньший остаток становится нулём;
   курсор сдвигается, только когда его остаток не больше _RESIDUAL_EPS
   (шум float). Остатки до tolerance не выбрасываются и переносятся
   дальше.
6. После исчерпания одной из очередей остатки другой не превышают
   tolerance каждый.

Гарантия: не более N - 1 переводов, где N — число позиций в
сопоставлении (creditors + debtors, если пыль не понадобилась).
Глобальный минимум не гарантируется: точная минимизация NP-трудна.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, List, Set, Tuple

from splitledger.core.domain.ledger import NetBalanceMap, Transfer
from splitledger.core.errors import INTEGRITY_LOGGER_NAME, MalformedRecord, UnbalancedLedger
from splitledger.core.math.numerical_safeguards import (
    MONEY_EPS,
    is_credit,
    is_debt,
    is_real_number,
    is_settled,
    money_sum,
)

log = logging.getLogger(__name__)
integrity_log = logging.getLogger(INTEGRITY_LOGGER_NAME)

# Остаток, при котором курсор сдвигается: шум float, а не денежная толерантность
_RESIDUAL_EPS: Final[float] = 1e-9


# =============================================================================
# ENUMS
# =============================================================================


class SimplifierOrdering(str, Enum):
    """Порядок обхода кредиторов и должников.

    Разные порядки дают разные, но одинаково корректные наборы переводов.
    """

    BY_IDENTIFIER = "by_identifier"  # по возрастанию ID участника
    BY_MAGNITUDE = "by_magnitude"  # крупные позиции первыми, при равенстве по ID
    INPUT_ORDER = "input_order"  # порядок итерации входного словаря


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class DebtSimplifierConfig:
    """Конфигурация debt simplifier."""

    # Порог «рассчитанности» позиции и допустимый дисбаланс входа
    tolerance: float = MONEY_EPS

    ordering: SimplifierOrdering = SimplifierOrdering.BY_IDENTIFIER


# =============================================================================
# DEBT SIMPLIFIER
# =============================================================================


class DebtSimplifier:
    """Debt simplifier: NetBalanceMap → список Transfer."""

    def __init__(self, config: DebtSimplifierConfig | None = None):
        self.config = config or DebtSimplifierConfig()

    def simplify(self, balances: NetBalanceMap) -> List[Transfer]:
        """Упрощение долгов.

        Args:
            balances: participant → нетто-баланс (обычно результат
                compute_net_balances); не изменяется

        Returns:
            Переводы, которые, будучи применены, обнуляют все балансы
            (в пределах tolerance)

        Raises:
            MalformedRecord: баланс не является конечным числом
            UnbalancedLedger: сумма балансов отлична от нуля больше чем на tolerance
        """
        try:
            positions = self._read(balances)
            self._check_conservation(positions)
            creditors, debtors = self._partition(positions)
            transfers = self._match(creditors, debtors)
        except (MalformedRecord, UnbalancedLedger) as e:
            integrity_log.error("integrity fault during debt simplification: %s", e)
            raise

        log.debug(
            "simplified %d creditors and %d debtors into %d transfers",
            len(creditors),
            len(debtors),
            len(transfers),
        )
        return transfers

    # -------------------------------------------------------------------------
    # Проверка входа
    # -------------------------------------------------------------------------

    @staticmethod
    def _read(balances: NetBalanceMap) -> List[Tuple[str, float]]:
        if not isinstance(balances, Mapping):
            raise MalformedRecord(
                "balances", None, f"expected a mapping, got {type(balances).__name__}"
            )

        positions: List[Tuple[str, float]] = []
        for participant, amount in balances.items():
            if not isinstance(participant, str) or not participant:
                raise MalformedRecord("balance", None, f"invalid participant id {participant!r}")
            if not is_real_number(amount):
                raise MalformedRecord(
                    "balance",
                    None,
                    f"balance of {participant!r} is not a finite number: {amount!r}",
                )
            positions.append((participant, float(amount)))
        return positions

    def _check_conservation(self, positions: List[Tuple[str, float]]) -> None:
        tol = self.config.tolerance
        residual = money_sum(amount for _, amount in positions)
        if is_settled(residual, tol):
            return

        excess = is_credit if residual > 0 else is_debt
        raise UnbalancedLedger(
            residual, sorted(p for p, amount in positions if excess(amount, tol))
        )

    # -------------------------------------------------------------------------
    # Разбиение на кредиторов и должников
    # -------------------------------------------------------------------------

    def _partition(self, positions: List[Tuple[str, float]]) -> Tuple[List[List], List[List]]:
        tol = self.config.tolerance
        residue = money_sum(amount for _, amount in positions if not is_settled(amount, tol))
        absorbing = self._absorbing_dust(positions, residue)

        creditors: List[List] = []
        debtors: List[List] = []
        for participant, amount in positions:
            if is_settled(amount, tol) and participant not in absorbing:
                continue
            if amount > 0:
                creditors.append([participant, amount])
            else:
                debtors.append([participant, -amount])

        return self._ordered(creditors), self._ordered(debtors)

    def _absorbing_dust(self, positions: List[Tuple[str, float]], residue: float) -> Set[str]:
        """Пылевые позиции, нужные, чтобы остаток активных уложился в tolerance.

        Вход уже сбалансирован, поэтому пыли противоположного знака
        всегда хватает.
        """
        tol = self.config.tolerance
        if is_settled(residue, tol):
            return set()

        sign = -1.0 if residue > 0 else 1.0
        dust = sorted(
            (
                (participant, amount)
                for participant, amount in positions
                if is_settled(amount, tol) and amount * sign > _RESIDUAL_EPS
            ),
            key=lambda pos: (-abs(pos[1]), pos[0]),
        )

        absorbing: Set[str] = set()
        for participant, amount in dust:
            if is_settled(residue, tol):
                break
            absorbing.add(participant)
            residue += amount
        return absorbing

    def _ordered(self, positions: List[List]) -> List[List]:
        ordering = self.config.ordering
        if ordering is SimplifierOrdering.BY_IDENTIFIER:
            return sorted(positions, key=lambda p: p[0])
        if ordering is SimplifierOrdering.BY_MAGNITUDE:
            return sorted(positions, key=lambda p: (-p[1], p[0]))
        return positions

    # -------------------------------------------------------------------------
    # Two-pointer matching
    # -------------------------------------------------------------------------

    def _match(self, creditors: List[List], debtors: List[List]) -> List[Transfer]:
        tol = self.config.tolerance
        transfers: List[Transfer] = []

        i, j = 0, 0
        while i < len(debtors) and j < len(creditors):
            debtor = debtors[i]
            creditor = creditors[j]

            pay = min(debtor[1], creditor[1])
            transfers.append(
                Transfer(from_participant=debtor[0], to_participant=creditor[0], amount=pay)
            )

            debtor[1] -= pay
            creditor[1] -= pay

            if debtor[1] <= _RESIDUAL_EPS:
                i += 1
            if creditor[1] <= _RESIDUAL_EPS:
                j += 1

        # Для сбалансированного входа каждый остаток в пределах tolerance
        leftover = [p for p in debtors[i:] + creditors[j:] if not is_settled(p[1], tol)]
        if leftover:
            residual = money_sum(
                [p[1] for p in creditors[j:]] + [-p[1] for p in debtors[i:]]
            )
            raise UnbalancedLedger(residual, [p[0] for p in leftover])

        return transfers


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def simplify_debts(balances: NetBalanceMap) -> List[Transfer]:
    """
    Упрощение долгов с конфигурацией по умолчанию (порядок по ID).

    Args:
        balances: participant → нетто-баланс

    Returns:
        Список Transfer (не более N - 1 элементов, N — позиции в сопоставлении)

    Raises:
        MalformedRecord: баланс не является конечным числом
        UnbalancedLedger: сумма балансов отлична от нуля больше чем на tolerance
    """
    return DebtSimplifier().simplify(balances)
