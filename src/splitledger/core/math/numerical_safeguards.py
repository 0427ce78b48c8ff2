"""
Numerical Safeguards — денежная epsilon-политика

Единственное место, где определена толерантность сравнения денежных сумм.
Все три компонента (split calculator, balance aggregator, debt simplifier)
сравнивают суммы только через функции этого модуля:
- Epsilon-сравнения сумм (money_equal, is_settled, is_credit, is_debt)
- Проверка валидности чисел (NaN/Inf, bool не является числом)
- Точное (не зависящее от порядка) суммирование через math.fsum
- Округление до минорной единицы валюты для отображения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Суммы никогда не сравниваются на точное равенство
2. Толерантность MONEY_EPS одна для всей библиотеки
3. Суммирование детерминировано и не зависит от порядка слагаемых
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Final, Iterable

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность для денежных сумм (одна минорная единица: 0.01)
# Компенсирует дрейф при многократном суммировании float
MONEY_EPS: Final[float] = 0.01

# Число знаков минорной единицы валюты (для отображения)
MONEY_DECIMALS: Final[int] = 2


# =============================================================================
# ВАЛИДНОСТЬ ЧИСЕЛ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_real_number(value: object) -> bool:
    """
    Проверка, что значение — конечное вещественное число.

    bool формально является int, но денежной суммой не считается.

    Examples:
        >>> is_real_number(10)
        True
        >>> is_real_number(True)
        False
        >>> is_real_number(float('nan'))
        False
        >>> is_real_number("10")
        False
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return is_valid_float(float(value))


# =============================================================================
# EPSILON-СРАВНЕНИЯ СУММ
# =============================================================================


def money_equal(a: float, b: float, tol: float = MONEY_EPS) -> bool:
    """
    Сравнение двух сумм с учётом денежной толерантности.

    Граница включительная: |a - b| <= tol считается равенством.

    Args:
        a: Первая сумма
        b: Вторая сумма
        tol: Абсолютная толерантность (default: MONEY_EPS)

    Returns:
        True если суммы совпадают в пределах tol

    Examples:
        >>> money_equal(49.99, 50.0)
        True
        >>> money_equal(49.90, 50.0)
        False
    """
    # Небольшой запас на представление границы в float (49.99 - 50.0 != -0.01)
    return abs(a - b) <= tol + tol * 1e-9


def is_settled(value: float, tol: float = MONEY_EPS) -> bool:
    """
    Проверка, что позиция погашена (в пределах tol от нуля).

    Args:
        value: Баланс или остаток
        tol: Абсолютная толерантность (default: MONEY_EPS)

    Returns:
        True если abs(value) <= tol
    """
    return money_equal(value, 0.0, tol)


def is_credit(value: float, tol: float = MONEY_EPS) -> bool:
    """Баланс участника — кредит (группа должна ему): value > tol."""
    return value > 0 and not is_settled(value, tol)


def is_debt(value: float, tol: float = MONEY_EPS) -> bool:
    """Баланс участника — долг (он должен группе): value < -tol."""
    return value < 0 and not is_settled(value, tol)


# =============================================================================
# СУММИРОВАНИЕ И ОКРУГЛЕНИЕ
# =============================================================================


def money_sum(values: Iterable[float]) -> float:
    """
    Точная сумма денежных величин.

    math.fsum даёт корректно округлённый результат, поэтому он не зависит
    от порядка слагаемых (в отличие от последовательного +=).

    Args:
        values: Слагаемые

    Returns:
        Сумма
    """
    return math.fsum(values)


def round_money(value: float, decimals: int = MONEY_DECIMALS) -> float:
    """
    Округление суммы до минорной единицы (ROUND_HALF_UP, от нуля).

    Используется только для отображения: балансовая математика работает
    с неокруглёнными значениями.

    Args:
        value: Сумма
        decimals: Число знаков после запятой (default: MONEY_DECIMALS)

    Returns:
        Округлённая сумма

    Examples:
        >>> round_money(33.333333)
        33.33
        >>> round_money(0.125)
        0.13
        >>> round_money(-0.125)
        -0.13
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    # str(): десятичная запись float, 2.675 остаётся 2.675, а не 2.67499999...
    quantum = Decimal("1").scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
