"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Epsilon-сравнения денежных сумм (граница включительная)
2. Классификацию позиций: кредит / долг / рассчитано
3. Проверку валидности чисел
4. Точное суммирование (независимость от порядка)
5. Округление до минорной единицы
"""

import itertools

import pytest

from splitledger.core.math.numerical_safeguards import (
    MONEY_DECIMALS,
    MONEY_EPS,
    is_credit,
    is_debt,
    is_real_number,
    is_settled,
    is_valid_float,
    money_equal,
    money_sum,
    round_money,
)

# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты денежной политики"""

    def test_money_eps_is_one_minor_unit(self) -> None:
        """Толерантность — одна минорная единица"""
        assert MONEY_EPS == 0.01
        assert MONEY_DECIMALS == 2


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestMoneyEqual:
    """Тесты для money_equal"""

    def test_exact_equality(self) -> None:
        assert money_equal(50.0, 50.0)
        assert money_equal(0.0, -0.0)

    def test_one_minor_unit_is_equal(self) -> None:
        """Разница ровно 0.01 считается равенством (граница включительная)"""
        assert money_equal(49.99, 50.0)
        assert money_equal(50.01, 50.0)
        assert money_equal(-0.01, 0.0)

    def test_ten_minor_units_not_equal(self) -> None:
        assert not money_equal(49.90, 50.0)
        assert not money_equal(50.0, 50.02)

    def test_custom_tolerance(self) -> None:
        assert money_equal(49.6, 50.0, tol=0.5)
        assert not money_equal(49.4, 50.0, tol=0.5)

    def test_float_drift_tolerated(self) -> None:
        """Накопленный дрейф суммирования не ломает сравнение"""
        drifted = sum([0.1] * 10)
        assert drifted != 1.0
        assert money_equal(drifted, 1.0)


class TestPositionClassification:
    """Тесты для is_settled / is_credit / is_debt"""

    def test_settled_within_eps(self) -> None:
        assert is_settled(0.0)
        assert is_settled(0.005)
        assert is_settled(-0.01)
        assert not is_settled(0.02)
        assert not is_settled(-0.02)

    def test_credit_strictly_above_eps(self) -> None:
        assert is_credit(0.02)
        assert is_credit(60.0)
        assert not is_credit(0.01)
        assert not is_credit(0.0)
        assert not is_credit(-5.0)

    def test_debt_strictly_below_minus_eps(self) -> None:
        assert is_debt(-0.02)
        assert is_debt(-30.0)
        assert not is_debt(-0.01)
        assert not is_debt(0.0)
        assert not is_debt(5.0)

    def test_classes_are_exclusive(self) -> None:
        """Каждое значение попадает ровно в один класс"""
        for value in (-100.0, -0.02, -0.01, 0.0, 0.005, 0.01, 0.02, 100.0):
            flags = [is_credit(value), is_debt(value), is_settled(value)]
            assert flags.count(True) == 1, value


# =============================================================================
# ТЕСТЫ ВАЛИДНОСТИ ЧИСЕЛ
# =============================================================================


class TestNumberValidity:
    """Тесты для is_valid_float / is_real_number"""

    def test_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    @pytest.mark.parametrize("value", [0, 1, 10.5, -3.25, 1e9])
    def test_real_numbers(self, value) -> None:
        assert is_real_number(value)

    @pytest.mark.parametrize(
        "value",
        [True, False, "10", None, [], float("nan"), float("inf"), float("-inf")],
    )
    def test_not_real_numbers(self, value) -> None:
        """bool, строки, None и NaN/Inf — не денежные суммы"""
        assert not is_real_number(value)


# =============================================================================
# ТЕСТЫ СУММИРОВАНИЯ И ОКРУГЛЕНИЯ
# =============================================================================


class TestMoneySum:
    """Тесты для money_sum"""

    def test_correctly_rounded(self) -> None:
        assert money_sum([0.1] * 10) == 1.0
        assert money_sum([1e16, 1.0, -1e16]) == 1.0

    def test_empty_is_zero(self) -> None:
        assert money_sum([]) == 0.0

    def test_order_independent(self) -> None:
        """Все перестановки дают бит-в-бит одинаковую сумму"""
        values = [0.1, 0.2, 0.3, -0.6, 33.333333333, -1e-7, 1e6]
        results = {money_sum(p) for p in itertools.permutations(values)}
        assert len(results) == 1


class TestRoundMoney:
    """Тесты для round_money"""

    def test_rounds_to_cents(self) -> None:
        assert round_money(33.333333) == 33.33
        assert round_money(66.666667) == 66.67

    def test_half_away_from_zero(self) -> None:
        assert round_money(0.125) == 0.13
        assert round_money(-0.125) == -0.13
        assert round_money(2.675) == 2.68

    def test_decimal_notation_rounded(self) -> None:
        """Округляется десятичная запись, а не двоичное приближение float"""
        assert round_money(1.005) == 1.01
        assert round_money(-2.675) == -2.68
        assert round_money(1.0049999) == 1.0
        assert round_money(1e-07) == 0.0

    def test_custom_decimals(self) -> None:
        assert round_money(10.4, decimals=0) == 10.0
        assert round_money(1.23456, decimals=3) == 1.235

    def test_negative_decimals_raise(self) -> None:
        with pytest.raises(ValueError, match="decimals must be non-negative"):
            round_money(1.0, decimals=-1)
