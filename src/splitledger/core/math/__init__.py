"""
Core math modules для splitledger

Денежная epsilon-политика и точное суммирование.
"""

# Numerical Safeguards
from splitledger.core.math.numerical_safeguards import (
    # Epsilon constants
    MONEY_DECIMALS,
    MONEY_EPS,
    # Validity
    is_real_number,
    is_valid_float,
    # Epsilon comparisons
    is_credit,
    is_debt,
    is_settled,
    money_equal,
    # Summation & rounding
    money_sum,
    round_money,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "MONEY_DECIMALS",
    "MONEY_EPS",
    # Numerical Safeguards: Validity
    "is_real_number",
    "is_valid_float",
    # Numerical Safeguards: Epsilon comparisons
    "is_credit",
    "is_debt",
    "is_settled",
    "money_equal",
    # Numerical Safeguards: Summation & rounding
    "money_sum",
    "round_money",
]
