"""Balance view — композиция aggregator + simplifier для экрана группы.

- build_balance_view: балансы и упрощённые переводы одним вызовом
- summarize_participant: «вы должны» / «вам должны» для участника
- describe_transfer: строка вида "B owes A 30.00"
- balance_view_payload: ответ для слоя представления (проверен контрактом)
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict, Optional

from splitledger.balances.aggregator import BalanceAggregator
from splitledger.core.contracts import BalanceViewValidator
from splitledger.core.domain.ledger import BalanceView, ParticipantSummary, Transfer
from splitledger.core.math.numerical_safeguards import MONEY_DECIMALS, money_sum, round_money
from splitledger.simplify.simplifier import DebtSimplifier


def build_balance_view(
    expenses: Iterable[Any],
    settlements: Iterable[Any],
    members: Optional[Iterable[str]] = None,
    aggregator: BalanceAggregator | None = None,
    simplifier: DebtSimplifier | None = None,
) -> BalanceView:
    """
    Балансы группы и упрощённый план переводов.

    Args:
        expenses: расходы группы (согласованный снимок)
        settlements: взаиморасчёты группы (тот же снимок)
        members: участники группы, показываемые даже без движений
        aggregator: balance aggregator (опционально, default конфигурация)
        simplifier: debt simplifier (опционально, default конфигурация)

    Returns:
        BalanceView

    Raises:
        MalformedRecord: структурно невалидная запись
        UnbalancedLedger: нарушен закон сохранения суммы
    """
    aggregator = aggregator or BalanceAggregator()
    simplifier = simplifier or DebtSimplifier()

    balances = aggregator.aggregate(expenses, settlements, members)
    simplified = simplifier.simplify(balances)
    return BalanceView(balances=balances, simplified=tuple(simplified))


def summarize_participant(transfers: Iterable[Transfer], participant: str) -> ParticipantSummary:
    """
    Сводка по участнику: сколько он должен заплатить и сколько ему должны.

    Учитываются только переводы, где участник — from или to.
    """
    transfers = list(transfers)
    owes = money_sum(t.amount for t in transfers if t.from_participant == participant)
    owed = money_sum(t.amount for t in transfers if t.to_participant == participant)
    return ParticipantSummary(participant=participant, owes=owes, owed=owed)


def describe_transfer(
    transfer: Transfer,
    names: Optional[Mapping[str, str]] = None,
    decimals: int = MONEY_DECIMALS,
) -> str:
    """
    Текстовое представление перевода.

    Examples:
        >>> describe_transfer(Transfer(from_participant="b", to_participant="a", amount=30))
        'b owes a 30.00'
        >>> describe_transfer(
        ...     Transfer(from_participant="b", to_participant="a", amount=30),
        ...     names={"a": "Alice", "b": "Bob"},
        ... )
        'Bob owes Alice 30.00'
    """
    names = names or {}
    debtor = names.get(transfer.from_participant, transfer.from_participant)
    creditor = names.get(transfer.to_participant, transfer.to_participant)
    return f"{debtor} owes {creditor} {round_money(transfer.amount, decimals):.{decimals}f}"


def balance_view_payload(view: BalanceView) -> Dict[str, Any]:
    """
    Ответ для слоя представления: {"balances": {...}, "simplified": [...]}.

    Переводы сериализуются с wire-именами from / to.

    Raises:
        jsonschema.ValidationError: если ответ не соответствует контракту
    """
    payload = {
        "balances": dict(view.balances),
        "simplified": [t.model_dump(by_alias=True) for t in view.simplified],
    }
    BalanceViewValidator().validate(payload)
    return payload
