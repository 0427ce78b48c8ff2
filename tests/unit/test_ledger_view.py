"""
Тесты для Balance View

Coverage:
- build_balance_view: балансы + упрощённые переводы
- summarize_participant: «вы должны» / «вам должны»
- describe_transfer: текстовое представление
- balance_view_payload: wire-формат с from / to, проверка контрактом
"""

import pytest
from pydantic import ValidationError

from splitledger.core.contracts import validate_balance_view
from splitledger.core.domain import BalanceView, ParticipantSummary, Transfer
from splitledger.core.errors import MalformedRecord
from splitledger.ledger import (
    balance_view_payload,
    build_balance_view,
    describe_transfer,
    summarize_participant,
)
from splitledger.simplify import DebtSimplifier, DebtSimplifierConfig, SimplifierOrdering


@pytest.fixture
def dinner_documents():
    """Ужин 90 на троих, оплатил A."""
    expenses = [
        {
            "description": "Dinner",
            "amount": 90,
            "paidBy": "A",
            "splitType": "EQUAL",
            "splits": [
                {"user": "A", "amount": 30},
                {"user": "B", "amount": 30},
                {"user": "C", "amount": 30},
            ],
        }
    ]
    return expenses, []


@pytest.fixture
def view(dinner_documents):
    expenses, settlements = dinner_documents
    return build_balance_view(expenses, settlements)


class TestBuildBalanceView:
    """Тесты композиции aggregator + simplifier"""

    def test_balances_and_transfers(self, view):
        assert isinstance(view, BalanceView)
        assert view.balances == {"A": 60.0, "B": -30.0, "C": -30.0}
        assert [(t.from_participant, t.to_participant, t.amount) for t in view.simplified] == [
            ("B", "A", 30.0),
            ("C", "A", 30.0),
        ]

    def test_members_without_activity(self, dinner_documents):
        expenses, settlements = dinner_documents

        view = build_balance_view(expenses, settlements, members=["D"])

        assert view.balances["D"] == 0.0
        assert len(view.simplified) == 2

    def test_settled_group_has_no_transfers(self, dinner_documents):
        expenses, _ = dinner_documents
        settlements = [{"from": "B", "to": "A", "amount": 30}, {"from": "C", "to": "A", "amount": 30}]

        view = build_balance_view(expenses, settlements)

        assert view.simplified == ()

    def test_percent_split_with_prior_settlement(self):
        """PERCENT [60, 40] от 100, оплатил A, затем B → A 40: остаётся один перевод B → A 20."""
        expenses = [
            {
                "paidBy": "A",
                "amount": 100,
                "splitType": "PERCENT",
                "splits": [
                    {"user": "B", "amount": 60.0, "percent": 60},
                    {"user": "A", "amount": 40.0, "percent": 40},
                ],
            }
        ]

        view = build_balance_view(expenses, [{"from": "B", "to": "A", "amount": 40}])

        assert view.simplified == (Transfer(from_participant="B", to_participant="A", amount=20.0),)

    def test_custom_simplifier(self):
        expenses = [
            {"payer": "A", "amount": 10, "splits": [{"user": "C", "amount": 10}]},
            {"payer": "B", "amount": 40, "splits": [{"user": "C", "amount": 20}, {"user": "D", "amount": 20}]},
        ]
        simplifier = DebtSimplifier(DebtSimplifierConfig(ordering=SimplifierOrdering.BY_MAGNITUDE))

        view = build_balance_view(expenses, [], simplifier=simplifier)

        assert view.simplified[0].to_participant == "B"

    def test_malformed_record_propagates(self):
        with pytest.raises(MalformedRecord):
            build_balance_view([{"paidBy": "A"}], [])

    def test_view_is_frozen(self, view):
        with pytest.raises(ValidationError):
            view.simplified = ()  # type: ignore


class TestSummarizeParticipant:
    """Тесты сводки по участнику"""

    def test_creditor(self, view):
        summary = summarize_participant(view.simplified, "A")

        assert isinstance(summary, ParticipantSummary)
        assert summary.owes == 0.0
        assert summary.owed == 60.0
        assert summary.net == 60.0

    def test_debtor(self, view):
        summary = summarize_participant(view.simplified, "B")

        assert summary.owes == 30.0
        assert summary.owed == 0.0
        assert summary.net == -30.0

    def test_outsider(self, view):
        summary = summarize_participant(view.simplified, "Z")

        assert (summary.owes, summary.owed) == (0.0, 0.0)

    def test_accepts_generator(self, view):
        summary = summarize_participant((t for t in view.simplified), "C")

        assert summary.owes == 30.0


class TestDescribeTransfer:
    """Тесты текстового представления перевода"""

    def test_plain_ids(self):
        transfer = Transfer(from_participant="b", to_participant="a", amount=30)

        assert describe_transfer(transfer) == "b owes a 30.00"

    def test_display_names(self):
        transfer = Transfer(from_participant="b", to_participant="a", amount=30)

        assert describe_transfer(transfer, names={"a": "Alice", "b": "Bob"}) == "Bob owes Alice 30.00"

    def test_missing_name_falls_back_to_id(self):
        transfer = Transfer(from_participant="b", to_participant="a", amount=30)

        assert describe_transfer(transfer, names={"a": "Alice"}) == "b owes Alice 30.00"

    def test_rounded_to_minor_unit(self):
        transfer = Transfer(from_participant="b", to_participant="a", amount=100 / 3)

        assert describe_transfer(transfer) == "b owes a 33.33"

    def test_custom_decimals(self):
        transfer = Transfer(from_participant="b", to_participant="a", amount=12.5)

        assert describe_transfer(transfer, decimals=0) == "b owes a 13"


class TestBalanceViewPayload:
    """Тесты ответа для слоя представления"""

    def test_wire_names(self, view):
        payload = balance_view_payload(view)

        assert payload["balances"] == {"A": 60.0, "B": -30.0, "C": -30.0}
        assert payload["simplified"] == [
            {"from": "B", "to": "A", "amount": 30.0},
            {"from": "C", "to": "A", "amount": 30.0},
        ]

    def test_payload_matches_contract(self, view):
        validate_balance_view(balance_view_payload(view))

    def test_payload_is_independent_copy(self, view):
        payload = balance_view_payload(view)
        payload["balances"]["A"] = 0.0

        assert view.balances["A"] == 60.0
