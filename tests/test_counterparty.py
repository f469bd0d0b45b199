from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from analytics.counterparty import build_counterparty_report, top_narration
from domain.models import Transaction, TransactionKind
from domain.schemas import NarrationTotal


def _txn(kind: TransactionKind, amount: str, narration: str) -> Transaction:
    return Transaction(
        kind=kind,
        amount=Decimal(amount),
        balance_after=Decimal("0"),
        timestamp=None,
        value_date=date(2024, 1, 5),
        narration=narration,
    )


class CounterpartyReportTests(unittest.TestCase):
    def test_top_sources_per_direction(self) -> None:
        report = build_counterparty_report(
            [
                _txn(TransactionKind.DEBIT, "300", "AMAZON"),
                _txn(TransactionKind.DEBIT, "800", "RENT"),
                _txn(TransactionKind.DEBIT, "600", "AMAZON"),
                _txn(TransactionKind.CREDIT, "50000", "SALARY"),
                _txn(TransactionKind.CREDIT, "2000", "REFUND"),
            ]
        )

        self.assertEqual(report.top_outflow_narration, "AMAZON")
        self.assertEqual(report.top_outflow_amount, Decimal("900"))
        self.assertEqual(report.top_inflow_narration, "SALARY")
        self.assertEqual(report.top_inflow_amount, Decimal("50000"))
        self.assertEqual([e.narration for e in report.outflow_totals], ["AMAZON", "RENT"])

    def test_ties_keep_first_encountered_narration(self) -> None:
        report = build_counterparty_report(
            [
                _txn(TransactionKind.DEBIT, "500", "NETFLIX"),
                _txn(TransactionKind.DEBIT, "500", "SPOTIFY"),
            ]
        )

        self.assertEqual(report.top_outflow_narration, "NETFLIX")

    def test_missing_direction_yields_absent_top(self) -> None:
        report = build_counterparty_report([_txn(TransactionKind.DEBIT, "10", "TEA")])

        self.assertIsNone(report.top_inflow_narration)
        self.assertIsNone(report.top_inflow_amount)
        self.assertEqual(report.inflow_totals, [])

    def test_empty_input(self) -> None:
        report = build_counterparty_report([])

        self.assertIsNone(report.top_outflow_narration)
        self.assertIsNone(report.top_inflow_narration)
        self.assertEqual(report.recurring_outflows, [])

    def test_repeated_outflow_narrations_are_recurring(self) -> None:
        report = build_counterparty_report(
            [
                _txn(TransactionKind.DEBIT, "199", "NETFLIX"),
                _txn(TransactionKind.DEBIT, "40", "CHAI"),
                _txn(TransactionKind.DEBIT, "199", "NETFLIX"),
                _txn(TransactionKind.CREDIT, "10", "CASHBACK"),
                _txn(TransactionKind.CREDIT, "10", "CASHBACK"),
            ]
        )

        self.assertEqual(
            report.recurring_outflows,
            [NarrationTotal(narration="NETFLIX", total=Decimal("398"), occurrences=2)],
        )


class TopNarrationTests(unittest.TestCase):
    def test_zero_totals_never_win(self) -> None:
        self.assertIsNone(top_narration([NarrationTotal(narration="x", total=Decimal("0"), occurrences=1)]))

    def test_later_larger_total_replaces_earlier(self) -> None:
        totals = [
            NarrationTotal(narration="a", total=Decimal("5"), occurrences=1),
            NarrationTotal(narration="b", total=Decimal("7"), occurrences=1),
            NarrationTotal(narration="c", total=Decimal("7"), occurrences=1),
        ]
        self.assertEqual(top_narration(totals).narration, "b")


if __name__ == "__main__":
    unittest.main()
