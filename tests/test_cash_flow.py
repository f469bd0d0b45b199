from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from analytics.cash_flow import build_cash_flow
from domain.models import Transaction, TransactionKind


def _txn(kind: TransactionKind, amount: str, balance: str = "0") -> Transaction:
    return Transaction(
        kind=kind,
        amount=Decimal(amount),
        balance_after=Decimal(balance),
        timestamp=None,
        value_date=date(2024, 3, 1),
        narration="entry",
    )


class CashFlowTests(unittest.TestCase):
    def test_inflow_outflow_and_savings(self) -> None:
        summary = build_cash_flow(
            [_txn(TransactionKind.CREDIT, "50000", "50000"), _txn(TransactionKind.DEBIT, "30000", "20000")]
        )

        self.assertEqual(summary.total_inflow, Decimal("50000"))
        self.assertEqual(summary.total_outflow, Decimal("30000"))
        self.assertEqual(summary.net_savings, Decimal("20000"))
        self.assertEqual(summary.monthly_savings, Decimal("20000"))
        self.assertEqual(summary.savings_ratio, Decimal("0.4"))
        self.assertEqual(summary.closing_balance, Decimal("20000"))
        self.assertEqual((summary.debit_count, summary.credit_count), (1, 1))

    def test_negative_savings_are_shown_as_zero_but_kept_signed(self) -> None:
        summary = build_cash_flow([_txn(TransactionKind.CREDIT, "10000"), _txn(TransactionKind.DEBIT, "15000")])

        self.assertEqual(summary.net_savings, Decimal("-5000"))
        self.assertEqual(summary.monthly_savings, Decimal("0"))
        self.assertEqual(summary.savings_ratio, Decimal("-0.5"))

    def test_conservation_is_exact_for_fractional_amounts(self) -> None:
        txns = [
            _txn(TransactionKind.CREDIT, "0.1"),
            _txn(TransactionKind.CREDIT, "0.2"),
            _txn(TransactionKind.DEBIT, "0.3"),
            _txn(TransactionKind.DEBIT, "1234.56"),
        ]

        summary = build_cash_flow(txns)

        self.assertEqual(summary.total_inflow - summary.total_outflow, summary.net_savings)
        self.assertEqual(summary.total_inflow, Decimal("0.3"))

    def test_empty_input(self) -> None:
        summary = build_cash_flow([])

        self.assertEqual(summary.total_inflow, Decimal("0"))
        self.assertEqual(summary.total_outflow, Decimal("0"))
        self.assertEqual(summary.net_savings, Decimal("0"))
        self.assertEqual(summary.monthly_savings, Decimal("0"))
        self.assertIsNone(summary.savings_ratio)
        self.assertIsNone(summary.closing_balance)
        self.assertEqual(summary.transaction_count, 0)

    def test_no_inflow_leaves_ratio_unset(self) -> None:
        summary = build_cash_flow([_txn(TransactionKind.DEBIT, "100")])
        self.assertIsNone(summary.savings_ratio)


if __name__ == "__main__":
    unittest.main()
