from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from domain.models import Transaction
from domain.schemas import CashFlowSummary

_ZERO = Decimal("0")
_RATIO_PLACES = Decimal("0.0001")


def build_cash_flow(transactions: Sequence[Transaction]) -> CashFlowSummary:
    total_inflow = _ZERO
    total_outflow = _ZERO
    debit_count = 0
    credit_count = 0
    for txn in transactions:
        if txn.is_credit:
            total_inflow += txn.amount
            credit_count += 1
        else:
            total_outflow += txn.amount
            debit_count += 1

    net_savings = total_inflow - total_outflow
    savings_ratio = None
    if total_inflow > 0:
        savings_ratio = (net_savings / total_inflow).quantize(_RATIO_PLACES, rounding=ROUND_HALF_UP)

    return CashFlowSummary(
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        net_savings=net_savings,
        # The summary card never shows negative savings; net_savings keeps the signed figure.
        monthly_savings=max(net_savings, _ZERO),
        savings_ratio=savings_ratio,
        closing_balance=transactions[-1].balance_after if transactions else None,
        transaction_count=len(transactions),
        debit_count=debit_count,
        credit_count=credit_count,
    )
