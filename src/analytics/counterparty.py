from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from domain.models import Transaction
from domain.schemas import CounterpartyReport, NarrationTotal

_ZERO = Decimal("0")


def _totals_by_narration(transactions: Sequence[Transaction]) -> list[NarrationTotal]:
    order: list[str] = []
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for txn in transactions:
        if txn.narration not in totals:
            order.append(txn.narration)
            totals[txn.narration] = _ZERO
            counts[txn.narration] = 0
        totals[txn.narration] += txn.amount
        counts[txn.narration] += 1
    return [NarrationTotal(narration=n, total=totals[n], occurrences=counts[n]) for n in order]


def top_narration(totals: Sequence[NarrationTotal]) -> NarrationTotal | None:
    """First narration holding the largest positive total; ties keep the earlier one."""
    best: NarrationTotal | None = None
    best_total = _ZERO
    for entry in totals:
        if entry.total > best_total:
            best = entry
            best_total = entry.total
    return best


def build_counterparty_report(transactions: Sequence[Transaction]) -> CounterpartyReport:
    inflow = _totals_by_narration([t for t in transactions if t.is_credit])
    outflow = _totals_by_narration([t for t in transactions if t.is_debit])
    top_in = top_narration(inflow)
    top_out = top_narration(outflow)

    return CounterpartyReport(
        top_inflow_narration=top_in.narration if top_in else None,
        top_inflow_amount=top_in.total if top_in else None,
        top_outflow_narration=top_out.narration if top_out else None,
        top_outflow_amount=top_out.total if top_out else None,
        inflow_totals=inflow,
        outflow_totals=outflow,
        # No interval analysis: a narration that shows up again counts as recurring.
        recurring_outflows=[entry for entry in outflow if entry.occurrences >= 2],
    )
