from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from domain.errors import DivisionByZeroBenchmark
from domain.models import Transaction
from domain.schemas import BenchmarkTable, CategoryReport, CategorySpend

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_ONE_DECIMAL = Decimal("0.1")


def percentage_vs_benchmark(category: str, difference: Decimal, average: Decimal) -> Decimal:
    if average == 0:
        raise DivisionByZeroBenchmark(category)
    return (difference / average * 100).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def category_insight(category: str, difference: Decimal) -> str:
    name = category.lower()
    if difference > 0:
        return (
            f"You're spending ₹{difference:,} more than average on {name}. "
            "Consider reducing these expenses."
        )
    return f"Great job! You're spending ₹{abs(difference):,} less than average on {name}."


def build_category_report(transactions: Sequence[Transaction], benchmarks: BenchmarkTable) -> CategoryReport:
    totals: dict[str, Decimal] = {name: _ZERO for name in benchmarks.categories}
    counts: dict[str, int] = {name: 0 for name in benchmarks.categories}

    for txn in transactions:
        if not txn.is_debit:
            continue
        category = benchmarks.resolve(txn.category)
        totals[category] += txn.amount
        counts[category] += 1

    entries: list[CategorySpend] = []
    potential_savings = _ZERO
    for name in benchmarks.categories:
        total = totals[name]
        average = benchmarks.averages[name]
        difference = total - average
        try:
            percentage = percentage_vs_benchmark(name, difference, average)
        except DivisionByZeroBenchmark:
            logger.warning("Benchmark average is zero for category=%s; percentage left unset", name)
            percentage = None
        potential_savings += max(difference, _ZERO)
        entries.append(
            CategorySpend(
                category=name,
                total=total,
                benchmark_average=average,
                difference=difference,
                percentage_vs_benchmark=percentage,
                is_overspending=difference > 0,
                transaction_count=counts[name],
                insight=category_insight(name, difference),
            )
        )

    return CategoryReport(
        categories=entries,
        total_spend=sum((e.total for e in entries), _ZERO),
        total_potential_savings=potential_savings,
        overspending_categories=[e.category for e in entries if e.is_overspending],
    )
