from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from domain.models import Transaction
from domain.schemas import DailySeries, SeriesPoint, TimeSeriesReport

DEFAULT_WINDOW_DAYS = 7

# Fixed English abbreviations so labels never depend on the process locale.
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def day_label(day: date) -> str:
    return f"{_MONTH_ABBR[day.month - 1]} {day.day}"


class DayBucket:
    """Per-day accumulator that remembers the order in which days were first seen."""

    def __init__(self, name: str):
        self.name = name
        self._order: list[date] = []
        self._values: dict[date, Decimal] = {}

    def __len__(self) -> int:
        return len(self._order)

    def _touch(self, day: date) -> None:
        if day not in self._values:
            self._order.append(day)
            self._values[day] = Decimal("0")

    def set(self, day: date, value: Decimal) -> None:
        self._touch(day)
        self._values[day] = value

    def add(self, day: date, value: Decimal) -> None:
        self._touch(day)
        self._values[day] += value

    def series(self, window_days: int) -> DailySeries:
        recent = self._order[-window_days:]
        return DailySeries(
            name=self.name,
            points=[SeriesPoint(day=d, label=day_label(d), value=self._values[d]) for d in recent],
        )


def build_time_series(transactions: Sequence[Transaction], window_days: int = DEFAULT_WINDOW_DAYS) -> TimeSeriesReport:
    if window_days < 1:
        raise ValueError("window_days must be >= 1")

    balance = DayBucket("balance")
    debit = DayBucket("debit")
    credit = DayBucket("credit")

    for txn in transactions:
        balance.set(txn.value_date, txn.balance_after)
        if txn.is_debit:
            debit.add(txn.value_date, txn.amount)
        else:
            credit.add(txn.value_date, txn.amount)

    return TimeSeriesReport(
        window_days=window_days,
        balance=balance.series(window_days),
        debit=debit.series(window_days),
        credit=credit.series(window_days),
    )
