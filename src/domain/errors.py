from __future__ import annotations

from decimal import Decimal


class AnalyticsError(Exception):
    pass


class MalformedRecord(AnalyticsError, ValueError):
    """A single raw transaction could not be coerced; the batch carries on without it."""

    def __init__(self, reason: str, index: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.index = index


class UnsustainableBudget(AnalyticsError):
    def __init__(self, monthly_savings_rate: Decimal):
        super().__init__(
            f"Monthly savings rate {monthly_savings_rate} is not positive; no finite goal projection exists"
        )
        self.monthly_savings_rate = monthly_savings_rate


class DivisionByZeroBenchmark(AnalyticsError, ZeroDivisionError):
    def __init__(self, category: str):
        super().__init__(f"Benchmark average for {category!r} is zero")
        self.category = category
