from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Any, Iterable

from analytics.cash_flow import build_cash_flow
from analytics.category_spend import build_category_report
from analytics.counterparty import build_counterparty_report
from analytics.goal_projection import project_goal_or_guidance
from analytics.normalizer import normalize_records
from analytics.time_series import DEFAULT_WINDOW_DAYS, build_time_series
from domain.models import RecordIssue
from domain.schemas import AggregationResult, BenchmarkTable

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Turns raw transaction records into one AggregationResult. Holds no per-request state."""

    def __init__(self, benchmarks: BenchmarkTable, window_days: int = DEFAULT_WINDOW_DAYS):
        if window_days < 1:
            raise ValueError("window_days must be >= 1")
        self._benchmarks = benchmarks
        self._window_days = window_days

    def run(
        self,
        records: Iterable[Any] | None,
        goal_amount: Decimal | None = None,
    ) -> tuple[AggregationResult, list[RecordIssue]]:
        t0 = time.perf_counter()

        t = time.perf_counter()
        transactions, issues = normalize_records(records)
        logger.info(
            "Normalization complete in %.3fs accepted=%d rejected=%d",
            time.perf_counter() - t,
            len(transactions),
            len(issues),
        )
        if issues:
            logger.warning("Dropped %d malformed transaction record(s)", len(issues))
        if not transactions:
            logger.info("No usable transactions; returning empty aggregates")

        t = time.perf_counter()
        categories = build_category_report(transactions, self._benchmarks)
        cash_flow = build_cash_flow(transactions)
        time_series = build_time_series(transactions, window_days=self._window_days)
        counterparties = build_counterparty_report(transactions)
        logger.info("Aggregation complete in %.3fs", time.perf_counter() - t)

        goal = None
        if goal_amount is not None:
            goal = project_goal_or_guidance(goal_amount, cash_flow.net_savings)
            logger.info("Goal projection status=%s months=%s", goal.status, goal.months_required)

        result = AggregationResult(
            transaction_count=len(transactions),
            rejected_count=len(issues),
            categories=categories,
            cash_flow=cash_flow,
            time_series=time_series,
            counterparties=counterparties,
            goal=goal,
        )
        logger.info("Analytics run complete in %.3fs", time.perf_counter() - t0)
        return result, issues
