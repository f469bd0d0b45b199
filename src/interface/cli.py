from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from application.engine import AnalyticsEngine
from infrastructure.benchmarks import BenchmarkStore
from infrastructure.transaction_api import TransactionApiClient, TransactionApiError


def build_engine() -> AnalyticsEngine:
    return AnalyticsEngine(
        benchmarks=BenchmarkStore().fetch_benchmark_table(),
        window_days=int(os.getenv("SPENDLENS_WINDOW_DAYS", "7")),
    )


def load_records(path: Path) -> list[Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("transactions", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must hold a transactions list or a {{\"transactions\": [...]}} object")
    return payload


def _decimal_arg(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if amount <= 0:
        raise argparse.ArgumentTypeError("goal must be > 0")
    return amount


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="spendlens", description="Summarize bank transactions.")
    parser.add_argument("source", nargs="?", help="JSON file with transactions; omit to fetch from the API")
    parser.add_argument("--goal", type=_decimal_arg, default=None, help="savings goal to project")
    args = parser.parse_args(argv)

    try:
        if args.source:
            records = load_records(Path(args.source))
        else:
            records = TransactionApiClient().fetch_transactions()
    except (OSError, ValueError, TransactionApiError) as exc:
        print(f"[spendlens] error: {exc}", file=sys.stderr)
        return 1

    engine = build_engine()
    result, issues = engine.run(records, goal_amount=args.goal)
    print(result.model_dump_json(indent=2, by_alias=True))
    if issues:
        print(json.dumps({"issues": [asdict(issue) for issue in issues]}, indent=2), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
