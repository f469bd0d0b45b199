from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.models import Category
from domain.schemas import BenchmarkTable

logger = logging.getLogger(__name__)

# Expected monthly spend per category, INR.
DEFAULT_BENCHMARKS: dict[str, int] = {
    Category.ENTERTAINMENT.value: 1500,
    Category.FOOD.value: 8000,
    Category.LIFESTYLE.value: 3000,
    Category.EDUCATION.value: 5000,
    Category.SHOPPING.value: 3500,
    Category.ECOMMERCE.value: 2500,
    Category.TRAVEL.value: 2000,
    Category.UTILITIES.value: 4000,
    Category.SERVICES.value: 2000,
    Category.GENERAL.value: 3000,
    Category.UNCATEGORIZED.value: 1000,
}


class BenchmarkStore:
    """Serves the benchmark table: the built-in INR catalog, or a JSON override file."""

    def __init__(self, path: str | Path | None = None) -> None:
        raw_path = path if path is not None else os.getenv("SPENDLENS_BENCHMARKS_PATH", "")
        self._path = Path(raw_path) if raw_path else None
        self._table: BenchmarkTable | None = None

    def fetch_benchmark_table(self) -> BenchmarkTable:
        if self._table is None:
            self._table = self._load()
        return self._table

    def _load(self) -> BenchmarkTable:
        if self._path is None:
            return default_benchmark_table()

        logger.info("Loading benchmark table path=%s", self._path)
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ValueError(f"Unable to read benchmark table {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError(f"Benchmark table {self._path} must be a JSON object, got {type(payload).__name__}")

        try:
            table = BenchmarkTable(averages=payload)
        except ValidationError as exc:
            raise ValueError(f"Invalid benchmark table {self._path}: {exc}") from exc
        logger.info("Benchmark table loaded categories=%d", len(table.categories))
        return table


def default_benchmark_table() -> BenchmarkTable:
    return BenchmarkTable(averages=DEFAULT_BENCHMARKS)
