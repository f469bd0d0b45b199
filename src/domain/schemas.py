from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.models import Category, Transaction, TransactionKind


def _parse_moment(value: Any) -> datetime | None:
    """ISO datetime string or datetime; anything unparseable becomes None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _parse_calendar_day(value: Any) -> date | None:
    """Resolve a date or ISO date/datetime string to its UTC calendar day, or None."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    moment = _parse_moment(value)
    if moment is None:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class TransactionRecord(BaseModel):
    """
    One raw ledger entry as delivered by the transactions API.

    Accepts the upstream underscore keys (`_type`, `_amount`, `_currentBalance`, ...)
    as well as plain snake_case keys. Validation failure means the record is malformed.
    """

    model_config = ConfigDict(extra="ignore")

    kind: TransactionKind = Field(validation_alias=AliasChoices("_type", "kind", "type"))
    amount: Decimal = Field(ge=0, validation_alias=AliasChoices("_amount", "amount"))
    balance_after: Decimal = Field(
        validation_alias=AliasChoices("_currentBalance", "balance_after", "balanceAfter", "current_balance")
    )
    timestamp: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("_transactionTimestamp", "timestamp", "transaction_timestamp"),
    )
    value_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("_valueDate", "value_date", "valueDate"),
    )
    narration: str = Field(default="", validation_alias=AliasChoices("_narration", "narration"))
    category: str = Field(
        default=Category.UNCATEGORIZED.value,
        validation_alias=AliasChoices("_transactionCategory", "category", "transaction_category"),
    )
    mode: Optional[str] = Field(default=None, validation_alias=AliasChoices("_mode", "mode"))
    reference: Optional[str] = Field(default=None, validation_alias=AliasChoices("_reference", "reference"))

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("amount", "balance_after", mode="before")
    @classmethod
    def coerce_decimal(cls, value: Any) -> Any:
        # bool is an int subclass; a flag is never a monetary amount.
        if isinstance(value, bool):
            raise ValueError("boolean is not a monetary value")
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, float):
            return str(value)
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, value: Any) -> Any:
        # Only the value date feeds aggregation; a bad timestamp is dropped, not fatal.
        return _parse_moment(value)

    @field_validator("value_date", mode="before")
    @classmethod
    def coerce_value_date(cls, value: Any) -> Any:
        return _parse_calendar_day(value)

    @field_validator("narration", mode="before")
    @classmethod
    def coerce_narration(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value: Any) -> Any:
        if value is None:
            return Category.UNCATEGORIZED.value
        text = str(value).strip().upper()
        return text or Category.UNCATEGORIZED.value

    @model_validator(mode="after")
    def fill_value_date(self) -> "TransactionRecord":
        if self.value_date is None:
            if self.timestamp is None:
                raise ValueError("record has neither a parseable value date nor a parseable timestamp")
            self.value_date = _parse_calendar_day(self.timestamp)
        return self

    def to_transaction(self) -> Transaction:
        return Transaction(
            kind=self.kind,
            amount=self.amount,
            balance_after=self.balance_after,
            timestamp=self.timestamp,
            value_date=self.value_date,
            narration=self.narration,
            category=self.category,
            mode=self.mode,
            reference=self.reference,
        )


class BenchmarkTable(BaseModel):
    """Expected monthly spend per category. Key order is the catalog order of every report."""

    model_config = ConfigDict(frozen=True)

    averages: Dict[str, Decimal]
    fallback_category: str = Category.UNCATEGORIZED.value

    @field_validator("averages", mode="before")
    @classmethod
    def normalize_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k).strip().upper(): v for k, v in value.items()}
        return value

    @model_validator(mode="after")
    def validate_catalog(self) -> "BenchmarkTable":
        if not self.averages:
            raise ValueError("benchmark table must contain at least one category")
        negative = [name for name, avg in self.averages.items() if avg < 0]
        if negative:
            raise ValueError(f"benchmark averages must be >= 0: {', '.join(negative)}")
        if self.fallback_category not in self.averages:
            raise ValueError(f"benchmark table must include fallback category {self.fallback_category!r}")
        return self

    @property
    def categories(self) -> List[str]:
        return list(self.averages.keys())

    def resolve(self, category: str) -> str:
        return category if category in self.averages else self.fallback_category

    def average(self, category: str) -> Decimal:
        return self.averages[self.resolve(category)]


class CategorySpend(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    total: Decimal
    benchmark_average: Decimal
    difference: Decimal
    percentage_vs_benchmark: Optional[Decimal] = None
    is_overspending: bool
    transaction_count: int = 0
    insight: str = ""


class CategoryReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: List[CategorySpend] = Field(default_factory=list)
    total_spend: Decimal = Decimal("0")
    total_potential_savings: Decimal = Decimal("0")
    overspending_categories: List[str] = Field(default_factory=list)

    def get(self, category: str) -> CategorySpend:
        for entry in self.categories:
            if entry.category == category:
                return entry
        raise KeyError(f"Category not in report: {category}")


class CashFlowSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_inflow: Decimal = Decimal("0")
    total_outflow: Decimal = Decimal("0")
    net_savings: Decimal = Decimal("0")
    monthly_savings: Decimal = Decimal("0")
    savings_ratio: Optional[Decimal] = None
    closing_balance: Optional[Decimal] = None
    transaction_count: int = 0
    debit_count: int = 0
    credit_count: int = 0


class SeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    label: str
    value: Decimal


class DailySeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    points: List[SeriesPoint] = Field(default_factory=list)

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    @property
    def values(self) -> List[Decimal]:
        return [p.value for p in self.points]


class TimeSeriesReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    window_days: int
    balance: DailySeries
    debit: DailySeries
    credit: DailySeries


class NarrationTotal(BaseModel):
    model_config = ConfigDict(frozen=True)

    narration: str
    total: Decimal
    occurrences: int


class CounterpartyReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    top_inflow_narration: Optional[str] = None
    top_inflow_amount: Optional[Decimal] = None
    top_outflow_narration: Optional[str] = None
    top_outflow_amount: Optional[Decimal] = None
    inflow_totals: List[NarrationTotal] = Field(default_factory=list)
    outflow_totals: List[NarrationTotal] = Field(default_factory=list)
    recurring_outflows: List[NarrationTotal] = Field(default_factory=list)


class GoalProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_amount: Decimal
    monthly_savings_rate: Decimal
    status: Literal["projected", "achievable_now", "unsustainable"]
    months_required: Optional[int] = None
    message: str = ""


class AggregationResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_version: str = Field(default="spendlens.analytics.v1", alias="schema")
    transaction_count: int = 0
    rejected_count: int = 0
    categories: CategoryReport
    cash_flow: CashFlowSummary
    time_series: TimeSeriesReport
    counterparties: CounterpartyReport
    goal: Optional[GoalProjection] = None


class AnalyzeRequest(BaseModel):
    transactions: List[Any] = Field(default_factory=list)
    goal_amount: Optional[Decimal] = Field(default=None, gt=0)


class GoalRequest(BaseModel):
    target_amount: Decimal = Field(gt=0)
    monthly_savings_rate: Decimal
