from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class Category(str, Enum):
    ENTERTAINMENT = "ENTERTAINMENT"
    FOOD = "FOOD"
    LIFESTYLE = "LIFESTYLE"
    EDUCATION = "EDUCATION"
    SHOPPING = "SHOPPING"
    ECOMMERCE = "ECOMMERCE"
    TRAVEL = "TRAVEL"
    UTILITIES = "UTILITIES"
    SERVICES = "SERVICES"
    GENERAL = "GENERAL"
    UNCATEGORIZED = "UNCATEGORIZED"


@dataclass(frozen=True)
class Transaction:
    kind: TransactionKind
    amount: Decimal
    balance_after: Decimal
    timestamp: datetime | None
    value_date: date
    narration: str
    category: str = Category.UNCATEGORIZED.value
    mode: str | None = None
    reference: str | None = None

    @property
    def is_debit(self) -> bool:
        return self.kind is TransactionKind.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.kind is TransactionKind.CREDIT


@dataclass(frozen=True)
class RecordIssue:
    index: int
    reason: str
