from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from pydantic import ValidationError

from domain.errors import MalformedRecord
from domain.models import RecordIssue, Transaction
from domain.schemas import TransactionRecord


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def normalize_record(raw: Any, index: int | None = None) -> Transaction:
    if isinstance(raw, Transaction):
        return raw
    if isinstance(raw, TransactionRecord):
        return raw.to_transaction()
    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"expected a mapping, got {type(raw).__name__}", index=index)
    try:
        record = TransactionRecord.model_validate(dict(raw))
    except ValidationError as exc:
        raise MalformedRecord(_describe(exc), index=index) from exc
    return record.to_transaction()


def normalize_records(records: Iterable[Any] | None) -> tuple[list[Transaction], list[RecordIssue]]:
    """Coerce raw records in input order, dropping malformed ones and reporting why."""
    transactions: list[Transaction] = []
    issues: list[RecordIssue] = []
    for index, raw in enumerate(records or []):
        try:
            transactions.append(normalize_record(raw, index=index))
        except MalformedRecord as exc:
            issues.append(RecordIssue(index=index, reason=exc.reason))
    return transactions, issues
