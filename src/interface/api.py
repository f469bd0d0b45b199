from __future__ import annotations

import logging
from dataclasses import asdict
from decimal import Decimal
from typing import Optional

from fastapi import FastAPI, Header, HTTPException

from analytics.goal_projection import project_goal_or_guidance
from domain.schemas import AggregationResult, AnalyzeRequest, GoalProjection, GoalRequest
from domain.models import RecordIssue
from infrastructure.transaction_api import TransactionApiClient, TransactionApiError
from interface.cli import build_engine

logger = logging.getLogger(__name__)

app = FastAPI(title="SpendLens API")
engine = build_engine()


def _payload(result: AggregationResult, issues: list[RecordIssue]) -> dict:
    return {
        "result": result.model_dump(mode="json", by_alias=True),
        "issues": [asdict(issue) for issue in issues],
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze")
def analyze(request: AnalyzeRequest) -> dict:
    result, issues = engine.run(request.transactions, goal_amount=request.goal_amount)
    return _payload(result, issues)


@app.post("/analyze/remote")
def analyze_remote(
    goal_amount: Optional[Decimal] = None,
    username: str = Header(..., alias="Username"),
    api_key: str = Header(..., alias="X-API-Key"),
) -> dict:
    if goal_amount is not None and goal_amount <= 0:
        raise HTTPException(status_code=422, detail="goal_amount must be > 0")
    client = TransactionApiClient(username=username, api_key=api_key)
    try:
        records = client.fetch_transactions()
    except TransactionApiError as exc:
        logger.warning("Remote transaction fetch failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    result, issues = engine.run(records, goal_amount=goal_amount)
    return _payload(result, issues)


@app.post("/goal")
def goal(request: GoalRequest) -> dict:
    projection: GoalProjection = project_goal_or_guidance(request.target_amount, request.monthly_savings_rate)
    return projection.model_dump(mode="json")
