from __future__ import annotations

import json
import logging
import os
import socket
import time
import urllib.error
import urllib.request
from typing import Any

logger = logging.getLogger(__name__)


class TransactionApiError(RuntimeError):
    pass


class TransactionApiClient:
    """Fetches the raw `{ transactions: [...] }` payload from the account backend."""

    def __init__(
        self,
        base_url: str | None = None,
        username: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("SPENDLENS_API_BASE_URL", "https://api.ynab.in")).rstrip("/")
        self.username = username if username is not None else os.getenv("SPENDLENS_API_USERNAME", "")
        self.api_key = api_key if api_key is not None else os.getenv("SPENDLENS_API_KEY", "")
        self.timeout_seconds = timeout_seconds or float(os.getenv("SPENDLENS_API_TIMEOUT_SECONDS", "30"))

    def fetch_transactions(self) -> list[dict[str, Any]]:
        if not self.username or not self.api_key:
            raise TransactionApiError("Username and API key are required to fetch transactions")

        started = time.perf_counter()
        req = urllib.request.Request(
            url=f"{self.base_url}/fetch_transactions",
            data=b"",
            headers={
                "Content-Type": "application/json",
                "Username": self.username,
                "X-API-Key": self.api_key,
            },
            method="POST",
        )

        logger.info(
            "TransactionApiClient request start base_url=%s username=%s timeout=%.1fs",
            self.base_url,
            self.username,
            self.timeout_seconds,
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                body = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            logger.warning("TransactionApiClient HTTP error status=%s", exc.code)
            raise TransactionApiError(f"HTTP error! status: {exc.code}") from exc
        except (socket.timeout, urllib.error.URLError, TimeoutError) as exc:
            logger.warning("TransactionApiClient request failed after %.2fs: %s", time.perf_counter() - started, exc)
            raise TransactionApiError(f"Unable to reach transactions API: {exc}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TransactionApiError(f"Transactions API returned invalid JSON: {exc}") from exc

        transactions = body.get("transactions") if isinstance(body, dict) else None
        if not isinstance(transactions, list):
            raise TransactionApiError(
                f"Expected a transactions list in API response, got {type(transactions).__name__}"
            )

        logger.info(
            "TransactionApiClient request complete in %.2fs transactions=%d",
            time.perf_counter() - started,
            len(transactions),
        )
        return transactions
