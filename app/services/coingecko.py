"""Helpers for interacting with the public CoinGecko API."""

from __future__ import annotations

import logging
from typing import Any

import httpx


logger = logging.getLogger("token_insight.coingecko")

DEMO_KEY_HEADER = "x-cg-demo-api-key"


class MarketDataError(RuntimeError):
    """Raised when CoinGecko cannot be reached or returns an unusable payload."""

    def __init__(self, path: str, message: str, status_code: int | None = None) -> None:
        self.path = path
        self.status_code = status_code
        super().__init__(f"{path}: {message}")


class CoinGeckoClient:
    """Thin async wrapper over the two CoinGecko endpoints the service reads."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        *,
        vs_currency: str = "usd",
        category: str = "ai-agents",
        per_page: int = 100,
    ) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.vs_currency = vs_currency
        self.category = category
        self.per_page = per_page

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        try:
            response = await self.http.get(f"{self.base_url}{path}", params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise MarketDataError(
                path, f"HTTP {exc.response.status_code}", status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise MarketDataError(path, f"transport error: {exc!r}") from exc
        except ValueError as exc:
            raise MarketDataError(path, "response is not valid JSON") from exc

    async def fetch_category_markets(self) -> list[dict[str, Any]]:
        """Return the raw `/coins/markets` rows for the configured category."""

        params = {
            "vs_currency": self.vs_currency,
            "category": self.category,
            "order": "market_cap_desc",
            "per_page": self.per_page,
            "page": 1,
            "sparkline": "false",
        }

        data = await self._get("/coins/markets", params)
        if not isinstance(data, list):
            raise MarketDataError("/coins/markets", f"expected a list, got {type(data).__name__}")
        return data

    async def fetch_coin(self, coin_id: str) -> dict[str, Any]:
        """Return the raw `/coins/{id}` payload with market data and sparkline."""

        params = {
            "localization": "false",
            "tickers": "false",
            "market_data": "true",
            "community_data": "false",
            "developer_data": "false",
            "sparkline": "true",
        }

        path = f"/coins/{coin_id}"
        data = await self._get(path, params)
        if not isinstance(data, dict):
            raise MarketDataError(path, f"expected an object, got {type(data).__name__}")
        return data


def build_http_client(timeout_s: float | None = None, api_key: str | None = None) -> httpx.AsyncClient:
    headers = {"accept": "application/json"}
    if api_key:
        headers[DEMO_KEY_HEADER] = api_key
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout_s), headers=headers)
