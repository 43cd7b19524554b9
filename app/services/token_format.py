"""
Normalization of raw CoinGecko payloads into the public token shapes.

Upstream JSON has no enforced schema, so every field is read through a small
accessor with an explicit default. A value that is missing, null, zero, empty,
non-finite (NaN, Infinity) or of the wrong type is replaced by the default;
nothing is ever omitted.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from app.schemas.token import TokenDetail, TokenImage, TokenSummary

CHART_POINTS = 24


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _quoted(market: Any, key: str, vs_currency: str) -> Any:
    """Read a market field that CoinGecko may key by quote currency."""
    value = _dig(market, key)
    if isinstance(value, Mapping):
        return value.get(vs_currency)
    return value


def _finite(value: Any) -> bool:
    # httpx decodes NaN / Infinity tokens into floats
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _number(value: Any, default: Optional[float] = 0) -> Any:
    if not _finite(value):
        return default
    return value or default


def _rank(value: Any) -> Optional[int]:
    if not _finite(value) or not value:
        return None
    return int(value)


def _text(value: Any, default: Optional[str] = "") -> Optional[str]:
    if not isinstance(value, str) or not value:
        return default
    return value


def _symbol(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return "N/A"
    return value.upper()


def _chart(prices: Any) -> list[float]:
    if not isinstance(prices, list):
        return []
    points = [p for p in prices if _finite(p)]
    return points[-CHART_POINTS:]


def format_market_token(token: Mapping[str, Any]) -> TokenSummary:
    """Shape one `/coins/markets` row."""
    return TokenSummary(
        id=_text(token.get("id"), None),
        name=_text(token.get("name"), None),
        symbol=_symbol(token.get("symbol")),
        image=_text(token.get("image")),
        current_price=_number(token.get("current_price")),
        market_cap=_number(token.get("market_cap")),
        market_cap_rank=_rank(token.get("market_cap_rank")),
        total_volume=_number(token.get("total_volume")),
        high_24h=_number(token.get("high_24h")),
        low_24h=_number(token.get("low_24h")),
        price_change_24h=_number(token.get("price_change_24h")),
        price_change_percentage_24h=_number(token.get("price_change_percentage_24h")),
        circulating_supply=_number(token.get("circulating_supply")),
        total_supply=_number(token.get("total_supply")),
        max_supply=_number(token.get("max_supply"), None),
        ath=_number(token.get("ath")),
        ath_change_percentage=_number(token.get("ath_change_percentage")),
        atl=_number(token.get("atl")),
        atl_change_percentage=_number(token.get("atl_change_percentage")),
        last_updated=_text(token.get("last_updated"), "N/A"),
    )


def format_token_details(token: Mapping[str, Any], vs_currency: str = "usd") -> TokenDetail:
    """
    Shape one `/coins/{id}` payload.

    Per-currency values (price, market cap, volume, ATH/ATL and their change
    percentages and dates) are read from the `vs_currency` key. Price history
    is the tail of the 7 day sparkline.
    """
    market = token.get("market_data")

    return TokenDetail(
        id=_text(token.get("id"), None),
        name=_text(token.get("name"), None),
        symbol=_symbol(token.get("symbol")),
        image=TokenImage(
            thumb=_text(_dig(token, "image", "thumb")),
            small=_text(_dig(token, "image", "small")),
            large=_text(_dig(token, "image", "large")),
        ),
        market_cap_rank=_rank(token.get("market_cap_rank")),
        current_price=_number(_quoted(market, "current_price", vs_currency)),
        market_cap=_number(_quoted(market, "market_cap", vs_currency)),
        total_volume=_number(_quoted(market, "total_volume", vs_currency)),
        price_change_24h=_number(_dig(market, "price_change_24h")),
        price_change_percentage_24h=_number(_dig(market, "price_change_percentage_24h")),
        circulating_supply=_number(_dig(market, "circulating_supply")),
        total_supply=_number(_dig(market, "total_supply")),
        max_supply=_number(_dig(market, "max_supply"), None),
        ath=_number(_quoted(market, "ath", vs_currency)),
        ath_change_percentage=_number(_quoted(market, "ath_change_percentage", vs_currency)),
        ath_date=_text(_quoted(market, "ath_date", vs_currency), "N/A"),
        atl=_number(_quoted(market, "atl", vs_currency)),
        atl_change_percentage=_number(_quoted(market, "atl_change_percentage", vs_currency)),
        atl_date=_text(_quoted(market, "atl_date", vs_currency), "N/A"),
        last_updated=_text(token.get("last_updated"), "N/A"),
        chart_data=_chart(_dig(market, "sparkline_7d", "price")),
    )
