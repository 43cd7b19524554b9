"""Pydantic models for the normalized token payloads returned to clients."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


class TokenSummary(BaseModel):
    """One row of the category listing (`GET /tokens`)."""

    id: Optional[str] = None
    name: Optional[str] = None
    symbol: str = "N/A"
    image: str = ""
    current_price: Number = 0
    market_cap: Number = 0
    market_cap_rank: Optional[int] = None
    total_volume: Number = 0
    high_24h: Number = 0
    low_24h: Number = 0
    price_change_24h: Number = 0
    price_change_percentage_24h: Number = 0
    circulating_supply: Number = 0
    total_supply: Number = 0
    max_supply: Optional[Number] = None
    ath: Number = 0
    ath_change_percentage: Number = 0
    atl: Number = 0
    atl_change_percentage: Number = 0
    last_updated: str = "N/A"


class TokenImage(BaseModel):
    thumb: str = ""
    small: str = ""
    large: str = ""


class TokenDetail(BaseModel):
    """Extended market data for a single token."""

    id: Optional[str] = None
    name: Optional[str] = None
    symbol: str = "N/A"
    image: TokenImage = Field(default_factory=TokenImage)
    market_cap_rank: Optional[int] = None
    current_price: Number = 0
    market_cap: Number = 0
    total_volume: Number = 0
    price_change_24h: Number = 0
    price_change_percentage_24h: Number = 0
    circulating_supply: Number = 0
    total_supply: Number = 0
    max_supply: Optional[Number] = None
    ath: Number = 0
    ath_change_percentage: Number = 0
    ath_date: str = "N/A"
    atl: Number = 0
    atl_change_percentage: Number = 0
    atl_date: str = "N/A"
    last_updated: str = "N/A"
    chart_data: List[Number] = Field(default_factory=list)


class TokenInsight(TokenDetail):
    """TokenDetail with the generated analyst commentary attached."""

    ai_insight: str = "No AI insight available."
