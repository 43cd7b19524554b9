"""Token list / token detail orchestration."""

from __future__ import annotations

import logging

from app.schemas.token import TokenInsight, TokenSummary
from app.services.coingecko import CoinGeckoClient, MarketDataError
from app.services.commentary import CommentaryGenerator
from app.services.token_format import format_market_token, format_token_details


logger = logging.getLogger("token_insight.tokens")

NO_INSIGHT = "No AI insight available."


class TokenService:
    """
    Request-scoped pipelines over injected collaborators.

    Both operations degrade instead of failing: the list falls back to `[]`,
    the detail to `None` (unknown token and unreachable provider are not
    distinguished).
    """

    def __init__(self, market: CoinGeckoClient, commentary: CommentaryGenerator) -> None:
        self.market = market
        self.commentary = commentary

    async def list_tokens(self) -> list[TokenSummary]:
        try:
            rows = await self.market.fetch_category_markets()
            return [format_market_token(row) for row in rows]
        except MarketDataError:
            logger.exception("Failed to fetch category tokens | category=%s", self.market.category)
        except Exception:
            logger.exception("Failed to normalize category tokens | category=%s", self.market.category)
        return []

    async def get_token_details(self, token_id: str) -> TokenInsight | None:
        try:
            raw = await self.market.fetch_coin(token_id)
            token = format_token_details(raw, self.market.vs_currency)
        except MarketDataError as exc:
            logger.error("Error fetching details | token=%s | status=%s | err=%s", token_id, exc.status_code, exc)
            return None
        except Exception:
            logger.exception("Error normalizing details | token=%s", token_id)
            return None

        insight = await self.commentary.generate(token)

        return TokenInsight(**token.model_dump(), ai_insight=insight or NO_INSIGHT)
