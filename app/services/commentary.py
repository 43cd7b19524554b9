"""LLM analyst commentary for a single normalized token."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from openai import AsyncOpenAI

from app.schemas.token import TokenDetail


logger = logging.getLogger("token_insight.commentary")

ANALYSIS_UNAVAILABLE = "AI analysis unavailable."

DEFAULT_MODEL = "gpt-4o"
TEMPERATURE = 0.8
MAX_TOKENS = 1000

ANALYST_INSTRUCTION = (
    "You are a professional cryptocurrency analyst. Provide direct, data-driven "
    "analysis and a clear investment recommendation based on technical and market "
    "indicators. Be concise and avoid generic introductions."
)

PROMPT_TEMPLATE = """
Analyze the AI-powered token **{name} ({symbol})** and provide a **concise investment recommendation**.

📊 **Market Overview**:
- **Current Price**: ${current_price}
- **Market Cap**: ${market_cap}
- **Market Cap Rank**: #{market_cap_rank}
- **Total Volume**: ${total_volume}
- **24h High/Low**: ${high_24h} / ${low_24h}
- **24h Price Change**: ${price_change_24h} ({price_change_percentage_24h}%)
- **ATH / ATL**: ${ath} ({ath_change_percentage}%) / ${atl} ({atl_change_percentage}%)
- **Circulating Supply**: {circulating_supply}
- **Total Supply**: {total_supply}
- **24h Price Trend**: {chart_data}

### **💡 Investment Recommendation**
1. **Short-Term Outlook (Next 7 Days)**: 🚀 **Bullish** or 📉 **Bearish**? Why?
2. **Support & Resistance Levels**: Where are the key buy & sell zones?
3. **Best Buy Zone**: What price range would be ideal for entry?
4. **Best Sell Zone**: Where should an investor take profit?
5. **Risk Factor**: What risks should be considered?
6. **Final Verdict**: **Buy, Hold, or Avoid?**

Provide specific numbers and avoid speculation.
"""

PROMPT_FIELDS = (
    "name",
    "symbol",
    "current_price",
    "market_cap",
    "market_cap_rank",
    "total_volume",
    "high_24h",
    "low_24h",
    "price_change_24h",
    "price_change_percentage_24h",
    "ath",
    "ath_change_percentage",
    "atl",
    "atl_change_percentage",
    "circulating_supply",
    "total_supply",
)


def _render(value: Any) -> str:
    # JSON-style scalars: null, 42000 rather than None, 42000.0
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_messages(token: TokenDetail | Mapping[str, Any]) -> list[dict[str, str]]:
    """Build the developer instruction + user prompt for one token."""
    data = token.model_dump() if isinstance(token, TokenDetail) else dict(token)

    values = {field: _render(data.get(field)) for field in PROMPT_FIELDS}
    values["chart_data"] = json.dumps(data.get("chart_data") or [], separators=(",", ":"))

    return [
        {"role": "developer", "content": ANALYST_INSTRUCTION},
        {"role": "user", "content": PROMPT_TEMPLATE.format(**values)},
    ]


class CommentaryGenerator:
    """Turns a normalized token into analyst text; never raises."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, token: TokenDetail) -> str | None:
        """
        Return the first completion's text.

        Any failure (transport, auth, empty `choices`, unexpected shape) is
        logged and mapped to ANALYSIS_UNAVAILABLE. A successful call whose
        message content is empty is returned as-is for the caller to handle.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(token),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            return response.choices[0].message.content
        except Exception:
            logger.exception("AI analysis failed | token=%s", getattr(token, "name", None))
            return ANALYSIS_UNAVAILABLE


def build_openai_client(api_key: str | None, timeout_s: float | None = None) -> AsyncOpenAI:
    # openai refuses to construct without a key; a placeholder keeps startup
    # alive and every call then fails over to ANALYSIS_UNAVAILABLE. The SDK
    # retries twice by default; calls here are single-shot.
    return AsyncOpenAI(api_key=api_key or "missing", timeout=timeout_s, max_retries=0)
