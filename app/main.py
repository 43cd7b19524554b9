# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.health import router as health_router
from app.api.tokens import router as tokens_router

from app.config.settings import Settings, get_settings
from app.services.coingecko import CoinGeckoClient, build_http_client
from app.services.commentary import CommentaryGenerator, build_openai_client
from app.services.tokens import TokenService
from app.utils.logging import configure_logging


logger = logging.getLogger("token_insight.app")


def build_token_service(settings: Settings) -> TokenService:
    http = build_http_client(settings.HTTP_TIMEOUT_S, settings.GECKO_API_KEY)
    llm = build_openai_client(settings.OPENAI_API_KEY, settings.HTTP_TIMEOUT_S)

    market = CoinGeckoClient(
        http,
        settings.GECKO_API_URL,
        vs_currency=settings.VS_CURRENCY,
        category=settings.TOKEN_CATEGORY,
        per_page=settings.TOKENS_PER_PAGE,
    )
    commentary = CommentaryGenerator(llm, model=settings.OPENAI_MODEL)
    return TokenService(market, commentary)


app = FastAPI(title="AI Agent Token Insight API")

# Routers
app.include_router(health_router)
app.include_router(tokens_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "AI agent token insights"}


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app.state.token_service = build_token_service(settings)

    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set; ai_insight will fall back")
    logger.info(
        "token service ready | gecko=%s | category=%s | model=%s | timeout_s=%s",
        settings.GECKO_API_URL,
        settings.TOKEN_CATEGORY,
        settings.OPENAI_MODEL,
        settings.HTTP_TIMEOUT_S,
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    service: TokenService | None = getattr(app.state, "token_service", None)
    if service is None:
        return

    try:
        await service.market.http.aclose()
    finally:
        try:
            await service.commentary.client.close()
        finally:
            app.state.token_service = None
    logger.info("token service stopped")
