from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.schemas.token import TokenInsight, TokenSummary
from app.services.tokens import TokenService


router = APIRouter(prefix="/tokens", tags=["tokens"])


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


@router.get("", response_model=list[TokenSummary])
async def list_tokens(service: TokenService = Depends(get_token_service)):
    """AI-agent category tokens, market-cap descending."""
    return await service.list_tokens()


@router.get("/{token_id}", response_model=TokenInsight | None)
async def get_token(token_id: str, service: TokenService = Depends(get_token_service)):
    """
    Detail + analyst commentary for one token.
    Example: /tokens/bitcoin

    Returns `null` when the token is unknown or CoinGecko is unreachable.
    """
    return await service.get_token_details(token_id)
