from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api import tokens as tokens_module
from app.tests.stubs import DETAIL_KEYS, FakeCompletions, token_service


def _sparkline(n: int) -> list[float]:
    return [40000.0 + i for i in range(n)]


@pytest.fixture()
def tokens_client():
    state = {"completions": FakeCompletions(content="Bullish short term. Buy zone $40k-$41k."), "fail": False}

    def handler(request: httpx.Request) -> httpx.Response:
        if state["fail"]:
            raise httpx.ConnectError("provider down", request=request)
        if request.url.path.endswith("/coins/markets"):
            return httpx.Response(
                200,
                json=[
                    {"id": "virtual-protocol", "symbol": "virtual", "name": "Virtuals Protocol", "current_price": 2.1},
                    {"id": "ai16z", "symbol": "ai16z", "name": "ai16z"},
                ],
            )
        if request.url.path.endswith("/coins/bitcoin"):
            return httpx.Response(200, json={"id": "bitcoin", "symbol": "btc", "market_data": {"current_price": {"usd": 42000}}})
        if request.url.path.endswith("/coins/ethereum"):
            return httpx.Response(
                200,
                json={
                    "id": "ethereum",
                    "symbol": "eth",
                    "name": "Ethereum",
                    "market_data": {"sparkline_7d": {"price": _sparkline(168)}},
                },
            )
        return httpx.Response(404, json={"error": "coin not found"})

    app = FastAPI()
    app.include_router(tokens_module.router)

    def _override():
        return token_service(handler, state["completions"])

    app.dependency_overrides[tokens_module.get_token_service] = _override
    client = TestClient(app)
    yield client, state


def test_list_tokens(tokens_client):
    client, _ = tokens_client
    resp = client.get("/tokens")
    assert resp.status_code == 200
    body = resp.json()
    assert [t["id"] for t in body] == ["virtual-protocol", "ai16z"]
    assert body[0]["symbol"] == "VIRTUAL"
    assert body[1]["current_price"] == 0
    assert body[1]["max_supply"] is None
    assert body[1]["last_updated"] == "N/A"


def test_list_tokens_provider_down(tokens_client):
    client, state = tokens_client
    state["fail"] = True
    resp = client.get("/tokens")
    assert resp.status_code == 200
    assert resp.json() == []


def test_bitcoin_end_to_end(tokens_client):
    client, state = tokens_client
    resp = client.get("/tokens/bitcoin")
    assert resp.status_code == 200
    body = resp.json()
    assert body["symbol"] == "BTC"
    assert body["current_price"] == 42000
    assert body["market_cap"] == 0
    assert body["market_cap_rank"] is None
    assert body["image"] == {"thumb": "", "small": "", "large": ""}
    assert body["chart_data"] == []
    assert body["ai_insight"] == "Bullish short term. Buy zone $40k-$41k."
    assert len(state["completions"].calls) == 1


def test_detail_chart_bounded(tokens_client):
    client, _ = tokens_client
    body = client.get("/tokens/ethereum").json()
    assert body["chart_data"] == _sparkline(168)[-24:]


def test_unknown_token_is_null(tokens_client):
    client, state = tokens_client
    resp = client.get("/tokens/not-a-coin")
    assert resp.status_code == 200
    assert resp.json() is None
    assert state["completions"].calls == []


def test_detail_provider_down_is_null(tokens_client):
    client, state = tokens_client
    state["fail"] = True
    resp = client.get("/tokens/bitcoin")
    assert resp.status_code == 200
    assert resp.json() is None


def test_detail_generation_failure(tokens_client):
    client, state = tokens_client
    state["completions"] = FakeCompletions(error=TimeoutError("llm timeout"))
    body = client.get("/tokens/bitcoin").json()
    assert body["ai_insight"] == "AI analysis unavailable."


def test_detail_generation_empty(tokens_client):
    client, state = tokens_client
    state["completions"] = FakeCompletions(content=None)
    body = client.get("/tokens/bitcoin").json()
    assert body["ai_insight"] == "No AI insight available."


def test_detail_body_has_every_key(tokens_client):
    client, _ = tokens_client
    body = client.get("/tokens/bitcoin").json()
    assert set(body) == DETAIL_KEYS | {"ai_insight"}
    assert set(body["image"]) == {"thumb", "small", "large"}


def test_list_body_has_every_key(tokens_client):
    client, _ = tokens_client
    for row in client.get("/tokens").json():
        assert len(row) == 20
        assert row["market_cap_rank"] is None
