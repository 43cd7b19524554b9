# app/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Response

from app.config.settings import get_settings

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_unix": int(now_ts),
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


def build_ready_payload() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        **_now_meta(),
        "checks": {
            "market_data": {"ok": True, "base_url": settings.GECKO_API_URL},
            "llm": {"ok": bool(settings.OPENAI_API_KEY), "model": settings.OPENAI_MODEL},
        },
    }


@router.get("/live")
async def live():
    return {"status": "ok"}


@router.get("/ready")
async def ready(response: Response):
    """
    Configuration readiness only; no outbound calls are made.
    A missing LLM key is degraded, not fatal: ai_insight falls back.
    """
    payload = build_ready_payload()

    degraded_reasons = []
    if not payload["checks"]["llm"]["ok"]:
        degraded_reasons.append("llm_key_missing")

    if degraded_reasons:
        payload["status"] = "degraded"
        response.status_code = 503

    payload["degraded"] = bool(degraded_reasons)
    payload["degraded_reasons"] = degraded_reasons
    return payload
