from __future__ import annotations

import pytest

from app.config import settings as settings_module


@pytest.fixture()
def clean_settings(monkeypatch):
    for name in (
        "GECKO_API_URL",
        "GECKO_API_KEY",
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "TOKEN_CATEGORY",
        "VS_CURRENCY",
        "TOKENS_PER_PAGE",
        "HTTP_TIMEOUT_S",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings_module.reset_settings()
    yield monkeypatch
    settings_module.reset_settings()
