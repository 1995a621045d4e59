"""Shared fixtures: app/client, config isolation and fake upstream responses."""

from __future__ import annotations

import io
import json
from typing import Any, Dict, Optional

import pytest
import requests

from core.config_priority import clear_config_cache
from core.error_handler import get_error_handler
from modules.downloader.manager import reset_download_manager
from modules.shortlink.resolver import reset_shortlink_resolver

TEST_API_KEY = "test-key"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Every test starts with a known API key and fresh singletons."""
    for name in ("API_KEY", "DOWNLOADER_API_BASE", "DOWNLOADER_PROXY", "NETWORK_PROXY",
                 "DEBUG", "APP_DEBUG", "PORT", "HOST", "SHORTLINK_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOWNLOADER_API_KEY", TEST_API_KEY)
    clear_config_cache()
    reset_download_manager()
    reset_shortlink_resolver()
    get_error_handler().reset()
    yield
    clear_config_cache()
    reset_download_manager()
    reset_shortlink_resolver()


@pytest.fixture
def app():
    from core.app import create_app

    flask_app = create_app({"TESTING": True})
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def build_response(
    status: int = 200,
    body: Any = b"",
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a real requests.Response backed by an in-memory body."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status
    response.raw = io.BytesIO(body)
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


@pytest.fixture
def make_response():
    return build_response
