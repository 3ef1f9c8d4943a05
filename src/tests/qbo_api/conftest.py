"""Test configuration for qbo_api tests."""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

JSON_HEADERS = {"Content-Type": "application/json;charset=UTF-8"}


class _FakeAdapter(BaseAdapter):
    """Transport adapter that records requests and replays canned responses."""

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[requests.PreparedRequest] = []
        self._queue: list[tuple[int, bytes, dict[str, str]]] = []

    def queue(self, status: int = 200, body: Any = None, headers: dict[str, str] | None = None) -> None:
        if isinstance(body, (dict, list)):
            raw = json.dumps(body).encode("utf-8")
            headers = headers or JSON_HEADERS
        elif isinstance(body, str):
            raw = body.encode("utf-8")
        else:
            raw = body or b""
        self._queue.append((status, raw, headers or {}))

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        if self._queue:
            status, raw, headers = self._queue.pop(0)
        else:
            status, raw, headers = 200, b"{}", JSON_HEADERS

        resp = requests.Response()
        resp.status_code = status
        resp._content = raw
        resp.headers = CaseInsensitiveDict(headers)
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self) -> None:
        pass

    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]


@pytest.fixture
def fake_adapter() -> _FakeAdapter:
    return _FakeAdapter()


@pytest.fixture
def qbo_env(monkeypatch):
    """Clear QBO_* variables so tests don't pick up a developer's `.env`."""

    import os

    for key in list(os.environ):
        if key.startswith("QBO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("qbo_api.config.load_dotenv", lambda *a, **k: False)
    monkeypatch.setattr("qbo_api.config.dotenv_values", lambda *a, **k: {})
    return monkeypatch
