"""Pytest fixtures: sesión HTTP falsa para no tocar la red."""

import pytest

from cjfeed.http_client import HttpClient


class DummyResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


class DummySession:
    """Sesión que responde según el último segmento de la URL y los params."""

    def __init__(self, search=None, details=None):
        self.headers = {}
        self.calls = []
        self.search = search or DummyResponse(payload={"data": {"list": []}})
        self.details = details or {}

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if url.endswith("/v1/product/query"):
            return self.search
        if url.endswith("/v1/product/detail"):
            return self.details.get(params["id"], DummyResponse(status_code=404))
        raise AssertionError(f"URL inesperada: {url}")


@pytest.fixture
def cj_config():
    return {"token": "test-token", "base_url": "https://cj.test/api2.0", "timeout": 5}


@pytest.fixture
def make_http():
    def _make(session):
        return HttpClient(timeout=5, headers={"CJ-Access-Token": "test-token"}, session=session)

    return _make
