import xml.etree.ElementTree as ET

import pytest
from fastapi.testclient import TestClient

import cjfeed.api as api_mod
import cjfeed.fetcher as fetcher_mod
from cjfeed.http_client import HttpClient

from conftest import DummyResponse, DummySession


@pytest.fixture
def session(monkeypatch, cj_config):
    """Sustituye la sesión HTTP del fetcher por una DummySession."""
    dummy = DummySession()
    monkeypatch.setattr(api_mod, "get_cj_config", lambda: cj_config)
    monkeypatch.setattr(
        fetcher_mod,
        "HttpClient",
        lambda timeout, headers: HttpClient(timeout=timeout, headers=headers, session=dummy),
    )
    return dummy


@pytest.fixture
def client():
    return TestClient(api_mod.app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_feed_without_params_returns_empty_document(client, session):
    resp = client.get("/api/feed")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/xml; charset=utf-8"
    root = ET.fromstring(resp.content)
    assert root.tag == "products"
    assert root.get("generated_at")
    assert list(root) == []
    assert session.calls == []


def test_feed_by_keyword(client, session):
    session.search = DummyResponse(
        payload={
            "data": {
                "list": [
                    {
                        "pid": "x",
                        "productId": "P1",
                        "productName": "Desk & Chair",
                        "sellPrice": "19.9",
                        "variants": [{"inventory": 3}, {"inventory": 7}],
                    }
                ]
            }
        }
    )

    resp = client.get("/api/feed", params={"kw": " desk ", "pageNum": "2", "pageSize": "abc"})

    assert resp.status_code == 200
    assert session.calls[0]["params"] == {"keyWords": "desk", "pageNum": 2, "pageSize": 50}
    product = ET.fromstring(resp.content).find("product")
    assert product.findtext("id") == "P1"
    assert product.findtext("title") == "Desk & Chair"
    assert product.findtext("price") == "19.90"
    assert product.findtext("inventory") == "10"
    assert [v.findtext("id") for v in product.find("variants")] == ["P1-1", "P1-2"]


def test_feed_by_ids_skips_failures(client, session):
    session.details = {
        "A": DummyResponse(payload={"data": {"id": "A"}}),
        "B": DummyResponse(status_code=404),
        "C": DummyResponse(payload={"data": {"id": "C"}}),
    }

    resp = client.get("/api/feed", params={"ids": "A,B,C"})

    assert resp.status_code == 200
    root = ET.fromstring(resp.content)
    assert [p.findtext("id") for p in root.findall("product")] == ["A", "C"]


def test_keyword_upstream_error_returns_xml_500(client, session):
    session.search = DummyResponse(status_code=502)

    resp = client.get("/api/feed", params={"kw": "desk"})

    assert resp.status_code == 500
    assert resp.headers["content-type"] == "application/xml; charset=utf-8"
    root = ET.fromstring(resp.content)
    assert root.tag == "error"
    assert "502" in root.text


def test_missing_token_returns_500_without_network(client, monkeypatch):
    calls = []

    def fail_get(*args, **kwargs):
        calls.append(args)
        raise AssertionError("no debería haber llamadas de red")

    monkeypatch.setattr(api_mod, "get_cj_config", lambda: {"token": "", "base_url": "https://cj.test"})
    monkeypatch.setattr("requests.Session.get", fail_get)

    resp = client.get("/api/feed", params={"kw": "desk"})

    assert resp.status_code == 500
    root = ET.fromstring(resp.content)
    assert root.tag == "error"
    assert "CJ_TOKEN" in root.text
    assert calls == []
