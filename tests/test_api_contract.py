import httpx
from fastapi.testclient import TestClient

from vbcheck import api, config
from vbcheck.api import app
from vbcheck.catalog_client import CatalogClient
from vbcheck.config import Notice


client = TestClient(app)


async def dummy_resolution(title: str, author=None) -> Notice:
    # Deterministic fake: echo the inputs back in a matched notice
    return Notice(
        status="matched",
        link_url="https://www.valuebooks.jp/bp/1",
        display_title=title,
        in_stock=True,
        price=100,
        price_text="100円",
        matched_keyword=f'"{title}" {author or ""}'.strip(),
    )


def test_health_endpoint():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_resolve_requires_non_empty_title(monkeypatch):
    monkeypatch.setattr("vbcheck.api.run_resolution", dummy_resolution)

    assert client.post("/resolve", json={"title": " "}).status_code == 422
    assert client.post("/resolve", json={"title": ""}).status_code == 422
    assert client.post("/resolve", json={}).status_code == 422


def test_resolve_returns_notice(monkeypatch):
    monkeypatch.setattr("vbcheck.api.run_resolution", dummy_resolution)

    resp = client.post("/resolve", json={"title": " 老人と海 ", "author": "ヘミングウェイ"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "matched"
    assert data["display_title"] == "老人と海"
    assert data["matched_keyword"] == '"老人と海" ヘミングウェイ'


def test_resolve_page_extracts_fields(monkeypatch):
    monkeypatch.setattr("vbcheck.api.run_resolution", dummy_resolution)

    html = '<span id="productTitle">老人と海</span><div id="bylineInfo">ヘミングウェイ (著)</div>'
    resp = client.post("/resolve/page", json={"html": html})
    assert resp.status_code == 200
    assert resp.json()["matched_keyword"] == '"老人と海" ヘミングウェイ'


def test_resolve_page_without_title_is_422(monkeypatch):
    monkeypatch.setattr("vbcheck.api.run_resolution", dummy_resolution)

    resp = client.post("/resolve/page", json={"html": "<p>nothing</p>"})
    assert resp.status_code == 422


def test_catalog_outage_is_a_no_match_notice(monkeypatch):
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    monkeypatch.setattr(
        api, "_catalog_client",
        lambda: CatalogClient(client=httpx.AsyncClient(transport=transport)),
    )
    monkeypatch.setattr(config, "RETRY_DELAY_MS", 0)

    resp = client.post("/resolve", json={"title": "鬼滅の刃 (1) (少年ジャンプ)"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "no_match"
    assert data["search_seed"] == "鬼滅の刃 (1)"
