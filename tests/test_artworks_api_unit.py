from __future__ import annotations

import pytest
import requests

from artic_core import artworks_api
from artic_core.artworks_api import ArticClient, ArtworkFetchError, parse_artworks_payload
from artic_core.models import Artwork


class _Resp:
    def __init__(self, *, json_data=None, status_code: int = 200, text: str = ""):
        self._json_data = json_data
        self.status_code = status_code
        self.text = text

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_data


def _payload(records, total=129_000):
    return {"pagination": {"total": total, "limit": len(records), "current_page": 1}, "data": records}


def test_fetch_page_sends_page_limit_and_fields(monkeypatch):
    """The request must carry page, limit and the trimmed field list."""
    captured = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        captured.update(url=url, params=params, headers=headers, timeout=timeout)
        return _Resp(json_data=_payload([{"id": 27992, "title": "A Sunday on La Grande Jatte"}]))

    monkeypatch.setattr(artworks_api.requests, "get", fake_get)

    client = ArticClient(base_url="https://api.example.org/v1/", timeout=5, fields=["id", "title"])
    page = client.fetch_page(3, limit=24)

    assert captured["url"] == "https://api.example.org/v1/artworks"
    assert captured["params"] == {"page": "3", "limit": "24", "fields": "id,title"}
    assert captured["timeout"] == 5.0
    assert "User-Agent" in captured["headers"]
    assert page.page == 3
    assert page.total == 129_000
    assert page.artworks == (Artwork(id=27992, title="A Sunday on La Grande Jatte"),)


def test_fetch_page_non_2xx_raises_descriptive_error(monkeypatch):
    monkeypatch.setattr(artworks_api.requests, "get", lambda *a, **k: _Resp(status_code=503))

    with pytest.raises(ArtworkFetchError) as excinfo:
        ArticClient(base_url="https://api.example.org").fetch_page(1)

    assert str(excinfo.value) == "HTTP error! status: 503"
    assert excinfo.value.status_code == 503


def test_fetch_page_transport_failure_raises(monkeypatch):
    def fake_get(*_a, **_k):
        raise requests.ConnectionError("Name or service not known")

    monkeypatch.setattr(artworks_api.requests, "get", fake_get)

    with pytest.raises(ArtworkFetchError, match="Name or service not known"):
        ArticClient(base_url="https://api.example.org").fetch_page(1)


def test_fetch_page_non_json_body_raises(monkeypatch):
    monkeypatch.setattr(artworks_api.requests, "get", lambda *a, **k: _Resp(text="<html>oops</html>"))

    with pytest.raises(ArtworkFetchError, match="not JSON"):
        ArticClient(base_url="https://api.example.org").fetch_page(1)


def test_parse_payload_keeps_nullable_fields_as_none():
    payload = _payload(
        [
            {
                "id": 4,
                "title": None,
                "place_of_origin": "Paris",
                "artist_display": "",
                "inscriptions": None,
                "date_start": 1884,
                "date_end": None,
            }
        ],
        total=1,
    )
    page = parse_artworks_payload(payload, 1)
    art = page.artworks[0]
    assert art.id == 4
    assert art.title is None
    assert art.place_of_origin == "Paris"
    assert art.artist_display is None
    assert art.date_start == 1884
    assert art.date_end is None


def test_parse_payload_preserves_result_order_and_non_sequential_ids():
    page = parse_artworks_payload(_payload([{"id": 900}, {"id": 12}, {"id": 4050}]), 2)
    assert page.ids == [900, 12, 4050]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"pagination": {"total": 3}},
        {"data": []},
        {"data": [], "pagination": {"total": "many"}},
        {"data": [{"title": "no id"}], "pagination": {"total": 1}},
    ],
)
def test_parse_payload_rejects_malformed_bodies(payload):
    with pytest.raises(ArtworkFetchError, match="Malformed response"):
        parse_artworks_payload(payload, 1)


def test_client_reads_defaults_from_config():
    client = ArticClient()
    assert client.artworks_url == "https://api.artic.edu/api/v1/artworks"
    assert "place_of_origin" in client.fields


def test_parse_payload_tolerates_out_of_range_numbers():
    """Years too large for an int are dropped instead of failing the whole page."""
    payload = _payload([{"id": 1, "date_start": 1e400, "date_end": 1900}], total=1)
    page = parse_artworks_payload(payload, 2)
    assert page.artworks[0].date_start is None
    assert page.artworks[0].date_end == 1900
