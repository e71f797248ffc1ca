"""읽기 API 동작 테스트."""

from __future__ import annotations

import importlib

import requests
from fastapi.testclient import TestClient

from laxy_pipeline.core.config import get_settings
from laxy_pipeline.core.json_files import write_json_file
from laxy_pipeline.services.mock_store import write_manifest

CLIENT_ID = "beppu-airbnb"
BASE_URL = "https://s3.ap-northeast-1.amazonaws.com/laxy.travel.dev/tours/JPN-OITA-TUR/"


def _set_required_env(monkeypatch, **overrides: str) -> None:
    monkeypatch.setenv("CMS_API_TOKEN", "test-token")
    monkeypatch.setenv("CLIENT_ID", CLIENT_ID)
    monkeypatch.setenv("LEGACY_ASSET_ENV", "dev")
    for key, value in overrides.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()


def _load_main_module():
    import laxy_pipeline.main as main_module

    return importlib.reload(main_module)


def _seed_mock_store(mock_root) -> None:
    poi_guides = {
        "data": [
            {
                "legacyTourCode": "JPN-OITA-TUR-001-0001",
                "poi": {"slug": "suginoi-hotel", "label": "Suginoi Hotel", "type": "attraction"},
            },
            {"legacyTourCode": None, "poi": {"slug": "beppu-tower", "label": "Beppu Tower"}},
            {"legacyTourCode": "JPN-BROKEN-TUR-001", "poi": {"slug": "broken-tour", "label": "Broken"}},
        ]
    }
    write_json_file(mock_root / "poi-guides" / "en.json", poi_guides)
    write_json_file(
        mock_root / "suites" / CLIENT_ID / "room-201" / "en.json",
        {
            "data": [
                {
                    "name": "room-201",
                    "label": "Room 201",
                    "ownedBy": {"pickedPOIs": [{"slug": "ramen", "label": "Ramen", "type": "restaurant"}]},
                }
            ]
        },
    )
    write_json_file(
        mock_root / "poi-recommendations" / "en.json",
        {
            "data": [
                {
                    "poi": {"slug": "ramen", "label": "Ramen Kou", "address": "Beppu", "type": "restaurant"},
                    "weightInNearbyRestaurants": 1,
                    "weightInHighlight": 1,
                }
            ]
        },
    )
    write_manifest(mock_root)


class _Response:
    def __init__(self, status_code: int, body: object = None, content: bytes = b"") -> None:
        self.status_code = status_code
        self._body = body
        self.content = content

    def json(self):
        return self._body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


ASSETS = {
    BASE_URL + "audio/1_eng.mp3": b"mp3",
    BASE_URL + "srt/1_eng.srt": b"1\n00:00:00,000 --> 00:00:02,000\nWelcome\n\n2\n00:00:02,500 --> 00:00:04,000\nLobby\n",
}


def _fake_legacy_get(url, timeout=None):
    documents = {
        BASE_URL + "index.json": {"title": "Suginoi Walk"},
        BASE_URL + "content.json": {
            "poiList": [
                {
                    "id": 1,
                    "title": "Lobby",
                    "order": 1,
                    "audio": {"eng": "audio/1_eng.mp3", "cht": "audio/1_cht.mp3"},
                    "subtitle": {"eng": "srt/1_eng.srt"},
                }
            ]
        },
    }
    if url in documents:
        return _Response(200, documents[url])
    if url in ASSETS:
        return _Response(200, content=ASSETS[url])
    return _Response(404, None)


def _client(monkeypatch, tmp_path) -> TestClient:
    _seed_mock_store(tmp_path)
    _set_required_env(monkeypatch, MOCK_DATA_DIR=str(tmp_path), ASSET_CACHE_DIR=str(tmp_path / "cache"))
    monkeypatch.setattr("laxy_pipeline.services.legacy_tour_loader.requests.get", _fake_legacy_get)
    main_module = _load_main_module()
    return TestClient(main_module.app)


def test_health_check_endpoint(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Laxy Guide API is running"}


def test_get_guide_resolves_assets_for_language(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        english = client.get("/api/v1/guides/Suginoi-Hotel", params={"lang": "en"})
        japanese = client.get("/api/v1/guides/suginoi-hotel", params={"lang": "ja"})
        mandarin = client.get("/api/v1/guides/suginoi-hotel", params={"lang": "en", "audio_lang": "cmn"})

    assert english.status_code == 200
    body = english.json()
    assert body["tour_id"] == "JPN-OITA-TUR"
    assert body["title"] == "Suginoi Walk"
    assert body["audio_language"] == "eng"
    assert body["steps"][0]["audio_url"] == BASE_URL + "audio/1_eng.mp3"
    assert japanese.json()["language"] == "ja"
    assert japanese.json()["steps"][0]["audio_url"] is None
    assert mandarin.json()["steps"][0]["audio_url"] == BASE_URL + "audio/1_cht.mp3"


def test_get_guide_not_found_and_unavailable(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        missing = client.get("/api/v1/guides/unknown")
        no_tour = client.get("/api/v1/guides/beppu-tower")
        broken = client.get("/api/v1/guides/broken-tour")

    assert missing.status_code == 404
    assert no_tour.status_code == 404
    assert broken.status_code == 503
    assert broken.json() == {"detail": "guide unavailable"}


def test_get_guide_languages(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        response = client.get("/api/v1/guides/suginoi-hotel/languages")

    assert response.status_code == 200
    body = response.json()
    assert body["languages"] == ["en", "zh-Hant"]
    assert [option["code"] for option in body["audio_languages"]] == ["eng", "cmn"]


def test_poi_and_suite_endpoints(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        poi = client.get("/api/v1/pois/suginoi-hotel", headers={"Accept-Language": "ko-KR"})
        suites = client.get("/api/v1/suites")
        suite = client.get("/api/v1/suites/room-201", params={"lang": "fr"})
        featured = client.get("/api/v1/suites/room-201/pois", params={"category": "restaurant"})
        missing_suite = client.get("/api/v1/suites/room-999")

    assert poi.status_code == 200
    assert poi.json()["language"] == "ko"
    assert poi.json()["has_audio_guide"] is True
    assert [item["id"] for item in suites.json()] == ["room-201"]
    assert suite.json()["language"] == "en"
    assert featured.json()["title"] == "Nearby Restaurants"
    assert [item["slug"] for item in featured.json()["pois"]] == ["ramen"]
    assert missing_suite.status_code == 404


def test_search_endpoint(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        response = client.get("/api/v1/search", params={"q": "ramen", "lang": "en"})

    body = response.json()
    assert response.status_code == 200
    assert [item["poi"]["slug"] for item in body["results"]] == ["ramen"]
    assert [item["poi"]["slug"] for item in body["highlighted"]] == ["ramen"]


def test_missing_content_returns_503(monkeypatch, tmp_path) -> None:
    _set_required_env(monkeypatch, MOCK_DATA_DIR=str(tmp_path / "empty"))
    main_module = _load_main_module()

    with TestClient(main_module.app) as client:
        response = client.get("/api/v1/pois/suginoi-hotel")

    assert response.status_code == 503


def test_get_step_subtitles(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        response = client.get("/api/v1/guides/suginoi-hotel/steps/0/subtitles", params={"lang": "en", "at": 3})
        ranged = client.get(
            "/api/v1/guides/suginoi-hotel/steps/0/subtitles", params={"lang": "en", "start": 0, "end": 1}
        )
        missing_language = client.get("/api/v1/guides/suginoi-hotel/steps/0/subtitles", params={"lang": "ja"})
        missing_step = client.get("/api/v1/guides/suginoi-hotel/steps/5/subtitles", params={"lang": "en"})

    assert response.status_code == 200
    body = response.json()
    assert body["subtitle_url"] == BASE_URL + "srt/1_eng.srt"
    assert [subtitle["text"] for subtitle in body["subtitles"]] == ["Welcome", "Lobby"]
    assert body["active"]["text"] == "Lobby"
    assert [subtitle["text"] for subtitle in ranged.json()["subtitles"]] == ["Welcome"]
    assert missing_language.status_code == 404
    assert missing_step.status_code == 404


def test_preload_guide_caches_assets(monkeypatch, tmp_path) -> None:
    with _client(monkeypatch, tmp_path) as client:
        english = client.post("/api/v1/guides/suginoi-hotel/preload", params={"lang": "en"})
        chinese = client.post("/api/v1/guides/suginoi-hotel/preload", params={"lang": "zh-Hant"})

    assert english.status_code == 200
    assert english.json()["tour_id"] == "JPN-OITA-TUR"
    assert (english.json()["total"], english.json()["loaded"], english.json()["failed"]) == (2, 2, 0)
    assert (tmp_path / "cache" / "JPN-OITA-TUR" / "audio" / "1_eng.mp3").read_bytes() == b"mp3"
    assert chinese.json()["failed_urls"] == [BASE_URL + "audio/1_cht.mp3"]
