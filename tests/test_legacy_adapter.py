"""레거시 투어 문서 변환 테스트."""

import pytest

from laxy_pipeline.core.errors import InvalidLegacyDocumentError
from laxy_pipeline.services.legacy_adapter import (
    adapt_legacy_tour,
    discover_available_languages,
    resolve_step_assets,
    validate_legacy_tour,
)

BASE_URL = "https://s3.ap-northeast-1.amazonaws.com/laxy.travel.dev/tours/JPN-OITA-TUR/"
POI_ITEM = {"legacyTourCode": "JPN-OITA-TUR-001-0001", "poi": {"slug": "suginoi-hotel", "label": "Suginoi Hotel"}}


def _legacy_document() -> dict:
    return {
        "title": "Beppu Walk",
        "description": "Hot springs",
        "poiList": [
            {
                "id": 1,
                "title": "Gate",
                "order": 2,
                "audio": {"eng": "audio/1_eng.mp3", "jpn": "audio/1_jpn.mp3"},
                "subtitle": {"eng": "srt/1_eng.srt"},
                "image": {"eng": [{"url": "img/1.jpg", "startTimestamp": 0, "endTimestamp": 12.5}]},
            },
            {
                "id": 2,
                "title": "Garden",
                "audio": {"cht": "audio/2_cht.mp3"},
                "subtitle": {},
                "image": {},
            },
        ],
    }


@pytest.mark.parametrize("document", [None, {}, {"poiList": None}, {"poiList": "x"}, [], "poiList"])
def test_validate_rejects_invalid_documents(document) -> None:
    assert validate_legacy_tour(document) is False


def test_validate_accepts_empty_poi_list() -> None:
    assert validate_legacy_tour({"poiList": []}) is True


def test_adapt_rejects_invalid_document() -> None:
    with pytest.raises(InvalidLegacyDocumentError):
        adapt_legacy_tour({"title": "no stops"}, POI_ITEM)


def test_adapt_preserves_order_and_defaults() -> None:
    guide = adapt_legacy_tour(_legacy_document(), POI_ITEM)

    assert guide.poi == POI_ITEM["poi"]
    assert guide.guide.id == "JPN-OITA-TUR"
    assert guide.guide.title == "Beppu Walk"
    assert [step.id for step in guide.guide.steps] == [1, 2]
    assert [step.order for step in guide.guide.steps] == [2, 0]


def test_adapt_title_falls_back_to_poi_label() -> None:
    guide = adapt_legacy_tour({"poiList": []}, POI_ITEM)

    assert guide.guide.title == "Audio Guide for Suginoi Hotel"
    assert guide.guide.steps == []


def test_adapt_accepts_opaque_poi_reference() -> None:
    guide = adapt_legacy_tour({"poiList": []}, {"legacyTourCode": "JPN-OITA-TUR-001-0001", "poi": "doc-abc"})

    assert guide.poi == "doc-abc"
    assert guide.guide.id == "JPN-OITA-TUR"
    assert guide.guide.title == "Audio Guide for "


def test_adapt_rejects_malformed_stop() -> None:
    with pytest.raises(InvalidLegacyDocumentError):
        adapt_legacy_tour({"poiList": ["not a stop"]}, POI_ITEM)


def test_resolve_step_assets_for_present_and_missing_language() -> None:
    step = adapt_legacy_tour(_legacy_document(), POI_ITEM).guide.steps[0]

    english = resolve_step_assets(step, "en", BASE_URL)
    japanese = resolve_step_assets(step, "ja", BASE_URL)
    korean = resolve_step_assets(step, "ko", BASE_URL)

    assert english.audio_url == BASE_URL + "audio/1_eng.mp3"
    assert english.subtitle_url == BASE_URL + "srt/1_eng.srt"
    assert english.images[0].url == BASE_URL + "img/1.jpg"
    assert english.images[0].end_timestamp == 12.5
    assert japanese.audio_url == BASE_URL + "audio/1_jpn.mp3"
    assert japanese.subtitle_url is None
    assert japanese.images == []
    assert korean.audio_url is None


def test_resolve_step_assets_passes_unknown_codes_through() -> None:
    document = {"poiList": [{"id": 1, "audio": {"fra": "audio/1_fra.mp3"}}]}
    step = adapt_legacy_tour(document, POI_ITEM).guide.steps[0]

    assert resolve_step_assets(step, "fra", BASE_URL).audio_url == BASE_URL + "audio/1_fra.mp3"


def test_discover_available_languages() -> None:
    document = _legacy_document()
    document["poiList"].append({"id": 3, "audio": {"xyz": "audio/3.mp3"}})

    assert discover_available_languages(document) == {"en", "ja", "zh-Hant", "xyz"}
