"""레거시 투어 코드 해석 테스트."""

import pytest

from laxy_pipeline.services.tour_resolver import (
    build_asset_base_url,
    extract_tour_id,
    has_audio_guide_support,
    resolve_tour_config,
)


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("JPN-OITA-TUR-001-0001", "JPN-OITA-TUR"),
        ("A-B-C", "A-B-C"),
        ("A-B", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_tour_id(code, expected) -> None:
    assert extract_tour_id(code) == expected


def test_build_asset_base_url_by_environment() -> None:
    assert build_asset_base_url("JPN-OITA-TUR", "prod") == (
        "https://s3.ap-northeast-1.amazonaws.com/laxy.travel/tours/JPN-OITA-TUR/"
    )
    assert build_asset_base_url("JPN-OITA-TUR") == (
        "https://s3.ap-northeast-1.amazonaws.com/laxy.travel.dev/tours/JPN-OITA-TUR/"
    )


def test_unknown_environment_uses_dev_bucket() -> None:
    assert build_asset_base_url("JPN-OITA-TUR", "staging") == build_asset_base_url("JPN-OITA-TUR", "dev")


def test_resolve_tour_config() -> None:
    item = {"legacyTourCode": "JPN-OITA-TUR-001-0001", "poi": {"slug": "suginoi-hotel"}}

    config = resolve_tour_config(item, "prod")

    assert config is not None
    assert config.tour_id == "JPN-OITA-TUR"
    assert config.asset_base_url.endswith("/laxy.travel/tours/JPN-OITA-TUR/")
    assert config.poi == {"slug": "suginoi-hotel"}


def test_resolve_tour_config_without_tour() -> None:
    assert resolve_tour_config(None) is None
    assert resolve_tour_config({"poi": {}}) is None
    assert resolve_tour_config({"legacyTourCode": "A-B"}) is None
    assert has_audio_guide_support({"legacyTourCode": "A-B-C"}) is True
    assert has_audio_guide_support({"legacyTourCode": ""}) is False


def test_resolve_tour_config_keeps_opaque_poi_reference() -> None:
    config = resolve_tour_config({"legacyTourCode": "JPN-OITA-TUR-001-0001", "poi": "doc-abc"})

    assert config is not None
    assert config.tour_id == "JPN-OITA-TUR"
    assert config.poi == "doc-abc"
