"""레거시 투어 코드에서 투어 ID와 에셋 위치를 해석합니다."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from laxy_pipeline.schemas.guide import TourConfig

_ASSET_HOST = "https://s3.ap-northeast-1.amazonaws.com"
_PROD_BUCKET = "laxy.travel"
_DEV_BUCKET = "laxy.travel.dev"
_TOUR_ID_SEGMENTS = 3


def extract_tour_id(legacy_tour_code: str | None) -> str | None:
    """레거시 투어 코드의 앞 세 구간을 투어 ID로 반환합니다.

    Examples:
        `"JPN-OITA-TUR-001-0001"` -> `"JPN-OITA-TUR"`, 구간이 셋 미만이면 None.
    """
    if not legacy_tour_code:
        return None

    parts = legacy_tour_code.split("-")
    if len(parts) < _TOUR_ID_SEGMENTS:
        return None
    return "-".join(parts[:_TOUR_ID_SEGMENTS])


def build_asset_base_url(tour_id: str, environment: str = "dev") -> str:
    """투어 에셋 기준 URL. `prod` 외의 값은 검증 없이 모두 dev 버킷을 씁니다."""
    bucket = _PROD_BUCKET if environment == "prod" else _DEV_BUCKET
    return f"{_ASSET_HOST}/{bucket}/tours/{tour_id}/"


def resolve_tour_config(poi_guide_item: Mapping[str, Any] | None, environment: str = "dev") -> TourConfig | None:
    """POI 가이드 항목에서 투어 설정을 만듭니다. 레거시 투어가 없으면 None."""
    if not poi_guide_item or not poi_guide_item.get("legacyTourCode"):
        return None

    tour_id = extract_tour_id(poi_guide_item["legacyTourCode"])
    if not tour_id:
        return None

    return TourConfig(
        tour_id=tour_id,
        asset_base_url=build_asset_base_url(tour_id, environment),
        poi=poi_guide_item.get("poi"),
    )


def has_audio_guide_support(poi_guide_item: Mapping[str, Any] | None) -> bool:
    return bool(poi_guide_item and poi_guide_item.get("legacyTourCode"))
