"""레거시 투어 문서를 현재 가이드 스키마로 변환합니다.

에셋 언어 해석에는 레거시 테이블(`cht` / `chs` 구분)을 사용합니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from laxy_pipeline.core.errors import InvalidLegacyDocumentError
from laxy_pipeline.core.languages import from_legacy_language, to_legacy_language
from laxy_pipeline.schemas.guide import (
    AdaptedGuide,
    AdaptedStep,
    GuideBody,
    ImageAsset,
    LegacyStop,
    StepAssets,
)
from laxy_pipeline.services.tour_resolver import extract_tour_id


def validate_legacy_tour(document: Any) -> bool:
    """`poiList`가 리스트인 객체인지 확인합니다. 빈 리스트도 유효합니다."""
    return isinstance(document, Mapping) and isinstance(document.get("poiList"), list)


def _adapt_stop(raw_stop: Any, index: int) -> AdaptedStep:
    try:
        stop = LegacyStop.model_validate(raw_stop)
    except ValidationError as exc:
        raise InvalidLegacyDocumentError(f"poiList[{index}] is malformed: {exc.errors()[0]['msg']}") from exc

    return AdaptedStep(
        id=stop.id,
        title=stop.title,
        description=stop.description,
        audio=stop.audio,
        subtitle=stop.subtitle,
        images=stop.image,
        duration=stop.duration,
        order=stop.order or 0,
    )


def adapt_legacy_tour(document: Any, poi_item: Mapping[str, Any]) -> AdaptedGuide:
    """레거시 투어 문서를 `AdaptedGuide`로 변환합니다.

    Args:
        document: `index.json`과 `content.poiList`를 합친 레거시 문서.
        poi_item: `legacyTourCode`와 `poi`를 가진 POI 가이드 항목.

    Raises:
        InvalidLegacyDocumentError: 문서 구조가 유효하지 않은 경우.
    """
    if not validate_legacy_tour(document):
        raise InvalidLegacyDocumentError("Invalid legacy tour data structure")

    poi = poi_item.get("poi")
    label = poi.get("label") if isinstance(poi, Mapping) else None
    title = document.get("title") or f"Audio Guide for {label or ''}"
    steps = [_adapt_stop(raw_stop, index) for index, raw_stop in enumerate(document["poiList"])]

    return AdaptedGuide(
        poi=poi,
        guide=GuideBody(
            id=extract_tour_id(poi_item.get("legacyTourCode")),
            title=title,
            description=document.get("description"),
            steps=steps,
        ),
    )


def resolve_step_assets(step: AdaptedStep, language: str, asset_base_url: str) -> StepAssets:
    """스텝의 에셋 경로를 특정 표시 언어의 절대 URL로 해석합니다.

    해당 언어의 오디오/자막이 없으면 URL은 None, 이미지는 빈 목록입니다.
    """
    legacy_code = to_legacy_language(language)
    audio_path = step.audio.get(legacy_code)
    subtitle_path = step.subtitle.get(legacy_code)

    return StepAssets(
        id=step.id,
        title=step.title,
        description=step.description,
        audio_url=f"{asset_base_url}{audio_path}" if audio_path else None,
        subtitle_url=f"{asset_base_url}{subtitle_path}" if subtitle_path else None,
        images=[
            ImageAsset(
                url=f"{asset_base_url}{image.url}",
                start_timestamp=image.start_timestamp,
                end_timestamp=image.end_timestamp,
            )
            for image in step.images.get(legacy_code, [])
        ],
        duration=step.duration,
        order=step.order,
    )


def discover_available_languages(document: Mapping[str, Any]) -> set[str]:
    """모든 스텝의 오디오 맵 키를 모아 표시 언어 코드 집합으로 반환합니다."""
    legacy_codes: set[str] = set()
    for stop in document.get("poiList") or []:
        audio = stop.get("audio") if isinstance(stop, Mapping) else None
        if isinstance(audio, Mapping):
            legacy_codes.update(audio.keys())
    return {from_legacy_language(code) for code in legacy_codes}
