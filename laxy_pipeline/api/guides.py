"""오디오 가이드 조회 API."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, status

from laxy_pipeline.api.dependencies import get_store, get_tour_loader, require_loaded, resolve_language
from laxy_pipeline.core.config import Settings, get_settings
from laxy_pipeline.core.errors import GuideUnavailableError, InvalidLegacyDocumentError, LegacyTourLoadError
from laxy_pipeline.core.languages import from_audio_language, get_valid_audio_language_code, to_audio_language
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.timeout_policy import get_timeout_policy
from laxy_pipeline.schemas.api import (
    AudioLanguageOption,
    GuideLanguagesResponse,
    GuideResponse,
    PreloadResponse,
    SubtitleTrackResponse,
)
from laxy_pipeline.schemas.guide import AudioGuide
from laxy_pipeline.services.asset_preloader import preload_guide_assets
from laxy_pipeline.services.legacy_adapter import discover_available_languages, resolve_step_assets
from laxy_pipeline.services.legacy_tour_loader import LegacyTourLoader
from laxy_pipeline.services.mock_store import MockDataStore
from laxy_pipeline.services.poi_lookup import find_item_by_slug
from laxy_pipeline.services.srt_parser import find_active_subtitle, subtitles_in_range
from laxy_pipeline.services.tour_resolver import has_audio_guide_support, resolve_tour_config

router = APIRouter(prefix="/api/v1/guides", tags=["guides"])
logger = get_logger(__name__)

GUIDE_UNAVAILABLE_DETAIL = "guide unavailable"


def _find_guide_item(store: MockDataStore, slug: str, language: str) -> dict:
    poi_guides = require_loaded(store.poi_guides(language))
    item = find_item_by_slug(poi_guides.items, slug)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"POI not found: {slug}")
    if not has_audio_guide_support(item):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No audio guide for POI: {slug}")
    return item


async def _load_guide(loader: LegacyTourLoader, item: dict, slug: str, language: str) -> AudioGuide:
    try:
        return await loader.load_guide(item, language)
    except GuideUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (InvalidLegacyDocumentError, LegacyTourLoadError) as exc:
        logger.warning("Guide unavailable: slug=%s error=%s", slug, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GUIDE_UNAVAILABLE_DETAIL) from exc


@router.get("/{slug}", response_model=GuideResponse)
async def get_guide(
    slug: str,
    language: str = Depends(resolve_language),
    audio_lang: str | None = Query(default=None, description="오디오 선택기 코드 (eng, jpn, kor, cmn)"),
    store: MockDataStore = Depends(get_store),
    loader: LegacyTourLoader = Depends(get_tour_loader),
) -> GuideResponse:
    """POI 슬러그로 오디오 가이드를 불러와 요청 언어의 에셋 URL로 해석합니다."""
    item = _find_guide_item(store, slug, language)
    guide = await _load_guide(loader, item, slug, language)

    if audio_lang:
        audio_language = get_valid_audio_language_code(audio_lang)
        asset_language = from_audio_language(audio_language)
    else:
        audio_language = to_audio_language(language)
        asset_language = language

    steps = [resolve_step_assets(step, asset_language, guide.asset_base_url) for step in guide.guide.steps]
    logger.info("Guide resolved: slug=%s tour_id=%s steps=%d", slug, guide.guide.id, len(steps))
    return GuideResponse(
        poi=guide.poi,
        tour_id=guide.guide.id,
        title=guide.guide.title,
        description=guide.guide.description,
        language=language,
        audio_language=audio_language,
        asset_base_url=guide.asset_base_url,
        steps=steps,
    )


@router.get("/{slug}/languages", response_model=GuideLanguagesResponse)
async def get_guide_languages(
    slug: str,
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
    loader: LegacyTourLoader = Depends(get_tour_loader),
) -> GuideLanguagesResponse:
    """투어에 오디오가 있는 언어와 선택 가능한 오디오 언어 목록을 반환합니다."""
    item = _find_guide_item(store, slug, language)
    tour_config = resolve_tour_config(item, loader.environment)
    if tour_config is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No audio guide for POI: {slug}")

    try:
        document = await loader.load(tour_config.tour_id)
    except (InvalidLegacyDocumentError, LegacyTourLoadError) as exc:
        logger.warning("Guide languages unavailable: slug=%s error=%s", slug, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GUIDE_UNAVAILABLE_DETAIL) from exc

    languages = sorted(discover_available_languages(document))
    audio_codes = {to_audio_language(code) for code in languages}
    options = store.audio_languages(language, audio_codes)
    return GuideLanguagesResponse(
        languages=languages,
        audio_languages=[AudioLanguageOption(**option) for option in options],
    )


@router.get("/{slug}/steps/{step_index}/subtitles", response_model=SubtitleTrackResponse)
async def get_step_subtitles(
    slug: str,
    step_index: int,
    language: str = Depends(resolve_language),
    at: float | None = Query(default=None, ge=0, description="표시 중인 자막을 찾을 재생 시각(초)"),
    start: float | None = Query(default=None, ge=0, description="구간 시작(초). `end`와 함께 쓰면 겹치는 자막만 반환"),
    end: float | None = Query(default=None, ge=0, description="구간 끝(초)"),
    store: MockDataStore = Depends(get_store),
    loader: LegacyTourLoader = Depends(get_tour_loader),
) -> SubtitleTrackResponse:
    """스텝 자막을 파싱해 반환합니다. `step_index`는 가이드 스텝 목록의 0부터 시작하는 위치입니다."""
    item = _find_guide_item(store, slug, language)
    guide = await _load_guide(loader, item, slug, language)

    steps = guide.guide.steps
    if not 0 <= step_index < len(steps):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Step not found: {step_index}")

    assets = resolve_step_assets(steps[step_index], language, guide.asset_base_url)
    if not assets.subtitle_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No subtitles for step {step_index} in {language}",
        )

    try:
        subtitles = await loader.load_subtitles(assets.subtitle_url, guide.guide.id or slug)
    except LegacyTourLoadError as exc:
        logger.warning("Subtitles unavailable: slug=%s step=%d error=%s", slug, step_index, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GUIDE_UNAVAILABLE_DETAIL) from exc

    active = find_active_subtitle(subtitles, at) if at is not None else None
    if start is not None and end is not None:
        subtitles = subtitles_in_range(subtitles, start, end)

    return SubtitleTrackResponse(
        step_id=assets.id,
        language=language,
        subtitle_url=assets.subtitle_url,
        subtitles=subtitles,
        active=active,
    )


@router.post("/{slug}/preload", response_model=PreloadResponse)
async def preload_guide(
    slug: str,
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
    loader: LegacyTourLoader = Depends(get_tour_loader),
    settings: Settings = Depends(get_settings),
) -> PreloadResponse:
    """요청 언어의 가이드 에셋을 `ASSET_CACHE_DIR/<tour_id>/` 아래로 미리 내려받습니다."""
    item = _find_guide_item(store, slug, language)
    guide = await _load_guide(loader, item, slug, language)
    tour_id = guide.guide.id or slug

    report = await preload_guide_assets(
        guide,
        language,
        max_concurrency=settings.ASSET_PRELOAD_MAX_CONCURRENCY,
        timeout_seconds=get_timeout_policy(settings).legacy_asset_timeout_seconds,
        cache_dir=Path(settings.ASSET_CACHE_DIR) / tour_id,
    )
    return PreloadResponse(
        tour_id=guide.guide.id,
        language=language,
        total=report.total,
        loaded=report.loaded,
        failed=report.failed,
        failed_urls=report.failed_urls,
    )
