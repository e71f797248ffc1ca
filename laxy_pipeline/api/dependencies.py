"""API 의존성 모음."""

from fastapi import Header, HTTPException, Query, Request, status

from laxy_pipeline.core.languages import detect_language, get_valid_language_code
from laxy_pipeline.schemas.store import LoadResult, LoadStatus
from laxy_pipeline.services.legacy_tour_loader import LegacyTourLoader
from laxy_pipeline.services.mock_store import MockDataStore


def get_store(request: Request) -> MockDataStore:
    """애플리케이션 시작 시 연 목 저장소를 제공합니다."""
    return request.app.state.store


def get_tour_loader(request: Request) -> LegacyTourLoader:
    return request.app.state.tour_loader


def resolve_language(
    lang: str | None = Query(default=None, description="표시 언어 코드"),
    accept_language: str | None = Header(default=None, alias="accept-language"),
) -> str:
    """`lang` 쿼리가 있으면 정규화하고, 없으면 `Accept-Language`에서 고릅니다."""
    if lang:
        return get_valid_language_code(lang)
    return detect_language(accept_language)


def require_loaded(result: LoadResult) -> LoadResult:
    """목 파일을 읽지 못했으면 503으로 응답합니다. 빈 결과는 그대로 통과합니다."""
    if result.status is LoadStatus.ERROR:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"content unavailable: {result.resource} ({result.language})",
        )
    return result
