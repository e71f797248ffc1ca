"""스위트/POI 조회 API."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from laxy_pipeline.api.dependencies import get_store, require_loaded, resolve_language
from laxy_pipeline.core.languages import SUPPORTED_LANGUAGES
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.schemas.api import PoiResponse, SearchResponse
from laxy_pipeline.schemas.store import FeaturedPois, SuiteDetails, SuiteSummary
from laxy_pipeline.services.mock_store import POI_RECOMMENDATIONS_RESOURCE, MockDataStore
from laxy_pipeline.services.poi_lookup import (
    featured_pois,
    filter_highlighted,
    find_item_by_slug,
    search_across_languages,
)
from laxy_pipeline.services.tour_resolver import has_audio_guide_support

router = APIRouter(prefix="/api/v1", tags=["pois"])
logger = get_logger(__name__)


@router.get("/pois/{slug}", response_model=PoiResponse)
def get_poi(
    slug: str,
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
) -> PoiResponse:
    poi_guides = require_loaded(store.poi_guides(language))
    item = find_item_by_slug(poi_guides.items, slug)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"POI not found: {slug}")
    return PoiResponse(language=language, poi=item["poi"], has_audio_guide=has_audio_guide_support(item))


@router.get("/suites", response_model=list[SuiteSummary])
def list_suites(store: MockDataStore = Depends(get_store)) -> list[SuiteSummary]:
    return store.suites()


@router.get("/suites/{suite_id}", response_model=SuiteDetails)
def get_suite(
    suite_id: str,
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
) -> SuiteDetails:
    suite = store.suite(suite_id, language)
    if suite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Suite not found: {suite_id}")
    return suite


@router.get("/suites/{suite_id}/pois", response_model=FeaturedPois)
def get_suite_pois(
    suite_id: str,
    category: str = Query(default="restaurant", description="POI 유형 (restaurant, attraction)"),
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
) -> FeaturedPois:
    """스위트 숙소가 고른 POI를 카테고리별 추천 가중치 순으로 반환합니다."""
    suite = store.suite(suite_id, language)
    if suite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Suite not found: {suite_id}")

    recommendations = store.poi_recommendations(language)
    return featured_pois(suite.details, recommendations.document, category)


@router.get("/search", response_model=SearchResponse)
def search_pois(
    q: str = Query(default="", description="검색어 (두 글자 이상)"),
    language: str = Depends(resolve_language),
    store: MockDataStore = Depends(get_store),
) -> SearchResponse:
    """모든 언어의 POI 추천에서 검색하고 결과는 표시 언어로 반환합니다."""
    documents = {}
    for code in SUPPORTED_LANGUAGES:
        result = store.load(POI_RECOMMENDATIONS_RESOURCE, code)
        if result.document is not None:
            documents[code] = result.document

    results = search_across_languages(q, documents, language)
    highlighted = filter_highlighted(q, documents, language)
    logger.info("Search completed: query=%s language=%s results=%d", q, language, len(results))
    return SearchResponse(query=q, language=language, results=results, highlighted=highlighted)
