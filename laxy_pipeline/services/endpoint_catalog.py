"""수집 대상 CMS 엔드포인트 정의를 만듭니다."""

from __future__ import annotations

from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.query_presets import (
    GUIDE_CONFIG_PARAMS,
    HUB_CONFIG_PARAMS,
    POI_GUIDES_PARAMS,
    POI_RECOMMENDATIONS_PARAMS,
    SUITE_DISCOVERY_PARAMS,
    SUITE_PARAMS,
)
from laxy_pipeline.schemas.query import EndpointDescriptor
from laxy_pipeline.services.param_builder import (
    build_direct_params,
    build_filter_params,
    build_nested_params,
    build_pagination_params,
    join_params,
)

logger = get_logger(__name__)


def _log_params(key: str, params: str, debug_params: bool) -> None:
    if debug_params:
        logger.info("Generated %s parameters: %s", key, params)
    else:
        logger.debug("Generated %s parameters: %s", key, params)


def build_guide_config_endpoint(*, debug_params: bool = False) -> EndpointDescriptor:
    params = build_nested_params(GUIDE_CONFIG_PARAMS)
    _log_params("guideApplicationConfig", params, debug_params)
    return EndpointDescriptor(
        key="guideApplicationConfig",
        path="/api/guide-application-config",
        query_params=params,
        output_dir="guide-application-config",
    )


def build_hub_config_endpoint(*, debug_params: bool = False) -> EndpointDescriptor:
    params = build_nested_params(HUB_CONFIG_PARAMS)
    _log_params("hubApplicationConfig", params, debug_params)
    return EndpointDescriptor(
        key="hubApplicationConfig",
        path="/api/hub-application-config",
        query_params=params,
        output_dir="hub-application-config",
    )


def build_poi_guides_endpoint(page_size: int = 10000, *, debug_params: bool = False) -> EndpointDescriptor:
    params = join_params(build_pagination_params(1, page_size), build_direct_params(POI_GUIDES_PARAMS))
    _log_params("poiGuides", params, debug_params)
    return EndpointDescriptor(
        key="poiGuides",
        path="/api/poi-guides",
        query_params=params,
        output_dir="poi-guides",
    )


def build_suite_endpoint(client_id: str, suite_id: str, *, debug_params: bool = False) -> EndpointDescriptor:
    """클라이언트 소유 스위트 하나의 엔드포인트. 결과는 `suites/<client>/<suite>/`에 저장됩니다."""
    filters = build_filter_params({"ownedBy": {"slug": {"$eq": client_id}}, "name": {"$eq": suite_id}})
    params = join_params(filters, build_direct_params(SUITE_PARAMS))
    _log_params("suites", params, debug_params)
    return EndpointDescriptor(
        key="suites",
        path="/api/suites",
        query_params=params,
        output_dir=f"suites/{client_id}/{suite_id}",
    )


def build_poi_recommendations_endpoint(
    client_id: str, page_size: int = 10000, *, debug_params: bool = False
) -> EndpointDescriptor:
    filters = build_filter_params({"recommended_by": {"slug": {"$eq": client_id}}})
    params = join_params(
        filters,
        build_direct_params(POI_RECOMMENDATIONS_PARAMS),
        build_pagination_params(1, page_size),
    )
    _log_params("poiRecommendations", params, debug_params)
    return EndpointDescriptor(
        key="poiRecommendations",
        path="/api/poi-recommendations",
        query_params=params,
        output_dir="poi-recommendations",
    )


def build_suite_discovery_query(client_id: str) -> str:
    return join_params(
        build_filter_params({"ownedBy": {"slug": {"$eq": client_id}}}),
        build_direct_params(SUITE_DISCOVERY_PARAMS),
    )
