"""CMS 콘텐츠를 목 저장소로 수집하는 배치 흐름.

가이드 앱과 허브 앱이 필요로 하는 리소스가 달라 흐름을 나눕니다.
"""

from __future__ import annotations

import os
import threading
from datetime import datetime, timezone
from pathlib import Path

import requests

from laxy_pipeline.core.config import Settings
from laxy_pipeline.core.errors import CmsRequestError, SuiteDiscoveryError
from laxy_pipeline.core.json_files import write_json_file
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.schemas.fetch import FetchSummary
from laxy_pipeline.services.content_fetcher import ContentFetcher
from laxy_pipeline.services.endpoint_catalog import (
    build_guide_config_endpoint,
    build_hub_config_endpoint,
    build_poi_guides_endpoint,
    build_poi_recommendations_endpoint,
    build_suite_discovery_query,
    build_suite_endpoint,
)
from laxy_pipeline.services.mock_store import write_manifest

logger = get_logger(__name__)


def discover_suites(fetcher: ContentFetcher, client_id: str) -> list[str]:
    """클라이언트가 소유한 스위트 이름 목록을 조회합니다.

    Raises:
        SuiteDiscoveryError: 조회에 실패했거나 스위트가 하나도 없는 경우.
    """
    logger.info("Discovering suites: client_id=%s", client_id)
    try:
        document = fetcher.fetch_document("/api/suites", build_suite_discovery_query(client_id))
    except (CmsRequestError, requests.RequestException) as exc:
        raise SuiteDiscoveryError(f"Failed to fetch suites for client {client_id}: {exc}") from exc

    records = document.get("data") if isinstance(document, dict) else None
    suite_ids = [record["name"] for record in records or [] if isinstance(record, dict) and record.get("name")]
    if not suite_ids:
        raise SuiteDiscoveryError(f"No suites found for client: {client_id}")

    logger.info("Found %d suite(s): %s", len(suite_ids), ", ".join(suite_ids))
    return suite_ids


def write_discovered_config(
    path: str | os.PathLike[str],
    client_id: str,
    suite_ids: list[str] | None = None,
    current_suite: str | None = None,
) -> Path:
    """발견한 클라이언트/스위트 정보를 기록합니다.

    `suite_ids`가 없으면 `clientId`와 `discoveredAt`만 기록합니다 (가이드 앱).
    """
    config: dict[str, object] = {"clientId": client_id}
    if suite_ids is not None:
        config["availableSuites"] = list(suite_ids)
        config["currentSuite"] = current_suite or (suite_ids[0] if suite_ids else None)
    config["discoveredAt"] = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    target = write_json_file(path, config, indent=2)
    logger.info("Discovered configuration written: path=%s current_suite=%s", target, current_suite)
    return target


def _log_summary(target: str, summary: FetchSummary) -> None:
    logger.info(
        "%s ingest completed: successful=%d skipped=%d failed=%d total=%d",
        target,
        summary.successful,
        summary.skipped,
        summary.failed,
        summary.total,
    )
    for failure in summary.failures:
        logger.error("Failed %s (%s): %s", failure.resource, failure.language, failure.error)


def run_guide_ingest(
    fetcher: ContentFetcher,
    settings: Settings,
    cancel_event: threading.Event | None = None,
) -> FetchSummary:
    """가이드 앱 설정과 POI 가이드를 모든 언어로 수집합니다."""
    languages = settings.content_languages
    logger.info("Starting guide ingest: client_id=%s languages=%s", settings.CLIENT_ID, ", ".join(languages))
    write_discovered_config(settings.DISCOVERED_CONFIG_PATH, settings.CLIENT_ID)

    summary = FetchSummary()
    endpoints = (
        build_guide_config_endpoint(debug_params=settings.DEBUG_PARAMS),
        build_poi_guides_endpoint(settings.CMS_PAGE_SIZE, debug_params=settings.DEBUG_PARAMS),
    )
    for endpoint in endpoints:
        fetcher.fetch_languages(endpoint, languages, summary, cancel_event)

    write_manifest(fetcher.mock_root)
    _log_summary("Guide", summary)
    return summary


def run_hub_ingest(
    fetcher: ContentFetcher,
    settings: Settings,
    cancel_event: threading.Event | None = None,
) -> FetchSummary:
    """스위트를 발견한 뒤 허브 앱 설정, 스위트별 문서, POI 추천을 수집합니다.

    Raises:
        SuiteDiscoveryError: 스위트 발견에 실패한 경우. 이때는 아무것도 수집하지 않습니다.
    """
    client_id = settings.CLIENT_ID
    languages = settings.content_languages
    debug_params = settings.DEBUG_PARAMS

    suite_ids = discover_suites(fetcher, client_id)
    write_discovered_config(settings.DISCOVERED_CONFIG_PATH, client_id, suite_ids)

    summary = FetchSummary()
    fetcher.fetch_languages(build_hub_config_endpoint(debug_params=debug_params), languages, summary, cancel_event)

    for suite_id in suite_ids:
        if cancel_event is not None and cancel_event.is_set():
            break
        logger.info("Processing suite: %s", suite_id)
        write_discovered_config(settings.DISCOVERED_CONFIG_PATH, client_id, suite_ids, suite_id)
        endpoint = build_suite_endpoint(client_id, suite_id, debug_params=debug_params)
        fetcher.fetch_languages(endpoint, languages, summary, cancel_event)

    recommendations = build_poi_recommendations_endpoint(
        client_id, settings.CMS_PAGE_SIZE, debug_params=debug_params
    )
    fetcher.fetch_languages(recommendations, languages, summary, cancel_event)

    write_manifest(fetcher.mock_root)
    _log_summary("Hub", summary)
    return summary
