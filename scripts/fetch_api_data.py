"""CMS 콘텐츠를 JSON 목 저장소로 수집합니다.

사용법:
  python scripts/fetch_api_data.py --target guide
  python scripts/fetch_api_data.py --target hub --client-id beppu-airbnb

하나라도 실패한 요청이 있으면 종료 코드 1을 반환합니다. 번역이 없는 404는 실패가 아닙니다.
"""

from __future__ import annotations

import argparse
import os
import sys

# 경로 설정 - 스크립트 위치 기준으로 프로젝트 루트 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from laxy_pipeline.core.config import Settings, get_settings
from laxy_pipeline.core.errors import SuiteDiscoveryError
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.services.content_fetcher import ContentFetcher
from laxy_pipeline.services.ingest_service import run_guide_ingest, run_hub_ingest

logger = get_logger("laxy_pipeline.scripts.fetch_api_data")

TARGETS = ("guide", "hub")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch CMS content into the JSON mock store.")
    parser.add_argument("--target", choices=TARGETS, required=True, help="Which application to fetch for.")
    parser.add_argument("--client-id", type=str, default="", help="Override CLIENT_ID.")
    parser.add_argument("--mock-dir", type=str, default="", help="Override MOCK_DATA_DIR.")
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    overrides: dict[str, str] = {}
    if args.client_id:
        overrides["CLIENT_ID"] = args.client_id
    if args.mock_dir:
        overrides["MOCK_DATA_DIR"] = args.mock_dir
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = _resolve_settings(args)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    logger.info(
        "Starting API data fetch: target=%s base_url=%s mock_root=%s languages=%s",
        args.target,
        settings.CMS_API_BASE_URL,
        settings.MOCK_DATA_DIR,
        ", ".join(settings.content_languages),
    )

    try:
        fetcher = ContentFetcher.from_settings(settings)
    except ValueError as exc:
        logger.error("Fetcher configuration error: %s", exc)
        return 1

    run_ingest = run_guide_ingest if args.target == "guide" else run_hub_ingest
    with fetcher:
        try:
            summary = run_ingest(fetcher, settings)
        except SuiteDiscoveryError as exc:
            logger.error("Suite discovery failed: %s", exc)
            return 1

    if summary.has_failures:
        logger.warning("Some requests failed: failed=%d", summary.failed)
        return 1

    logger.info("All available data fetched successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
