"""레거시 에셋 저장소(S3)에서 투어 문서를 불러옵니다."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import requests

from laxy_pipeline.core.config import Settings, get_settings
from laxy_pipeline.core.errors import GuideUnavailableError, InvalidLegacyDocumentError, LegacyTourLoadError
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.timeout_policy import get_timeout_policy, to_requests_timeout
from laxy_pipeline.schemas.guide import AudioGuide, Subtitle
from laxy_pipeline.services.legacy_adapter import adapt_legacy_tour, validate_legacy_tour
from laxy_pipeline.services.srt_parser import format_srt_time, is_valid_srt, parse_srt
from laxy_pipeline.services.tour_resolver import build_asset_base_url, resolve_tour_config

logger = get_logger(__name__)


class LegacyTourLoader:
    """`index.json` + `content.json`을 합쳐 레거시 투어 문서를 만들고 가이드로 변환합니다."""

    def __init__(self, environment: str = "dev", timeout_seconds: int = 15) -> None:
        self._environment = environment
        self._timeout = to_requests_timeout(timeout_seconds)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LegacyTourLoader:
        resolved = settings or get_settings()
        policy = get_timeout_policy(resolved)
        return cls(environment=resolved.LEGACY_ASSET_ENV, timeout_seconds=policy.legacy_asset_timeout_seconds)

    @property
    def environment(self) -> str:
        return self._environment

    async def _get(self, url: str, tour_id: str) -> requests.Response:
        def _send() -> requests.Response:
            return requests.get(url, timeout=self._timeout)

        try:
            response = await asyncio.to_thread(_send)
        except requests.RequestException as exc:
            raise LegacyTourLoadError(tour_id, f"request failed for {url}: {exc}") from exc

        if response.status_code != 200:
            raise LegacyTourLoadError(tour_id, f"HTTP {response.status_code} for {url}")
        return response

    async def _get_json(self, url: str, tour_id: str) -> Any:
        response = await self._get(url, tour_id)
        try:
            return response.json()
        except ValueError as exc:
            raise LegacyTourLoadError(tour_id, f"invalid JSON at {url}: {exc}") from exc

    async def load(self, tour_id: str) -> dict[str, Any]:
        """투어 문서를 불러와 검증합니다.

        Raises:
            LegacyTourLoadError: 요청 실패, 200 이외 응답, JSON 파싱 실패.
            InvalidLegacyDocumentError: 합친 문서의 구조가 유효하지 않은 경우.
        """
        base_url = build_asset_base_url(tour_id, self._environment)
        index_data, content_data = await asyncio.gather(
            self._get_json(f"{base_url}index.json", tour_id),
            self._get_json(f"{base_url}content.json", tour_id),
        )

        if not isinstance(index_data, Mapping) or not isinstance(content_data, Mapping):
            raise InvalidLegacyDocumentError(f"{tour_id}: index.json and content.json must be objects")

        combined = {**index_data, "poiList": content_data.get("poiList")}
        if not validate_legacy_tour(combined):
            raise InvalidLegacyDocumentError(f"{tour_id}: invalid legacy tour data structure")

        logger.info("Loaded legacy tour: tour_id=%s steps=%d", tour_id, len(combined["poiList"]))
        return combined

    async def load_guide(self, poi_item: Mapping[str, Any], language: str = "en") -> AudioGuide:
        """POI 가이드 항목의 오디오 가이드를 불러옵니다.

        Raises:
            GuideUnavailableError: 항목에 레거시 투어 코드가 없거나 해석되지 않는 경우.
        """
        tour_config = resolve_tour_config(poi_item, self._environment)
        if tour_config is None:
            raise GuideUnavailableError("POI has no legacy tour")

        document = await self.load(tour_config.tour_id)
        adapted = adapt_legacy_tour(document, poi_item)
        return AudioGuide(
            poi=adapted.poi,
            guide=adapted.guide,
            asset_base_url=tour_config.asset_base_url,
            current_language=language,
        )

    async def load_subtitles(self, subtitle_url: str, tour_id: str) -> list[Subtitle]:
        """스텝 자막(SRT)을 내려받아 파싱합니다.

        Raises:
            LegacyTourLoadError: 요청 실패, 200 이외 응답, SRT 형식이 아닌 응답.
        """
        response = await self._get(subtitle_url, tour_id)
        # S3는 SRT에 charset을 붙이지 않으므로 UTF-8로 직접 디코딩한다.
        content = response.content.decode("utf-8", errors="replace")
        if not is_valid_srt(content):
            raise LegacyTourLoadError(tour_id, f"invalid SRT at {subtitle_url}")

        subtitles = parse_srt(content)
        logger.info(
            "Loaded subtitles: tour_id=%s url=%s blocks=%d ends_at=%s",
            tour_id,
            subtitle_url,
            len(subtitles),
            format_srt_time(subtitles[-1].end_time) if subtitles else "-",
        )
        return subtitles

    async def exists(self, poi_item: Mapping[str, Any]) -> bool:
        """`index.json`에 HEAD 요청을 보내 투어 존재 여부를 확인합니다."""
        tour_config = resolve_tour_config(poi_item, self._environment)
        if tour_config is None:
            return False

        def _send() -> requests.Response:
            return requests.head(f"{tour_config.asset_base_url}index.json", timeout=self._timeout)

        try:
            response = await asyncio.to_thread(_send)
        except requests.RequestException as exc:
            logger.warning("Legacy tour probe failed: tour_id=%s error=%s", tour_config.tour_id, exc)
            return False
        return response.status_code == 200
