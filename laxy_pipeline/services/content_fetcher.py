"""Strapi CMS 콘텐츠 수집기."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import requests

from laxy_pipeline.core.config import Settings, get_settings
from laxy_pipeline.core.errors import CmsRequestError
from laxy_pipeline.core.json_files import write_json_file
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.timeout_policy import get_timeout_policy, to_requests_timeout
from laxy_pipeline.schemas.fetch import FetchResult, FetchSummary
from laxy_pipeline.schemas.query import EndpointDescriptor
from laxy_pipeline.services.param_builder import join_params

logger = get_logger(__name__)

_BODY_PREVIEW_LENGTH = 200


class ContentFetcher:
    """(리소스, 언어) 단위로 CMS 문서를 받아 목 저장소에 기록합니다.

    요청은 하나씩 순서대로 보내고, 요청 사이에 고정 지연을 둡니다.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        mock_root: str | Path,
        *,
        timeout_seconds: int = 30,
        request_delay_seconds: float = 0.3,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not api_token:
            raise ValueError("CMS_API_TOKEN is not configured.")
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._mock_root = Path(mock_root)
        self._timeout = to_requests_timeout(timeout_seconds)
        self._request_delay_seconds = max(0.0, request_delay_seconds)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._sleep = sleep
        self._requests_sent = 0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ContentFetcher:
        """애플리케이션 설정으로 수집기를 생성합니다."""
        resolved = settings or get_settings()
        policy = get_timeout_policy(resolved)
        return cls(
            base_url=resolved.CMS_API_BASE_URL,
            api_token=resolved.CMS_API_TOKEN,
            mock_root=resolved.MOCK_DATA_DIR,
            timeout_seconds=policy.cms_timeout_seconds,
            request_delay_seconds=resolved.FETCH_REQUEST_DELAY_SECONDS,
        )

    @property
    def mock_root(self) -> Path:
        return self._mock_root

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> ContentFetcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def build_url(self, path: str, query: str, language: str | None = None) -> str:
        locale = f"locale={language}" if language else ""
        params = join_params(query, locale)
        return f"{self._base_url}{path}?{params}" if params else f"{self._base_url}{path}"

    def _request_json(self, url: str) -> Any:
        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }
        self._requests_sent += 1
        response = self._session.get(url, headers=headers, timeout=self._timeout)

        if response.status_code == 404:
            raise CmsRequestError("NOT_FOUND", status_code=404)
        if response.status_code != 200:
            body = (response.text or "")[:_BODY_PREVIEW_LENGTH]
            raise CmsRequestError(f"HTTP {response.status_code}: {body}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("CMS response parse failed: url=%s body=%s", url, (response.text or "")[:500])
            raise CmsRequestError(f"Failed to parse JSON: {exc}", status_code=response.status_code) from exc

    def fetch_document(self, path: str, query: str = "") -> Any:
        """인증된 GET 요청으로 JSON 문서를 반환합니다.

        Raises:
            CmsRequestError: 200 이외의 응답 또는 JSON 파싱 실패.
            requests.RequestException: 전송 계층 오류.
        """
        return self._request_json(self.build_url(path, query))

    def fetch(self, endpoint: EndpointDescriptor, language: str) -> FetchResult:
        """엔드포인트 하나를 특정 언어로 수집하고 성공 시 `<output_dir>/<language>.json`에 저장합니다."""
        url = self.build_url(endpoint.path, endpoint.query_params, language)
        logger.info("Fetching %s (%s)", endpoint.key, language)

        try:
            document = self._request_json(url)
        except CmsRequestError as exc:
            if exc.not_found:
                logger.warning("Skipped %s (%s): translation not available", endpoint.key, language)
                return FetchResult.skipped(endpoint.key, language)
            logger.error("Failed %s (%s): %s", endpoint.key, language, exc)
            return FetchResult.failed(endpoint.key, language, str(exc))
        except requests.RequestException as exc:
            logger.error("Request failed %s (%s): %s", endpoint.key, language, exc)
            return FetchResult.failed(endpoint.key, language, f"Request failed: {exc}")

        output_path = self._mock_root / endpoint.output_dir / f"{language}.json"
        try:
            write_json_file(output_path, document)
        except OSError as exc:
            logger.error("Write failed %s (%s): %s", endpoint.key, language, exc)
            return FetchResult.failed(endpoint.key, language, f"Write failed: {exc}")

        logger.info("Updated %s", output_path.relative_to(self._mock_root))
        return FetchResult.success(endpoint.key, language, document, output_path=str(output_path))

    def fetch_languages(
        self,
        endpoint: EndpointDescriptor,
        languages: Iterable[str],
        summary: FetchSummary | None = None,
        cancel_event: threading.Event | None = None,
    ) -> FetchSummary:
        """여러 언어를 순차 수집하고 결과를 집계합니다.

        Args:
            endpoint: 수집할 엔드포인트.
            languages: 언어 코드 목록 (순서대로 요청).
            summary: 누적할 집계 객체. 없으면 새로 만듭니다.
            cancel_event: 설정되면 다음 요청 전에 중단합니다.
        """
        summary = summary if summary is not None else FetchSummary()
        logger.info("Processing %s", endpoint.key)

        for language in languages:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Fetch cancelled before %s (%s)", endpoint.key, language)
                break
            if self._requests_sent and self._request_delay_seconds:
                self._sleep(self._request_delay_seconds)
            summary.record(self.fetch(endpoint, language))

        return summary
