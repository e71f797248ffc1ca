"""디스크 JSON 목 저장소 조회.

수집 스크립트가 한 번 쓰고 애플리케이션은 읽기만 합니다.
스위트 파일 위치는 `manifest.json`으로 색인합니다.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from laxy_pipeline.core.json_files import read_json_file, write_json_file
from laxy_pipeline.core.languages import DEFAULT_LANGUAGE, FALLBACK_AUDIO_LANGUAGES
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.schemas.store import (
    LoadResult,
    LoadStatus,
    ManifestEntry,
    MockStoreManifest,
    SuiteDetails,
    SuiteSummary,
)

logger = get_logger(__name__)

MANIFEST_FILENAME = "manifest.json"
SUITES_DIR = "suites"
POI_GUIDES_RESOURCE = "poi-guides"
POI_RECOMMENDATIONS_RESOURCE = "poi-recommendations"
GUIDE_CONFIG_RESOURCE = "guide-application-config"

_SUITE_NAME_FALLBACK = "Suite {suite_id}"
_SUITE_DESCRIPTION_FALLBACK = "A comfortable suite for your stay"
_SUITE_IMAGE_FALLBACK = "https://source.unsplash.com/random/800x600/?hotel-room"


def build_manifest(mock_root: str | os.PathLike[str]) -> MockStoreManifest:
    """`suites/<client>/<suite>/<language>.json` 파일을 훑어 색인을 만듭니다."""
    root = Path(mock_root)
    entries = [
        ManifestEntry(
            client_id=path.parent.parent.name,
            suite_id=path.parent.name,
            language=path.stem,
            path=path.relative_to(root).as_posix(),
        )
        for path in sorted((root / SUITES_DIR).glob("*/*/*.json"))
    ]
    return MockStoreManifest(generated_at=datetime.now(timezone.utc).isoformat(), entries=entries)


def write_manifest(mock_root: str | os.PathLike[str]) -> Path:
    manifest = build_manifest(mock_root)
    target = write_json_file(Path(mock_root) / MANIFEST_FILENAME, manifest.model_dump(), indent=2)
    logger.info("Mock store manifest written: path=%s entries=%d", target, len(manifest.entries))
    return target


def _load_manifest(root: Path) -> MockStoreManifest:
    manifest_path = root / MANIFEST_FILENAME
    if not manifest_path.exists():
        logger.warning("Manifest not found, scanning mock store: root=%s", root)
        return build_manifest(root)

    try:
        return MockStoreManifest.model_validate(read_json_file(manifest_path))
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Manifest unreadable, scanning mock store: path=%s error=%s", manifest_path, exc)
        return build_manifest(root)


def _first_record(document: Mapping[str, Any] | None) -> Mapping[str, Any]:
    data = (document or {}).get("data")
    if isinstance(data, list) and data and isinstance(data[0], Mapping):
        return data[0]
    return {}


class MockDataStore:
    """한 클라이언트의 목 저장소 읽기 전용 뷰."""

    def __init__(self, mock_root: str | os.PathLike[str], client_id: str, manifest: MockStoreManifest) -> None:
        self._root = Path(mock_root)
        self._client_id = client_id
        self._manifest = manifest

    @classmethod
    def open(cls, mock_root: str | os.PathLike[str], client_id: str) -> MockDataStore:
        root = Path(mock_root)
        manifest = _load_manifest(root)
        logger.info(
            "Mock store opened: root=%s client_id=%s suites=%d",
            root,
            client_id,
            len(manifest.suite_ids(client_id)),
        )
        return cls(root, client_id, manifest)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def manifest(self) -> MockStoreManifest:
        return self._manifest

    def _read(self, relative_path: str, resource: str, language: str) -> LoadResult:
        path = self._root / relative_path
        try:
            document = read_json_file(path)
        except FileNotFoundError:
            return LoadResult(status=LoadStatus.ERROR, resource=resource, language=language, error="NOT_FOUND")
        except (OSError, ValueError) as exc:
            logger.warning("Mock file unreadable: path=%s error=%s", path, exc)
            return LoadResult(status=LoadStatus.ERROR, resource=resource, language=language, error=str(exc))

        if not isinstance(document, dict):
            return LoadResult(
                status=LoadStatus.ERROR,
                resource=resource,
                language=language,
                error="document is not a JSON object",
            )

        status = LoadStatus.OK if document.get("data") else LoadStatus.EMPTY
        return LoadResult(status=status, resource=resource, language=language, document=document)

    def load(self, resource: str, language: str) -> LoadResult:
        """`<resource>/<language>.json`을 읽습니다.

        Returns:
            `OK`(데이터 있음), `EMPTY`(파일은 정상이나 `data`가 비어 있음),
            `ERROR`(파일 없음 또는 읽기 실패) 중 하나의 결과.
        """
        return self._read(f"{resource}/{language}.json", resource, language)

    def load_with_fallback(self, resource: str, language: str) -> LoadResult:
        """요청 언어 파일을 읽지 못하면 `en`으로 대체합니다. 빈 결과는 대체하지 않습니다."""
        result = self.load(resource, language)
        if result.status is LoadStatus.ERROR and language != DEFAULT_LANGUAGE:
            logger.info("Falling back to %s: resource=%s language=%s", DEFAULT_LANGUAGE, resource, language)
            return self.load(resource, DEFAULT_LANGUAGE)
        return result

    def poi_guides(self, language: str) -> LoadResult:
        return self.load_with_fallback(POI_GUIDES_RESOURCE, language)

    def poi_recommendations(self, language: str) -> LoadResult:
        return self.load_with_fallback(POI_RECOMMENDATIONS_RESOURCE, language)

    def _load_suite(self, suite_id: str, language: str) -> LoadResult | None:
        relative_path = self._manifest.path_for(self._client_id, suite_id, language)
        if relative_path is None:
            return None
        return self._read(relative_path, f"{SUITES_DIR}/{suite_id}", language)

    def _summary(self, suite_id: str) -> SuiteSummary:
        languages = self._manifest.languages(self._client_id, suite_id)
        default_language = DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in languages else languages[0]
        result = self._load_suite(suite_id, default_language)
        record = _first_record(result.document if result is not None else None)
        slider = record.get("slider") or []
        first_slide = slider[0] if isinstance(slider, list) and slider and isinstance(slider[0], Mapping) else {}

        return SuiteSummary(
            id=suite_id,
            name=record.get("label") or _SUITE_NAME_FALLBACK.format(suite_id=suite_id),
            description=record.get("headline") or _SUITE_DESCRIPTION_FALLBACK,
            image=first_slide.get("url") or _SUITE_IMAGE_FALLBACK,
            languages=languages,
        )

    def suites(self) -> list[SuiteSummary]:
        return [self._summary(suite_id) for suite_id in self._manifest.suite_ids(self._client_id)]

    def suite(self, suite_id: str, language: str) -> SuiteDetails | None:
        """스위트 상세를 반환합니다. `zh`는 `zh-Hans`로, 없는 언어는 `en`(없으면 첫 언어)으로 대체합니다."""
        languages = self._manifest.languages(self._client_id, suite_id)
        if not languages:
            return None

        requested = "zh-Hans" if language == "zh" else language
        if requested in languages:
            effective = requested
        else:
            effective = DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in languages else languages[0]
        result = self._load_suite(suite_id, effective)
        summary = self._summary(suite_id)
        return SuiteDetails(
            **summary.model_dump(),
            language=effective,
            details=result.document if result is not None else None,
        )

    def audio_languages(self, language: str, available: Iterable[str] | None = None) -> list[dict[str, str]]:
        """가이드 앱 설정의 오디오 언어 목록을 반환합니다.

        설정에 목록이 없으면 기본 목록을 쓰고, `available`이 주어지면 그 코드만 남깁니다.
        """
        config = self.load_with_fallback(GUIDE_CONFIG_RESOURCE, language)
        data = (config.document or {}).get("data") or {}
        universal = data.get("universalConfig") if isinstance(data, Mapping) else None
        configured = (universal or {}).get("audioLanguages") or []
        options = [
            {"code": option.get("value"), "label": option.get("label")}
            for option in configured
            if isinstance(option, Mapping) and option.get("value")
        ]
        if not options:
            options = [dict(option) for option in FALLBACK_AUDIO_LANGUAGES]

        available_codes = set(available or ())
        if not available_codes:
            return options
        return [option for option in options if option["code"] in available_codes]
