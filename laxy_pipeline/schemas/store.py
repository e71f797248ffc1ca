"""JSON 목 저장소 조회 모델."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class LoadStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


class LoadResult(BaseModel):
    """목 파일 로드 결과.

    `EMPTY`는 파일은 정상이나 `data`가 비어 있는 경우, `ERROR`는 파일이 없거나 읽지 못한 경우입니다.
    """

    status: LoadStatus
    resource: str
    language: str
    document: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    @property
    def items(self) -> list[Any]:
        data = (self.document or {}).get("data")
        return data if isinstance(data, list) else []


class ManifestEntry(BaseModel):
    client_id: str
    suite_id: str
    language: str
    path: str = Field(..., description="목 저장소 루트 기준 상대 경로")


class MockStoreManifest(BaseModel):
    """스위트 목 파일 색인. `(client_id, suite_id, language) -> path`."""

    generated_at: str
    entries: list[ManifestEntry] = Field(default_factory=list)

    def path_for(self, client_id: str, suite_id: str, language: str) -> str | None:
        for entry in self.entries:
            if (entry.client_id, entry.suite_id, entry.language) == (client_id, suite_id, language):
                return entry.path
        return None

    def suite_ids(self, client_id: str) -> list[str]:
        seen: dict[str, None] = {}
        for entry in self.entries:
            if entry.client_id == client_id:
                seen.setdefault(entry.suite_id, None)
        return list(seen)

    def languages(self, client_id: str, suite_id: str) -> list[str]:
        return [
            entry.language for entry in self.entries if entry.client_id == client_id and entry.suite_id == suite_id
        ]


class SuiteSummary(BaseModel):
    id: str
    name: str
    description: str
    image: str
    languages: list[str] = Field(default_factory=list)


class SuiteDetails(SuiteSummary):
    language: str
    details: dict[str, Any] | None = None


class FeaturedPois(BaseModel):
    """카테고리별 추천 POI 뷰 모델 (예: 주변 레스토랑)."""

    category: str
    title: str
    subtitle: str
    pois: list[dict[str, Any]] = Field(default_factory=list)
