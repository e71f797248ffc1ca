"""CMS 수집 결과 모델."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FetchStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FetchResult:
    """(리소스, 언어) 한 쌍의 수집 결과.

    `SKIPPED`는 번역이 없다는 404 응답이며 실패로 집계하지 않습니다.
    """

    status: FetchStatus
    resource: str
    language: str
    document: Any = None
    error: str | None = None
    output_path: str | None = None

    @classmethod
    def success(cls, resource: str, language: str, document: Any, output_path: str | None = None) -> FetchResult:
        return cls(FetchStatus.SUCCESS, resource, language, document=document, output_path=output_path)

    @classmethod
    def skipped(cls, resource: str, language: str) -> FetchResult:
        return cls(FetchStatus.SKIPPED, resource, language, error="NOT_FOUND")

    @classmethod
    def failed(cls, resource: str, language: str, error: str) -> FetchResult:
        return cls(FetchStatus.FAILED, resource, language, error=error)

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS


@dataclass(slots=True)
class FetchSummary:
    """배치 수집 집계."""

    total: int = 0
    successful: int = 0
    skipped: int = 0
    failed: int = 0
    failures: list[FetchResult] = field(default_factory=list)

    def record(self, result: FetchResult) -> None:
        self.total += 1
        if result.status is FetchStatus.SUCCESS:
            self.successful += 1
        elif result.status is FetchStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.failures.append(result)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0
