"""파이프라인 공통 예외."""

from __future__ import annotations


class CmsRequestError(RuntimeError):
    """CMS 호출이 200 이외의 응답이나 파싱 실패로 끝났을 때 발생하는 예외."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class SuiteDiscoveryError(RuntimeError):
    """클라이언트 소유 스위트를 찾지 못했을 때 발생하는 예외."""


class InvalidLegacyDocumentError(ValueError):
    """레거시 투어 문서가 `poiList` 구조 검증을 통과하지 못했을 때 발생하는 예외."""


class LegacyTourLoadError(RuntimeError):
    """레거시 에셋 저장소에서 투어 문서를 가져오지 못했을 때 발생하는 예외."""

    def __init__(self, tour_id: str, message: str) -> None:
        super().__init__(f"{tour_id}: {message}")
        self.tour_id = tour_id


class GuideUnavailableError(LookupError):
    """POI에 연결된 레거시 투어가 없을 때 발생하는 예외."""
