"""레거시 투어 문서와 변환된 가이드 스키마."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LegacyImage(BaseModel):
    """레거시 스텝 이미지 항목. 타임스탬프 구간 동안 표시됩니다."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    url: str = Field(..., description="에셋 기준 상대 경로")
    start_timestamp: float | str | None = Field(default=None, alias="startTimestamp")
    end_timestamp: float | str | None = Field(default=None, alias="endTimestamp")


class LegacyStop(BaseModel):
    """레거시 `poiList`의 스텝 하나."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    title: str | None = None
    description: str | None = None
    duration: Any = None
    order: int | None = None
    audio: dict[str, str | None] = Field(default_factory=dict, description="레거시 언어 코드별 오디오 경로")
    subtitle: dict[str, str | None] = Field(default_factory=dict, description="레거시 언어 코드별 자막 경로")
    image: dict[str, list[LegacyImage]] = Field(default_factory=dict, description="레거시 언어 코드별 이미지 목록")

    @field_validator("audio", "subtitle", "image", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return {} if value is None else value


class AdaptedStep(BaseModel):
    """현재 가이드 스키마의 스텝. 언어별 에셋 맵은 아직 해석하지 않은 상태입니다."""

    id: int | str | None = None
    title: str | None = None
    description: str | None = None
    audio: dict[str, str | None] = Field(default_factory=dict)
    subtitle: dict[str, str | None] = Field(default_factory=dict)
    images: dict[str, list[LegacyImage]] = Field(default_factory=dict)
    duration: Any = None
    order: int = Field(default=0, description="원본 순서 값 (목록 위치와 다를 수 있음)")


class GuideBody(BaseModel):
    id: str | None = Field(default=None, description="투어 ID")
    title: str
    description: str | None = None
    steps: list[AdaptedStep] = Field(default_factory=list)


class AdaptedGuide(BaseModel):
    """POI 참조와 변환된 가이드."""

    poi: Any = None
    guide: GuideBody


class ImageAsset(BaseModel):
    url: str
    start_timestamp: float | str | None = None
    end_timestamp: float | str | None = None


class StepAssets(BaseModel):
    """특정 언어로 해석된 스텝. 해당 언어의 오디오/자막이 없으면 URL은 None입니다."""

    id: int | str | None = None
    title: str | None = None
    description: str | None = None
    audio_url: str | None = None
    subtitle_url: str | None = None
    images: list[ImageAsset] = Field(default_factory=list)
    duration: Any = None
    order: int = 0


class TourConfig(BaseModel):
    tour_id: str
    asset_base_url: str
    poi: Any = None


class AudioGuide(AdaptedGuide):
    """에셋 기준 URL과 요청 언어가 붙은 가이드."""

    asset_base_url: str
    current_language: str


class PreloadReport(BaseModel):
    total: int = 0
    loaded: int = 0
    failed: int = 0
    failed_urls: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class Subtitle(BaseModel):
    """SRT 자막 블록 하나. 시간 단위는 초입니다."""

    index: int
    start_time: float
    end_time: float
    text: str

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time
