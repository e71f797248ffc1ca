"""읽기 API 응답 모델."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from laxy_pipeline.schemas.guide import StepAssets, Subtitle


class GuideResponse(BaseModel):
    """특정 언어로 에셋을 해석한 오디오 가이드."""

    poi: Any = None
    tour_id: str | None = None
    title: str
    description: str | None = None
    language: str = Field(..., description="표시 언어 코드")
    audio_language: str = Field(..., description="오디오 선택기 코드 (eng, jpn, kor, cmn)")
    asset_base_url: str
    steps: list[StepAssets] = Field(default_factory=list)


class AudioLanguageOption(BaseModel):
    code: str
    label: str | None = None


class GuideLanguagesResponse(BaseModel):
    languages: list[str] = Field(default_factory=list, description="투어에 오디오가 있는 표시 언어")
    audio_languages: list[AudioLanguageOption] = Field(default_factory=list)


class PoiResponse(BaseModel):
    language: str
    poi: dict[str, Any]
    has_audio_guide: bool = False


class SearchResponse(BaseModel):
    query: str
    language: str
    results: list[dict[str, Any]] = Field(default_factory=list)
    highlighted: list[dict[str, Any]] = Field(default_factory=list)


class SubtitleTrackResponse(BaseModel):
    """스텝 하나의 파싱된 자막."""

    step_id: int | str | None = None
    language: str
    subtitle_url: str
    subtitles: list[Subtitle] = Field(default_factory=list)
    active: Subtitle | None = Field(default=None, description="`at` 시각에 표시 중인 자막")


class PreloadResponse(BaseModel):
    tour_id: str | None = None
    language: str
    total: int
    loaded: int
    failed: int
    failed_urls: list[str] = Field(default_factory=list)
