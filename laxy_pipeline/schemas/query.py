"""CMS 조회 파라미터 스키마."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class FieldSpec(BaseModel):
    """Strapi `fields` / `populate` 요청 형태.

    Fields:
        `fields`: 가져올 필드 이름 (순서 유지)
        `populate`: 관계 이름별 하위 FieldSpec
    """

    model_config = ConfigDict(frozen=True)

    fields: list[str] = Field(default_factory=list, description="가져올 필드 이름 목록")
    populate: dict[str, FieldSpec] | None = Field(default=None, description="관계별 하위 요청 형태")


FieldSpec.model_rebuild()


@dataclass(frozen=True, slots=True)
class EndpointDescriptor:
    """리소스 하나에 대한 CMS 엔드포인트 정의."""

    key: str
    path: str
    query_params: str
    output_dir: str
