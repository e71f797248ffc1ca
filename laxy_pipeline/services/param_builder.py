"""Strapi 쿼리 문자열 생성기.

`fields` / `populate` 선언을 Strapi의 대괄호 표기 쿼리 파라미터로 펼칩니다.
값은 인코딩하지 않고 그대로 이어 붙이며, 순서는 입력 순서를 따릅니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from laxy_pipeline.schemas.query import FieldSpec


def _as_field_spec(spec: FieldSpec | Mapping[str, Any]) -> FieldSpec:
    if isinstance(spec, FieldSpec):
        return spec
    return FieldSpec.model_validate(spec)


def _child_path(path: str, relation: str) -> str:
    return f"{path}[populate][{relation}]" if path else f"populate[{relation}]"


def _field_path(path: str, index: int) -> str:
    return f"{path}[fields][{index}]" if path else f"fields[{index}]"


def _collect(spec: FieldSpec, path: str, params: list[str]) -> None:
    for index, field_name in enumerate(spec.fields):
        params.append(f"{_field_path(path, index)}={field_name}")

    for relation, child in (spec.populate or {}).items():
        _collect(child, _child_path(path, relation), params)


def build_nested_params(config: Mapping[str, FieldSpec | Mapping[str, Any]]) -> str:
    """여러 컴포넌트를 묶는 설정형 엔드포인트용 파라미터를 만듭니다.

    최상위 키는 모두 `populate[<key>]` 아래에 놓입니다.

    Args:
        config: 컴포넌트 이름별 FieldSpec (또는 같은 형태의 dict).

    Returns:
        `&`로 연결된 쿼리 문자열. 필드가 하나도 없으면 빈 문자열.
    """
    params: list[str] = []
    for key, spec in config.items():
        _collect(_as_field_spec(spec), f"populate[{key}]", params)
    return "&".join(params)


def build_direct_params(spec: FieldSpec | Mapping[str, Any]) -> str:
    """단일 리소스 목록 엔드포인트용 파라미터를 만듭니다.

    최상위 FieldSpec의 필드는 `fields[<i>]`, 관계는 `populate[<relation>]`에서 시작합니다.
    """
    params: list[str] = []
    _collect(_as_field_spec(spec), "", params)
    return "&".join(params)


def _collect_filters(filters: Mapping[str, Any], path: str, params: list[str]) -> None:
    for key, value in filters.items():
        key_path = f"{path}[{key}]"
        if isinstance(value, Mapping):
            _collect_filters(value, key_path, params)
        else:
            params.append(f"{key_path}={value}")


def build_filter_params(filters: Mapping[str, Any]) -> str:
    """중첩 필터를 `filters[a][b][$eq]=value` 형태로 펼칩니다."""
    params: list[str] = []
    _collect_filters(filters, "filters", params)
    return "&".join(params)


def build_pagination_params(page: int = 1, page_size: int = 10000) -> str:
    return f"pagination[page]={page}&pagination[pageSize]={page_size}"


def join_params(*parts: str) -> str:
    """비어 있지 않은 쿼리 조각만 `&`로 연결합니다."""
    return "&".join(part for part in parts if part)
