"""가져온 JSON 컬렉션에 대한 메모리 내 조회/필터링.

조회 실패는 예외 대신 None 또는 빈 목록으로 표현합니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from laxy_pipeline.schemas.store import FeaturedPois

_CATEGORY_WEIGHT_FIELDS: dict[str, str] = {
    "restaurant": "weightInNearbyRestaurants",
    "attraction": "weightInNearbyAttractions",
}
_CATEGORY_HEADINGS: dict[str, tuple[str, str]] = {
    "restaurant": ("Nearby Restaurants", "Discover local dining options"),
    "attraction": ("Nearby Attractions", "Explore local attractions"),
}
_POI_VIEW_FIELDS = (
    "id",
    "documentId",
    "slug",
    "label",
    "address",
    "highlight",
    "externalURL",
    "dial",
    "laxyURL",
    "type",
    "nativeLanguageCode",
    "coverPhoto",
)
MIN_SEARCH_QUERY_LENGTH = 2
_NOT_HIGHLIGHTED = -1


def _poi_slug(item: Any) -> str | None:
    if not isinstance(item, Mapping):
        return None
    poi = item.get("poi")
    if not isinstance(poi, Mapping):
        return None
    slug = poi.get("slug")
    return slug if isinstance(slug, str) and slug else None


def find_item_by_slug(collection: Any, slug: str | None) -> dict[str, Any] | None:
    """`item.poi.slug`가 대소문자 무시 일치하는 첫 항목 전체를 반환합니다."""
    if not isinstance(collection, list) or not slug:
        return None

    normalized = slug.lower()
    for item in collection:
        item_slug = _poi_slug(item)
        if item_slug is not None and item_slug.lower() == normalized:
            return item
    return None


def find_by_slug(collection: Any, slug: str | None) -> dict[str, Any] | None:
    """슬러그로 POI를 찾습니다.

    Args:
        collection: POI 가이드 항목 목록 (`data` 배열).
        slug: 찾을 슬러그. 대소문자를 구분하지 않습니다.

    Returns:
        첫 일치 항목의 `poi` 객체. 목록이 아니거나 일치 항목이 없으면 None.
    """
    item = find_item_by_slug(collection, slug)
    return item["poi"] if item is not None else None


def filter_by_category(collection: Any, category: str, field: str = "type") -> list[dict[str, Any]]:
    """`field` 값이 `category`와 정확히 일치하는 항목만 남깁니다."""
    if not isinstance(collection, list):
        return []
    return [item for item in collection if isinstance(item, Mapping) and item.get(field) == category]


def _to_poi_view(poi: Mapping[str, Any]) -> dict[str, Any]:
    view = {key: poi.get(key) for key in _POI_VIEW_FIELDS}
    view["tag_labels"] = poi.get("tag_labels") or []
    return view


def featured_pois(
    suite_document: Mapping[str, Any] | None,
    recommendations: Mapping[str, Any] | None,
    category: str,
) -> FeaturedPois:
    """스위트 숙소의 추천 POI를 카테고리별로 정렬해 반환합니다.

    숙소가 고른 POI(`ownedBy.pickedPOIs`)를 추천 가중치 오름차순으로 정렬합니다.
    고른 POI가 없으면 가중치가 양수인 추천 목록으로 대체합니다.
    """
    title, subtitle = _CATEGORY_HEADINGS.get(category, _CATEGORY_HEADINGS["attraction"])
    weight_field = _CATEGORY_WEIGHT_FIELDS.get(category, _CATEGORY_WEIGHT_FIELDS["attraction"])
    result = FeaturedPois(category=category, title=title, subtitle=subtitle)

    suites = (suite_document or {}).get("data")
    if not isinstance(suites, list) or not suites:
        return result

    owned_by = suites[0].get("ownedBy") if isinstance(suites[0], Mapping) else None
    picked = (owned_by or {}).get("pickedPOIs") or []
    pois = [_to_poi_view(poi) for poi in filter_by_category(picked, category)]

    recommended_items = (recommendations or {}).get("data")
    if not isinstance(recommended_items, list):
        result.pois = pois
        return result

    if pois:
        weights = {
            _poi_slug(item): item.get(weight_field) or 0 for item in recommended_items if _poi_slug(item) is not None
        }
        pois.sort(key=lambda poi: weights.get(poi["slug"]) or 0)
    else:
        weighted = [
            item
            for item in recommended_items
            if isinstance(item, Mapping)
            and isinstance(item.get("poi"), Mapping)
            and item["poi"].get("type") == category
            and (item.get(weight_field) or 0) > 0
        ]
        weighted.sort(key=lambda item: item[weight_field])
        pois = [_to_poi_view(item["poi"]) for item in weighted]

    result.pois = pois
    return result


def _build_cross_language_index(
    documents_by_language: Mapping[str, Mapping[str, Any] | None],
) -> dict[str, dict[str, dict[str, Any]]]:
    index: dict[str, dict[str, dict[str, Any]]] = {}
    for language, document in documents_by_language.items():
        items = (document or {}).get("data")
        if not isinstance(items, list):
            continue
        for item in items:
            slug = _poi_slug(item)
            if slug is None:
                continue
            index.setdefault(slug, {})[language] = item
    return index


def _matches(item: Mapping[str, Any], query: str) -> bool:
    poi = item["poi"]
    label = str(poi.get("label") or "").lower()
    address = str(poi.get("address") or "").lower()
    return query in label or query in address


def search_across_languages(
    query: str | None,
    documents_by_language: Mapping[str, Mapping[str, Any] | None],
    display_language: str,
    max_results: int = 5,
) -> list[dict[str, Any]]:
    """모든 언어의 이름/주소에서 검색하고, 결과는 표시 언어 항목으로 반환합니다.

    예를 들어 영어 화면에서 일본어 이름으로 검색해도 영어 항목이 나옵니다.
    표시 언어 항목이 없으면 `en`, 그것도 없으면 처음 발견된 언어 항목을 씁니다.
    두 글자 미만의 검색어는 빈 목록을 반환합니다.
    """
    normalized = (query or "").strip().lower()
    if len(normalized) < MIN_SEARCH_QUERY_LENGTH:
        return []

    results: list[dict[str, Any]] = []
    for variants in _build_cross_language_index(documents_by_language).values():
        if not any(_matches(item, normalized) for item in variants.values()):
            continue
        display_item = variants.get(display_language) or variants.get("en") or next(iter(variants.values()))
        results.append(display_item)
        if len(results) >= max_results:
            break
    return results


def filter_highlighted(
    query: str | None,
    documents_by_language: Mapping[str, Mapping[str, Any] | None],
    display_language: str,
) -> list[dict[str, Any]]:
    """하이라이트 POI를 가중치 순으로 반환하고, 검색어가 있으면 다국어 검색 결과로 거릅니다."""
    document = documents_by_language.get(display_language)
    items = (document or {}).get("data")
    if not isinstance(items, list):
        return []

    highlighted = [
        item
        for item in items
        if isinstance(item, Mapping) and item.get("weightInHighlight") not in (None, _NOT_HIGHLIGHTED)
    ]
    highlighted.sort(key=lambda item: item.get("weightInHighlight") or 0)

    if not (query or "").strip():
        return highlighted

    matched_slugs = {
        _poi_slug(item) for item in search_across_languages(query, documents_by_language, display_language, 50)
    }
    return [item for item in highlighted if _poi_slug(item) in matched_slugs]
