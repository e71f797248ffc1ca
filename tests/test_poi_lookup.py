"""POI 조회/필터 테스트."""

from laxy_pipeline.services.poi_lookup import (
    featured_pois,
    filter_by_category,
    filter_highlighted,
    find_by_slug,
    find_item_by_slug,
    search_across_languages,
)

POI_GUIDES = [
    {"legacyTourCode": None, "poi": {"slug": "beppu-tower", "label": "Beppu Tower"}},
    {"legacyTourCode": "JPN-OITA-TUR-001-0001", "poi": {"slug": "suginoi-hotel", "label": "Suginoi Hotel"}},
    {"legacyTourCode": "JPN-OITA-TUR-002-0001", "poi": None},
]


def _recommendation(slug: str, label: str, poi_type: str, **weights) -> dict:
    return {
        "poi": {"slug": slug, "label": label, "address": f"{label} street", "type": poi_type},
        "weightInNearbyRestaurants": weights.get("restaurant", 0),
        "weightInNearbyAttractions": weights.get("attraction", 0),
        "weightInHighlight": weights.get("highlight", -1),
    }


def test_find_by_slug_is_case_insensitive() -> None:
    assert find_by_slug(POI_GUIDES, "Suginoi-Hotel") == {"slug": "suginoi-hotel", "label": "Suginoi Hotel"}
    assert find_item_by_slug(POI_GUIDES, "SUGINOI-HOTEL")["legacyTourCode"] == "JPN-OITA-TUR-001-0001"


def test_find_by_slug_returns_none_for_misses_and_malformed_input() -> None:
    assert find_by_slug(POI_GUIDES, "unknown") is None
    assert find_by_slug({"data": POI_GUIDES}, "suginoi-hotel") is None
    assert find_by_slug(None, "suginoi-hotel") is None
    assert find_by_slug(POI_GUIDES, "") is None


def test_filter_by_category_is_exact() -> None:
    pois = [{"type": "restaurant"}, {"type": "Restaurant"}, {"type": "attraction"}, "junk"]

    assert filter_by_category(pois, "restaurant") == [{"type": "restaurant"}]
    assert filter_by_category(pois, "attraction", field="type") == [{"type": "attraction"}]
    assert filter_by_category(None, "restaurant") == []


def test_featured_pois_sorts_picked_pois_by_weight() -> None:
    suite = {
        "data": [
            {
                "ownedBy": {
                    "pickedPOIs": [
                        {"slug": "ramen", "label": "Ramen", "type": "restaurant"},
                        {"slug": "sushi", "label": "Sushi", "type": "restaurant", "tag_labels": [{"name": "fish"}]},
                        {"slug": "park", "label": "Park", "type": "attraction"},
                    ]
                }
            }
        ]
    }
    recommendations = {
        "data": [
            _recommendation("ramen", "Ramen", "restaurant", restaurant=5),
            _recommendation("sushi", "Sushi", "restaurant", restaurant=1),
        ]
    }

    featured = featured_pois(suite, recommendations, "restaurant")

    assert featured.title == "Nearby Restaurants"
    assert [poi["slug"] for poi in featured.pois] == ["sushi", "ramen"]
    assert featured.pois[0]["tag_labels"] == [{"name": "fish"}]
    assert featured.pois[1]["tag_labels"] == []


def test_featured_pois_falls_back_to_weighted_recommendations() -> None:
    suite = {"data": [{"ownedBy": {"pickedPOIs": []}}]}
    recommendations = {
        "data": [
            _recommendation("onsen", "Onsen", "attraction", attraction=3),
            _recommendation("tower", "Tower", "attraction", attraction=1),
            _recommendation("hidden", "Hidden", "attraction", attraction=0),
            _recommendation("cafe", "Cafe", "restaurant", restaurant=2),
        ]
    }

    featured = featured_pois(suite, recommendations, "attraction")

    assert featured.subtitle == "Explore local attractions"
    assert [poi["slug"] for poi in featured.pois] == ["tower", "onsen"]


def test_featured_pois_with_empty_suite() -> None:
    assert featured_pois({"data": []}, None, "restaurant").pois == []


def test_search_across_languages_returns_display_language_items() -> None:
    documents = {
        "en": {"data": [_recommendation("tower", "Beppu Tower", "attraction", highlight=2)]},
        "ja": {
            "data": [
                _recommendation("tower", "別府タワー", "attraction", highlight=2),
                _recommendation("onsen", "海地獄", "attraction", highlight=1),
            ]
        },
    }

    results = search_across_languages("タワー", documents, "en")
    fallback = search_across_languages("海地獄", documents, "ko")

    assert [item["poi"]["label"] for item in results] == ["Beppu Tower"]
    assert [item["poi"]["label"] for item in fallback] == ["海地獄"]
    assert search_across_languages("a", documents, "en") == []


def test_filter_highlighted_orders_by_weight_and_filters_by_query() -> None:
    documents = {
        "ja": {
            "data": [
                _recommendation("tower", "別府タワー", "attraction", highlight=2),
                _recommendation("onsen", "海地獄", "attraction", highlight=1),
                _recommendation("cafe", "カフェ", "restaurant"),
            ]
        },
        "en": {"data": [_recommendation("tower", "Beppu Tower", "attraction", highlight=2)]},
    }

    highlighted = filter_highlighted("", documents, "ja")
    matched = filter_highlighted("tower", documents, "ja")

    assert [item["poi"]["slug"] for item in highlighted] == ["onsen", "tower"]
    assert [item["poi"]["slug"] for item in matched] == ["tower"]
    assert filter_highlighted("", documents, "ko") == []


def test_filter_highlighted_skips_null_and_missing_weight() -> None:
    unset = _recommendation("bar", "Bar", "restaurant")
    unset["weightInHighlight"] = None
    missing = _recommendation("inn", "Inn", "attraction")
    del missing["weightInHighlight"]
    documents = {"en": {"data": [unset, missing, _recommendation("tower", "Beppu Tower", "attraction", highlight=0)]}}

    highlighted = filter_highlighted("", documents, "en")

    assert [item["poi"]["slug"] for item in highlighted] == ["tower"]
