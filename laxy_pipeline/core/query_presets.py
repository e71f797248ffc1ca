"""CMS 리소스별 `fields` / `populate` 선언.

각 값은 FieldSpec과 같은 모양의 dict이며, 키 순서가 그대로 쿼리 순서가 됩니다.
"""

from __future__ import annotations

from typing import Any

_URL_ONLY: dict[str, Any] = {"fields": ["url"]}
_TAG_LABELS: dict[str, Any] = {"fields": ["name", "color"]}
_LABEL_ONLY: dict[str, Any] = {"fields": ["label"]}
_LABEL_VALUE: dict[str, Any] = {"fields": ["label", "value"]}
_NAVIGATION: dict[str, Any] = {"fields": ["label", "route"], "populate": {"icon": _URL_ONLY}}

GUIDE_CONFIG_PARAMS: dict[str, Any] = {
    "universalConfig": {
        "populate": {
            "releasedLanguages": _LABEL_VALUE,
            "audioLanguages": _LABEL_VALUE,
        }
    },
    "pagePOIGuide": {
        "fields": ["coverDescription", "audioLanguageLabel", "nextLabel"],
    },
}

POI_GUIDES_PARAMS: dict[str, Any] = {
    "fields": ["legacyTourCode"],
    "populate": {
        "poi": {
            "fields": [
                "slug",
                "label",
                "address",
                "highlight",
                "externalURL",
                "type",
                "nativeLanguageCode",
                "addressEmbedHTML",
                "dial",
                "addressURL",
            ],
            "populate": {
                "tag_labels": _TAG_LABELS,
                "coverPhoto": _URL_ONLY,
            },
        }
    },
}

# `naviagtion`, `pagPoiDetail` 오타는 CMS 스키마 이름 그대로입니다.
HUB_CONFIG_PARAMS: dict[str, Any] = {
    "universalConfig": {
        "fields": ["themeOptions"],
        "populate": {"releasedLanguages": _LABEL_VALUE},
    },
    "globalComponent": {
        "fields": [
            "readMoreLabel",
            "readLessLabel",
            "hostTagLabel",
            "poweredByLabel",
            "exploreMoreAboutLabel",
        ],
        "populate": {
            "speechButton": {"fields": ["label"], "populate": {"icon": _URL_ONLY}},
            "audioGuideButton": _LABEL_ONLY,
        },
    },
    "header": {
        "fields": ["leftRoute", "rightRoute"],
        "populate": {"leftIcon": _URL_ONLY, "rightIcon": _URL_ONLY},
    },
    "pageLanding": {
        "fields": ["recommendationHeading"],
        "populate": {"naviagtion": _NAVIGATION},
    },
    "pageLanguage": {
        "fields": ["heading"],
        "populate": {"applyButton": _LABEL_ONLY},
    },
    "pageSearch": {
        "fields": [
            "searchInputPlaceholder",
            "searchResultHeading",
            "noResultsFound",
            "defaultListHeading",
            "highlightedListHeading",
        ],
        "populate": {"defaultList": _LABEL_VALUE},
    },
    "pageInfo": {
        "fields": ["heading"],
        "populate": {"navigation": _NAVIGATION},
    },
    "pageWiFi": {
        "populate": {
            "scanQRButton": _LABEL_ONLY,
            "clipboardButton": _LABEL_ONLY,
            "showQRButton": _LABEL_ONLY,
        }
    },
    "pagPoiDetail": {
        "fields": ["recommendationHeading", "highlightHeading"],
        "populate": {"addressIcon": _URL_ONLY, "urlIcon": _URL_ONLY, "dialIcon": _URL_ONLY},
    },
}

SUITE_PARAMS: dict[str, Any] = {
    "fields": [
        "name",
        "label",
        "headline",
        "address",
        "addressURL",
        "addressEmbedHTML",
        "checkInOut",
        "amenities",
        "directContact",
        "houseRules",
    ],
    "populate": {
        "slider": _URL_ONLY,
        "faq": {"fields": ["question", "answer"]},
        "wifi": {"fields": ["network", "password"]},
        "ownedBy": {
            "fields": ["slug", "label", "greeting", "nativeLanguageCode"],
            "populate": {
                "avatar": _URL_ONLY,
                "pickedPOIs": {
                    "fields": [
                        "slug",
                        "label",
                        "address",
                        "addressURL",
                        "addressEmbedHTML",
                        "dial",
                        "highlight",
                        "externalURL",
                        "type",
                        "nativeLanguageCode",
                        "laxyURL",
                    ],
                    "populate": {"tag_labels": _TAG_LABELS, "coverPhoto": _URL_ONLY},
                },
            },
        },
    },
}

POI_RECOMMENDATIONS_PARAMS: dict[str, Any] = {
    "fields": [
        "recommendation",
        "kmFromStay",
        "weightInNearbyRestaurants",
        "weightInNearbyAttractions",
        "weightInHighlight",
    ],
    "populate": {
        "poi": {
            "fields": ["slug", "label", "address", "highlight", "externalURL", "type"],
            "populate": {"tag_labels": _TAG_LABELS, "coverPhoto": _URL_ONLY},
        }
    },
}

SUITE_DISCOVERY_PARAMS: dict[str, Any] = {"fields": ["name"]}
