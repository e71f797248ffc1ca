"""표시 언어 코드와 레거시/오디오 언어 코드 매핑.

매핑 테이블은 두 종류이며 서로 호환되지 않습니다.

- 레거시 테이블: 레거시 투어 문서의 에셋 맵 키(`eng`, `jpn`, `kor`, `cht`, `chs`).
  중국어 번체/간체를 구분하며, 레거시 어댑터가 사용합니다.
- 오디오 선택 테이블: 오디오 언어 선택기 코드(`eng`, `jpn`, `kor`, `cmn`).
  번체/간체 모두 `cmn`으로 합쳐지고, 역방향은 `zh-Hant`로 돌아갑니다.
"""

from __future__ import annotations

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ja", "ko", "zh-Hant", "zh-Hans")
DEFAULT_LANGUAGE = "en"

_CHINESE_ALIASES: dict[str, str] = {
    "zh": "zh-Hans",
    "zh-CN": "zh-Hans",
    "zh-TW": "zh-Hant",
}
_TRADITIONAL_CHINESE_MARKERS = ("TW", "HK", "MO", "Hant")

TEXT_TO_LEGACY_LANGUAGE: dict[str, str] = {
    "en": "eng",
    "ja": "jpn",
    "ko": "kor",
    "zh-Hant": "cht",
    "zh-Hans": "chs",
}
LEGACY_TO_TEXT_LANGUAGE: dict[str, str] = {legacy: text for text, legacy in TEXT_TO_LEGACY_LANGUAGE.items()}

TEXT_TO_AUDIO_LANGUAGE: dict[str, str] = {
    "en": "eng",
    "ja": "jpn",
    "ko": "kor",
    "zh-Hant": "cmn",
    "zh-Hans": "cmn",
}
AUDIO_TO_TEXT_LANGUAGE: dict[str, str] = {
    "eng": "en",
    "jpn": "ja",
    "kor": "ko",
    "cmn": "zh-Hant",
}
SUPPORTED_AUDIO_LANGUAGES: tuple[str, ...] = ("eng", "jpn", "kor", "cmn")
DEFAULT_AUDIO_LANGUAGE = "eng"

FALLBACK_AUDIO_LANGUAGES: tuple[dict[str, str], ...] = (
    {"code": "eng", "label": "English"},
    {"code": "jpn", "label": "日本語"},
    {"code": "kor", "label": "한국어"},
    {"code": "cmn", "label": "國語"},
)


def is_language_supported(lang_code: str | None) -> bool:
    """표시 언어 코드 지원 여부를 반환합니다. `zh`, `zh-CN`, `zh-TW` 별칭도 허용합니다."""
    if not lang_code:
        return False
    return lang_code in SUPPORTED_LANGUAGES or lang_code in _CHINESE_ALIASES


def get_valid_language_code(lang_code: str | None) -> str:
    """지원되는 표시 언어 코드로 정규화합니다. 지원하지 않는 코드는 `en`으로 대체합니다."""
    if not lang_code:
        return DEFAULT_LANGUAGE
    if lang_code in _CHINESE_ALIASES:
        return _CHINESE_ALIASES[lang_code]
    if lang_code in SUPPORTED_LANGUAGES:
        return lang_code
    return DEFAULT_LANGUAGE


def _detect_single(tag: str) -> str | None:
    if tag in SUPPORTED_LANGUAGES:
        return tag
    if tag.startswith("zh"):
        if any(marker in tag for marker in _TRADITIONAL_CHINESE_MARKERS):
            return "zh-Hant"
        return "zh-Hans"
    primary = tag.split("-")[0]
    if primary in SUPPORTED_LANGUAGES:
        return primary
    return None


def detect_language(accept_language: str | None) -> str:
    """`Accept-Language` 형식의 문자열에서 지원 언어를 고릅니다.

    나열된 순서대로 태그를 확인하고, 중국어 계열은 지역/스크립트 표기로 번체·간체를 나눕니다.
    일치하는 태그가 없으면 `en`을 반환합니다.
    """
    if not accept_language:
        return DEFAULT_LANGUAGE

    for raw_tag in accept_language.split(","):
        tag = raw_tag.split(";")[0].strip()
        if not tag or tag == "*":
            continue
        detected = _detect_single(tag)
        if detected:
            return detected
    return DEFAULT_LANGUAGE


def to_legacy_language(lang_code: str) -> str:
    """표시 언어 코드를 레거시 에셋 코드로 바꿉니다. 매핑이 없으면 입력을 그대로 씁니다."""
    return TEXT_TO_LEGACY_LANGUAGE.get(lang_code, lang_code)


def from_legacy_language(legacy_code: str) -> str:
    """레거시 에셋 코드를 표시 언어 코드로 바꿉니다. 매핑이 없으면 입력을 그대로 씁니다."""
    return LEGACY_TO_TEXT_LANGUAGE.get(legacy_code, legacy_code)


def to_audio_language(lang_code: str | None) -> str:
    """표시 언어 코드를 오디오 선택기 코드로 바꿉니다. 매핑이 없으면 `eng`."""
    return TEXT_TO_AUDIO_LANGUAGE.get(lang_code or "", DEFAULT_AUDIO_LANGUAGE)


def from_audio_language(audio_code: str | None) -> str:
    """오디오 선택기 코드를 표시 언어 코드로 바꿉니다. 매핑이 없으면 `en`."""
    return AUDIO_TO_TEXT_LANGUAGE.get(audio_code or "", DEFAULT_LANGUAGE)


def is_audio_language_supported(audio_code: str | None) -> bool:
    return audio_code in SUPPORTED_AUDIO_LANGUAGES


def get_valid_audio_language_code(audio_code: str | None) -> str:
    """지원되는 오디오 언어 코드를 반환합니다. 지원하지 않으면 `eng`."""
    if not audio_code or not is_audio_language_supported(audio_code):
        return DEFAULT_AUDIO_LANGUAGE
    return audio_code
