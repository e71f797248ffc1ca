"""언어 코드 유틸 테스트."""

import pytest

from laxy_pipeline.core.languages import (
    detect_language,
    from_audio_language,
    from_legacy_language,
    get_valid_audio_language_code,
    get_valid_language_code,
    is_language_supported,
    to_audio_language,
    to_legacy_language,
)


@pytest.mark.parametrize(
    ("code", "expected"),
    [("ja", "ja"), ("zh", "zh-Hans"), ("zh-CN", "zh-Hans"), ("zh-TW", "zh-Hant"), ("fr", "en"), (None, "en")],
)
def test_get_valid_language_code(code, expected) -> None:
    assert get_valid_language_code(code) == expected


def test_is_language_supported() -> None:
    assert is_language_supported("zh-Hant") is True
    assert is_language_supported("zh-TW") is True
    assert is_language_supported("fr") is False
    assert is_language_supported("") is False


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("ja-JP,ja;q=0.9,en;q=0.8", "ja"),
        ("zh-TW,zh;q=0.9", "zh-Hant"),
        ("zh-HK", "zh-Hant"),
        ("zh-CN", "zh-Hans"),
        ("fr-FR,ko;q=0.5", "ko"),
        ("fr-FR", "en"),
        (None, "en"),
    ],
)
def test_detect_language(header, expected) -> None:
    assert detect_language(header) == expected


def test_legacy_table_distinguishes_chinese_scripts() -> None:
    assert to_legacy_language("zh-Hant") == "cht"
    assert to_legacy_language("zh-Hans") == "chs"
    assert to_legacy_language("fr") == "fr"
    assert from_legacy_language("chs") == "zh-Hans"
    assert from_legacy_language("xyz") == "xyz"


def test_audio_table_merges_chinese_scripts() -> None:
    assert to_audio_language("zh-Hant") == "cmn"
    assert to_audio_language("zh-Hans") == "cmn"
    assert to_audio_language("fr") == "eng"
    assert from_audio_language("cmn") == "zh-Hant"
    assert from_audio_language("fra") == "en"
    assert get_valid_audio_language_code("kor") == "kor"
    assert get_valid_audio_language_code("chs") == "eng"
