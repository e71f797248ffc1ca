"""SRT(SubRip) 자막 파서."""

from __future__ import annotations

import re

from laxy_pipeline.schemas.guide import Subtitle

_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
_TIME_RANGE = re.compile(r"(\d{2}):(\d{2}):(\d{2}),(\d{3})\s*-->\s*(\d{2}):(\d{2}):(\d{2}),(\d{3})")


def _to_seconds(hours: str, minutes: str, seconds: str, millis: str) -> float:
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds) + int(millis) / 1000


def _split_blocks(content: str) -> list[list[str]]:
    normalized = content.replace("\r\n", "\n").strip()
    if not normalized:
        return []
    return [block.strip().split("\n") for block in _BLOCK_SEPARATOR.split(normalized)]


def _parse_index(line: str) -> int | None:
    match = re.match(r"\s*(\d+)", line)
    return int(match.group(1)) if match else None


def _match_time_line(lines: list[str]) -> tuple[re.Match[str] | None, int]:
    """시간 줄을 찾습니다. 종료 시각이 다음 줄로 넘어간 경우 두 줄을 합칩니다.

    Returns:
        (매치 결과, 본문 시작 줄 번호)
    """
    time_line = lines[1]
    text_start = 2
    if "-->" in time_line and not _TIME_RANGE.search(time_line) and len(lines) > 2:
        time_line = f"{time_line.strip()} {lines[2].strip()}"
        text_start = 3
    return _TIME_RANGE.search(time_line), text_start


def parse_srt(content: str | None) -> list[Subtitle]:
    """SRT 문자열을 시작 시각 순으로 정렬된 자막 목록으로 파싱합니다.

    번호나 시간 줄이 잘못된 블록, 본문이 빈 블록은 건너뜁니다.
    """
    if not content or not isinstance(content, str):
        return []

    subtitles: list[Subtitle] = []
    for lines in _split_blocks(content):
        if len(lines) < 3:
            continue
        index = _parse_index(lines[0])
        if index is None:
            continue

        match, text_start = _match_time_line(lines)
        if match is None:
            continue

        text = "\n".join(lines[text_start:]).strip()
        if not text:
            continue

        groups = match.groups()
        subtitles.append(
            Subtitle(
                index=index,
                start_time=_to_seconds(*groups[:4]),
                end_time=_to_seconds(*groups[4:]),
                text=text,
            )
        )

    return sorted(subtitles, key=lambda subtitle: subtitle.start_time)


def find_active_subtitle(subtitles: list[Subtitle], current_time: float) -> Subtitle | None:
    for subtitle in subtitles:
        if subtitle.start_time <= current_time <= subtitle.end_time:
            return subtitle
    return None


def subtitles_in_range(subtitles: list[Subtitle], start_time: float, end_time: float) -> list[Subtitle]:
    """구간과 겹치는 자막을 반환합니다."""
    return [
        subtitle
        for subtitle in subtitles
        if start_time <= subtitle.start_time <= end_time
        or start_time <= subtitle.end_time <= end_time
        or (subtitle.start_time <= start_time and subtitle.end_time >= end_time)
    ]


def format_srt_time(seconds: float) -> str:
    """초를 `HH:MM:SS,mmm` 형식으로 변환합니다."""
    total_millis = int(round(max(seconds, 0) * 1000))
    hours, remainder = divmod(total_millis, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def is_valid_srt(content: str | None) -> bool:
    """첫 블록이 번호와 시간 줄을 갖췄는지 확인합니다."""
    if not content or not isinstance(content, str):
        return False

    blocks = _split_blocks(content)
    if not blocks or len(blocks[0]) < 3:
        return False
    if _parse_index(blocks[0][0]) is None:
        return False

    match, _ = _match_time_line(blocks[0])
    return match is not None
