"""가이드 에셋(오디오/자막/이미지) 일괄 사전 다운로드."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from urllib.parse import urlparse

import requests

from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.timeout_policy import to_requests_timeout
from laxy_pipeline.schemas.guide import AudioGuide, PreloadReport
from laxy_pipeline.services.legacy_adapter import resolve_step_assets

logger = get_logger(__name__)

ProgressCallback = Callable[[int], None]


def collect_asset_urls(guide: AudioGuide, language: str) -> list[str]:
    """가이드의 모든 스텝에서 해당 언어 에셋 URL을 중복 없이 순서대로 모읍니다."""
    urls: list[str] = []
    for step in guide.guide.steps:
        assets = resolve_step_assets(step, language, guide.asset_base_url)
        if assets.audio_url:
            urls.append(assets.audio_url)
        if assets.subtitle_url:
            urls.append(assets.subtitle_url)
        urls.extend(image.url for image in assets.images)
    return list(dict.fromkeys(urls))


def _cache_path(cache_dir: Path, url: str, asset_base_url: str) -> Path:
    """에셋 URL을 캐시 파일 경로로 바꿉니다.

    Raises:
        ValueError: 상대 경로가 캐시 디렉터리 밖을 가리키는 경우.
    """
    relative = url[len(asset_base_url) :] if url.startswith(asset_base_url) else Path(urlparse(url).path).name
    root = cache_dir.resolve()
    target = (root / relative.lstrip("/")).resolve()
    if target == root or not target.is_relative_to(root):
        raise ValueError(f"asset path escapes cache directory: {relative}")
    return target


async def preload_guide_assets(
    guide: AudioGuide,
    language: str,
    on_progress: ProgressCallback | None = None,
    *,
    max_concurrency: int = 4,
    timeout_seconds: int = 15,
    cache_dir: str | Path | None = None,
) -> PreloadReport:
    """가이드 에셋을 동시에 내려받고 진행률을 보고합니다.

    진행률은 완료(성공/실패 모두) 개수 기준 `round(completed / total * 100)`이며,
    잠금 안에서 갱신되므로 콜백은 증가하는 순서로만 호출됩니다.

    Args:
        guide: 에셋 기준 URL이 포함된 가이드.
        language: 표시 언어 코드.
        on_progress: 진행률(0~100) 콜백.
        max_concurrency: 동시에 진행할 최대 요청 수.
        timeout_seconds: 요청별 타임아웃.
        cache_dir: 지정하면 에셋을 상대 경로 그대로 저장합니다.

    Returns:
        전체/성공/실패 개수를 담은 보고서.
    """
    urls = collect_asset_urls(guide, language)
    report = PreloadReport(total=len(urls))
    if not urls:
        return report

    request_timeout = to_requests_timeout(timeout_seconds)
    cache_root = Path(cache_dir) if cache_dir is not None else None
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    progress_lock = asyncio.Lock()
    completed = 0

    def _download(url: str) -> None:
        target = _cache_path(cache_root, url, guide.asset_base_url) if cache_root is not None else None
        response = requests.get(url, timeout=request_timeout)
        response.raise_for_status()
        if target is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.content)

    async def _load(url: str) -> None:
        nonlocal completed
        succeeded = True
        async with semaphore:
            try:
                await asyncio.to_thread(_download, url)
            except (requests.RequestException, OSError, ValueError) as exc:
                logger.warning("Asset preload failed: url=%s error=%s", url, exc)
                succeeded = False

        async with progress_lock:
            completed += 1
            if succeeded:
                report.loaded += 1
            else:
                report.failed += 1
                report.failed_urls.append(url)
            if on_progress is not None:
                on_progress(round(completed / report.total * 100))

    await asyncio.gather(*(_load(url) for url in urls))
    logger.info(
        "Asset preload completed: language=%s total=%d loaded=%d failed=%d",
        language,
        report.total,
        report.loaded,
        report.failed,
    )
    return report
