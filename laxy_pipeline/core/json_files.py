"""JSON 파일 읽기/쓰기 유틸."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def write_json_file(path: str | os.PathLike[str], data: Any, *, indent: int = 4) -> Path:
    """JSON 문서를 사람이 읽기 좋은 형태로 저장합니다.

    같은 디렉터리의 임시 파일에 먼저 쓴 뒤 교체하므로, 실패해도 기존 파일은 그대로 남습니다.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=indent, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return target


def read_json_file(path: str | os.PathLike[str]) -> Any:
    with Path(path).open(encoding="utf-8") as handle:
        return json.load(handle)
