"""Uvicorn 기본 포맷에 맞춘 로깅 설정."""

from __future__ import annotations

import copy
import logging.config
import os
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG


def _resolve_log_level(level: str | None = None) -> str:
    """인자 또는 환경변수에서 로그 레벨을 결정합니다."""
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", "INFO").upper()


def build_logging_config(level: str | None = None) -> dict[str, Any]:
    """API 서버용 로깅 설정을 생성합니다.

    uvicorn 로거 레벨을 맞추고, `laxy_pipeline` 로거는 uvicorn 기본 핸들러로 내보냅니다.
    """
    log_level = _resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["root"] = {"handlers": ["default"], "level": log_level}

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        config["loggers"][logger_name]["level"] = log_level

    config["loggers"]["laxy_pipeline"] = {"handlers": ["default"], "level": log_level, "propagate": False}
    return config


def configure_logging(level: str | None = None) -> None:
    """dictConfig로 로깅을 구성합니다."""
    logging.config.dictConfig(build_logging_config(level))
