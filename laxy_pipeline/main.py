"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from laxy_pipeline.api import guides, pois
from laxy_pipeline.core.config import get_settings
from laxy_pipeline.core.logger import get_logger
from laxy_pipeline.core.logging_config import configure_logging
from laxy_pipeline.services.legacy_tour_loader import LegacyTourLoader
from laxy_pipeline.services.mock_store import MockDataStore

configure_logging()
logger = get_logger(__name__)
settings = get_settings()


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _configure_cors(app_: FastAPI) -> None:
    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Accept-Language", "Content-Type"],
    )


@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
    """목 저장소와 레거시 투어 로더를 한 번 만들어 앱 상태에 둡니다."""
    app_.state.store = MockDataStore.open(settings.MOCK_DATA_DIR, settings.CLIENT_ID)
    app_.state.tour_loader = LegacyTourLoader.from_settings(settings)
    logger.info(
        "Laxy guide API started: env=%s mock_root=%s legacy_env=%s",
        settings.APP_ENV,
        settings.MOCK_DATA_DIR,
        settings.LEGACY_ASSET_ENV,
    )
    yield


app = FastAPI(title="Laxy Guide API", lifespan=lifespan)

_configure_cors(app)

app.include_router(guides.router)
app.include_router(pois.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외를 표준 형식으로 처리합니다."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "내부 서버 오류가 발생했습니다."
    return JSONResponse(status_code=500, content={"detail": message})


@app.get("/")
def health_check() -> dict:
    """헬스 체크 엔드포인트."""
    return {"status": "ok", "message": "Laxy Guide API is running"}
