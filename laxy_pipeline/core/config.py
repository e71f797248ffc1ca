"""파이프라인 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    CMS_API_BASE_URL: str = "https://laxy-studio-strapi-c1d6d20cbc41.herokuapp.com"
    CMS_API_TOKEN: str
    CLIENT_ID: str = "beppu-airbnb"
    CONTENT_LANGUAGES: str = "en,ja,ko,zh-Hans,zh-Hant"
    MOCK_DATA_DIR: str = "data/mocks"
    DISCOVERED_CONFIG_PATH: str = "data/config/discovered.json"
    FETCH_REQUEST_DELAY_SECONDS: float = 0.3
    CMS_PAGE_SIZE: int = 10000
    DEBUG_PARAMS: bool = False
    LEGACY_ASSET_ENV: str = "dev"
    REQUEST_TIMEOUT_SECONDS: int = 60
    EXTERNAL_API_TIMEOUT_SECONDS: int = 30
    CMS_TIMEOUT_SECONDS: int = 30
    LEGACY_ASSET_TIMEOUT_SECONDS: int = 15
    ASSET_PRELOAD_MAX_CONCURRENCY: int = 4
    ASSET_CACHE_DIR: str = "data/cache/assets"
    APP_ENV: str = "development"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("FETCH_REQUEST_DELAY_SECONDS", mode="before")
    @classmethod
    def _clamp_fetch_request_delay(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 0.3
        except (TypeError, ValueError):
            numeric = 0.3
        return max(0.0, numeric)

    @field_validator("ASSET_PRELOAD_MAX_CONCURRENCY", mode="before")
    @classmethod
    def _clamp_asset_preload_max_concurrency(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 4
        except (TypeError, ValueError):
            numeric = 4
        return min(16, max(1, numeric))

    @property
    def content_languages(self) -> list[str]:
        """`CONTENT_LANGUAGES`를 순서를 유지한 목록으로 반환합니다."""
        return [item.strip() for item in self.CONTENT_LANGUAGES.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
