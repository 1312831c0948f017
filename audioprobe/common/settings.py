# audioprobe/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    prefix: str = ""

    # Threads available to sync endpoints; each queued request parks one of them on the gate.
    worker_threads: int = Field(40, ge=1)


class ConcurrencyConfig(BaseModel):
    max_concurrent_probes: int = Field(10, ge=1, description="Admission gate capacity (K)")


class FFProbeConfig(BaseModel):
    bin: str = "ffprobe"
    log_level: str = "quiet"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    timeout_sec: Optional[float] = Field(default=None, gt=0)

    @field_validator("timeout_sec", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "audioprobe"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Read once at start-up and hand the
    instance to create_app(); the core never reaches for it on its own:
        from audioprobe.common.settings import get_settings
        app = create_app(get_settings())
    """
    return Settings()  # pydantic_settings will read from .env automatically
