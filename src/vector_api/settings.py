from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOSTNAME = "app.construction.ai"
LOCALHOST_PORT = 3000


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    API_KEY: Optional[str] = None
    USE_LOCALHOST: bool = False
    VECTOR_API_HOSTNAME: str = DEFAULT_HOSTNAME
    VECTOR_API_PORT: Optional[int] = None
    VECTOR_API_USE_HTTP: bool = False
    VECTOR_API_TIMEOUT_S: float = 60.0
    VECTOR_API_POLL_INTERVAL_S: float = 0.2
    VECTOR_API_PATH_REVISION: Literal["nested", "flat"] = "nested"
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_intervals(self) -> "ApiSettings":
        invalid = [
            name
            for name, value in {
                "VECTOR_API_TIMEOUT_S": self.VECTOR_API_TIMEOUT_S,
                "VECTOR_API_POLL_INTERVAL_S": self.VECTOR_API_POLL_INTERVAL_S,
            }.items()
            if value <= 0
        ]
        if invalid:
            raise ValueError(f"Settings must be positive: {', '.join(invalid)}")
        return self

    @property
    def hostname(self) -> str:
        return "localhost" if self.USE_LOCALHOST else self.VECTOR_API_HOSTNAME

    @property
    def port(self) -> int | None:
        return LOCALHOST_PORT if self.USE_LOCALHOST else self.VECTOR_API_PORT

    @property
    def use_http(self) -> bool:
        return self.USE_LOCALHOST or self.VECTOR_API_USE_HTTP

    @property
    def base_url(self) -> str:
        scheme = "http" if self.use_http else "https"
        if self.port is None:
            return f"{scheme}://{self.hostname}"
        return f"{scheme}://{self.hostname}:{self.port}"


@lru_cache
def get_settings() -> ApiSettings:
    return ApiSettings()
