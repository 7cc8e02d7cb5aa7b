from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_LOCALE, DEFAULT_USER_AGENT, PORTAL_HOST, SPECIFICATIONS_PATH


class ScannerSettings(BaseSettings):
    """Scanner configuration. Every value has a default; PURS_* variables may override them."""

    model_config = SettingsConfigDict(env_prefix="PURS_", extra="ignore")

    app_env: Literal["local", "dev", "prod"] = "local"
    log_level: str = "INFO"

    portal_host: str = Field(default=PORTAL_HOST)
    portal_base_url: str = Field(default=f"https://{PORTAL_HOST}")
    specifications_path: str = Field(default=SPECIFICATIONS_PATH)

    # Per-request ceiling; the transport aborts the call after this many seconds
    request_timeout: float = Field(default=15.0, gt=0)

    default_locale: str = Field(default=DEFAULT_LOCALE)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    @model_validator(mode="after")
    def normalize_urls(self):
        """Keep base URL and path joinable without doubled slashes."""
        self.portal_base_url = self.portal_base_url.rstrip("/")
        if not self.specifications_path.startswith("/"):
            self.specifications_path = "/" + self.specifications_path
        return self

    @property
    def specifications_url(self) -> str:
        return f"{self.portal_base_url}{self.specifications_path}"


@lru_cache(maxsize=1)
def get_settings() -> ScannerSettings:
    return ScannerSettings()
