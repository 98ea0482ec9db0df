"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the DuckSmart hunt service."""
    model_config = SettingsConfigDict(env_prefix="DUCKSMART_", extra="ignore")

    weather_source: str = "openweathermap"  # options: openweathermap, mock
    owm_api_key: str | None = None
    owm_base_url: str = "https://api.openweathermap.org/data/2.5"
    weather_timeout_seconds: float = 10.0
    spread_catalog_path: str | None = None  # None -> bundled catalog
    api_key: str | None = None
    log_level: str = "INFO"
    job_name: str = "ducksmart"

    @field_validator("owm_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("owm_api_key", "api_key", "spread_catalog_path", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        """Treat empty env values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'owm_api_key', 'api_key'})}")
