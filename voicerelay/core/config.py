from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


class AppSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    app_name: str = Field(default="Voice Relay")
    app_env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )

    deepgram_api_key: Optional[SecretStr] = Field(default=None, alias="DEEPGRAM_API_KEY")
    deepgram_endpoint: str = Field(
        default="https://api.deepgram.com/v1/listen", alias="DEEPGRAM_ENDPOINT"
    )
    deepgram_default_model: str = Field(default="nova-3", alias="DEEPGRAM_DEFAULT_MODEL")
    deepgram_timeout_seconds: float = Field(default=60.0, alias="DEEPGRAM_TIMEOUT_SECONDS")

    static_dir: Path = Field(default=PACKAGE_STATIC_DIR, alias="STATIC_DIR")
    default_audio_asset: str = Field(default="sample.wav", alias="DEFAULT_AUDIO_ASSET")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings."""
    return AppSettings()  # type: ignore[call-arg]
