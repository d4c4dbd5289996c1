from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import API_BASE, HTTP_TIMEOUT_SEC

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="", env_file=None, extra="ignore")

    github_token: str | None = Field(default=None)
    github_api_url: str = Field(default=API_BASE)
    http_timeout: float = Field(default=HTTP_TIMEOUT_SEC, gt=0)


def get_settings() -> Settings:
    return Settings()
