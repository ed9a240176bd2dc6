"""Process-level settings read from the environment."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Contact Search")
    log_level: str = Field(default="INFO")

    # JSON file with a list of contact objects; sample data is used when unset
    contacts_path: str | None = None

    default_threshold: float = Field(default=0.6)
    default_limit: int = Field(default=50)

    model_config = SettingsConfigDict(
        env_prefix="CONTACT_SEARCH_",
        env_file=".env",
        extra="ignore",
    )
