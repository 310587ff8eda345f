# intake_cli/config.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CLISettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_url: str = Field(default="http://localhost:8000", validation_alias="INTAKE_API_URL")
    api_prefix: str = Field(default="/api", validation_alias="INTAKE_API_PREFIX")
    timeout: float = Field(default=10.0, validation_alias="INTAKE_TIMEOUT")
    role: str = Field(default="agent1", validation_alias="INTAKE_ROLE")
