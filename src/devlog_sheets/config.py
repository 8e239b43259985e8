from __future__ import annotations

from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from .google_auth import DEFAULT_TOKEN_PATH
from .models import TAB_NAME


class SheetSettings(BaseModel):
    tab_name: str = TAB_NAME
    value_input_option: str = "RAW"


class ClockSettings(BaseModel):
    timezone: str = "Australia/Sydney"
    stale_after_hours: int = Field(default=6, ge=0)
    stale_minutes: int = Field(default=10, ge=0)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class AuthSettings(BaseModel):
    token_path: Path = DEFAULT_TOKEN_PATH


class Settings(BaseSettings):
    model_config = ConfigDict(extra="ignore")

    sheet: SheetSettings = Field(default_factory=SheetSettings)
    clock: ClockSettings = Field(default_factory=ClockSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level: {v}")
        return level


def default_config_path() -> Path:
    return Path("~/.config/devlog-sheets/config.yaml").expanduser()


def load_settings(path: Optional[Path] = None) -> Settings:
    path = path or default_config_path()
    if not path.exists():
        # allow running with env-only values
        return Settings()

    data = yaml.safe_load(path.read_text()) or {}
    return Settings.model_validate(data)
