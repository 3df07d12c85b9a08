"""Configuration for the tertestrial command line tools.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The decoder itself takes no configuration; these settings only shape how the
CLI reports what it decoded.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogFormat = Literal["json", "text"]


class TertestrialSettings(BaseSettings):
    """Settings for the tertestrial CLI.

    Environment variables:
    - LOG_LEVEL               (optional)
    - TERTESTRIAL_LOG_FORMAT  (optional, `json` or `text`)

    Notes:
        Tests can point at a different env file via
        `TertestrialSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    log_format: LogFormat = Field(
        default="json",
        validation_alias="TERTESTRIAL_LOG_FORMAT",
        description="Log record format written to stderr",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level
