"""
Handlewrap — Configuration
============================

What:  Settings for logging and for where translated errors are written.
How:   Pydantic Settings reads HANDLEWRAP_* environment variables (or a .env
       file), validates them, and exposes a module-level `settings` object.
Who:   Read by handlewrap.main when building the application.
When:  Loaded once at import time.

Example:
    HANDLEWRAP_LOG_LEVEL=debug
    HANDLEWRAP_ERROR_SINK=logger
    HANDLEWRAP_ERROR_LOGGER_NAME=myservice.errors
"""

import logging
import sys
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from handlewrap.translator import ErrorSink, LoggerSink


class Settings(BaseSettings):
    """Settings loaded from HANDLEWRAP_* environment variables."""

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Error Sink ────────────────────────────────────────────────────────
    # stderr / stdout: raw error text on the process stream
    # logger: one ERROR record per failing request on `error_logger_name`
    error_sink: Literal["stderr", "stdout", "logger"] = Field(default="stderr")
    error_logger_name: str = Field(default="handlewrap.errors")

    model_config = SettingsConfigDict(
        env_prefix="HANDLEWRAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


def error_sink_from_settings(cfg: Settings) -> ErrorSink:
    """Resolve the configured error sink to a writable object."""
    if cfg.error_sink == "logger":
        return LoggerSink(logging.getLogger(cfg.error_logger_name))
    if cfg.error_sink == "stdout":
        return sys.stdout
    return sys.stderr
