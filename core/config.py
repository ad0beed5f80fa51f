"""
Pydantic-based configuration for the service auth prober.

All knobs are exposed via environment variables so the same codebase
can run behind the API or the CLI with short timeouts in tests.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, env_file=".env")

    # Timeouts (seconds)
    probe_timeout_s: float = Field(1.0, description="TCP reachability hard timeout")
    handshake_timeout_s: float = Field(1.0, description="per-driver connect/command timeout")

    # Concurrency; 0 means one worker per configured service
    scan_workers: int = Field(0, ge=0)

    # Service ports
    mongodb_port: int = Field(27017, ge=1, le=65535)
    redis_port: int = Field(6379, ge=1, le=65535)

    # MongoDB write-as-notice
    mongodb_database: str = Field("local")
    mongodb_notice_enabled: bool = Field(True, description="leave a marker document on unsecured servers")
    mongodb_notice_collection: str = Field("secureit")
    mongodb_notice_message: str = Field("This server was not secured.")

    # Optional scope restriction
    enforce_allowlist: bool = Field(False)
    allowlist_cidrs: List[str] = Field(default_factory=list)
    allowlist_domains: List[str] = Field(default_factory=list)

    log_level: str = Field("INFO")

    @field_validator("probe_timeout_s", "handshake_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
