"""Lightweight settings layer wrapping environment variables with validation.

Does not replace AppConfig; augments it. Use get_settings() where env-driven behavior
is needed (log level / format, CLI parity checks, default random seed).
All variables share the PLANEGEOM_ prefix, e.g. PLANEGEOM_LOG_LEVEL=DEBUG.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment settings (prefix ``PLANEGEOM_``, case-insensitive)."""

    model_config = SettingsConfigDict(env_prefix="PLANEGEOM_", case_sensitive=False, extra="ignore")

    log_level: str = Field("INFO")
    json_logging: bool = Field(False)
    log_file: Optional[str] = Field(None)
    # Cross-check CLI results against the vectorised reference even without --check
    enable_parity_check: bool = Field(False)
    default_seed: int = Field(0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore
