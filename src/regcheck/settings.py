"""regcheck configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegCheckSettings(BaseSettings):
    """Runtime configuration, overridable through ``REGCHECK_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="REGCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Reading .reg files ---
    encoding: str = "utf-8"
    fallback_encoding: str = "cp1252"

    # --- Store addressing ---
    hive_aliases: dict[str, str] = Field(
        default_factory=lambda: {
            "HKEY_LOCAL_MACHINE": "HKLM",
            "HKEY_CURRENT_USER": "HKCU",
        }
    )
    default_view: Literal["32", "64"] = "64"

    # --- Import ---
    reg_executable: str = "reg"

    # --- Logging ---
    log_level: str = "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> RegCheckSettings:
    return RegCheckSettings()
