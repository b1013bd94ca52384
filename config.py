"""
config.py — Application configuration from environment variables.
Every variable uses the DICEXP_ prefix (e.g. DICEXP_SEED=42).
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "WARNING"

    # Rolling — used when the CLI gets no --seed
    seed: Optional[int] = None

    # Output
    average_digits: int = 1

    # App
    app_title: str = "dicexp"
    app_version: str = "1.1.1"

    model_config = SettingsConfigDict(env_prefix="DICEXP_", env_file=".env", extra="ignore")
