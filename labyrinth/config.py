"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LABYRINTH_",
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Labyrinth"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8001
    shutdown_on_done: bool = False

    # Maze
    width: int = Field(15, gt=0)
    height: int = Field(10, gt=0)
    cut_limit: int = Field(3, ge=1)
    seed: Optional[int] = None

    # Solver
    times: int = Field(10, gt=0)
    request_timeout_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_room_count(self) -> "Settings":
        """A maze needs somewhere to start and somewhere else to end."""
        if self.width * self.height < 2:
            raise ValueError("width * height must be at least 2")
        return self

    @property
    def server_url(self) -> str:
        """Base URL the solver connects to."""
        return f"http://{self.host}:{self.port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
