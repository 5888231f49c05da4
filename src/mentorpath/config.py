from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Mentorpath"
    app_env: str = "development"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/mentorpath.db"
    data_dir: Path = Path("./data")
    seed_catalog_on_init: bool = True

    default_time_commitment: str = "regular"

    rate_limit_max: int = 30
    rate_limit_window_sec: float = 60.0

    repair_batch_limit: int = 0

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("default_time_commitment")
    @classmethod
    def validate_time_commitment(cls, value: str) -> str:
        allowed = {"casual", "regular", "intensive"}
        if value not in allowed:
            raise ValueError(f"default_time_commitment must be one of {sorted(allowed)}")
        return value

    @field_validator("rate_limit_max")
    @classmethod
    def validate_rate_limit_max(cls, value: int) -> int:
        if value < 1:
            raise ValueError("rate_limit_max must be at least 1")
        return value

    @field_validator("repair_batch_limit")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("value must not be negative")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
