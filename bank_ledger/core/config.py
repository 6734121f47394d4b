from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bank Ledger API"
    database_url: str = "sqlite:///bank_ledger.db"
    log_level: str = "INFO"
    checking_overdraft_limit: Decimal = Field(default=Decimal("500"), ge=0)
    account_number_prefix: str = Field(default="A", pattern=r"^[A-Z]{1,4}$")
    sqlite_busy_timeout: float = Field(default=5.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LEDGER_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
