"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./ledger.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # None keeps the driver default
    isolation_level: Optional[str] = "SERIALIZABLE"


class TransferSettings(BaseModel):
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=0.1, ge=0)
    retry_backoff: Literal["fixed", "exponential"] = "fixed"
    retry_max_delay: float = Field(default=2.0, ge=0)
    retry_jitter: bool = False
    reference_length: int = Field(default=12, ge=8, le=64)
    retryable_sqlstates: list[str] = Field(default_factory=lambda: ["40001"])
    attempt_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    max_page_size: int = Field(default=100, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Funds Ledger"

    database: DatabaseSettings = DatabaseSettings()
    transfers: TransferSettings = TransferSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def max_retries(self) -> int:
        return self.transfers.max_retries

    @property
    def reference_length(self) -> int:
        return self.transfers.reference_length


@lru_cache()
def get_settings() -> Settings:
    return Settings()
