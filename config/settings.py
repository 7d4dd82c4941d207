from pathlib import Path
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    weekly_window: int = Field(default=12, ge=1)
    top_n: int = Field(default=5, ge=1)


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="")

    db_dir: Path = Field(default=Path("db"), alias="DB_DIR")

    @computed_field
    @property
    def journal_path(self) -> Path:
        return self.db_dir / "journal.db"

    @computed_field
    @property
    def log_dir(self) -> Path:
        return self.db_dir / "logs"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()
