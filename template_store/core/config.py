"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./templates.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # Schema namespace for the templates table; None keeps the default schema.
    schema_name: Optional[str] = None


class TemplateSettings(BaseModel):
    max_body_bytes: int = Field(default=1_048_576, gt=0)
    default_page_size: int = Field(default=50, gt=0)
    max_page_size: int = Field(default=500, gt=0)
    compression_level: int = Field(default=6, ge=0, le=9)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


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
    project_name: str = "Template Store"
    api_prefix: str = "/api"

    database: DatabaseSettings = DatabaseSettings()
    templates: TemplateSettings = TemplateSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def max_body_bytes(self) -> int:
        return self.templates.max_body_bytes


@lru_cache()
def get_settings() -> Settings:
    return Settings()
