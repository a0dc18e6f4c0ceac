from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):

    api_host: str = Field(default="localhost", description="API host")
    api_port: int = Field(default=3000, description="API port")
    debug: bool = Field(default=False, description="Debug mode")

    allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
        validation_alias=AliasChoices("CORS_ALLOWED_ORIGINS", "ALLOWED_ORIGINS"),
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")

    # NewsAPI upstream
    news_api_key: Optional[str] = Field(default=None, description="NewsAPI key")
    news_api_base_url: str = Field(default="https://newsapi.org/v2", description="NewsAPI base URL")
    news_api_timeout_seconds: float = Field(default=10.0, description="Timeout for a single NewsAPI call")
    news_api_page_size: int = Field(default=20, description="Articles requested per NewsAPI call")

    # Article cache
    cache_ttl_seconds: int = Field(default=300, description="Time an entry may be reused without revalidation")
    aggregate_retention_seconds: Optional[int] = Field(
        default=None,
        description="Hide entries older than this from read/favorites/search views (unset keeps every entry visible)"
    )

    # Background refresh
    refresh_enabled: bool = Field(default=True, description="Run the background cache refresh")
    refresh_initial_delay_seconds: float = Field(default=60.0, description="Delay before the first refresh run")
    refresh_interval_seconds: float = Field(default=600.0, description="Interval between refresh runs")
    refresh_countries: list[str] = Field(
        default_factory=lambda: ["us", "gb", "in", "au", "ca"],
        description="Countries kept warm by the refresh scheduler"
    )
    refresh_categories: list[str] = Field(
        default_factory=lambda: ["general", "technology", "science", "business", "sports"],
        description="Categories kept warm by the refresh scheduler"
    )

    # Authentication
    jwt_secret: str = Field(default="dev_secret_change_me", description="Secret used to sign access tokens")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expires_minutes: int = Field(default=60, description="Access token lifetime in minutes")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashes")

    @field_validator("allowed_origins", "refresh_countries", "refresh_categories", mode="before")
    @classmethod
    def parse_comma_separated(cls, value):
        if value is None:
            return value
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    class Config:
        env_file = [".env", ".env.local"]  # .env.local takes precedence over .env
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
