"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Missing commerce credentials do not prevent startup; /api/env-check reports them

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Variable names match the dashboard's existing deployment
      (SHOPIFY_API_KEY, SHOPIFY_APP_URL, NEXT_PUBLIC_SUPABASE_URL, ...)
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://fundboard:fundboard@db:5432/fundboard"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Commerce platform (Shopify)
    shopify_api_key: str = ""
    shopify_api_secret: str = ""
    shopify_app_url: str = ""
    shopify_scopes: list[str] = [
        "read_products", "read_orders", "read_customers", "read_inventory",
    ]
    shopify_api_version: str = "2023-10"
    shopify_timeout_seconds: float = 30.0

    @field_validator("shopify_scopes", mode="before")
    @classmethod
    def split_scopes(cls, v):
        """Accept SHOPIFY_SCOPES as a comma-separated string."""
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # Reported by /api/env-check only
    nextauth_url: str | None = None
    nextauth_secret: str | None = None
    supabase_url: str | None = Field(
        None,
        validation_alias=AliasChoices("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_anon_key: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "NEXT_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY",
        ),
    )

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
