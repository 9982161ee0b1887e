"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Missing secrets do not fail startup; the trigger route reports them
      through missing_required_vars() so the scheduler sees a 500 with names

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Timeouts default to 8s per oracle call and 9s per pass: the hosting
      platform kills requests at ~10s
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

# Settings that must be non-empty before a reconciliation pass may run.
REQUIRED_SETTINGS = (
    "cron_secret",
    "domainsduck_api_key",
    "resend_api_key",
    "resend_from_email",
    "notification_email",
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://domainwatch:domainwatch@db:5432/domainwatch"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Scheduler trigger
    cron_secret: str = ""

    # Availability oracle (Domainsduck)
    domainsduck_api_url: str = "https://eu.domainsduck.com"
    domainsduck_api_key: str = ""
    oracle_timeout_seconds: float = 8.0
    oracle_rate_limit_max_requests: int = 30
    oracle_rate_limit_window_seconds: float = 3600.0

    # Reconciliation pass
    pass_soft_deadline_seconds: float = 9.0

    # Email (Resend)
    resend_api_url: str = "https://api.resend.com"
    resend_api_key: str = ""
    resend_from_email: str = ""
    notification_email: str = ""
    email_timeout_seconds: float = 5.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def missing_required_vars(self) -> list[str]:
        """Env var names of required settings that are unset or blank."""
        return [
            name.upper() for name in REQUIRED_SETTINGS
            if not str(getattr(self, name) or "").strip()
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
