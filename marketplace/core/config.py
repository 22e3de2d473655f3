from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Marketplace API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Logging
    log_level: str | None = Field(
        default=None, alias="LOG_LEVEL",
    )  # Defaults to DEBUG in development, INFO elsewhere

    # Database (Postgres in production or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./marketplace_dev.db",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Admin review queue
    verification_queue_include_pending: bool = Field(
        default=False, alias="VERIFICATION_QUEUE_INCLUDE_PENDING",
    )  # Also list VENDOR_PENDING applicants, not only VENDOR accounts

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.is_development else "INFO"


settings = Settings()
