"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./worth.db"

    # Service
    service_name: str = "worth-gateway"
    log_level: str = "INFO"

    # Serve synthesized histories instead of stored snapshots
    demo_mode: bool = False

    # Balance used for accounts that have no snapshots at all
    missing_balance_minor: int = 0


settings = Settings()
