"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./installments.db"
    snapshot_key: str = "installments"  # One snapshot row per tracker

    # Service
    service_name: str = "installment-tracker"
    log_level: str = "INFO"

    # Display only, amounts are never converted
    currency: str = "EGP"


settings = Settings()
