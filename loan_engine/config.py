"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "loan-engine"
    log_level: str = "INFO"

    # Calculation limits
    max_term_years: int = 50  # caps schedule length at 600 rows


settings = Settings()
