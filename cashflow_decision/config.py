"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "cashflow-decision"
    log_level: str = "INFO"

    # Request defaults and bounds
    default_horizon_days: int = 90
    max_horizon_days: int = 366
    default_safety_floor: float = 0.0
    default_tie_break: str = "expenses_first"  # expenses_first | income_first


settings = Settings()
