"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "credit-plans"
    log_level: str = "INFO"

    # Installment dates are computed as local midnights in this zone
    business_timezone: str = "America/Guatemala"

    # External Services
    credit_api_base: str = "http://localhost:8003"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    credit_api_max_retries: int = 3
    credit_api_backoff_base: float = 0.5  # Exponential backoff base in seconds


settings = Settings()
