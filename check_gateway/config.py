"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External check store (REST)
    check_store_url: str = "http://localhost:54321"
    check_store_api_key: str = ""

    # Service
    service_name: str = "check-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Analytics defaults, used when a snapshot carries no settings
    default_high_value_threshold: float = 50_000
    default_alert_days: int = 3
    default_currency: str = "MAD"

    # When false the outgoing window stays fixed at 3 days regardless of alert_days
    use_alert_days_window: bool = False

    # Presentation
    month_label_locale: str = "fr"
    recent_checks_limit: int = 5
    page_size: int = 8


settings = Settings()
