"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "sphere-engine"
    log_level: str = "INFO"

    # Data source (Sphere REST API)
    sphere_api_base: str = "http://localhost:3000"
    sphere_api_token: str | None = None
    http_timeout_seconds: float = 5.0
    transaction_fetch_limit: int = 1000

    # Safe-to-Spend
    safe_to_spend_horizon_days: int = 7
    default_user_buffer: float = 200.0

    # Budget pace
    pace_tolerance_pct: float = 5.0  # on-track band above expected progress
    pace_warning_threshold_pct: float = 20.0  # over expected spend before "over"
    near_limit_pct: float = 80.0

    # Debt urgency (days until due)
    urgent_days: int = 3
    soon_days: int = 7
    high_utilization_pct: float = 30.0
    payoff_max_months: int = 600  # 50 years

    # Investments
    default_annual_return_pct: float = 7.0
    default_monthly_contribution: float = 500.0


settings = Settings()
