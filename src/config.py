from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Defaults offered to new plans
    default_rate_pct: Decimal = Decimal("4.85")
    default_term_years: int = 30

    # Export
    csv_filename: str = "amortization_recast_schedule.csv"

    # Dashboard
    dashboard_port: int = 8050


settings = Settings()
