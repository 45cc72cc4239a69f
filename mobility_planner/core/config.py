# mobility_planner/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Mobility Planner API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Upstream mobility-data provider feeds
    PROVIDER_VEHICLES_URL: str = (
        "https://poppy.red/api/v3/cities/a88ea9d0-3d5e-4002-8bbf-775313a5973c/vehicles"
    )
    PROVIDER_ZONES_URL: str = (
        "https://poppy.red/api/v3/geozones/62c4bd62-881c-473e-8a6b-fbedfd276739"
    )
    # No public default; must be configured to estimate prices
    PROVIDER_PRICING_URL: Optional[str] = None
    PROVIDER_TIMEOUT_S: float = 10.0

    # Optional wall-clock budget for a whole trip plan, checked between legs
    PLANNING_DEADLINE_S: Optional[float] = None


settings = Settings()
