from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    # ─────────────────────────────────────────────
    # App Identity
    # ─────────────────────────────────────────────
    APP_NAME: str = "Mini-HIDS Collector"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"
    API_PREFIX: str = "/api"

    # ─────────────────────────────────────────────
    # Server
    # ─────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # ─────────────────────────────────────────────
    # Ingestion Limits
    # ─────────────────────────────────────────────
    MAX_REQUEST_SIZE: int = 8_388_608
    MAX_HISTORY_PER_AGENT: int = 1000
    DEFAULT_HISTORY_LIMIT: int = 100

    # ─────────────────────────────────────────────
    # Liveness Windows
    # ─────────────────────────────────────────────
    ONLINE_WINDOW_SECONDS: int = 30
    ACTIVE_WINDOW_SECONDS: int = 300

    model_config = ConfigDict(
        env_prefix="MINIHIDS_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
