from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "CLOOFY Control Panel"
    ENVIRONMENT: str = "local"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ==============================
    # Database
    # ==============================
    # "memory://" keeps all data in-process (nothing persisted).
    DATABASE_URL: str = "sqlite:///./cloofy.db"
    STORAGE_LOCK_TIMEOUT_SECONDS: float = 30.0
    SEED_ON_STARTUP: bool = True

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Dashboard & Reports
    # ==============================
    SALES_WINDOW_DAYS: int = 30
    CURRENCY_LABEL: str = "LKR"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
