"""
Configuration de l'application / Application configuration.
Chargee depuis .env ou les variables d'environnement via pydantic-settings.
Loaded from .env or environment variables through pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "FleetLedger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # SQLite hors-ligne par defaut ; postgresql+asyncpg://... en production
    # Offline SQLite by default; postgresql+asyncpg://... in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./fleetledger.db"

    # Client mobile Expo en dev / Expo mobile client in dev
    CORS_ORIGINS: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    # Limites par IP sur l'authentification / Per-IP limits on authentication
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_REGISTER: str = "3/minute"

    CURRENCY_SYMBOL: str = "₹"
    SEED_DEMO_DATA: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
