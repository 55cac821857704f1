"""
Конфигурация приложения.
Все значения читаются из переменных окружения и файла .env.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Конфигурация подключения к PostgreSQL."""

    model_config = SettingsConfigDict(env_prefix="DB_", env_file=".env", extra="ignore")

    host: str = "localhost"
    port: int = 5432
    user: str = "flashdeck"
    password: str = "flashdeck"
    name: str = "flashdeck"
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False

    @property
    def async_url(self) -> str:
        """URL для asyncpg драйвера."""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
        )

    @property
    def sync_url(self) -> str:
        """URL для psycopg2 драйвера (offline-режим alembic)."""
        return (
            f"postgresql+psycopg2://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
        )


class JWTConfig(BaseSettings):
    """Конфигурация JWT токенов."""

    model_config = SettingsConfigDict(env_prefix="JWT_", env_file=".env", extra="ignore")

    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class LoggingConfig(BaseSettings):
    """Конфигурация логирования."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = "INFO"
    # "json" - структурированные логи, иначе цветной консольный формат
    format: str = "console"

    @property
    def is_json(self) -> bool:
        return self.format.lower() == "json"


class MetricsConfig(BaseSettings):
    """Конфигурация Prometheus метрик."""

    model_config = SettingsConfigDict(env_prefix="METRICS_", env_file=".env", extra="ignore")

    enabled: bool = True


class AppConfig(BaseSettings):
    """Общая конфигурация приложения."""

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    name: str = "flashdeck"
    version: str = "1.0.0"
    debug: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Список CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class Settings:
    """Агрегатор всех конфигураций."""

    def __init__(self) -> None:
        self.db = DatabaseConfig()
        self.jwt = JWTConfig()
        self.logging = LoggingConfig()
        self.metrics = MetricsConfig()
        self.app = AppConfig()


@lru_cache
def get_settings() -> Settings:
    """Получить синглтон настроек (кешируется)."""
    return Settings()


settings = get_settings()
