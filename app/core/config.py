"""
Application configuration.
All settings are loaded from environment variables.
Use env.example as a reference for required variables.
"""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    IMPORTANT: Credentials have no defaults - they MUST be set in .env file.
    """

    # ===========================================
    # APPLICATION
    # ===========================================
    app_env: str = "local"
    # CORS: через запятую (например http://localhost:3000,https://servicewechat.com). Пусто = дефолтный список в коде.
    cors_origins: str = ""
    # Часовой пояс, в котором считается «сегодня» для дня публикации вакансии.
    app_timezone: str = "Asia/Shanghai"

    # ===========================================
    # DATABASE (PostgreSQL)
    # ===========================================
    database_url: str  # Required, no default
    db_connect_timeout: int = 5

    # ===========================================
    # REDIS & CELERY
    # ===========================================
    redis_url: str  # Required, no default
    redis_socket_timeout: float = 2.0
    celery_broker_url: str  # Required, no default
    celery_result_backend: str  # Required, no default

    # ===========================================
    # AUTH (bearer JWT issued by the WeChat login service)
    # ===========================================
    jwt_secret_key: str  # Required, no default
    jwt_algorithm: str = "HS256"

    # ===========================================
    # SHARE UNLOCK
    # ===========================================
    share_unlock_retention_days: int = 7  # записи разблокировки старше окна удаляются
    share_unlock_cache_ttl: int = 3600  # 1 hour, positive answers only
    share_unlock_purge_minute: str = "15"  # crontab minute for hourly purge
    share_statistics_max_days: int = 365
    share_ranking_cache_ttl: int = 3600  # 1 hour

    # ===========================================
    # LOGGING
    # ===========================================
    log_file: str | None = None
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @field_validator("app_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown IANA zone names at startup."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown app_timezone: {v}") from e
        return v

    @field_validator("share_unlock_retention_days")
    @classmethod
    def validate_retention(cls, v: int) -> int:
        if v < 1:
            raise ValueError("share_unlock_retention_days must be >= 1")
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Ensure JWT secret is reasonably secure."""
        if len(v) < 16:
            raise ValueError("jwt_secret_key must be at least 16 characters")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Игнорировать неизвестные поля из .env


settings = Settings()
