from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+psycopg2://mentor4all:mentor4all@db:5432/mentor4all"

    # Async queue (optional)
    ASYNC_QUEUE_ENABLED: bool = False
    REDIS_URL: str = "redis://redis:6379/0"
    RQ_QUEUE_NAME: str = "mentor4all"
    RQ_JOB_TIMEOUT_SECONDS: int = 600
    RQ_JOB_RETRY_MAX: int = 1

    # Auth
    JWT_SECRET: str = "changethis"  # Should be changed in .env
    JWT_EXPIRES_SECONDS: int = 3600  # 1 hour

    # Scheduled jobs (Cloud Scheduler / cron) send this in X-Cron-Secret
    CRON_SECRET: str = "dev-cron-secret-change-in-prod"
    REMINDER_WINDOW_HOURS: int = 24

    # Avatar storage
    STORAGE_ROOT: str = "storage"
    PUBLIC_STORAGE_URL: str = "http://localhost:8000/storage"

    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
