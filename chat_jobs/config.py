from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Chat Jobs"
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    max_message_length: int = 1000
    list_preview_length: int = 100
    job_retention_seconds: int = 30 * 60
    cleanup_interval_seconds: int = 5 * 60
    intake_delay_ms: tuple[int, int] = (1000, 2000)
    analysis_delay_ms: tuple[int, int] = (2000, 4000)
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
