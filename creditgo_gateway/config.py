"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (key-value profile store)
    database_url: str = "sqlite:///./creditgo.db"
    storage_namespace: str = "creditgo-storage"

    # Service
    service_name: str = "creditgo-gateway"
    log_level: str = "INFO"

    # SMS sources
    demo_mode: bool = True
    message_export_path: str | None = None
    sms_max_messages: int = 200


settings = Settings()
