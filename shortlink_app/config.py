from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "ShortLink"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Database
    database_file: str = "./data/urls.db"
    database_url: Optional[str] = None  # Full SQLAlchemy URL, overrides database_file

    # URL Shortener specific
    base_url: Optional[str] = None  # Falls back to the request's scheme + host
    short_code_length: int = 7
    max_code_attempts: int = 10
    short_code_strategy: str = "random"  # Options: "random", "secure"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def sqlalchemy_database_url(self) -> str:
        """SQLAlchemy URL for the URL store"""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.database_file}"


# Create settings instance
settings = Settings()
