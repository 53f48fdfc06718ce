"""
Application configuration settings.

This file loads settings from environment variables.
For local development, create a .env file based on .env.example
"""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATA_DIR: Directory holding master.db and one tenant_<id>.db per company
        APP_NAME: Name of the application
        DEBUG: Enable debug mode (echoes SQL when True)
    """

    # Storage location
    # master.db lives here, plus tenant_<company_id>.db for every company
    DATA_DIR: str = "data"

    # Application settings
    APP_NAME: str = "Commitments Ledger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-this-in-production-min-32-chars"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Bootstrap data seeded into the master directory on first boot
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin"
    DEFAULT_CURRENCY: str = "SAR"

    class Config:
        # Load variables from .env file if it exists
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR)

    @property
    def master_database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.data_path / 'master.db'}"


# Create a single settings instance to use throughout the app
settings = Settings()
