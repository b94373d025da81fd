"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from sqlalchemy.engine import URL
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TripMaster"
    APP_VERSION: str = "2.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    DATABASE_URL: str = ""  # Full URL; composed from the DB_* parts when empty
    DB_DRIVER: str = "mysql+pymysql"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "tripmaster"
    DB_USER: str = "tripmaster"
    DB_PASSWORD: str = ""
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 10  # Seconds to wait for a pooled connection
    DB_POOL_RECYCLE: int = 3600
    DB_CONNECT_ATTEMPTS: int = 3
    DB_CONNECT_RETRY_DELAY: float = 2.0
    DB_QUERY_RETRY_DELAY: float = 1.0
    DB_AUTO_CREATE: bool = True

    # JWT
    SECRET_KEY: str = "tripmaster-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    ENFORCE_TOKEN_EXPIRY: bool = False  # Tokens past "exp" are still accepted unless enabled

    # Passwords
    BCRYPT_ROUNDS: int = 10
    MIN_PASSWORD_LENGTH: int = 6

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # AMAP place search
    AMAP_API_KEY: str = ""
    AMAP_API_URL: str = "https://restapi.amap.com/v3"
    AMAP_TIMEOUT: float = 10.0

    @property
    def database_url(self) -> str:
        """Return DATABASE_URL, or build one from the individual DB_* settings."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
