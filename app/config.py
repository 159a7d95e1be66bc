from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    SECRET_KEY has no default: the application refuses to start without it.
    """

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # JWT signing secret for session tokens
    SECRET_KEY: str

    # Cost factor for password hashing
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "Tenant Notes API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("SECRET_KEY must be set to a non-empty value")
        return value

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def bcrypt_rounds_in_range(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def secure_cookies(self) -> bool:
        """Session cookie gets the Secure flag everywhere except local development"""
        return not self.is_development


# Global settings instance
settings = Settings()
