from pydantic import Field, field_validator, model_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: Literal["dev", "prod"] = Field(default="dev", description="Application environment")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level used by the command line tools")

    # User store: "postgres" (production) or "memory" (testing)
    USER_STORE: Literal["postgres", "memory"] = Field(default="postgres", description="Backend used for user accounts")

    # Database Configuration
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="photo_accounts", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")
    DATABASE_URL: Optional[str] = Field(default=None, description="Full database URL (overrides individual DB_* settings)")
    DB_POOL_SIZE: int = Field(default=5, description="Database connection pool size")
    DB_ECHO: bool = Field(default=False, description="Enable SQL query logging")

    # Credentials
    BCRYPT_ROUNDS: int = Field(default=10, description="bcrypt cost factor for stored passwords")
    GENERATED_PASSWORD_BYTES: int = Field(default=24, description="Random bytes used for generated admin passwords")

    @computed_field
    @property
    def database_url_computed(self) -> str:
        """
        Compute the database URL from individual settings or use DATABASE_URL if provided.

        Returns:
            str: PostgreSQL connection URL for asyncpg
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url

        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("GENERATED_PASSWORD_BYTES")
    @classmethod
    def validate_generated_password_bytes(cls, v: int) -> int:
        if v < 12:
            raise ValueError("GENERATED_PASSWORD_BYTES must be at least 12")
        return v

    @model_validator(mode="after")
    def set_environment_defaults(self):
        """Reject weak credential settings in production."""
        if self.ENVIRONMENT == "prod":
            if self.BCRYPT_ROUNDS < 10:
                raise ValueError(
                    "BCRYPT_ROUNDS must be at least 10 in production. "
                    "Raise it in your .env file."
                )
            if self.USER_STORE == "memory":
                logger.warning("USER_STORE=memory in production, accounts will not survive a restart")
        return self


settings = Settings()
