from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, PostgresDsn, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env.docker",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=True)


class PgDbSettings(CustomSettings):
    POSTGRES_ENGINE: str = Field(default="postgresql+asyncpg")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: SecretStr = Field(default="postgres")
    POSTGRES_DB: str = Field(default="chat")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: PostgresDsn | str = Field(default="")
    POOL_SIZE: int = Field(default=5, ge=1)
    STATEMENT_TIMEOUT_MS: int = Field(default=8000, ge=0)

    @model_validator(mode="before")
    def validate_postgres_dsn(cls, data: dict):
        if isinstance(data, dict) and not data.get("DATABASE_URL"):
            _built_uri = PostgresDsn.build(
                scheme=data.get("POSTGRES_ENGINE", "postgresql+asyncpg"),
                username=data.get("POSTGRES_USER", "postgres"),
                password=data.get("POSTGRES_PASSWORD", "postgres"),
                host=data.get("POSTGRES_HOST", "localhost"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=data.get("POSTGRES_DB", "chat"),
            ).unicode_string()
            data["DATABASE_URL"] = _built_uri
        return data


class AuthSettings(CustomSettings):
    """Password hashing configuration.

    Set via env vars:
    - BCRYPT_ROUNDS
    - SALT_BYTES
    """

    BCRYPT_ROUNDS: int = Field(default=14, ge=4, le=31)
    SALT_BYTES: int = Field(default=16, ge=8, le=32)


class MessageSettings(CustomSettings):
    """Defaults stored for media messages sent without explicit metadata.

    Set via env vars:
    - IMAGE_WIDTH / IMAGE_HEIGHT
    - VIDEO_LENGTH / VIDEO_SOURCE
    - MAX_PAGE_SIZE
    """

    IMAGE_WIDTH: int = Field(default=100)
    IMAGE_HEIGHT: int = Field(default=200)
    VIDEO_LENGTH: int = Field(default=300)
    VIDEO_SOURCE: str = Field(default="YouTube")
    MAX_PAGE_SIZE: int = Field(default=500)


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: PgDbSettings = Field(default_factory=PgDbSettings)
    AUTH: AuthSettings = Field(default_factory=AuthSettings)
    MESSAGES: MessageSettings = Field(default_factory=MessageSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
