#app/core/settings.py
# app/core/settings.py
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing import Annotated, List, Optional
from pydantic import field_validator

class Settings(BaseSettings):
    """
    Environment settings for the progress board service.
    Values come from the environment or .env.
    """
    # Database
    DATABASE_URL: str

    # JWT / Security
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ANONYMOUS_TOKEN_EXPIRE_MINUTES: int = 720

    # First user (created by app.initial_data)
    FIRST_SUPERUSER_USERNAME: Optional[str] = None
    FIRST_SUPERUSER_EMAIL: Optional[str] = None
    FIRST_SUPERUSER_PASSWORD: Optional[str] = None

    # Archive export sink
    EXPORT_DIR: str = "exports"

    # Live views (SSE)
    SSE_QUEUE_SIZE: int = 100
    SSE_PING_SECONDS: int = 15

    # App meta
    ENV: str = "development"
    DEBUG: bool = True
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]

    # Split a comma separated ALLOWED_ORIGINS string from .env
    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
