# salonbook/config.py
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./salon.db"

    JWT_SECRET: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Flat surcharge for at-home visits, in minor units
    AT_HOME_SURCHARGE: int = 500

    DEFAULT_SPECIALTY: str = "General"
    DEFAULT_ZONE: str = "Unknown"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

settings = Settings()
