"""Settings configuration using pydantic-settings for environment variable management."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from dotenv import load_dotenv

load_dotenv(override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "tripwise"

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL_NAME: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.7

    JWT_SECRET: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 5760

    GENERATION_TIMEOUT_SECONDS: float = 120.0
    GENERATION_STALE_MINUTES: int = 5
    PLAN_COST_TOLERANCE: float = 0.05
    MAX_TRIP_DURATION_DAYS: int = 30

    CORS_ORIGINS: str = "*"

    APP_NAME: str = "Tripwise"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def validate_origins(cls, v):
        """Strip whitespace around the origin list."""
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def validate_generation_timeouts(self):
        """The provider call must give up before the stale sweep can fail a running plan."""
        if self.GENERATION_TIMEOUT_SECONDS >= self.GENERATION_STALE_MINUTES * 60:
            raise ValueError(
                "GENERATION_TIMEOUT_SECONDS must be less than GENERATION_STALE_MINUTES x 60"
            )
        return self

    def get_cors_origins(self) -> list[str]:
        """
        Parse comma-separated CORS origins into a list.

        Returns:
            List of origins (e.g., ['http://localhost:3000', 'https://tripwise.app'])
        """
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
