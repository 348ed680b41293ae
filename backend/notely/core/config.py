from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AI providers (Groq primary, OpenAI fallback)
    GROQ_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None

    # Logging
    LOG_LEVEL: str | None = None
    DEBUG: bool = False

    # App
    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:3000"

    # API
    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "Notely AI"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
