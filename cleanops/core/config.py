from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./cleanops.db"

    # Payroll
    DEFAULT_HOURLY_RATE: float = 15.0

    # Recurring shift generation
    GENERATION_WEEKS_AHEAD: int = 4
    GENERATION_BATCH_LIMIT: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
