from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKING_API_URL: str | None = None
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0

    BUSINESS_TIMEZONE: str = "America/Los_Angeles"

    CANCEL_LEAD_HOURS: int = 24
    RESCHEDULE_LEAD_HOURS: int = 24

    SESSION_STORE: str = "memory"
    SESSION_DATA_DIR: str = "./data/sessions"

    APPOINTMENTS_PAGE_SIZE: int = 10


settings = Settings()
