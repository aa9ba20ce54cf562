from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Your Business"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    HOME_BASE_ADDRESS: str | None = None

    CURRENT_GRACE_MINUTES: int = 10
    PENDING_EXPIRY_MINUTES: int = 30

    SCHEDULING_API_BASE_URL: str | None = None
    SCHEDULING_API_TOKEN: str | None = None
    VALIDATION_TIMEOUT_SECONDS: float = 10.0

    GOOGLE_MAPS_API_KEY: str | None = None
    GOOGLE_MAPS_BASE_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    TRAVEL_TIME_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
