from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Luxe Beauty Studio"
    BUSINESS_TIMEZONE: str = "Asia/Kolkata"
    FRONTEND_URL: str = "https://beauty-parlour-delta.vercel.app"

    STORE_PROVIDER: str = "memory"
    MONGO_URI: str | None = None
    MONGO_DB_NAME: str = "salon"
    MONGO_TIMEOUT_MS: int = 5000

    TWILIO_SID: str | None = None
    TWILIO_TOKEN: str | None = None
    TWILIO_WHATSAPP_FROM: str | None = None
    TWILIO_API_BASE_URL: str = "https://api.twilio.com/2010-04-01"
    NOTIFY_COUNTRY_CODE: str = "+91"
    NOTIFY_TIMEOUT_SECONDS: float = 10.0

    SIDE_EFFECT_TIMEOUT_SECONDS: float = 5.0

    SLOT_DAY_START_HOUR: int = 9
    SLOT_DAY_END_HOUR: int = 18
    SLOT_INTERVAL_MINUTES: int = 60


settings = Settings()
