from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Hosting Billing"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/database.db"
    REDIS_URL: str = "redis://localhost:6379"

    DEFAULT_CURRENCY: str = "IDR"

    # Renewal billing
    RENEWAL_DAYS_BEFORE: int = 30
    RENEWAL_DUE_DAYS_BEFORE_EXPIRY: int = 7
    RENEWAL_REQUIRE_AUTO_RENEW: bool = True
    RENEWAL_LOYALTY_DISCOUNT_PERCENT: int = 5
    RENEWAL_LOYALTY_MIN_MONTHS: int = 12
    SETUP_INVOICE_DUE_DAYS: int = 14
    DOMAIN_RENEWAL_PRICE: int = 150000  # flat price, not read from domain_prices

    # Invoice numbering
    INVOICE_NUMBER_MAX_RETRIES: int = 3

    # Domain registrar API
    DOMAIN_API_KEY: str = ""
    DOMAIN_API_BASE_URL: str = "https://api.rdash.id/v1"
    DOMAIN_API_TIMEOUT: float = 10.0
    DOMAIN_API_REQUEST_DELAY: float = 0.1  # seconds between bulk lookups

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def domain_api_enabled(self) -> bool:
        return bool(self.DOMAIN_API_KEY)


settings = Settings()
