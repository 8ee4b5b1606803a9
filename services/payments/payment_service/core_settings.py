from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "eventra_payments"
    POSTGRES_USER: str = "eventra"
    POSTGRES_PASSWORD: str = "eventra"
    # Takes precedence over the POSTGRES_* parts when set (tests use SQLite)
    DATABASE_URL: Optional[str] = None
    RUN_MIGRATIONS: bool = True

    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    RESERVATIONS_SERVICE_URL: str = "http://reservation-service:8080"
    RESERVATIONS_TIMEOUT: float = 5.0

    STRIPE_SECRET_KEY: str = ""
    CHECKOUT_SUCCESS_URL: str = "http://localhost:3000/checkout/success"
    CHECKOUT_CANCEL_URL: str = "http://localhost:3000/checkout/cancel"
    CHECKOUT_CURRENCY: str = "PEN"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
