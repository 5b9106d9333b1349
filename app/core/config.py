# app/core/config.py

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "CashCompass API"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str
    DB_CONNECT_RETRIES: int = 5
    DB_RETRY_DELAY: float = 0.5

    # JWT / Security Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 43200  # 30 days
    PASSWORD_MIN_LENGTH: int = 6

    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:5173"

    # Reporting
    DEFAULT_MONTHLY_BUDGET: float = 10000.0
    REPORT_MONTHS_DEFAULT: int = 6

    # Profile settings
    SUPPORTED_CURRENCIES: List[str] = [
        "USD", "EUR", "GBP", "INR", "JPY", "CNY", "KRW", "BRL", "RUB", "AUD",
        "CAD", "CHF", "SGD", "MYR", "THB", "IDR", "PHP", "VND", "ZAR", "MXN",
    ]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_supabase(self) -> bool:
        """Check if we're using Supabase database"""
        return any(d in self.DATABASE_URL for d in [
            "supabase.co",
            "supabase.com",
            "pooler.supabase",
        ])

# Create a global settings instance
settings = Settings()
