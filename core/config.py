# core/config.py
import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///library.db")
    database_pool_size: int = int(os.getenv("DATABASE_POOL_SIZE", "5"))
    database_max_overflow: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "10"))
    sqlite_busy_timeout: float = float(os.getenv("SQLITE_BUSY_TIMEOUT", "30"))  # seconds
    transaction_retries: int = int(os.getenv("TRANSACTION_RETRIES", "3"))

    # Fine policy
    fine_grace_period_days: int = int(os.getenv("FINE_GRACE_PERIOD_DAYS", "7"))
    fine_daily_rate: Decimal = Decimal(os.getenv("FINE_DAILY_RATE", "5"))
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "₹")

    # Application
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = field(default_factory=lambda: _split_origins(
        os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3005")
    ))


def configure_logging(level: str = None) -> None:
    """Configure root logging for the API process and CLI invocations."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = Settings()
