"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def parse_interest_rate(raw: str) -> Decimal:
    """
    Parse the INTEREST_RATE setting.

    The rate is a multiplier on the shortfall, so it must be a
    finite decimal greater than 1.
    """
    try:
        rate = Decimal(raw)
    except InvalidOperation:
        raise ValueError(
            f"INTEREST_RATE must be a decimal number, got {raw!r}"
        ) from None
    if not rate.is_finite() or rate <= 1:
        raise ValueError(f"INTEREST_RATE must be greater than 1, got {raw!r}")
    return rate


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Overdraft Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/overdraft_ledger"
    )

    # Ledger rules
    # Multiplier charged once on the shortfall when a withdrawal
    # pushes an account into overdraft. Parsed as Decimal so the
    # interest calculation never touches floating point.
    INTEREST_RATE: Decimal = parse_interest_rate(
        os.getenv("INTEREST_RATE", "1.02")
    )
    # A customer with this many fraud reversals is frozen
    MAX_FRAUD_REVERSALS: int = int(os.getenv("MAX_FRAUD_REVERSALS", "2"))

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
