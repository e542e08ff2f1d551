import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Money
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD").upper()

    # Rentals
    EXPIRING_RENTALS_DAYS = int(os.getenv("EXPIRING_RENTALS_DAYS", "30"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "false"))

config = Config()
