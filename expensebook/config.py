import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _csv_env(name, default):
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'expensebook.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    PAGE_SIZE = 10
    RECENT_DAYS = 3
    STATS_PERIODS = _csv_env("STATS_PERIODS", ("day", "week", "month", "year"))
    TIME_PERIODS = ("morning", "midday", "afternoon", "evening")
    PAYMENT_METHODS = _csv_env(
        "PAYMENT_METHODS",
        (
            "Industrial Bank Credit Card",
            "SPDB Credit Card",
            "inMotion HK Credit Card",
            "CMB Debit Card",
            "Huabei",
        ),
    )
    CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "¥")

    # Seconds between keep-alive comments on the change stream
    EVENTS_HEARTBEAT = float(os.getenv("EVENTS_HEARTBEAT", "15"))


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
    EVENTS_HEARTBEAT = 0.05
