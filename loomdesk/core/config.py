# loomdesk/core/config.py
import os
from typing import List, Optional
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Loomdesk Challan Finance")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS (env takes priority)
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ))

    # ---------- Locale ----------
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Kolkata")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₹")

    # ---------- Challan defaults ----------
    DEFAULT_PAYMENT_TERMS_DAYS: int = int(
        os.getenv("DEFAULT_PAYMENT_TERMS_DAYS", "30"))
    DEFAULT_INTEREST_TYPE: str = os.getenv("DEFAULT_INTEREST_TYPE",
                                           "compound")
    CREDIT_WARNING_PERCENT: float = float(
        os.getenv("CREDIT_WARNING_PERCENT", "80") or 80.0)

    # seconds between live interest refreshes on detail screens
    LIVE_INTEREST_REFRESH_SECONDS: float = float(
        os.getenv("LIVE_INTEREST_REFRESH_SECONDS", "1") or 1.0)

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None


settings = Settings()
