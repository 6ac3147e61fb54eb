"""App settings - loaded from environment variables with defaults."""

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:9002",
    ]
    CORS_EXTRA_ORIGINS: str = os.getenv("CORS_EXTRA_ORIGINS", "")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Jerusalem")

    # Artificial delay before store reads, in milliseconds; 0 disables it
    SIMULATED_LATENCY_MS: int = int(os.getenv("SIMULATED_LATENCY_MS", "0"))

    SEED_DEMO_DATA: bool = _env_bool("SEED_DEMO_DATA", "true")

    COACH_USERNAME: str = os.getenv("COACH_USERNAME", "coach")
    SESSION_COOKIE_MAX_AGE_DAYS: int = int(os.getenv("SESSION_COOKIE_MAX_AGE_DAYS", "30"))


settings = Settings()
