import os
from dotenv import load_dotenv

load_dotenv()

GEO_STATS_COUNT_SOURCES = ("detail", "daily")


class Settings:
    # If DB_URL is not provided, fall back to a local sqlite file for ease of local
    # development. Production runs against Postgres with the schema managed by alembic.
    DB_URL: str = os.getenv("DB_URL") or "sqlite:///./dev.db"

    PROJECT_NAME: str = os.getenv("PROJECT_NAME") or "Subnet Measurements API"

    LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").upper()

    # Comma separated list, "*" allows every origin
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in (os.getenv("CORS_ORIGINS") or "*").split(",")
        if origin.strip()
    ]

    # "detail" counts geo rows, "daily" reports the subnet-wide daily counters
    GEO_STATS_COUNT_SOURCE: str = (os.getenv("GEO_STATS_COUNT_SOURCE") or "detail").lower()

    def __init__(self):
        # Fail at startup instead of on the first stats request
        if self.GEO_STATS_COUNT_SOURCE not in GEO_STATS_COUNT_SOURCES:
            raise ValueError(
                f"GEO_STATS_COUNT_SOURCE must be one of {GEO_STATS_COUNT_SOURCES}, "
                f"got '{self.GEO_STATS_COUNT_SOURCE}'"
            )


settings = Settings()
