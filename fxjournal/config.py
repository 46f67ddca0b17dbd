import os
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class Settings(BaseModel):
    """
    Runtime configuration, read from the environment.
    Unset URLs disable the matching adapter.
    """
    journal_api_url: Optional[str] = None
    journal_api_token: Optional[str] = None
    database_url: Optional[str] = None
    redis_url: Optional[str] = None
    cache_ttl_seconds: int = 60
    journal_page_size: int = 500
    http_timeout_seconds: float = 10.0
    max_chart_labels: int = 8
    breakeven_tolerance: Decimal = Decimal("0.01")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        env = {
            "journal_api_url": os.getenv("JOURNAL_API_URL"),
            "journal_api_token": os.getenv("JOURNAL_API_TOKEN"),
            "database_url": os.getenv("DATABASE_URL"),
            "redis_url": os.getenv("REDIS_URL"),
            "cache_ttl_seconds": os.getenv("CACHE_TTL_SECONDS"),
            "journal_page_size": os.getenv("JOURNAL_PAGE_SIZE"),
            "http_timeout_seconds": os.getenv("HTTP_TIMEOUT_SECONDS"),
            "max_chart_labels": os.getenv("MAX_CHART_LABELS"),
            "breakeven_tolerance": os.getenv("BREAKEVEN_TOLERANCE"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        # Empty strings count as unset
        return cls(**{k: v for k, v in env.items() if v})
