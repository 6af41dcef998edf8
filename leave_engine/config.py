"""Application configuration via environment variables."""

import json
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    # Civil calendar
    TIMEZONE: str = "Asia/Taipei"

    # Work schedule (HH:MM)
    WORK_START: str = "08:30"
    BREAK_START: str = "12:00"
    BREAK_END: str = "13:00"
    WORK_END: str = "17:30"
    STANDARD_HALF_DAY_MINUTES: int = 240

    # Leave request rules
    LEAVE_END_FLEX_MINUTES: int = 60

    # Leave entitlement (days per year)
    PERSONAL_LEAVE_DAYS: int = 14
    SICK_LEAVE_DAYS: int = 30
    SPECIAL_LEAVE_MAX_DAYS_PER_YEAR: int = 30

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
