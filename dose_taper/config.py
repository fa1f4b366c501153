"""
Runtime configuration for the dose taper calculators.
"""

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .models.result import Mode, ReductionMethod

# Load environment variables
load_dotenv()


class Settings(BaseModel):
    """Settings read from DOSE_TAPER_* environment variables."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    log_level: str = "WARNING"
    default_mode: Mode = Mode.CLINICAL
    default_method: ReductionMethod = ReductionMethod.ABSOLUTE
    percentage_rate: float = Field(default=10.0, gt=0, lt=100)
    report_dir: str = "reports"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        values = {
            "log_level": os.getenv("DOSE_TAPER_LOG_LEVEL"),
            "default_mode": os.getenv("DOSE_TAPER_DEFAULT_MODE"),
            "default_method": os.getenv("DOSE_TAPER_DEFAULT_METHOD"),
            "percentage_rate": os.getenv("DOSE_TAPER_PERCENTAGE_RATE"),
            "report_dir": os.getenv("DOSE_TAPER_REPORT_DIR"),
        }
        settings = cls(**{key: value for key, value in values.items() if value})
        return settings.model_copy(update={"log_level": settings.log_level.upper()})


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
