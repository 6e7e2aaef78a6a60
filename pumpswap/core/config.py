import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

# names both the stdlib logging module and loguru know
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def check_log_level(level) -> str:
    level = str(level).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


class Settings(BaseModel):
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))
    log_service: str = Field(default=os.getenv("PUMPSWAP_LOG_SERVICE", "pumpswap"))
    default_slippage: int = Field(default=int(os.getenv("PUMPSWAP_DEFAULT_SLIPPAGE", "1")))
    log_json: bool = Field(default=os.getenv("PUMPSWAP_LOG_JSON", "true").lower() in ("1", "true", "yes"))

    @field_validator("log_level", mode="before")
    @classmethod
    def known_level(cls, v):
        return check_log_level(v)

    @field_validator("default_slippage")
    @classmethod
    def slippage_percent(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("default_slippage must be between 0 and 100")
        return v


settings = Settings()
