from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Level for swapform loggers")
    log_format: Literal["auto", "json", "console"] = Field(
        default="auto",
        description="auto renders to the console at DEBUG and JSON otherwise",
    )

    # Price feed
    prices_url: str = Field(
        default="https://interview.switcheo.com/prices.json",
        description="URL of the JSON price list",
    )
    request_timeout_seconds: float = Field(default=15.0, gt=0, description="Price fetch timeout")

    # Token icons
    token_icon_base_url: str = Field(
        default="https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens/",
        description="Base URL that token icon file names are appended to",
    )

    # Form defaults
    default_from_currency: str = Field(default="ETH", description="Preferred initial source token")
    default_to_currency: str = Field(default="USD", description="Preferred initial destination token")
    max_amount_preset: str = Field(default="10.5432", description="Amount filled in by the MAX shortcut")

    # Simulated execution
    simulated_success_rate: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Probability that a simulated swap succeeds",
    )
    simulated_latency_seconds: float = Field(
        default=1.5,
        ge=0.0,
        description="Delay before a simulated swap resolves",
    )

    def icon_url(self, currency: str) -> str:
        return f"{self.token_icon_base_url}{currency}.svg"


# Global settings instance
settings = Settings()
