"""
backend/oddsboard/config.py

Purpose:
    Central settings loading for providers, the odds board pipeline, and
    logging.

Dependencies:
    - pydantic-settings
    - pathlib
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Prefer backend/.env, fallback to project-root .env.
_BACKEND_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
_ROOT_ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    # The Odds API (commercial aggregator). Empty key disables the provider.
    ODDS_API_KEY: str = ""
    THEODDSAPI_BASE_URL: str = "https://api.the-odds-api.com/v4"
    ODDS_REGIONS: str = "us"
    ODDS_MARKETS: str = "h2h,spreads,totals"
    ODDS_BOOKMAKERS: str = "draftkings,betmgm,fanduel,caesars"
    ODDS_CACHE_TTL_SECONDS: int = 300  # 5 minutes

    # Books from the aggregator that may corroborate a price
    ODDS_CONSENSUS_BOOKMAKERS: str = "fanduel,draftkings,betmgm,caesars"
    CONSENSUS_MIN_SOURCES: int = 2

    # ESPN public scoreboard (no key)
    ESPN_BASE_URL: str = "https://site.api.espn.com/apis/site/v2/sports"
    ESPN_CACHE_TTL_SECONDS: int = 120

    # HTTP client
    HTTP_TIMEOUT_SECONDS: float = 15.0
    HTTP_MAX_RETRIES: int = 2
    HTTP_BASE_DELAY_SECONDS: float = 2.0

    # Bounded wait per provider before the board proceeds with partial results
    PROVIDER_WAIT_SECONDS: float = 8.0

    # Calendar day used for "games on date" windows
    DISPLAY_TIMEZONE: str = "America/New_York"

    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": (str(_BACKEND_ENV_FILE), str(_ROOT_ENV_FILE)),
        "extra": "ignore",
    }


def csv_setting(value: str) -> list[str]:
    """Split a comma-separated setting into lower-cased, non-empty items."""
    return [part.strip().lower() for part in str(value or "").split(",") if part.strip()]


settings = Settings()
