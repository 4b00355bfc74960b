from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="WANTBOARD_")

    app_name: str = "WantBoard"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"
    user_agent: str = "WantBoard/1.0"

    # Scryfall asks for ~10 requests/second, so space calls 100ms apart
    request_timeout_seconds: float = 10.0
    request_spacing_seconds: float = 0.1

    cache_ttl_hours: float = 24.0
    # None keeps every distinct query until the process exits
    cache_max_entries: int | None = None

    check_catalog_on_startup: bool = True


settings = Settings()


# =============================================================================
# WANT LIST LIMITS
# =============================================================================

# Copies of a single card specification a user may want
MAX_QUANTITY = 99

# Longest card name accepted before hitting the catalog
MAX_CARD_NAME_LENGTH = 100

# Distinct card specifications (name + edition + finish) per user
MAX_UNIQUE_CARDS = 50

# Rendered summary bound (Discord embed description limit)
SUMMARY_MAX_CHARS = 4000
