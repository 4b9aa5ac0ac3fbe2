"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """GameScope application settings loaded from environment variables."""

    # Upstream catalog (RAWG)
    rawg_api_key: str = ""
    rawg_base_url: str = "https://api.rawg.io/api"
    rawg_timeout: float = 15.0
    user_agent: str = "GameScope-Hub/1.0"

    # Trailer search (YouTube Data API); empty key disables it
    youtube_api_key: str = ""
    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"
    youtube_timeout: float = 10.0

    # CORS (comma-separated extra origins, in addition to localhost defaults)
    cors_origins: str = ""

    log_level: str = "INFO"

    # Catalog browsing
    trending_window_days: int = 30

    # Pagination bounds applied at the HTTP boundary
    max_page: int = 100
    max_page_size: int = 40
    default_page_size: int = 20

    model_config = {
        "env_prefix": "GAMESCOPE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def rawg_configured(self) -> bool:
        return bool(self.rawg_api_key)


# Singleton instance
settings = Settings()
