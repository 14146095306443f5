"""
Application configuration settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Public site the sitemaps point at
    SITE_URL: str = "https://kuke.ink"

    # Community backend API
    API_BASE: str = "https://api.kuke.ink"
    API_TIMEOUT: float = 15.0  # seconds per request
    POSTS_ENDPOINT: str = "/api/posts"
    NEWS_ENDPOINT: str = "/api/website/news/"
    NEWS_LIMIT: int = 1000

    # Post pagination limits
    POSTS_PER_PAGE: int = 50
    POSTS_MAX_PAGES: int = 20  # hard ceiling regardless of backend total
    POSTS_MAX_ITEMS: int = 10000

    # HTTP caching of generated documents
    SITEMAP_CACHE_SECONDS: int = 3600

    # Monitoring and Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("SITE_URL", "API_BASE")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cache_control(self) -> str:
        """Cache-Control header value for sitemap responses"""
        age = self.SITEMAP_CACHE_SECONDS
        return f"public, max-age={age}, s-maxage={age}"


# Create settings instance
settings = Settings()

# Crawlers get redirected away from plain http in production
if settings.ENVIRONMENT == "production" and not settings.SITE_URL.startswith("https://"):
    raise ValueError(f"SITE_URL must use https in production, got {settings.SITE_URL}")
