"""
Pydantic settings for the LocalAgent backend.
Centralizes all environment variable configuration with validation.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LARGE_RETAILER_DOMAINS = [
    'emag.ro',
    'altex.ro',
    'flanco.ro',
    'dedeman.ro',
    'ikea.ro',
    'carrefour.ro',
    'kaufland.ro',
    'lidl.ro',
    'auchan.ro',
    'mediamarkt.ro',
]

# Matched as substrings of host + path, so "blog." also catches subdomains
DEFAULT_MEDIA_SITE_PATTERNS = [
    'zf.ro',
    'digi24.ro',
    'stirileprotv.ro',
    'hotnews.ro',
    'mediafax.ro',
    'adevarul.ro',
    'libertatea.ro',
    'gandul.ro',
    'ziare.com',
    'antena3.ro',
    'romaniatv.net',
    'observatornews.ro',
    'realitatea.net',
    'capital.ro',
    'forbes.ro',
    'businessmagazin.ro',
    'wall-street.ro',
    'profit.ro',
    'economica.net',
    'startupcafe.ro',
    'g4media.ro',
    'wikipedia.org',
    'facebook.com',
    'instagram.com',
    'youtube.com',
    'tiktok.com',
    'reddit.com',
    'blog.',
    'blogspot.',
    'wordpress.com',
    'medium.com',
]

DEFAULT_SMALL_SELLER_DOMAINS = [
    'tricouriador.ro',
    'fashionup.ro',
    'molly.ro',
    'bonami.ro',
    'vivre.ro',
    'noriel.ro',
    'originals.ro',
    'inart.ro',
]

DEFAULT_SEARCH_PROVIDER_HOSTS = ['google.com', 'google.ro', 'serpapi.com', 'tavily.com']


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Django
    django_secret_key: str = Field(
        default="django-insecure-dev-key-change-in-production",
        description="Django secret key",
    )
    django_debug: bool = Field(default=True, description="Debug mode")
    django_allowed_hosts: str = Field(
        default="localhost,127.0.0.1",
        description="Comma-separated allowed hosts",
    )

    # Database
    db_engine: str = Field(default="postgresql", description="postgresql or sqlite")
    db_name: str = Field(default="localagent", description="Database name")
    db_host: str = Field(default="localhost", description="Database host")
    db_user: str = Field(default="postgres", description="Database user")
    db_password: str = Field(default="", description="Database password")
    db_port: int = Field(default=5432, description="Database port")

    # Supabase (identity provider)
    supabase_url: Optional[str] = Field(default=None, description="Supabase URL")
    supabase_key: Optional[str] = Field(default=None, description="Supabase service role key")

    # Web search providers
    serp_api_key: Optional[str] = Field(default=None, description="SerpAPI key")
    tavily_api_key: Optional[str] = Field(default=None, description="Tavily API key")
    search_query_suffix: str = Field(
        default="cumpara online Romania",
        description="Purchase-intent suffix appended to every product query",
    )
    search_location: str = Field(default="Romania", description="Search locale")
    search_language: str = Field(default="ro", description="Search interface language")
    search_country: str = Field(default="ro", description="Search country code")
    search_result_count: int = Field(default=15, description="Results requested per query")

    # Google Places (ratings)
    google_places_api_key: Optional[str] = Field(default=None, description="Google Places API key")
    places_region_suffix: str = Field(default="Romania", description="Appended to business names")

    # Completion model (OpenAI-compatible streaming endpoint)
    google_api_key: Optional[str] = Field(default=None, description="API key for the completion endpoint")
    completion_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/chat/completions",
        description="OpenAI-compatible chat completions URL",
    )
    completion_model: str = Field(default="gemini-2.5-flash", description="Completion model name")

    # Stripe (subscriptions)
    stripe_secret_key: Optional[str] = Field(default=None, description="Stripe secret key")
    stripe_api_url: str = Field(default="https://api.stripe.com/v1", description="Stripe API base")

    # HTTP
    http_timeout: float = Field(default=10.0, description="Timeout for provider calls, seconds")
    completion_timeout: float = Field(default=120.0, description="Read timeout for the completion stream")

    # Entitlements
    free_messages_per_day: int = Field(default=3, description="Daily free messages for non-subscribers")

    # Ranking
    min_rating_threshold: float = Field(default=3.5, description="Ratings below this sink to the bottom tier")
    max_ranked_results: int = Field(default=8, description="Candidates kept after ranking")
    max_enriched_candidates: int = Field(default=12, description="Candidates sent to the rating lookup")
    sme_match_limit: int = Field(default=10, description="SME registry matches per query")
    max_context_chars: int = Field(default=6000, description="Upper bound for the prompt context block")

    large_retailer_domains: List[str] = Field(default_factory=lambda: list(DEFAULT_LARGE_RETAILER_DOMAINS))
    media_site_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_MEDIA_SITE_PATTERNS))
    small_seller_domains: List[str] = Field(default_factory=lambda: list(DEFAULT_SMALL_SELLER_DOMAINS))
    search_provider_hosts: List[str] = Field(default_factory=lambda: list(DEFAULT_SEARCH_PROVIDER_HOSTS))

    # Import admin
    import_admin_emails: str = Field(default="", description="Comma-separated emails allowed to import")

    # CORS
    cors_allowed_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        description="Comma-separated CORS allowed origins",
    )

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Parse allowed hosts into a list."""
        return [h.strip() for h in self.django_allowed_hosts.split(",") if h.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS allowed origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def import_admin_list(self) -> List[str]:
        return [e.strip().lower() for e in self.import_admin_emails.split(",") if e.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
