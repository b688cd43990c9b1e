"""
Travel Relay — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and freezes the result. The instance is built
       once at startup and handed to create_app(), which stores it on app.state.
Who:   main.create_app(), the service registry and the CORS middleware.
When:  Loaded once when the application is created; never re-read per request.

Credentials are optional at load time. A relay with only the Maps key set
still serves the places routes; missing keys are reported as warnings during
startup (see missing_credentials()).
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Relay settings loaded from environment variables.

    All settings have development defaults. Production deployments must set
    the provider keys and the storage bucket.
    """

    # ── Upstream Credentials ──────────────────────────────────────────────
    # Injected into every outbound call; a caller-supplied key is never forwarded.
    serpapi_api_key: str = Field(default="", description="SerpApi key (flights, images)")
    google_maps_api_key: str = Field(default="", description="Google Maps Places key")
    openai_api_key: str = Field(default="", description="OpenAI key (image generation)")

    # ── Object Storage ────────────────────────────────────────────────────
    # Empty credentials fall through to botocore's default chain
    # (env, ~/.aws, instance role).
    aws_access_key_id: str = Field(default="")
    aws_secret_access_key: str = Field(default="")
    aws_region: str = Field(default="us-east-1")
    aws_bucket_name: str = Field(default="")

    # ── Upstream Endpoints ────────────────────────────────────────────────
    serpapi_url: str = Field(default="https://serpapi.com/search.json")
    google_places_url: str = Field(default="https://maps.googleapis.com/maps/api/place")
    openai_images_url: str = Field(default="https://api.openai.com/v1/images/generations")
    openai_image_model: str = Field(default="dall-e-3")

    # What: Timeout applied to every outbound call (connect + read)
    upstream_timeout_seconds: float = Field(default=60.0, gt=0, le=600)

    # What: Largest accepted JSON request body in bytes (default 10MB)
    max_body_bytes: int = Field(default=10_485_760, ge=1024)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: comma-separated origins, matched exactly against the Origin header
    allowed_origins: str = Field(
        default="http://localhost:5173,https://travelaid.onrender.com"
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Splits the comma-separated allow-list, dropping blanks."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "frozen": True,
    }

    def missing_credentials(self) -> List[str]:
        """
        What:  Lists environment variables whose absence disables a route.
        When:  Called during app startup (lifespan) to log one warning each.
        """
        missing = []
        if not self.serpapi_api_key:
            missing.append("SERPAPI_API_KEY (/search-flights, /get-image)")
        if not self.google_maps_api_key:
            missing.append("GOOGLE_MAPS_API_KEY (/google-places-*)")
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY (/generate-image)")
        if not self.aws_bucket_name:
            missing.append("AWS_BUCKET_NAME (/upload-image)")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    return Settings()
