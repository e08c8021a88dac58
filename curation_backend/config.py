"""
Configuration module for the Testimonial Curation backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")

    # Curation Engine
    CURATION_MODEL: str = os.getenv("CURATION_MODEL", "gemini-2.0-flash")
    CURATION_TEMPERATURE: float = float(os.getenv("CURATION_TEMPERATURE", "0.2") or "0.2")
    CURATION_TIMEOUT_SECONDS: float = float(os.getenv("CURATION_TIMEOUT_SECONDS", "30") or "30")
    CURATION_MAX_RETRIES: int = int(os.getenv("CURATION_MAX_RETRIES", "2") or "2")
    CURATION_BACKOFF_BASE_SECONDS: float = float(
        os.getenv("CURATION_BACKOFF_BASE_SECONDS", "1.0") or "1.0"
    )

    # Site-level switches for AI curation (fallback selection is used otherwise)
    CURATION_AI_ENABLED: bool = _env_bool("CURATION_AI_ENABLED", "true")
    CURATION_AI_MIN_TESTIMONIALS: int = int(os.getenv("CURATION_AI_MIN_TESTIMONIALS", "1") or "1")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only, see main._get_cors_origins)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing or out of range.
        """
        required_settings = {}
        if cls.CURATION_AI_ENABLED:
            required_settings["GOOGLE_API_KEY"] = cls.GOOGLE_API_KEY

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        if cls.CURATION_MAX_RETRIES < 0:
            raise ValueError("CURATION_MAX_RETRIES must be zero or greater.")
        if cls.CURATION_BACKOFF_BASE_SECONDS < 0:
            raise ValueError("CURATION_BACKOFF_BASE_SECONDS must be zero or greater.")

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_staging(cls) -> bool:
        """Check if running in staging environment."""
        return cls.ENVIRONMENT.lower() == "staging"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   AI curation will fall back to recent testimonials until .env is configured.")
        else:
            # In production or staging, fail immediately
            raise
