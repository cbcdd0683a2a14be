"""Painting estimator configuration settings.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load .env file for local configuration (log level, feature flags, etc.)
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Validation: report unrecognised service types as estimate issues
    strict_service_types: bool = field(
        default_factory=lambda: _env_flag("ESTIMATOR_STRICT_SERVICE_TYPES")
    )

    # Cloud Functions
    function_region: str = field(default_factory=lambda: os.getenv("FUNCTION_REGION", "us-central1"))
    cors_allow_origin: str = field(default_factory=lambda: os.getenv("CORS_ALLOW_ORIGIN", "*"))

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ValueError: If the log level is not a known level name.
        """
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level}")


# Application-wide settings instance
settings = Settings()
