"""Configuration management using environment variables"""
import logging
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_DELIVERY_WEBHOOK_URL = "http://localhost:7071/api/delivery"


class Settings:
    """Application settings - YAGNI: Only what we need right now"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # Downstream endpoints - required in production, local defaults otherwise
        if self.environment == "production":
            self.redis_url = self._get_required("REDIS_URL")
            self.delivery_webhook_url = self._get_required("DELIVERY_WEBHOOK_URL")
        else:
            self.redis_url = os.getenv("REDIS_URL", DEFAULT_REDIS_URL)
            self.delivery_webhook_url = os.getenv(
                "DELIVERY_WEBHOOK_URL",
                DEFAULT_DELIVERY_WEBHOOK_URL
            )
            self._warn_default_endpoints()

        # The delivery service is called with an absolute URL only
        parsed = urlparse(self.delivery_webhook_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"DELIVERY_WEBHOOK_URL must be an absolute http(s) URL, "
                f"got: {self.delivery_webhook_url!r}"
            )

        # Queue channel for reservation messages
        self.reservations_stream = os.getenv("RESERVATIONS_STREAM", "reservations")

        # Delivery webhook configuration
        self.delivery_webhook_timeout = float(os.getenv("DELIVERY_WEBHOOK_TIMEOUT", "10.0"))  # seconds

        # Public base URL for catalog pictures
        self.catalog_base_url = os.getenv("CATALOG_BASE_URL", "http://localhost:5106")

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "8000"))

        # Database configuration (SQLite by default - configurable URL)
        self.database_url = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./orders.db"
        )

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                f"Required in production mode."
            )
        return value

    def _warn_default_endpoints(self) -> None:
        """Warn about local-default downstream endpoints in development mode."""
        defaults = []
        if self.redis_url == DEFAULT_REDIS_URL:
            defaults.append(f"REDIS_URL -> {DEFAULT_REDIS_URL}")
        if self.delivery_webhook_url == DEFAULT_DELIVERY_WEBHOOK_URL:
            defaults.append(f"DELIVERY_WEBHOOK_URL -> {DEFAULT_DELIVERY_WEBHOOK_URL}")

        if defaults:
            logger.warning(
                "⚠️  Using local default endpoints - order notifications go to:\n" +
                "\n".join(f"  - {entry}" for entry in defaults) +
                "\n\nCopy .env.example to .env to point at real services."
            )


# Global settings instance
settings = Settings()
