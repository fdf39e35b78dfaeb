"""Configuration management for the catalog search engine."""

import logging
import os
import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_API_URL = "https://itunes.apple.com"
DEFAULT_HOME_SCRIPT = "[가-힣]"  # Hangul syllables


@dataclass
class CatalogConfig:
    """External music catalog API configuration."""

    api_url: str = DEFAULT_API_URL
    country: str = "KR"  # Home region store
    language: str = "ko_kr"
    home_script: str = DEFAULT_HOME_SCRIPT
    timeout: float = 15.0  # seconds
    max_retries: int = 3
    min_request_interval: float = 0.0  # seconds between requests, 0 disables throttling
    cache_responses: bool = False

    @cached_property
    def home_script_pattern(self) -> re.Pattern:
        """Compiled pattern matching any character of the home-locale script."""
        return re.compile(self.home_script)

    def contains_home_script(self, text: str | None) -> bool:
        """Check if text contains at least one home-locale script character."""
        if not text:
            return False
        return bool(self.home_script_pattern.search(text))


@dataclass
class Config:
    """Main configuration container."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    max_workers: int = 8  # Thread-pool width for concurrent catalog calls

    @classmethod
    def from_environment(cls, env_path: Path | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        try:
            catalog = CatalogConfig(
                api_url=os.getenv("CATALOG_API_URL", DEFAULT_API_URL).rstrip("/"),
                country=os.getenv("CATALOG_COUNTRY", "KR"),
                language=os.getenv("CATALOG_LANGUAGE", "ko_kr"),
                home_script=os.getenv("CATALOG_HOME_SCRIPT", DEFAULT_HOME_SCRIPT),
                timeout=float(os.getenv("CATALOG_TIMEOUT", "15")),
                max_retries=int(os.getenv("CATALOG_MAX_RETRIES", "3")),
                min_request_interval=float(os.getenv("CATALOG_MIN_REQUEST_INTERVAL", "0")),
                cache_responses=os.getenv("CATALOG_CACHE_RESPONSES", "false").lower() == "true",
            )
            max_workers = int(os.getenv("CATALOG_MAX_WORKERS", "8"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric catalog setting: {e}") from e

        return cls(catalog=catalog, max_workers=max_workers)

    def validate(self) -> None:
        """Validate the configuration."""
        self._validate_catalog()

        if self.max_workers < 1:
            raise ValueError("CATALOG_MAX_WORKERS must be at least 1")

    def _validate_catalog(self) -> None:
        """Validate catalog API configuration."""
        logger = logging.getLogger(__name__)
        catalog = self.catalog

        if not catalog.api_url:
            raise ValueError("CATALOG_API_URL is required")
        if catalog.timeout <= 0:
            raise ValueError("CATALOG_TIMEOUT must be positive")
        if catalog.max_retries < 1:
            raise ValueError("CATALOG_MAX_RETRIES must be at least 1")
        if catalog.min_request_interval < 0:
            raise ValueError("CATALOG_MIN_REQUEST_INTERVAL must not be negative")
        if not re.fullmatch(r"[A-Za-z]{2}", catalog.country):
            raise ValueError(f"CATALOG_COUNTRY must be a two-letter code, got '{catalog.country}'")

        try:
            re.compile(catalog.home_script)
        except re.error as e:
            raise ValueError(f"CATALOG_HOME_SCRIPT is not a valid pattern: {e}") from e

        if not catalog.api_url.startswith("https://"):
            logger.warning(f"Catalog API URL '{catalog.api_url}' is not served over HTTPS")


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
