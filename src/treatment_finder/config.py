"""
Configuration for Treatment Finder

Loads configuration from environment variables (and a local .env file).
"""

import os
from dataclasses import dataclass, field
from typing import Optional, List, Tuple
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing required values."""
    pass


@dataclass
class SearchConfig:
    """Search provider configuration."""
    search_api_key: Optional[str] = None
    base_url: str = "https://api.search.brave.com/res/v1"
    result_count: int = 5
    search_lang: str = "en"
    safesearch: str = "moderate"
    timeout_seconds: int = 10

    request_delay_ms: int = 1200  # fixed delay before every search call
    throttle_retry_delay_ms: int = 2000  # extra wait after an HTTP 429

    @property
    def request_delay_seconds(self) -> float:
        return self.request_delay_ms / 1000.0

    @property
    def throttle_retry_delay_seconds(self) -> float:
        return self.throttle_retry_delay_ms / 1000.0


@dataclass
class PricingConfig:
    """Pricing provider configuration."""
    provider_domain: str = "goodrx.com"

    @property
    def provider_label(self) -> str:
        """Display label for the provider, e.g. 'GoodRx' for goodrx.com."""
        name = self.provider_domain.split(".")[0]
        if name.lower() == "goodrx":
            return "GoodRx"
        return name.capitalize()


@dataclass
class ProcessingConfig:
    """Processing configuration."""
    max_conditions: int = 2
    candidate_pool_size: int = 4  # candidates pulled from each search
    options_per_category: int = 2
    max_workers: int = 1  # 1 = conditions processed sequentially


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs/treatment_finder"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class Config:
    """Main configuration class."""
    search: SearchConfig = field(default_factory=SearchConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}")


def load_config() -> Config:
    """
    Load configuration from environment variables.

    Environment variables:
        BRAVE_API_KEY / SEARCH_API_KEY: Search provider API key
        SEARCH_BASE_URL: Search provider base URL
        SEARCH_REQUEST_DELAY_MS: Fixed delay before every search call
        SEARCH_THROTTLE_RETRY_DELAY_MS: Extra wait before retrying a throttled call
        SEARCH_TIMEOUT_SECONDS: Per-call HTTP timeout
        PRICING_PROVIDER_DOMAIN: Domain of the pricing provider (default goodrx.com)
        TREATMENT_MAX_WORKERS: Parallel condition workers (default 1)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        LOG_DIR: Directory for rotating log files
    """
    config = Config()

    # Search
    config.search.search_api_key = os.getenv("BRAVE_API_KEY") or os.getenv("SEARCH_API_KEY")
    if not config.search.search_api_key:
        logger.warning("BRAVE_API_KEY not set - searches will return error lines")

    base_url = os.getenv("SEARCH_BASE_URL")
    if base_url:
        config.search.base_url = base_url

    config.search.request_delay_ms = _int_env(
        "SEARCH_REQUEST_DELAY_MS", config.search.request_delay_ms
    )
    config.search.throttle_retry_delay_ms = _int_env(
        "SEARCH_THROTTLE_RETRY_DELAY_MS", config.search.throttle_retry_delay_ms
    )
    config.search.timeout_seconds = _int_env(
        "SEARCH_TIMEOUT_SECONDS", config.search.timeout_seconds
    )

    # Pricing
    config.pricing.provider_domain = os.getenv(
        "PRICING_PROVIDER_DOMAIN", config.pricing.provider_domain
    ).strip().lower()

    # Processing
    config.processing.max_workers = _int_env(
        "TREATMENT_MAX_WORKERS", config.processing.max_workers
    )

    # Logging
    config.logging.level = os.getenv("LOG_LEVEL", "INFO")
    config.logging.log_dir = os.getenv("LOG_DIR", config.logging.log_dir)

    logger.info("Configuration loaded successfully")
    return config


def validate_config(config: Config, strict: bool = True) -> Tuple[List[str], List[str]]:
    """
    Validate configuration and return errors and warnings.

    Args:
        config: Configuration to validate
        strict: If True, raise ConfigurationError for critical issues

    Returns:
        Tuple of (errors, warnings) lists

    Raises:
        ConfigurationError: If strict=True and critical errors found
    """
    errors = []
    warnings = []

    # Warning: search still "works" without a key, every call degrades to an error line
    if not config.search.search_api_key:
        warnings.append("BRAVE_API_KEY not set - every search will degrade to default treatments")

    if not config.search.base_url.startswith(("http://", "https://")):
        errors.append(f"search base_url must be an http(s) URL, got: {config.search.base_url}")

    if config.search.result_count < 1:
        errors.append(f"result_count must be >= 1, got: {config.search.result_count}")

    if config.search.request_delay_ms < 0:
        errors.append(f"request_delay_ms must be >= 0, got: {config.search.request_delay_ms}")

    if config.search.throttle_retry_delay_ms < 0:
        errors.append(
            f"throttle_retry_delay_ms must be >= 0, got: {config.search.throttle_retry_delay_ms}"
        )

    if config.search.timeout_seconds < 1:
        errors.append(f"timeout_seconds must be >= 1, got: {config.search.timeout_seconds}")

    if not config.pricing.provider_domain or "." not in config.pricing.provider_domain:
        errors.append(f"provider_domain must be a domain name, got: {config.pricing.provider_domain!r}")

    if config.processing.max_conditions < 1:
        errors.append(f"max_conditions must be >= 1, got: {config.processing.max_conditions}")

    if config.processing.candidate_pool_size < config.processing.options_per_category:
        errors.append(
            f"candidate_pool_size ({config.processing.candidate_pool_size}) must be >= "
            f"options_per_category ({config.processing.options_per_category})"
        )

    if config.processing.max_workers < 1:
        errors.append(f"max_workers must be >= 1, got: {config.processing.max_workers}")

    # Log results
    if errors:
        logger.error(f"Configuration validation failed with {len(errors)} error(s):")
        for error in errors:
            logger.error(f"  - {error}")

    if warnings:
        logger.warning(f"Configuration has {len(warnings)} warning(s):")
        for warning in warnings:
            logger.warning(f"  - {warning}")

    if strict and errors:
        error_msg = "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_msg}")

    return errors, warnings


# Global config instance
_config: Optional[Config] = None


def get_config(validate: bool = True, strict: bool = False) -> Config:
    """
    Get or create global config instance.

    Args:
        validate: If True, validate configuration
        strict: If True, raise ConfigurationError on validation errors

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = load_config()
        if validate:
            validate_config(_config, strict=strict)
    return _config


def reload_config(validate: bool = True, strict: bool = False) -> Config:
    """Force reload configuration."""
    global _config
    _config = load_config()
    if validate:
        validate_config(_config, strict=strict)
    return _config
