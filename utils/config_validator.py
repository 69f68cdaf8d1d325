"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from typing import Optional


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_vendor_credentials(affiliate_id: Optional[str], api_token: Optional[str]) -> None:
    """
    Validate Florist One credentials.

    Both unset is valid (mock mode). Only one of them set is a
    misconfiguration that would silently fall back to mock carts.

    Raises:
        ConfigValidationError: If exactly one credential is set
    """
    if bool(affiliate_id) != bool(api_token):
        missing = "FLORISTONE_API_TOKEN" if affiliate_id else "FLORISTONE_AFFILIATE_ID"
        raise ConfigValidationError(
            f"{missing} is not set but its counterpart is!\n"
            "Set both FLORISTONE_AFFILIATE_ID and FLORISTONE_API_TOKEN for live carts,\n"
            "or unset both to run with mock carts."
        )


def validate_positive_int(value: int, name: str) -> None:
    """
    Raises:
        ConfigValidationError: If value is not a positive integer
    """
    if not isinstance(value, int) or value <= 0:
        raise ConfigValidationError(f"{name} must be a positive integer (got: {value})")


def validate_cache_backend(backend: str, redis_host: Optional[str]) -> None:
    """
    Raises:
        ConfigValidationError: If the backend is unknown or Redis is not configured
    """
    if backend not in ("memory", "redis"):
        raise ConfigValidationError(
            f"CACHE_BACKEND must be 'memory' or 'redis' (got: {backend})"
        )
    if backend == "redis" and not redis_host:
        raise ConfigValidationError(
            "CACHE_BACKEND=redis requires REDIS_HOST!\n"
            "Add to .env: REDIS_HOST=localhost"
        )


def validate_startup_config(config_module) -> None:
    """
    Validate all critical configuration at startup.

    Args:
        config_module: The config module to validate

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_vendor_credentials(
        config_module.FLORISTONE_AFFILIATE_ID,
        config_module.FLORISTONE_API_TOKEN,
    )
    validate_positive_int(config_module.GET_TOTAL_RATE_LIMIT_MAX_REQUESTS, 'GET_TOTAL_RATE_LIMIT_MAX_REQUESTS')
    validate_positive_int(config_module.GET_TOTAL_RATE_LIMIT_WINDOW_MS, 'GET_TOTAL_RATE_LIMIT_WINDOW_MS')
    validate_positive_int(config_module.DELIVERY_DATES_CACHE_TTL_SECONDS, 'DELIVERY_DATES_CACHE_TTL_SECONDS')
    validate_cache_backend(config_module.CACHE_BACKEND, config_module.REDIS_HOST)


def validate_or_exit(config_module) -> None:
    """
    Validate configuration and exit with error code 1 if validation fails.

    This is the main entry point for startup validation.

    Args:
        config_module: The config module to validate
    """
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nStorefront startup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
