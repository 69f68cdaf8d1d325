"""
Centralized Logging Configuration

Provides secure, production-ready logging with:
- Configurable log levels
- Automatic log rotation
- Secret masking to prevent credential and customer data leaks
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config


class SecretMaskingFilter(logging.Filter):
    """
    Logging filter that masks sensitive data in log records.

    Prevents credential leaks by replacing sensitive values with [REDACTED].

    Masks:
    - Florist One affiliate id and API token (query string and key/value form)
    - Payment tokens
    - Customer emails and phone numbers
    - Street addresses
    """

    # Patterns for secret masking
    PATTERNS: list[tuple[Pattern, str]] = [
        # Vendor auth query parameters (?affiliate_id=...&token=...)
        (re.compile(r'(affiliate[_-]?id["\']?\s*[:=]\s*["\']?)([^\s&"\']+)', re.IGNORECASE), r'\1[REDACTED_AFFILIATE_ID]'),
        (re.compile(r'(payment[_-]?token["\']?\s*[:=]\s*["\']?)([^\s&"\']+)', re.IGNORECASE), r'\1[REDACTED_PAYMENT_TOKEN]'),
        (re.compile(r'(authorizenet[_-]?token["\']?\s*[:=]\s*["\']?)([^\s&"\']+)', re.IGNORECASE), r'\1[REDACTED_PAYMENT_TOKEN]'),
        (re.compile(r'((?<![a-z_])token["\']?\s*[:=]\s*["\']?)([^\s&"\']+)', re.IGNORECASE), r'\1[REDACTED_TOKEN]'),

        # Email addresses (PII)
        (re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b'), '[REDACTED_EMAIL]'),

        # Phone numbers (US formats)
        (re.compile(r'\b(\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b'), '[REDACTED_PHONE]'),

        # Shipping addresses
        (re.compile(r'(address[12]?["\']?\s*[:=]\s*["\']?)([^"\']{10,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_ADDRESS]\3'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter log record to mask sensitive data.

        Args:
            record: LogRecord to filter

        Returns:
            True (always - we modify but don't block records)
        """
        if record.msg:
            record.msg = self.mask(str(record.msg))

        if record.args:
            masked_args = []
            for arg in record.args:
                if isinstance(arg, str):
                    arg = self.mask(arg)
                masked_args.append(arg)
            record.args = tuple(masked_args)

        return True

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text


def setup_logging():
    """
    Initialize centralized logging configuration.

    Call this function once at application startup (in run.py).

    Configuration:
    - Log level from config.LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
    - Automatic rotation every midnight
    - Keeps logs for config.LOG_RETENTION_DAYS days
    - Masks secrets if config.LOG_MASK_SECRETS is True
    - Writes to logs/storefront.log
    """
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    log_level_str = getattr(config, "LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    retention_days = getattr(config, "LOG_RETENTION_DAYS", 7)
    mask_secrets = getattr(config, "LOG_MASK_SECRETS", True)

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_dir / "storefront.log",
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    if mask_secrets:
        file_handler.addFilter(SecretMaskingFilter())
        console_handler.addFilter(SecretMaskingFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # aiohttp's access logging is noisy and carries full vendor URLs
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

    logging.info("=" * 80)
    logging.info(f"Logging initialized: Level={log_level_str}, Retention={retention_days} days, Masking={'ENABLED' if mask_secrets else 'DISABLED'}")
    logging.info("=" * 80)
