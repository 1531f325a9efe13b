"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from modrate.shared.core.logging import logger, get_logger
    from modrate.shared.core.exceptions import ModRateException, StoreError

    logger.info("Starting refresh cycle", mode="expiration")
"""

from modrate.shared.core.logging import (
    logger,
    get_logger,
    configure_logging,
    cycle_context,
)
from modrate.shared.core.exceptions import (
    ModRateException,
    ConfigurationError,
    TransportError,
    CacheError,
    RecordError,
    StoreError,
    SchemaContractError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "configure_logging",
    "cycle_context",
    # Exceptions
    "ModRateException",
    "ConfigurationError",
    "TransportError",
    "CacheError",
    "RecordError",
    "StoreError",
    "SchemaContractError",
]
