"""
Custom Exceptions

Application-specific exceptions with machine-readable error codes.

Exception Hierarchy:
====================
    ModRateException (base)
       │
       ├── ConfigurationError    ← Invalid or missing setting (fatal to the cycle)
       ├── TransportError        ← Remote catalog fetch failed (fatal, no store mutation)
       ├── CacheError            ← Cached snapshot missing, unreadable or corrupt
       ├── RecordError           ← One malformed catalog entry (skipped, counted)
       └── StoreError            ← Database failure during import (rolled back)
              └── SchemaContractError  ← ORM models disagree with the schema contract

Propagation:
============
RecordError is absorbed by the normalizer. Every other error aborts the
refresh cycle and reaches the invoker unchanged.

Usage:
======
    from modrate.shared.core.exceptions import ConfigurationError

    raise ConfigurationError(
        "Cache file required in cache-only mode",
        details={"path": "data/mods_cache.json"},
    )
"""

from typing import Any, Optional


class ModRateException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# CYCLE-LEVEL ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigurationError(ModRateException):
    """
    Invalid or missing required setting.

    Raised when:
    - MOD_REFRESH holds an unknown mode
    - An expiring mode has no import interval
    - cache-only mode is used without a cache file
    - Batch sizing cannot satisfy the per-statement parameter bound
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class TransportError(ModRateException):
    """
    Remote catalog fetch failed.

    Raised when the network is unreachable, the registry answers with a
    non-success status, or the body is not a JSON list of records.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="TRANSPORT_ERROR",
            details=details,
        )


class CacheError(ModRateException):
    """Cached snapshot is missing, unreadable or not a JSON list."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CACHE_ERROR",
            details=details,
        )


class StoreError(ModRateException):
    """
    Database failure during import.

    Wraps constraint violations and connection loss. The surrounding
    transaction is rolled back, so the store stays at its pre-cycle state.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        error_code: str = "STORE_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class SchemaContractError(StoreError):
    """ORM metadata does not match the expected table shapes."""

    def __init__(self, mismatches: list[str]) -> None:
        super().__init__(
            message=f"Schema contract mismatch: {'; '.join(mismatches)}",
            details={"mismatches": mismatches},
            error_code="SCHEMA_CONTRACT_ERROR",
        )
        self.mismatches = mismatches


# ═══════════════════════════════════════════════════════════════════════════════
# RECORD-LEVEL ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class RecordError(ModRateException):
    """
    One malformed catalog entry.

    Never aborts a cycle: the normalizer logs it, counts it and moves on.

    Example:
        raise RecordError("Missing field 'name'", record_id="5f0c...")
    """

    def __init__(
        self,
        message: str,
        record_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if record_id:
            details["record_id"] = record_id
        super().__init__(
            message=message,
            error_code="RECORD_ERROR",
            details=details,
        )
        self.record_id = record_id
