"""
Refresh Options

Resolves the raw MOD_REFRESH / interval settings into one canonical
RefreshOptions value. Legacy spellings are collapsed here so the policy
engine only ever sees RefreshMode members.

Accepted Values:
================
    MOD_REFRESH                 RefreshMode
    ─────────────────────────   ───────────────
    none                        NONE
    cache-only                  CACHE_ONLY
    expiration                  EXPIRATION
    download-if-expired         EXPIRATION        (legacy)
    always-download             ALWAYS_DOWNLOAD   (legacy)

    MOD_IMPORT_INTERVAL_HOURS wins over the legacy MOD_EXPIRATION_TIME_HOURS
    when both are set.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional

from modrate.config.settings import Settings
from modrate.shared.core.exceptions import ConfigurationError


class RefreshMode(str, Enum):
    """Canonical catalog refresh modes."""

    NONE = "none"
    CACHE_ONLY = "cache-only"
    EXPIRATION = "expiration"
    ALWAYS_DOWNLOAD = "always-download"


MODE_ALIASES: dict[str, RefreshMode] = {
    "none": RefreshMode.NONE,
    "cache-only": RefreshMode.CACHE_ONLY,
    "expiration": RefreshMode.EXPIRATION,
    "download-if-expired": RefreshMode.EXPIRATION,
    "always-download": RefreshMode.ALWAYS_DOWNLOAD,
}


@dataclass(frozen=True)
class RefreshOptions:
    """
    Resolved refresh configuration.

    Attributes:
        mode: Canonical refresh mode
        interval: Age after which the cache counts as expired; None for
            modes that never look at the cache age
    """

    mode: RefreshMode
    interval: Optional[timedelta] = None


def resolve_mode(raw: str) -> RefreshMode:
    """
    Map a configured mode string (canonical or legacy) to a RefreshMode.

    Raises:
        ConfigurationError: If the value is not a known mode
    """
    key = raw.strip().lower()
    try:
        return MODE_ALIASES[key]
    except KeyError:
        allowed = ", ".join(MODE_ALIASES)
        raise ConfigurationError(
            f"Not a valid mod refresh option: '{raw}'. Allowed values are: {allowed}",
            details={"MOD_REFRESH": raw},
        ) from None


def resolve_interval_hours(
    interval_hours: Optional[int],
    legacy_interval_hours: Optional[int],
) -> Optional[int]:
    """Pick the canonical interval, falling back to the legacy variable."""
    if interval_hours is not None:
        return interval_hours
    return legacy_interval_hours


def load_refresh_options(settings: Settings) -> RefreshOptions:
    """
    Build RefreshOptions from application settings.

    Args:
        settings: Loaded application settings

    Returns:
        RefreshOptions with a canonical mode

    Raises:
        ConfigurationError: Unknown mode, or an expiring mode without interval
    """
    mode = resolve_mode(settings.MOD_REFRESH)
    hours = resolve_interval_hours(
        settings.MOD_IMPORT_INTERVAL_HOURS,
        settings.MOD_EXPIRATION_TIME_HOURS,
    )

    if mode is RefreshMode.EXPIRATION and hours is None:
        raise ConfigurationError(
            "Missing environment variable: MOD_IMPORT_INTERVAL_HOURS",
            details={"MOD_REFRESH": settings.MOD_REFRESH},
        )

    interval = timedelta(hours=hours) if hours is not None else None
    return RefreshOptions(mode=mode, interval=interval)
