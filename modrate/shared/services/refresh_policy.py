"""
Refresh Policy Service

Decides what a refresh cycle does, from the configured mode, the cache state
and the current time. Pure: it never reads the cache contents, touches the
network or the database.

Decision Table:
===============
    mode               cache absent          cache fresh     cache expired
    ────────────────   ───────────────────   ─────────────   ──────────────
    none               SKIP                  SKIP            SKIP
    cache-only         ConfigurationError    USE_CACHE       USE_CACHE
    expiration         FETCH_REMOTE          USE_CACHE       FETCH_REMOTE
    always-download    FETCH_REMOTE          FETCH_REMOTE    FETCH_REMOTE

    "expired" means elapsed >= interval; an interval <= 0 is always expired.
    force=True turns expiration's USE_CACHE into FETCH_REMOTE.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from modrate.config.refresh import RefreshMode, RefreshOptions
from modrate.shared.core.exceptions import ConfigurationError


class RefreshDecision(str, Enum):
    """Outcome of the policy for one cycle."""

    SKIP = "skip"
    USE_CACHE = "use-cache"
    FETCH_REMOTE = "fetch-remote"


def is_expired(
    last_fetched: Optional[datetime],
    now: datetime,
    interval: Optional[timedelta],
) -> bool:
    """
    Check whether a cached snapshot is too old.

    Args:
        last_fetched: When the cache was written, None if there is no cache
        now: Current time (aware)
        interval: Maximum age; None or non-positive means always expired

    Returns:
        True if a fresh fetch is due
    """
    if last_fetched is None:
        # no previous fetch -> first run
        return True
    if interval is None or interval <= timedelta(0):
        return True
    return now - last_fetched >= interval


class RefreshPolicy:
    """
    Refresh decision engine.

    Example:
        policy = RefreshPolicy(RefreshOptions(RefreshMode.EXPIRATION, timedelta(hours=24)))
        decision = policy.decide(cache.exists(), cache.last_modified(), now)
    """

    def __init__(self, options: RefreshOptions) -> None:
        self.options = options

    def decide(
        self,
        cache_exists: bool,
        cache_modified_at: Optional[datetime],
        now: datetime,
        force: bool = False,
    ) -> RefreshDecision:
        """
        Decide what this cycle does.

        Args:
            cache_exists: Whether a cached snapshot is present
            cache_modified_at: Write time of the cached snapshot
            now: Current time
            force: An explicit re-import was requested

        Returns:
            RefreshDecision

        Raises:
            ConfigurationError: cache-only mode without a cached snapshot
        """
        mode = self.options.mode

        if mode is RefreshMode.NONE:
            return RefreshDecision.SKIP

        if mode is RefreshMode.CACHE_ONLY:
            if not cache_exists:
                raise ConfigurationError(
                    "MOD_REFRESH=cache-only requires an existing catalog cache",
                    details={"mode": mode.value},
                )
            return RefreshDecision.USE_CACHE

        if mode is RefreshMode.ALWAYS_DOWNLOAD:
            return RefreshDecision.FETCH_REMOTE

        last_fetched = cache_modified_at if cache_exists else None
        if force or is_expired(last_fetched, now, self.options.interval):
            return RefreshDecision.FETCH_REMOTE
        return RefreshDecision.USE_CACHE
