"""
Catalog Schemas

Pydantic models for the raw package listing published by the registry, and
the RawSnapshot container passed between the cache, the client and the
normalizer.

Wire Shape (one element of the top-level JSON list):
====================================================
    {
        "name": "MoreSuits",
        "full_name": "x753-MoreSuits",
        "owner": "x753",
        "package_url": "https://thunderstore.io/c/lethal-company/p/x753/MoreSuits/",
        "date_updated": "2025-03-20T10:00:00.000000Z",
        "uuid4": "7b1d4f38-1a5c-4b6e-9a51-0f3cf1f6a2d1",
        "rating_score": 812,
        "is_deprecated": false,
        "has_nsfw_content": false,
        "categories": ["Suits", "Misc"],
        "versions": [{"description": "...", "icon": "https://...", ...}, ...]
    }

Only the fields the mirror stores are validated; everything else the
registry sends is ignored.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Type
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modrate.shared.core.exceptions import ModRateException
from modrate.shared.models.enums import CatalogSource


NO_DESCRIPTION = "<No description available>"


class RawModVersion(BaseModel):
    """One published version of a package; only the display fields matter."""

    model_config = ConfigDict(extra="ignore")

    description: str = ""
    icon: str = ""


class RawModRecord(BaseModel):
    """
    One package as listed by the registry.

    Validation failures of this model become RecordErrors in the normalizer.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    full_name: str
    owner: str
    package_url: str
    date_updated: date
    uuid4: UUID
    rating_score: int
    is_deprecated: bool
    has_nsfw_content: bool
    categories: list[str]
    versions: list[RawModVersion] = Field(default_factory=list)

    @field_validator("date_updated", mode="before")
    @classmethod
    def _date_from_timestamp(cls, value: Any) -> Any:
        # The registry sends full ISO-8601 timestamps; only the date is kept
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    @property
    def latest_version(self) -> Optional[RawModVersion]:
        """The registry lists the most recent version first."""
        return self.versions[0] if self.versions else None


@dataclass(frozen=True)
class RawSnapshot:
    """
    One point-in-time capture of the catalog, kept verbatim.

    Attributes:
        payload: Raw response body / cache file content
        fetched_at: When the payload was fetched (cache file mtime for cached)
        source: Whether it came from the registry or the cache
        records: Parsed top-level list, when the producer already decoded it
    """

    payload: bytes
    fetched_at: datetime
    source: CatalogSource
    records: Optional[list[Any]] = field(default=None, repr=False, compare=False)

    @property
    def size_bytes(self) -> int:
        return len(self.payload)


def decode_records(payload: bytes, error_cls: Type[ModRateException]) -> list[Any]:
    """
    Parse a snapshot payload into its list of raw records.

    Only the envelope is checked here; individual records are validated by
    the normalizer.

    Args:
        payload: JSON document
        error_cls: Exception raised on a malformed envelope (TransportError
            for fetched payloads, CacheError for cached ones)

    Raises:
        error_cls: If the payload is not JSON or its top level is not a list
    """
    try:
        records = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise error_cls(
            f"Catalog payload is not valid JSON: {e}",
            details={"size_bytes": len(payload)},
        ) from e

    if not isinstance(records, list):
        raise error_cls(
            f"Catalog payload must be a JSON list, got {type(records).__name__}",
            details={"size_bytes": len(payload)},
        )

    return records
