"""
Catalog Normalizer Service

Turns raw registry records into the mirror's entity model.

Flow:
=====
    raw records ──► RawModRecord (pydantic) ──► ModRecord + category names
                         │
                         └─ invalid / duplicate uuid ──► RecordError (logged, counted, skipped)

    category names of all valid records − names already stored ──► new_categories

Normalization only reads: the set of stored category names is passed in,
and every write is left to the importer.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Iterable, Optional, Sequence
from uuid import UUID

from pydantic import ValidationError

from modrate.shared.core.exceptions import RecordError, SchemaContractError
from modrate.shared.core.logging import get_logger
from modrate.shared.models.contract import CURRENT_CONTRACT, SchemaContract
from modrate.shared.schemas.catalog import NO_DESCRIPTION, RawModRecord

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModRecord:
    """A validated mod, one attribute per column of the mods table."""

    id: UUID
    name: str
    description: str
    icon_url: str
    full_name: str
    owner: str
    package_url: str
    updated_date: date
    rating: int
    deprecated: bool
    nsfw: bool

    def to_row(self, columns: Sequence[str]) -> dict[str, Any]:
        """Column → value dict in the order the contract lists the columns."""
        return {column: getattr(self, column) for column in columns}


@dataclass(frozen=True)
class NormalizedMod:
    """A mod and the names of the categories it is listed under."""

    mod: ModRecord
    categories: frozenset[str]


@dataclass
class NormalizedCatalog:
    """
    Output of normalization, ready for the importer.

    Attributes:
        mods: Valid mods in snapshot order
        new_categories: Names not yet in the store, sorted
        skipped: Number of records left out
        errors: The RecordError of every skipped record
    """

    mods: list[NormalizedMod] = field(default_factory=list)
    new_categories: list[str] = field(default_factory=list)
    skipped: int = 0
    errors: list[RecordError] = field(default_factory=list)

    @property
    def category_names(self) -> set[str]:
        """Every category name referenced by a valid mod."""
        return {name for entry in self.mods for name in entry.categories}


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "record"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class CatalogNormalizer:
    """
    Maps raw catalog records to ModRecords and category names.

    Args:
        contract: Schema contract whose mods columns ModRecord must cover
    """

    def __init__(self, contract: SchemaContract = CURRENT_CONTRACT) -> None:
        record_fields = {f.name for f in fields(ModRecord)}
        missing = [c for c in contract.mods.insert_columns if c not in record_fields]
        if missing:
            raise SchemaContractError([f"ModRecord has no field for mods.{c}" for c in missing])
        self.contract = contract

    def parse_record(self, raw: Any) -> tuple[ModRecord, frozenset[str]]:
        """
        Validate one raw record.

        Args:
            raw: One element of the snapshot's top-level list

        Returns:
            The mod and its category names

        Raises:
            RecordError: If the record is not an object or fails validation
        """
        if not isinstance(raw, dict):
            raise RecordError(f"Catalog entry is not an object: {type(raw).__name__}")

        record_id = raw.get("uuid4")
        try:
            record = RawModRecord.model_validate(raw)
        except ValidationError as e:
            raise RecordError(
                f"Invalid catalog entry: {_describe_validation_error(e)}",
                record_id=str(record_id) if record_id is not None else None,
                details={"name": raw.get("name")},
            ) from e

        latest = record.latest_version
        if latest is None:
            logger.warning(
                "Catalog entry has no versions",
                mod_name=record.name,
                mod_id=str(record.uuid4),
            )
            description, icon_url = NO_DESCRIPTION, ""
        else:
            description, icon_url = latest.description, latest.icon

        mod = ModRecord(
            id=record.uuid4,
            name=record.name,
            description=description,
            icon_url=icon_url,
            full_name=record.full_name,
            owner=record.owner,
            package_url=record.package_url,
            updated_date=record.date_updated,
            rating=record.rating_score,
            deprecated=record.is_deprecated,
            nsfw=record.has_nsfw_content,
        )
        return mod, frozenset(record.categories)

    def normalize(
        self,
        records: Iterable[Any],
        existing_categories: Optional[set[str]] = None,
    ) -> NormalizedCatalog:
        """
        Normalize a whole snapshot.

        Args:
            records: Raw records in snapshot order
            existing_categories: Category names already in the store

        Returns:
            NormalizedCatalog; malformed records are counted, never raised
        """
        existing = existing_categories or set()
        catalog = NormalizedCatalog()
        seen_ids: set[UUID] = set()

        for index, raw in enumerate(records):
            try:
                mod, categories = self.parse_record(raw)
                if mod.id in seen_ids:
                    raise RecordError(
                        "Duplicate catalog entry",
                        record_id=str(mod.id),
                        details={"name": mod.name},
                    )
            except RecordError as e:
                catalog.skipped += 1
                catalog.errors.append(e)
                logger.warning(
                    "Skipping catalog entry",
                    index=index,
                    record_id=e.record_id,
                    reason=e.message,
                )
                continue

            seen_ids.add(mod.id)
            catalog.mods.append(NormalizedMod(mod=mod, categories=categories))

        catalog.new_categories = sorted(catalog.category_names - existing)

        logger.info(
            "Catalog normalized",
            mods=len(catalog.mods),
            new_categories=len(catalog.new_categories),
            skipped=catalog.skipped,
        )
        return catalog
