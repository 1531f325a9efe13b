"""
Schema Version Contract

A fixed, typed description of the tables the catalog pipeline reads and
writes, one per schema generation. The normalizer and importer take column
lists from here instead of hard-coding them, and the ORM metadata is checked
against the live generation before a refresh cycle runs.

A refresh cycle never introspects the live database: drift between this
contract and the actual store surfaces as a StoreError from the failing
statement. Migration checks compare a reflected store with reflected=True.

Generations:
============
    MOD_RATINGS     ratings(mod_id PK, rating rating_type)
    USER_RATINGS    ratings(mod_id, user_id, rating rating_type), PK (mod_id, user_id)
                    the MOD_RATINGS table lives on as legacy_ratings (not migrated)
    RATING_LOOKUP   rating_type(id, name) lookup rows 0=Dislike, 1=Like
                    ratings(mod_id PK, rating_id nullable FK → rating_type.id)

When a migration changes one of these tables, the matching TableSpec must be
changed in the same commit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from sqlalchemy import CHAR, Boolean, Date, DateTime, Integer, MetaData, String, Uuid
from sqlalchemy import Enum as SAEnum

from modrate.shared.core.exceptions import SchemaContractError, StoreError
from modrate.shared.models.enums import Rating


class SchemaGeneration(int, Enum):
    """Successive shapes of the ratings schema."""

    MOD_RATINGS = 1
    USER_RATINGS = 2
    RATING_LOOKUP = 3


# Contract type name → SQLAlchemy type class accepted for it
COLUMN_KINDS: dict[str, type] = {
    "uuid": Uuid,
    "text": String,
    "integer": Integer,
    "date": Date,
    "datetime": DateTime,
    "boolean": Boolean,
    "rating": SAEnum,
}

# SQLite reflects Uuid as CHAR(32) and Enum as VARCHAR
REFLECTED_COLUMN_KINDS: dict[str, tuple[type, ...]] = {
    **{kind: (type_,) for kind, type_ in COLUMN_KINDS.items()},
    "uuid": (Uuid, CHAR),
    "rating": (SAEnum, String),
}


@dataclass(frozen=True)
class ColumnSpec:
    """One column of a contracted table."""

    name: str
    kind: str
    nullable: bool = False
    primary_key: bool = False
    autoincrement: bool = False


@dataclass(frozen=True)
class TableSpec:
    """A contracted table and its columns, in insert order."""

    name: str
    columns: tuple[ColumnSpec, ...]

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def insert_columns(self) -> tuple[str, ...]:
        """Columns supplied by the writer (store-assigned ids excluded)."""
        return tuple(column.name for column in self.columns if not column.autoincrement)

    @property
    def key_columns(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns if column.primary_key)

    @property
    def value_columns(self) -> tuple[str, ...]:
        """Non-key columns, i.e. the ones an upsert replaces."""
        return tuple(column.name for column in self.columns if not column.primary_key)


@dataclass(frozen=True)
class SchemaContract:
    """All contracted tables of one schema generation."""

    generation: SchemaGeneration
    tables: tuple[TableSpec, ...]
    _index: dict[str, TableSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {table.name: table for table in self.tables})

    def table(self, name: str) -> TableSpec:
        """
        Get a contracted table by name.

        Raises:
            SchemaContractError: If the generation has no such table
        """
        try:
            return self._index[name]
        except KeyError:
            raise SchemaContractError(
                [f"table '{name}' is not part of generation {self.generation.name}"]
            ) from None

    @property
    def categories(self) -> TableSpec:
        return self.table("categories")

    @property
    def mods(self) -> TableSpec:
        return self.table("mods")

    @property
    def mod_category(self) -> TableSpec:
        return self.table("mod_category")

    @property
    def ratings(self) -> TableSpec:
        return self.table("ratings")

    def mismatches(self, metadata: MetaData, reflected: bool = False) -> list[str]:
        """
        Compare SQLAlchemy metadata to this contract.

        Args:
            metadata: MetaData of the ORM models, or of a reflected store
            reflected: Accept the storage types a dialect reflects back

        Returns:
            Human-readable description of every difference, empty if none
        """
        problems: list[str] = []
        accepted = REFLECTED_COLUMN_KINDS if reflected else COLUMN_KINDS

        for table_spec in self.tables:
            table = metadata.tables.get(table_spec.name)
            if table is None:
                problems.append(f"missing table '{table_spec.name}'")
                continue

            expected = set(table_spec.column_names)
            actual = set(table.columns.keys())
            for name in sorted(actual - expected):
                problems.append(f"unexpected column '{table_spec.name}.{name}'")

            for column_spec in table_spec.columns:
                column = table.columns.get(column_spec.name)
                where = f"{table_spec.name}.{column_spec.name}"
                if column is None:
                    problems.append(f"missing column '{where}'")
                    continue
                if not isinstance(column.type, accepted[column_spec.kind]):
                    problems.append(
                        f"column '{where}' is {type(column.type).__name__}, expected {column_spec.kind}"
                    )
                if column.primary_key != column_spec.primary_key:
                    problems.append(f"column '{where}' primary key mismatch")
                if not column.primary_key and column.nullable != column_spec.nullable:
                    problems.append(f"column '{where}' nullability mismatch")

        return problems

    def verify(self, metadata: MetaData) -> None:
        """
        Raise if the ORM metadata disagrees with this contract.

        Raises:
            SchemaContractError: Listing every mismatch found
        """
        problems = self.mismatches(metadata)
        if problems:
            raise SchemaContractError(problems)


# ═══════════════════════════════════════════════════════════════════════════════
# TABLE SHAPES
# ═══════════════════════════════════════════════════════════════════════════════

CATEGORIES = TableSpec(
    "categories",
    (
        ColumnSpec("id", "integer", primary_key=True, autoincrement=True),
        ColumnSpec("name", "text"),
    ),
)

MODS = TableSpec(
    "mods",
    (
        ColumnSpec("id", "uuid", primary_key=True),
        ColumnSpec("name", "text"),
        ColumnSpec("description", "text"),
        ColumnSpec("icon_url", "text"),
        ColumnSpec("full_name", "text"),
        ColumnSpec("owner", "text"),
        ColumnSpec("package_url", "text"),
        ColumnSpec("updated_date", "date"),
        ColumnSpec("rating", "integer"),
        ColumnSpec("deprecated", "boolean"),
        ColumnSpec("nsfw", "boolean"),
    ),
)

MOD_CATEGORY = TableSpec(
    "mod_category",
    (
        ColumnSpec("mod_id", "uuid", primary_key=True),
        ColumnSpec("category_id", "integer", primary_key=True),
    ),
)

USERS = TableSpec(
    "users",
    (
        ColumnSpec("id", "integer", primary_key=True, autoincrement=True),
        ColumnSpec("username", "text"),
        ColumnSpec("password_hash", "text"),
    ),
)

CATALOG_IMPORTS = TableSpec(
    "catalog_imports",
    (
        ColumnSpec("id", "integer", primary_key=True, autoincrement=True),
        ColumnSpec("imported_at", "datetime"),
        ColumnSpec("source", "text"),
        ColumnSpec("mods_inserted", "integer"),
        ColumnSpec("mods_updated", "integer"),
        ColumnSpec("categories_created", "integer"),
        ColumnSpec("records_skipped", "integer"),
    ),
)

MOD_RATINGS_TABLE = TableSpec(
    "ratings",
    (
        ColumnSpec("mod_id", "uuid", primary_key=True),
        ColumnSpec("rating", "rating"),
    ),
)

USER_RATINGS_TABLE = TableSpec(
    "ratings",
    (
        ColumnSpec("mod_id", "uuid", primary_key=True),
        ColumnSpec("user_id", "integer", primary_key=True),
        ColumnSpec("rating", "rating"),
    ),
)

RATING_TYPE_TABLE = TableSpec(
    "rating_type",
    (
        ColumnSpec("id", "integer", primary_key=True),
        ColumnSpec("name", "text"),
    ),
)

LOOKUP_RATINGS_TABLE = TableSpec(
    "ratings",
    (
        ColumnSpec("mod_id", "uuid", primary_key=True),
        ColumnSpec("rating_id", "integer", nullable=True),
    ),
)

_CATALOG_TABLES = (CATEGORIES, MODS, MOD_CATEGORY, CATALOG_IMPORTS)

CONTRACTS: dict[SchemaGeneration, SchemaContract] = {
    SchemaGeneration.MOD_RATINGS: SchemaContract(
        SchemaGeneration.MOD_RATINGS,
        _CATALOG_TABLES + (MOD_RATINGS_TABLE,),
    ),
    SchemaGeneration.USER_RATINGS: SchemaContract(
        SchemaGeneration.USER_RATINGS,
        _CATALOG_TABLES + (USERS, USER_RATINGS_TABLE),
    ),
    SchemaGeneration.RATING_LOOKUP: SchemaContract(
        SchemaGeneration.RATING_LOOKUP,
        _CATALOG_TABLES + (RATING_TYPE_TABLE, LOOKUP_RATINGS_TABLE),
    ),
}

CURRENT_GENERATION = SchemaGeneration.USER_RATINGS
CURRENT_CONTRACT = CONTRACTS[CURRENT_GENERATION]


# ═══════════════════════════════════════════════════════════════════════════════
# RATING TRANSLATION
# ═══════════════════════════════════════════════════════════════════════════════

RATING_LOOKUP_IDS: dict[Rating, int] = {
    Rating.DISLIKE: 0,
    Rating.LIKE: 1,
}

StoredRating = Union[str, int, None]


class RatingCodec:
    """
    Translates Rating values to and from their stored form.

    Enum generations store the member value ("Like"/"Dislike"); the lookup
    generation stores the rating_type id. None passes through unchanged
    because rating_id is nullable in the lookup generation.

    Example:
        codec = RatingCodec.for_generation(SchemaGeneration.RATING_LOOKUP)
        codec.to_storage(Rating.LIKE)   # 1
        codec.from_storage(0)           # Rating.DISLIKE
    """

    def __init__(self, generation: SchemaGeneration) -> None:
        self.generation = generation
        if generation is SchemaGeneration.RATING_LOOKUP:
            self._encode: dict[Rating, Any] = dict(RATING_LOOKUP_IDS)
        else:
            self._encode = {rating: rating.value for rating in Rating}
        self._decode = {stored: rating for rating, stored in self._encode.items()}

    @classmethod
    def for_generation(cls, generation: SchemaGeneration) -> "RatingCodec":
        return cls(generation)

    def to_storage(self, rating: Optional[Rating]) -> StoredRating:
        if rating is None:
            return None
        return self._encode[Rating(rating)]

    def from_storage(self, value: StoredRating) -> Optional[Rating]:
        """
        Decode a stored value.

        Raises:
            StoreError: If the value has no Rating counterpart
        """
        if value is None:
            return None
        if isinstance(value, Rating):
            return value
        try:
            return self._decode[value]
        except KeyError:
            raise StoreError(
                f"Unknown stored rating {value!r} for generation {self.generation.name}",
                details={"value": value},
            ) from None
