"""Tests for CatalogNormalizer."""

import uuid
from datetime import date

import pytest

from modrate.shared.core.exceptions import RecordError, SchemaContractError
from modrate.shared.models.contract import (
    CATALOG_IMPORTS,
    CATEGORIES,
    MOD_CATEGORY,
    MODS,
    ColumnSpec,
    SchemaContract,
    SchemaGeneration,
    TableSpec,
)
from modrate.shared.schemas.catalog import NO_DESCRIPTION
from modrate.shared.services.catalog_normalizer import CatalogNormalizer


@pytest.fixture
def normalizer():
    return CatalogNormalizer()


class TestParseRecord:
    def test_maps_every_column(self, normalizer, make_record):
        raw = make_record(
            name="MoreSuits",
            full_name="x753-MoreSuits",
            owner="x753",
            rating_score=812,
            is_deprecated=True,
            categories=["Suits", "Misc", "Suits"],
            versions=[
                {"description": "Adds suits", "icon": "https://cdn.test/new.png"},
                {"description": "Old", "icon": "https://cdn.test/old.png"},
            ],
        )

        mod, categories = normalizer.parse_record(raw)

        assert mod.id == uuid.UUID(raw["uuid4"])
        assert mod.name == "MoreSuits"
        assert mod.full_name == "x753-MoreSuits"
        assert mod.owner == "x753"
        assert mod.description == "Adds suits"
        assert mod.icon_url == "https://cdn.test/new.png"
        assert mod.updated_date == date(2025, 3, 20)
        assert mod.rating == 812
        assert mod.deprecated is True
        assert mod.nsfw is False
        assert categories == frozenset({"Suits", "Misc"})

    def test_plain_date_accepted(self, normalizer, make_record):
        mod, _ = normalizer.parse_record(make_record(date_updated="2024-12-01"))

        assert mod.updated_date == date(2024, 12, 1)

    def test_no_versions_keeps_placeholder_description(self, normalizer, make_record):
        mod, _ = normalizer.parse_record(make_record(versions=[]))

        assert mod.description == NO_DESCRIPTION
        assert mod.icon_url == ""

    def test_missing_field_is_record_error(self, normalizer, make_record):
        raw = make_record()
        del raw["owner"]

        with pytest.raises(RecordError) as exc_info:
            normalizer.parse_record(raw)

        assert "owner" in exc_info.value.message
        assert exc_info.value.record_id == raw["uuid4"]

    def test_bad_uuid_is_record_error(self, normalizer, make_record):
        with pytest.raises(RecordError):
            normalizer.parse_record(make_record(uuid4="not-a-uuid"))

    def test_non_object_is_record_error(self, normalizer):
        with pytest.raises(RecordError):
            normalizer.parse_record(["a", "list"])

    def test_row_follows_contract_column_order(self, normalizer, make_record):
        mod, _ = normalizer.parse_record(make_record())

        row = mod.to_row(MODS.insert_columns)

        assert tuple(row) == MODS.column_names
        assert row["id"] == mod.id


class TestNormalize:
    def test_one_malformed_record_out_of_ten(self, normalizer, make_record):
        records = [make_record() for _ in range(10)]
        del records[4]["name"]

        catalog = normalizer.normalize(records)

        assert len(catalog.mods) == 9
        assert catalog.skipped == 1
        assert len(catalog.errors) == 1
        assert catalog.errors[0].record_id == records[4]["uuid4"]

    def test_keeps_snapshot_order(self, normalizer, make_record):
        records = [make_record(name=f"Mod-{i}") for i in range(5)]

        catalog = normalizer.normalize(records)

        assert [entry.mod.name for entry in catalog.mods] == [f"Mod-{i}" for i in range(5)]

    def test_duplicate_uuid_first_occurrence_wins(self, normalizer, make_record):
        first = make_record(name="First")
        second = make_record(name="Second", uuid4=first["uuid4"])

        catalog = normalizer.normalize([first, second])

        assert [entry.mod.name for entry in catalog.mods] == ["First"]
        assert catalog.skipped == 1
        assert "Duplicate" in catalog.errors[0].message

    def test_new_categories_exclude_existing(self, normalizer, make_record):
        records = [
            make_record(categories=["Suits", "Misc"]),
            make_record(categories=["Misc", "Emotes"]),
            make_record(categories=[]),
        ]

        catalog = normalizer.normalize(records, existing_categories={"Misc"})

        assert catalog.new_categories == ["Emotes", "Suits"]
        assert catalog.category_names == {"Suits", "Misc", "Emotes"}

    def test_categories_of_skipped_records_ignored(self, normalizer, make_record):
        bad = make_record(categories=["Ghost"], rating_score="lots")

        catalog = normalizer.normalize([bad, make_record(categories=["Misc"])])

        assert catalog.new_categories == ["Misc"]

    def test_empty_snapshot(self, normalizer):
        catalog = normalizer.normalize([])

        assert catalog.mods == []
        assert catalog.new_categories == []
        assert catalog.skipped == 0


def test_contract_column_without_record_field_rejected():
    extended_mods = TableSpec("mods", MODS.columns + (ColumnSpec("downloads", "integer"),))
    contract = SchemaContract(
        SchemaGeneration.USER_RATINGS,
        (CATEGORIES, extended_mods, MOD_CATEGORY, CATALOG_IMPORTS),
    )

    with pytest.raises(SchemaContractError) as exc_info:
        CatalogNormalizer(contract)

    assert any("downloads" in problem for problem in exc_info.value.mismatches)
