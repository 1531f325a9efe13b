"""Tests for the schema version contract and rating translation."""

import pytest

from modrate.shared.core.exceptions import SchemaContractError, StoreError
from modrate.shared.models import Base, Rating
from modrate.shared.models.contract import (
    CONTRACTS,
    CURRENT_CONTRACT,
    CURRENT_GENERATION,
    MODS,
    RatingCodec,
    SchemaGeneration,
)


class TestContract:
    def test_models_match_current_generation(self):
        assert CURRENT_GENERATION is SchemaGeneration.USER_RATINGS
        assert CURRENT_CONTRACT.mismatches(Base.metadata) == []
        CURRENT_CONTRACT.verify(Base.metadata)

    def test_older_generation_reports_extra_rating_column(self):
        problems = CONTRACTS[SchemaGeneration.MOD_RATINGS].mismatches(Base.metadata)

        assert "unexpected column 'ratings.user_id'" in problems
        assert "missing table 'users'" not in problems

    def test_lookup_generation_reports_every_difference(self):
        with pytest.raises(SchemaContractError) as exc_info:
            CONTRACTS[SchemaGeneration.RATING_LOOKUP].verify(Base.metadata)

        mismatches = exc_info.value.mismatches
        assert "missing table 'rating_type'" in mismatches
        assert "missing column 'ratings.rating_id'" in mismatches
        assert isinstance(exc_info.value, StoreError)

    def test_unknown_table(self):
        with pytest.raises(SchemaContractError):
            CURRENT_CONTRACT.table("legacy_ratings")

    def test_mods_columns(self):
        assert MODS.column_names == (
            "id",
            "name",
            "description",
            "icon_url",
            "full_name",
            "owner",
            "package_url",
            "updated_date",
            "rating",
            "deprecated",
            "nsfw",
        )
        assert MODS.key_columns == ("id",)
        assert len(MODS.value_columns) == 10

    def test_store_assigned_ids_not_inserted(self):
        assert CURRENT_CONTRACT.categories.insert_columns == ("name",)
        assert CURRENT_CONTRACT.mod_category.insert_columns == ("mod_id", "category_id")


class TestRatingCodec:
    @pytest.mark.parametrize(
        "generation", [SchemaGeneration.MOD_RATINGS, SchemaGeneration.USER_RATINGS]
    )
    def test_enum_generations_store_labels(self, generation):
        codec = RatingCodec.for_generation(generation)

        assert codec.to_storage(Rating.LIKE) == "Like"
        assert codec.to_storage(Rating.DISLIKE) == "Dislike"
        assert codec.from_storage("Dislike") is Rating.DISLIKE

    def test_lookup_generation_stores_ids(self):
        codec = RatingCodec.for_generation(SchemaGeneration.RATING_LOOKUP)

        assert codec.to_storage(Rating.LIKE) == 1
        assert codec.to_storage(Rating.DISLIKE) == 0
        assert codec.from_storage(1) is Rating.LIKE
        assert codec.from_storage(0) is Rating.DISLIKE

    def test_none_passes_through(self):
        codec = RatingCodec.for_generation(SchemaGeneration.RATING_LOOKUP)

        assert codec.to_storage(None) is None
        assert codec.from_storage(None) is None

    def test_unknown_stored_value(self):
        codec = RatingCodec.for_generation(SchemaGeneration.RATING_LOOKUP)

        with pytest.raises(StoreError):
            codec.from_storage(7)
