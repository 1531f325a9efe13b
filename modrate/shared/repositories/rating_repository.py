"""
Rating Repository

Per-user ratings of mods. Values go through a RatingCodec so callers only
ever deal with Rating members, whatever the stored representation is.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from modrate.shared.repositories.base import BaseRepository
from modrate.shared.models.contract import CURRENT_GENERATION, RatingCodec
from modrate.shared.models.enums import Rating
from modrate.shared.models.rating import ModRating


class RatingRepository(BaseRepository[ModRating]):
    """Repository for ModRating database operations."""

    def __init__(self, session: AsyncSession, codec: Optional[RatingCodec] = None) -> None:
        super().__init__(ModRating, session)
        self.codec = codec or RatingCodec.for_generation(CURRENT_GENERATION)

    async def set_rating(self, mod_id: UUID, user_id: int, rating: Rating) -> None:
        """
        Store a user's rating, replacing any earlier one for the same mod.

        SQL Generated:
            INSERT INTO ratings (mod_id, user_id, rating) VALUES (?, ?, ?)
            ON CONFLICT (mod_id, user_id) DO UPDATE SET rating = excluded.rating
        """
        stmt = self.insert_into().values(
            mod_id=mod_id,
            user_id=user_id,
            rating=self.codec.to_storage(rating),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["mod_id", "user_id"],
            set_={"rating": stmt.excluded.rating},
        )
        await self.session.execute(stmt)

    async def get_rating(self, mod_id: UUID, user_id: int) -> Optional[Rating]:
        """Get a user's rating of a mod, None if not rated."""
        result = await self.session.execute(
            select(ModRating.rating).where(
                ModRating.mod_id == mod_id,
                ModRating.user_id == user_id,
            )
        )
        return self.codec.from_storage(result.scalar_one_or_none())

    async def count_for_mod(self, mod_id: UUID) -> dict[Rating, int]:
        """
        Tally ratings of a mod.

        Returns:
            Count per Rating; ratings nobody gave are reported as 0
        """
        result = await self.session.execute(
            select(ModRating.rating, func.count())
            .where(ModRating.mod_id == mod_id)
            .group_by(ModRating.rating)
        )
        counts = {rating: 0 for rating in Rating}
        for stored, total in result.all():
            counts[self.codec.from_storage(stored)] = total
        return counts
