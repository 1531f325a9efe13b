"""
ModRating Entity Model

A user's Like/Dislike verdict on a mod. This is the per-user generation of
the ratings table: at most one row per (mod, user).

Earlier generations (one rating per mod, and the lookup-table variant) are
described in modrate.shared.models.contract; the mod-keyed table survives as
legacy_ratings and is not mapped.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Enum, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modrate.shared.models.base import Base
from modrate.shared.models.enums import Rating


if TYPE_CHECKING:
    from modrate.shared.models.mod import Mod
    from modrate.shared.models.user import User


RATING_TYPE = Enum(
    Rating,
    name="rating_type",
    values_callable=lambda members: [member.value for member in members],
)


class ModRating(Base):
    """
    ModRating model - one user's verdict on one mod.

    Attributes:
        mod_id: Rated mod (part of composite PK)
        user_id: Rating user (part of composite PK)
        rating: Like or Dislike
    """

    __tablename__ = "ratings"

    mod_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("mods.id"),
        primary_key=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
    )

    rating: Mapped[Rating] = mapped_column(RATING_TYPE, nullable=False)

    mod: Mapped["Mod"] = relationship("Mod", back_populates="ratings")
    user: Mapped["User"] = relationship("User", back_populates="ratings")

    def __repr__(self) -> str:
        return f"<ModRating(mod_id={self.mod_id}, user_id={self.user_id}, rating={self.rating.value})>"
