"""
ModCategory Entity Model

Junction table linking Mods to Categories.

SAMPLE MOD_CATEGORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ mod_id           │ 7b1d4f38-1a5c-4b6e-9a51-0f3cf1f6a2d1                      │
│ category_id      │ 3                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modrate.shared.models.base import Base


if TYPE_CHECKING:
    from modrate.shared.models.category import Category
    from modrate.shared.models.mod import Mod


class ModCategory(Base):
    """
    ModCategory model - links mods to the categories they are listed under.

    Has no lifecycle of its own: the importer replaces a mod's links
    wholesale on every import of that mod.

    Attributes:
        mod_id: The mod (part of composite PK)
        category_id: The category (part of composite PK)
    """

    __tablename__ = "mod_category"

    mod_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("mods.id"),
        primary_key=True,
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        primary_key=True,
    )

    mod: Mapped["Mod"] = relationship("Mod", back_populates="category_links")

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="mod_links",
        lazy="joined",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<ModCategory(mod_id={self.mod_id}, category_id={self.category_id})>"
