"""
Mod Entity Model

Represents one package of the external catalog, mirrored locally.

Model Hierarchy:
================
    Mod
       ├── category_links (ModCategory[]) - Categories the mod is listed under
       └── ratings (ModRating[])          - Per-user verdicts

SAMPLE MOD RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7b1d4f38-1a5c-4b6e-9a51-0f3cf1f6a2d1                      │
│ name             │ "MoreSuits"                                               │
│ description      │ "Adds more suit options"                                  │
│ icon_url         │ "https://gcdn.thunderstore.io/live/repository/icons/..."  │
│ full_name        │ "x753-MoreSuits"                                          │
│ owner            │ "x753"                                                    │
│ package_url      │ "https://thunderstore.io/c/lethal-company/p/x753/..."     │
│ updated_date     │ 2025-03-20                                                │
│ rating           │ 812                                                       │
│ deprecated       │ false                                                     │
│ nsfw             │ false                                                     │
└──────────────────────────────────────────────────────────────────────────────┘

The id is the catalog's uuid4 and never changes across refreshes; every other
column is replaced when the catalog is re-imported.
"""

from datetime import date
from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Boolean, Date, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modrate.shared.models.base import Base


if TYPE_CHECKING:
    from modrate.shared.models.mod_category import ModCategory
    from modrate.shared.models.rating import ModRating


class Mod(Base):
    """
    Mod model - one catalog package.

    Attributes:
        id: Catalog uuid4 (primary key)
        name: Display name
        description: Description of the most recent version
        icon_url: Icon of the most recent version
        full_name: Fully-qualified package name (owner-name)
        owner: Publishing team/user handle
        package_url: Catalog page of the package
        updated_date: Date of the latest catalog update
        rating: Catalog rating score
        deprecated: Package is marked deprecated
        nsfw: Package has NSFW content
    """

    __tablename__ = "mods"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon_url: Mapped[str] = mapped_column(Text, nullable=False)
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    package_url: Mapped[str] = mapped_column(Text, nullable=False)
    updated_date: Mapped[date] = mapped_column(Date, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    deprecated: Mapped[bool] = mapped_column(Boolean, nullable=False)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    category_links: Mapped[list["ModCategory"]] = relationship(
        "ModCategory",
        back_populates="mod",
        lazy="selectin",
    )

    ratings: Mapped[list["ModRating"]] = relationship(
        "ModRating",
        back_populates="mod",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Mod(id={self.id}, full_name={self.full_name})>"
