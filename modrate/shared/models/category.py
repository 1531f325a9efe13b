"""
Category Entity Model

A catalog category, deduplicated by exact name. Ids are assigned by the store
when a name is first seen during an import.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modrate.shared.models.base import Base


if TYPE_CHECKING:
    from modrate.shared.models.mod_category import ModCategory


class Category(Base):
    """Category model - unique name, store-assigned integer id."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    mod_links: Mapped[list["ModCategory"]] = relationship(
        "ModCategory",
        back_populates="category",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
