"""
CatalogImport Entity Model

One row per committed refresh cycle. Written inside the import transaction,
so a rolled-back cycle leaves no trace here either.

SAMPLE CATALOG_IMPORT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id                  │ 17                                                     │
│ imported_at         │ 2025-03-22T12:45:56Z                                   │
│ source              │ "remote"                                               │
│ mods_inserted       │ 12                                                     │
│ mods_updated        │ 3840                                                   │
│ categories_created  │ 0                                                      │
│ records_skipped     │ 1                                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from modrate.shared.models.base import Base


class CatalogImport(Base):
    """
    CatalogImport model - audit row for a finished import.

    Attributes:
        id: Auto-assigned integer id
        imported_at: Commit time of the cycle (UTC)
        source: "remote" or "cache"
        mods_inserted: Mods that did not exist before the cycle
        mods_updated: Existing mods whose fields were replaced
        categories_created: Category names seen for the first time
        records_skipped: Malformed catalog entries left out
    """

    __tablename__ = "catalog_imports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    imported_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    source: Mapped[str] = mapped_column(String(16), nullable=False)
    mods_inserted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mods_updated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    categories_created: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    records_skipped: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<CatalogImport(id={self.id}, imported_at={self.imported_at}, source={self.source})>"
