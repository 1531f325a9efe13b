"""
ModRate SQLAlchemy Models

This package contains all database models of the catalog mirror.

Model Hierarchy:
================
    Mod
       ├── category_links (ModCategory[])
       │      └── category (Category)
       └── ratings (ModRating[])
              └── user (User)

    CatalogImport   ← one row per committed refresh cycle

Models Overview:
================
- Base: Declarative base with naming convention
- Mod: Mirrored catalog package (UUID identity)
- Category: Catalog category, unique by name
- ModCategory: Junction table for mods and categories
- User: Registered user, FK target of ratings
- ModRating: Per-user Like/Dislike
- CatalogImport: Import audit row
- contract: Typed table shapes per schema generation
"""

from modrate.shared.models.base import Base
from modrate.shared.models.enums import Rating, CatalogSource
from modrate.shared.models.category import Category
from modrate.shared.models.mod import Mod
from modrate.shared.models.mod_category import ModCategory
from modrate.shared.models.user import User
from modrate.shared.models.rating import ModRating
from modrate.shared.models.catalog_import import CatalogImport
from modrate.shared.models.contract import (
    CURRENT_CONTRACT,
    CURRENT_GENERATION,
    CONTRACTS,
    RatingCodec,
    SchemaContract,
    SchemaGeneration,
)

__all__ = [
    # Base class
    "Base",
    # Enums
    "Rating",
    "CatalogSource",
    # Models
    "Category",
    "Mod",
    "ModCategory",
    "User",
    "ModRating",
    "CatalogImport",
    # Contract
    "CURRENT_CONTRACT",
    "CURRENT_GENERATION",
    "CONTRACTS",
    "RatingCodec",
    "SchemaContract",
    "SchemaGeneration",
]
