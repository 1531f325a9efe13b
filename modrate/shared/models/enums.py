"""
Enums used across the application.
"""

from enum import Enum


class Rating(str, Enum):
    """
    A user's verdict on a mod.

    This is the internal representation. How a rating is stored depends on
    the schema generation; see modrate.shared.models.contract.RatingCodec.
    """

    LIKE = "Like"
    DISLIKE = "Dislike"


class CatalogSource(str, Enum):
    """Where the snapshot of an import came from."""

    REMOTE = "remote"
    CACHE = "cache"
