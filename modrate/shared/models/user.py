"""
User Entity Model

Represents a registered application user. Users are created by the
registration flow; this package only needs them as the owners of ratings.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modrate.shared.models.base import Base


if TYPE_CHECKING:
    from modrate.shared.models.rating import ModRating


class User(Base):
    """
    User model representing a registered application user.

    Attributes:
        id: Auto-assigned integer id
        username: Unique login name
        password_hash: Hash produced by the registration flow
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    ratings: Mapped[list["ModRating"]] = relationship(
        "ModRating",
        back_populates="user",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
