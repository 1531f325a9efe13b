# pylint: skip-file
# ruff: noqa
"""Mod ratings

Revision ID: 002
Revises: 001
Create Date: 2025-03-08 00:00:00

Enums created:
- rating_type: Like, Dislike (PostgreSQL only; SQLite stores the label)

Tables created:
- ratings: One rating per mod
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


rating_type_pg = postgresql.ENUM("Like", "Dislike", name="rating_type", create_type=False)
rating_type = sa.Enum("Like", "Dislike", name="rating_type").with_variant(
    rating_type_pg, "postgresql"
)


def upgrade() -> None:
    """Upgrade database schema."""
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute("CREATE TYPE rating_type AS ENUM ('Like', 'Dislike')")

    op.create_table(
        "ratings",
        sa.Column("mod_id", sa.Uuid(), nullable=False),
        sa.Column("rating", rating_type, nullable=False),
        sa.ForeignKeyConstraint(["mod_id"], ["mods.id"], name="fk_ratings_mod_id_mods"),
        sa.PrimaryKeyConstraint("mod_id", name="pk_ratings"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("ratings")
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TYPE rating_type")
