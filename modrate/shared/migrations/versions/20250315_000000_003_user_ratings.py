# pylint: skip-file
# ruff: noqa
"""Users and per-user ratings

Revision ID: 003
Revises: 002
Create Date: 2025-03-15 00:00:00

Tables created:
- users: Registered users
- ratings: One rating per (mod, user)

Tables renamed:
- ratings → legacy_ratings (kept as is, its rows are NOT copied forward)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


rating_type_pg = postgresql.ENUM("Like", "Dislike", name="rating_type", create_type=False)
rating_type = sa.Enum("Like", "Dislike", name="rating_type").with_variant(
    rating_type_pg, "postgresql"
)


def _rename_constraints(table: str, renames: dict[str, str]) -> None:
    # PostgreSQL constraint names are backed by schema-wide index names
    if op.get_bind().dialect.name != "postgresql":
        return
    for old, new in renames.items():
        op.execute(f"ALTER TABLE {table} RENAME CONSTRAINT {old} TO {new}")


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.rename_table("ratings", "legacy_ratings")
    _rename_constraints(
        "legacy_ratings",
        {
            "pk_ratings": "pk_legacy_ratings",
            "fk_ratings_mod_id_mods": "fk_legacy_ratings_mod_id_mods",
        },
    )

    op.create_table(
        "ratings",
        sa.Column("mod_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("rating", rating_type, nullable=False),
        sa.ForeignKeyConstraint(["mod_id"], ["mods.id"], name="fk_ratings_mod_id_mods"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_ratings_user_id_users"),
        sa.PrimaryKeyConstraint("mod_id", "user_id", name="pk_ratings"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("ratings")
    _rename_constraints(
        "legacy_ratings",
        {
            "pk_legacy_ratings": "pk_ratings",
            "fk_legacy_ratings_mod_id_mods": "fk_ratings_mod_id_mods",
        },
    )
    op.rename_table("legacy_ratings", "ratings")
    op.drop_table("users")
