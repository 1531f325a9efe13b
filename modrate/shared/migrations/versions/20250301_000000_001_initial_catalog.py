# pylint: skip-file
# ruff: noqa
"""Initial catalog schema

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- categories: Catalog categories, unique by name
- mods: Mirrored catalog packages (11 columns, UUID primary key)
- mod_category: Junction table for mods and categories
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    op.create_table(
        "mods",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon_url", sa.Text(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("owner", sa.Text(), nullable=False),
        sa.Column("package_url", sa.Text(), nullable=False),
        sa.Column("updated_date", sa.Date(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("deprecated", sa.Boolean(), nullable=False),
        sa.Column("nsfw", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_mods"),
    )

    op.create_table(
        "mod_category",
        sa.Column("mod_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["mod_id"], ["mods.id"], name="fk_mod_category_mod_id_mods"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], name="fk_mod_category_category_id_categories"
        ),
        sa.PrimaryKeyConstraint("mod_id", "category_id", name="pk_mod_category"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("mod_category")
    op.drop_table("mods")
    op.drop_table("categories")
