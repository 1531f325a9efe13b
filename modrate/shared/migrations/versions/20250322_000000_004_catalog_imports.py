# pylint: skip-file
# ruff: noqa
"""Catalog import audit

Revision ID: 004
Revises: 003
Create Date: 2025-03-22 00:00:00

Tables created:
- catalog_imports: One row per committed refresh cycle
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "catalog_imports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("imported_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("source", sa.String(16), nullable=False),
        sa.Column("mods_inserted", sa.Integer(), nullable=False),
        sa.Column("mods_updated", sa.Integer(), nullable=False),
        sa.Column("categories_created", sa.Integer(), nullable=False),
        sa.Column("records_skipped", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_imports"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("catalog_imports")
