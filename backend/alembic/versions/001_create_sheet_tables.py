"""Create sheet_metadata and sheet_tables

Revision ID: 001
Revises: None
Create Date: 2025-03-02 00:00:00.000000+00:00

What:  Creates the sheet name registry and the per-sheet grid table.
How:   Portable column types only (JSON, not JSONB), so the same revision
       runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables; all sheets are lost.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sheet_metadata",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "sheet_names",
            sa.JSON(),
            nullable=False,
            comment="Ordered list of sheet names, unique by application logic",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sheet_tables",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "collection_name",
            sa.String(255),
            nullable=False,
            comment="Sheet this table belongs to",
        ),
        sa.Column("row_count", sa.Integer(), nullable=False),
        sa.Column("column_count", sa.Integer(), nullable=False),
        sa.Column(
            "data",
            sa.JSON(),
            nullable=False,
            comment="Sparse cell entries: [{row, col, value}]",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Not unique: saveTable's upsert keeps one row per collection
    op.create_index(
        "idx_sheet_tables_collection_name",
        "sheet_tables",
        ["collection_name"],
    )


def downgrade() -> None:
    op.drop_index("idx_sheet_tables_collection_name", table_name="sheet_tables")
    op.drop_table("sheet_tables")
    op.drop_table("sheet_metadata")
