"""
SheetStore Backend — Sheet SQLAlchemy Models
==============================================

What:  ORM models for the two record kinds the API manages.
How:   Each row is a self-contained document: list- and grid-shaped fields
       live in JSON columns, so a record is read and written whole.
Who:   Used by SheetService / TableService, and by Alembic for schema management.

Record kinds:
    SheetMetadata (sheet_metadata): the registry of sheet names. One row by
        convention; services always read the first row.
    SheetTable (sheet_tables): the saved grid of one sheet, looked up by
        collection_name.

No foreign key links the two. Neither sheet name uniqueness nor
collection_name uniqueness is enforced here; the services keep them unique.
"""

from typing import Any, Dict, List

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class SheetMetadata(Base):
    """
    Registry of known sheet names.

    Lifecycle:
        1. Created lazily by the first addSheet call
        2. Updated by addSheet (append) and deleteSheet (remove)
        3. Never deleted

    JSON columns are not mutation-tracked: callers must assign a new list
    rather than append in place.
    """

    __tablename__ = "sheet_metadata"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sheet_names: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of sheet names, unique by application logic",
    )

    def __repr__(self) -> str:
        return f"<SheetMetadata(id={self.id}, sheets={len(self.sheet_names or [])})>"


class SheetTable(Base):
    """
    Saved grid for one sheet.

    `data` is sparse: a list of {"row": int, "col": int, "value": str}
    entries; cells that are not listed are empty. Saves replace rows,
    columns and data wholesale.
    """

    __tablename__ = "sheet_tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Lookup key; indexed but deliberately not unique
    collection_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Sheet this table belongs to",
    )

    # ROWS is an SQL keyword in several dialects; map onto neutral column names
    rows: Mapped[int] = mapped_column("row_count", Integer, nullable=False, default=0)
    columns: Mapped[int] = mapped_column("column_count", Integer, nullable=False, default=0)

    data: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Sparse cell entries: [{row, col, value}]",
    )

    __table_args__ = (
        Index("idx_sheet_tables_collection_name", "collection_name"),
    )

    def __repr__(self) -> str:
        return (
            f"<SheetTable(collection_name='{self.collection_name}', "
            f"rows={self.rows}, columns={self.columns}, cells={len(self.data or [])})>"
        )
