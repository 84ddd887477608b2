"""
SheetStore Backend — Table Store Service Unit Tests
=====================================================

What:  Tests for TableService (get_table default/lookup, save_table upsert).
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import StorageError
from app.models.sheet import SheetTable
from app.schemas.sheet import CellEntry, SaveTableRequest
from app.services.table_service import TableService


def _payload(rows, columns, cells):
    return SaveTableRequest(
        rows=rows,
        columns=columns,
        data=[CellEntry(row=r, col=c, value=v) for r, c, v in cells],
    )


class TestTableServiceGet:

    def setup_method(self):
        self.service = TableService()

    @pytest.mark.asyncio
    async def test_unsaved_collection_returns_default_grid(self, db_session):
        result = await self.service.get_table(db_session, "defaultCollection")

        assert result.metadata.rows == 5
        assert result.metadata.columns == 5
        assert result.data == []

    @pytest.mark.asyncio
    async def test_storage_failure_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("timeout")

        with pytest.raises(StorageError, match="Error fetching table data"):
            await self.service.get_table(mock_db_session, "Sheet1")


class TestTableServiceSave:

    def setup_method(self):
        self.service = TableService()

    @pytest.mark.asyncio
    async def test_save_then_get(self, db_session):
        result = await self.service.save_table(
            db_session, "Sheet1", _payload(3, 3, [(0, 0, "x")])
        )
        assert result.message == "Table data saved successfully"

        table = await self.service.get_table(db_session, "Sheet1")
        assert table.metadata.rows == 3
        assert table.metadata.columns == 3
        assert [c.model_dump() for c in table.data] == [{"row": 0, "col": 0, "value": "x"}]

    @pytest.mark.asyncio
    async def test_second_save_overwrites_without_merge(self, db_session):
        await self.service.save_table(
            db_session, "Sheet1", _payload(3, 3, [(0, 0, "a"), (1, 1, "b")])
        )
        await self.service.save_table(db_session, "Sheet1", _payload(4, 2, [(2, 1, "c")]))

        table = await self.service.get_table(db_session, "Sheet1")
        assert (table.metadata.rows, table.metadata.columns) == (4, 2)
        assert [c.model_dump() for c in table.data] == [{"row": 2, "col": 1, "value": "c"}]

        records = (await db_session.execute(select(SheetTable))).scalars().all()
        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_out_of_range_cells_are_kept(self, db_session):
        await self.service.save_table(db_session, "Sheet1", _payload(1, 1, [(7, 9, "far")]))

        table = await self.service.get_table(db_session, "Sheet1")
        assert table.data[0].row == 7
        assert table.data[0].col == 9

    @pytest.mark.asyncio
    async def test_collections_are_separate(self, db_session):
        await self.service.save_table(db_session, "Sheet1", _payload(2, 2, [(0, 0, "a")]))

        other = await self.service.get_table(db_session, "Sheet2")
        assert other.data == []
        assert other.metadata.rows == 5

    @pytest.mark.asyncio
    async def test_storage_failure_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("disk full")

        with pytest.raises(StorageError, match="Error saving table data"):
            await self.service.save_table(mock_db_session, "Sheet1", _payload(1, 1, []))


class TestCellEntry:

    def test_non_string_values_are_stringified(self):
        assert CellEntry(row=0, col=0, value=42).value == "42"
        assert CellEntry(row=0, col=0, value=1.5).value == "1.5"

    def test_null_value_is_empty(self):
        assert CellEntry(row=0, col=0, value=None).value == ""
