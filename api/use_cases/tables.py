"""List tables with their persisted data size."""

from typing import Optional

from accounting import count_unique_blocks
from domain import TableSizeEntry
from shared.formatting import format_size
from shared.result import Result

from ..cursor import RowCursor
from .base import AnalysisUseCase

TABLE_COLUMNS = ("database", "schema", "table", "persisted_data_size")


class ListTablesUseCase(AnalysisUseCase):
    """Every table of every non-internal schema with its unique-block size.

    Example:
        >>> result = ListTablesUseCase(conn).execute("mydb")
        >>> rows = list(result.value)
    """

    analysis_name = "list-tables-with-size"
    command_name = "tables"

    def execute(self, database: Optional[str] = None) -> Result[RowCursor]:
        return self._run(lambda: self._build(database))

    def _build(self, database_name: Optional[str]) -> RowCursor:
        database = self.require_persistent(database_name)
        block_alloc_size = self.sizes.fetch_block_universe(database.name).block_alloc_size

        entries = []
        for table in self.catalog.list_tables(database.name):
            blocks = count_unique_blocks(self.segments.fetch_segments(table))
            entries.append(
                TableSizeEntry(
                    database=database.name,
                    schema=table.schema,
                    table=table.name,
                    persisted_data_size=blocks * block_alloc_size,
                )
            )

        rows = [
            (entry.database, entry.schema, entry.table, format_size(entry.persisted_data_size))
            for entry in entries
        ]
        return RowCursor(TABLE_COLUMNS, rows, self.batch_size)


__all__ = ["ListTablesUseCase", "TABLE_COLUMNS"]
