"""File-wide storage breakdown by category."""

from typing import List, Optional

from accounting import BlockIdentitySet, StorageBreakdownPartitioner
from domain import StorageCategoryEntry
from shared.formatting import format_size
from shared.result import Result

from ..cursor import RowCursor
from .base import AnalysisUseCase

BREAKDOWN_COLUMNS = ("component", "size", "percentage", "block_count")


class StorageBreakdownUseCase(AnalysisUseCase):
    """Partitions a database file into table_data, index, metadata and free_blocks.

    Pipeline:
    1. Count unique table-data blocks across all tables (one shared set)
    2. Count metadata blocks
    3. Derive index blocks as the remainder of the file total
    """

    analysis_name = "storage-breakdown"
    command_name = "breakdown"

    def execute(self, database: Optional[str] = None) -> Result[RowCursor]:
        return self._run(lambda: self._build(database))

    def categories(self, database_name: str) -> List[StorageCategoryEntry]:
        universe = self.sizes.fetch_block_universe(database_name)
        metadata_blocks = self.sizes.count_metadata_blocks(database_name)

        # A block shared between tables still counts once
        table_blocks = BlockIdentitySet()
        for table in self.catalog.list_tables(database_name):
            table_blocks.add_segments(self.segments.fetch_segments(table))

        partitioner = StorageBreakdownPartitioner(universe)
        return partitioner.partition(
            table_data_blocks=table_blocks.count(),
            metadata_blocks=metadata_blocks,
        )

    def _build(self, database_name: Optional[str]) -> RowCursor:
        database = self.require_persistent(database_name)
        rows = [
            (entry.category, format_size(entry.size_bytes), entry.percentage, entry.block_count)
            for entry in self.categories(database.name)
        ]
        return RowCursor(BREAKDOWN_COLUMNS, rows, self.batch_size)


__all__ = ["StorageBreakdownUseCase", "BREAKDOWN_COLUMNS"]
