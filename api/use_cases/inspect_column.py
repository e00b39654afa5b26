"""Per-segment storage of a single column."""

import logging
from typing import Optional

from accounting import SegmentSizeResolver, estimate_decompressed_size
from shared.formatting import format_size
from shared.result import Result
from storage import parse_qualified_name

from ..cursor import RowCursor
from .base import AnalysisUseCase

logger = logging.getLogger(__name__)

COLUMN_COLUMNS = (
    "row_group_id",
    "column_name",
    "column_type",
    "compression",
    "compressed_size",
    "estimated_decompressed_size",
    "row_count",
)

NOT_APPLICABLE = "N/A"


class InspectColumnUseCase(AnalysisUseCase):
    """One row per persisted main-data segment of a column.

    Compressed size includes any additional blocks of the segment. The
    estimated decompressed size is "N/A" for variable-width types.

    Example:
        >>> result = InspectColumnUseCase(conn).execute("main.orders", "amount")
        >>> for row in result.value:
        ...     print(row)
    """

    analysis_name = "inspect-column"
    command_name = "column TABLE COLUMN"

    def execute(
        self,
        table: str,
        column: str,
        database: Optional[str] = None,
    ) -> Result[RowCursor]:
        return self._run(lambda: self._build(table, column, database))

    def _build(self, table_name: str, column_name: str, database_name: Optional[str]) -> RowCursor:
        if database_name is None:
            # "db.schema.table" names its own database
            database_name = parse_qualified_name(table_name)[0]
        database = self.require_persistent(database_name)
        table = self.catalog.resolve_table(database.name, table_name)
        column = self.segments.resolve_physical_column(
            table, self.catalog.resolve_column(table, column_name)
        )
        block_alloc_size = self.sizes.fetch_block_universe(database.name).block_alloc_size

        resolver = SegmentSizeResolver(self.segments.fetch_segments(table), block_alloc_size)
        sizes = resolver.resolve(column.column_id)
        logger.debug(
            "%s.%s: %d of %d segment sizes are block-bounded estimates",
            table.qualified_name,
            column.name,
            sum(1 for size in sizes if size.is_upper_bound),
            len(sizes),
        )
        rows = []
        for size in sizes:
            segment = size.segment
            estimated = estimate_decompressed_size(column.logical_type, segment.row_count)
            rows.append(
                (
                    segment.row_group_index,
                    column.name,
                    column.logical_type,
                    segment.compression_kind,
                    format_size(size.total_compressed_size),
                    NOT_APPLICABLE if estimated is None else format_size(estimated),
                    segment.row_count,
                )
            )
        return RowCursor(COLUMN_COLUMNS, rows, self.batch_size)


__all__ = ["InspectColumnUseCase", "COLUMN_COLUMNS", "NOT_APPLICABLE"]
