"""Segment repository implementation.

Reads per-segment storage metadata of a table.

Rules:
- MAY import domain, shared
- MUST NOT compute sizes (that's the accounting layer's job)
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Tuple

from domain import INVALID_BLOCK, ColumnRef, Segment, TableRef
from shared.exceptions import InvalidInputError

from ..db import quote_identifier, quote_literal
from .base import BaseRepository

logger = logging.getLogger(__name__)

# Older DuckDB releases do not report additional blocks at all
ADDITIONAL_BLOCK_COLUMNS = ("additional_block_ids", "additional_blocks", "additional_block")


def _parse_block_list(value: Any) -> Tuple[int, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.strip().strip("[]")
        if not value:
            return ()
        return tuple(int(item) for item in value.split(","))
    return tuple(int(item) for item in value)


def _additional_blocks(row: Dict[str, Any]) -> Tuple[int, ...]:
    for column in ADDITIONAL_BLOCK_COLUMNS:
        if column in row:
            return _parse_block_list(row[column])
    return ()


def row_to_segment(row: Dict[str, Any]) -> Segment:
    """Convert one ``pragma_storage_info`` row into a Segment snapshot."""
    block_id = row.get("block_id")
    block_offset = row.get("block_offset")
    return Segment(
        row_group_index=int(row["row_group_id"]),
        column_id=int(row["column_id"]),
        column_path=str(row["column_path"]),
        is_persistent=bool(row["persistent"]),
        block_id=INVALID_BLOCK if block_id is None else int(block_id),
        block_offset=0 if block_offset is None else int(block_offset),
        compression_kind=str(row.get("compression") or ""),
        row_count=int(row.get("count") or 0),
        additional_block_ids=_additional_blocks(row),
    )


class SegmentRepository(BaseRepository):
    """Read-only access to ``pragma_storage_info``."""

    def _storage_info_sql(self, table: TableRef, select: str) -> str:
        qualified = ".".join(
            quote_identifier(part) for part in (table.database, table.schema, table.name)
        )
        return f"SELECT {select} FROM pragma_storage_info({quote_literal(qualified)})"

    def fetch_segments(self, table: TableRef) -> List[Segment]:
        """All segments of every column and row group of ``table``."""
        rows = self._fetch_dicts(self._storage_info_sql(table, "*"))
        segments = [row_to_segment(row) for row in rows]
        logger.debug("fetched %d segments for %s", len(segments), table.qualified_name)
        return segments

    def fetch_physical_column_ids(self, table: TableRef) -> Dict[str, int]:
        """Map each stored column name of ``table`` to its physical column id.

        Generated columns hold no data and never appear in the map.
        """
        rows = self._fetch_dicts(
            self._storage_info_sql(table, "DISTINCT column_name, column_id")
        )
        return {row["column_name"]: int(row["column_id"]) for row in rows}

    def resolve_physical_column(self, table: TableRef, column: ColumnRef) -> ColumnRef:
        """Replace the catalog position of ``column`` with its physical id.

        A table without any stored segment keeps the catalog position, since
        no segment can match it either way.

        Raises:
            InvalidInputError: If the column is generated and stores no data.
        """
        physical_ids = self.fetch_physical_column_ids(table)
        if not physical_ids:
            return column
        if column.name not in physical_ids:
            raise InvalidInputError(
                f"Column '{column.name}' is generated and has no stored data"
            )
        return replace(column, column_id=physical_ids[column.name])


__all__ = ["SegmentRepository", "row_to_segment"]
