"""Snapshot entities for storage inspection.

All entities are read-only, point-in-time views built fresh for every
analysis run and discarded once its rows are consumed.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

INVALID_BLOCK = -1

# Schemas that hold catalog views rather than user tables
INTERNAL_SCHEMAS = ("information_schema", "pg_catalog")

NATIVE_DATABASE_TYPE = "duckdb"


def main_data_path(column_id: int) -> str:
    """Path marker of a column's main data segments, e.g. ``[3]``.

    Validity bitmap segments of the same column use ``[3, 0]``.
    """
    return f"[{column_id}]"


@dataclass(frozen=True)
class Segment:
    """One stored run of a column's values within one row group.

    Attributes:
        row_group_index: Ordinal of the row group
        column_id: Physical column index
        column_path: Path marker ("[id]" for main data, "[id, 0]" for validity)
        is_persistent: False for segments never flushed to a block
        block_id: Physical block id, or INVALID_BLOCK
        block_offset: Byte offset of the segment within its block
        compression_kind: Name of the encoding (e.g. "BitPacking")
        additional_block_ids: Extra full blocks used by oversized segments
        row_count: Number of rows stored in the segment
    """

    row_group_index: int
    column_id: int
    column_path: str
    is_persistent: bool
    block_id: int
    block_offset: int
    compression_kind: str
    row_count: int
    additional_block_ids: Tuple[int, ...] = ()

    @property
    def has_backing_block(self) -> bool:
        return self.is_persistent and self.block_id != INVALID_BLOCK


@dataclass(frozen=True)
class BlockUniverse:
    """Block totals of one database file."""

    total_blocks: int
    free_blocks: int
    block_alloc_size: int


@dataclass(frozen=True)
class DatabaseRef:
    """An attached database as reported by the catalog."""

    name: str
    path: Optional[str]
    type: str = NATIVE_DATABASE_TYPE
    internal: bool = False
    temporary: bool = False

    @property
    def is_persistent(self) -> bool:
        return bool(self.path) and not self.internal and not self.temporary

    @property
    def is_native(self) -> bool:
        return (self.type or "").lower() == NATIVE_DATABASE_TYPE


@dataclass(frozen=True)
class TableRef:
    database: str
    schema: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.database}.{self.schema}.{self.name}"


@dataclass(frozen=True)
class ColumnRef:
    """A resolved column: its name, column id and logical type.

    From the catalog ``column_id`` is the zero-based catalog position; after
    resolution against storage it is the physical id segments carry.
    """

    name: str
    column_id: int
    logical_type: str


@dataclass(frozen=True)
class FileSizes:
    database_file_size: int
    wal_file_size: int


@dataclass(frozen=True)
class ColumnSegmentSize:
    """Resolved compressed size of one main-data segment.

    ``compressed_size`` is exact when another segment follows in the same
    block and an upper bound when the segment is the last one in its block.
    """

    segment: Segment
    compressed_size: int
    additional_blocks_size: int
    is_upper_bound: bool = False

    @property
    def total_compressed_size(self) -> int:
        return self.compressed_size + self.additional_blocks_size


@dataclass(frozen=True)
class StorageCategoryEntry:
    """One row of the file-wide storage breakdown."""

    category: str
    block_count: int
    size_bytes: int
    percentage: str


@dataclass(frozen=True)
class TableSizeEntry:
    database: str
    schema: str
    table: str
    persisted_data_size: int = 0


@dataclass(frozen=True)
class AttachedStorageEntry:
    database: str
    sizes: FileSizes


__all__ = [
    "INVALID_BLOCK",
    "INTERNAL_SCHEMAS",
    "NATIVE_DATABASE_TYPE",
    "main_data_path",
    "Segment",
    "BlockUniverse",
    "DatabaseRef",
    "TableRef",
    "ColumnRef",
    "FileSizes",
    "ColumnSegmentSize",
    "StorageCategoryEntry",
    "TableSizeEntry",
    "AttachedStorageEntry",
]
