"""Domain layer for block-inspector.

Plain snapshot entities shared by every other layer.

Rules:
- MUST NOT import accounting, storage, api or shared
- MUST NOT perform I/O
"""

from .models import (
    INTERNAL_SCHEMAS,
    INVALID_BLOCK,
    NATIVE_DATABASE_TYPE,
    AttachedStorageEntry,
    BlockUniverse,
    ColumnRef,
    ColumnSegmentSize,
    DatabaseRef,
    FileSizes,
    Segment,
    StorageCategoryEntry,
    TableRef,
    TableSizeEntry,
    main_data_path,
)

__all__ = [
    # Sentinels
    "INVALID_BLOCK",
    "INTERNAL_SCHEMAS",
    "NATIVE_DATABASE_TYPE",
    "main_data_path",
    # Snapshots
    "Segment",
    "BlockUniverse",
    "DatabaseRef",
    "TableRef",
    "ColumnRef",
    "FileSizes",
    # Results
    "ColumnSegmentSize",
    "StorageCategoryEntry",
    "TableSizeEntry",
    "AttachedStorageEntry",
]
