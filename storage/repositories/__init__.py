"""Read-only repositories over DuckDB's catalog and storage pragmas."""

from .base import BaseRepository
from .catalog_repo import CatalogRepository, parse_qualified_name
from .database_size_repo import DatabaseSizeRepository
from .segment_repo import SegmentRepository

__all__ = [
    "BaseRepository",
    "CatalogRepository",
    "DatabaseSizeRepository",
    "SegmentRepository",
    "parse_qualified_name",
]
