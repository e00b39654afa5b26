"""Storage layer for block-inspector.

Reads catalog and storage snapshots from DuckDB. Never writes.

Rules:
- MUST NOT compute block accounting (accounting layer) or format output (api layer)
- MUST NOT import accounting, api
- MAY import domain, shared
"""

from .db import DatabaseHelper
from .repositories import (
    BaseRepository,
    CatalogRepository,
    DatabaseSizeRepository,
    SegmentRepository,
    parse_qualified_name,
)

__all__ = [
    # Database
    "DatabaseHelper",
    # Repositories
    "BaseRepository",
    "CatalogRepository",
    "DatabaseSizeRepository",
    "SegmentRepository",
    "parse_qualified_name",
]
