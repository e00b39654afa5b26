"""API layer for block-inspector.

Exposes the four storage analyses, their row cursor and output formatting.

Rules:
- MAY import accounting, domain, shared, storage
- MUST NOT implement block accounting directly
"""

from .cursor import RowCursor
from .formatters import ResponseFormatter
from .use_cases import (
    InspectColumnUseCase,
    ListAttachedStorageUseCase,
    ListTablesUseCase,
    StorageBreakdownUseCase,
)
from .validators import RequestValidator, ValidationError

__all__ = [
    "RowCursor",
    "ResponseFormatter",
    "RequestValidator",
    "ValidationError",
    "ListTablesUseCase",
    "InspectColumnUseCase",
    "ListAttachedStorageUseCase",
    "StorageBreakdownUseCase",
]
