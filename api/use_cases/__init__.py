"""Use case orchestration for block-inspector.

Each analysis resolves its inputs through the storage layer, runs the
accounting engine and returns a row cursor wrapped in Ok, or an Err.
"""

from .attached_storage import ListAttachedStorageUseCase
from .base import AnalysisUseCase
from .breakdown import StorageBreakdownUseCase
from .inspect_column import InspectColumnUseCase
from .tables import ListTablesUseCase

__all__ = [
    "AnalysisUseCase",
    "ListTablesUseCase",
    "InspectColumnUseCase",
    "ListAttachedStorageUseCase",
    "StorageBreakdownUseCase",
]
