"""File and WAL sizes of every attached database file."""

from domain import AttachedStorageEntry
from shared.formatting import format_size
from shared.result import Result

from ..cursor import RowCursor
from .base import AnalysisUseCase

STORAGE_COLUMNS = ("database", "database_file_size", "wal_file_size")


class ListAttachedStorageUseCase(AnalysisUseCase):
    """Lists attached databases backed by a file.

    System, temporary and in-memory databases are skipped rather than
    reported as errors.
    """

    analysis_name = "list-attached-storage"
    command_name = "storage"

    def execute(self) -> Result[RowCursor]:
        return self._run(self._build)

    def _build(self) -> RowCursor:
        entries = [
            AttachedStorageEntry(database.name, self.sizes.fetch_file_sizes(database))
            for database in self.catalog.list_databases()
            if database.is_persistent and database.is_native
        ]
        rows = [
            (
                entry.database,
                format_size(entry.sizes.database_file_size),
                format_size(entry.sizes.wal_file_size),
            )
            for entry in entries
        ]
        return RowCursor(STORAGE_COLUMNS, rows, self.batch_size)


__all__ = ["ListAttachedStorageUseCase", "STORAGE_COLUMNS"]
