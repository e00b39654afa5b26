"""Database size repository implementation.

Provides block totals, metadata block counts and file sizes of an
attached database.

Rules:
- MAY import domain, shared
"""

import logging
import os

from domain import BlockUniverse, DatabaseRef, FileSizes
from shared.exceptions import InvalidInputError

from ..db import quote_literal
from .base import BaseRepository

logger = logging.getLogger(__name__)

WAL_SUFFIX = ".wal"


class DatabaseSizeRepository(BaseRepository):
    """Read-only access to ``pragma_database_size`` and ``pragma_metadata_info``."""

    def fetch_block_universe(self, database: str) -> BlockUniverse:
        """Block totals for ``database``.

        Raises:
            InvalidInputError: If DuckDB reports no size row for the database.
        """
        rows = self._fetch_dicts(
            """
            SELECT block_size, total_blocks, free_blocks
            FROM pragma_database_size()
            WHERE database_name = ?
            """,
            [database],
        )
        if not rows:
            raise InvalidInputError(f"No size information for database '{database}'")
        row = rows[0]
        universe = BlockUniverse(
            total_blocks=int(row["total_blocks"] or 0),
            free_blocks=int(row["free_blocks"] or 0),
            block_alloc_size=int(row["block_size"] or 0),
        )
        logger.debug("block universe of %s: %s", database, universe)
        return universe

    def count_metadata_blocks(self, database: str) -> int:
        """Number of physical metadata blocks; one row per block."""
        count = self._fetch_scalar(
            f"SELECT count(*) FROM pragma_metadata_info({quote_literal(database)})"
        )
        return int(count or 0)

    def fetch_file_sizes(self, database: DatabaseRef) -> FileSizes:
        """Database file size from its block count and WAL size from disk."""
        universe = self.fetch_block_universe(database.name)
        wal_size = 0
        if database.path:
            wal_path = database.path + WAL_SUFFIX
            if os.path.exists(wal_path):
                wal_size = os.path.getsize(wal_path)
        return FileSizes(
            database_file_size=universe.total_blocks * universe.block_alloc_size,
            wal_file_size=wal_size,
        )


__all__ = ["DatabaseSizeRepository"]
