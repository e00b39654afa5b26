"""Shared plumbing for the storage analyses."""

import logging
from typing import Callable, Optional

import duckdb

from domain import DatabaseRef
from shared.config import DEFAULT_BATCH_SIZE
from shared.exceptions import InvalidInputError
from shared.result import Err, ErrorKind, Ok, Result
from storage import CatalogRepository, DatabaseSizeRepository, SegmentRepository

from ..cursor import RowCursor

logger = logging.getLogger(__name__)

PERSISTENT_DATABASE_HELP = (
    "{analysis} requires a persistent database file.\n"
    "This tool analyzes the storage of existing .duckdb files.\n\n"
    "Correct usage:\n"
    "  1. Open a database file directly:\n"
    "     $ block-inspector --db mydata.duckdb {command}\n\n"
    "  2. Or attach a database file and name it:\n"
    "     $ block-inspector --attach mydb=mydata.duckdb {command} --database mydb\n"
)


class AnalysisUseCase:
    """Base class for an analysis run against one inspection connection.

    Subclasses build a RowCursor; ``_run`` turns invalid input into an
    ``Err`` and lets storage consistency errors propagate.
    """

    analysis_name = "analysis"
    command_name = ""

    def __init__(self, conn: duckdb.DuckDBPyConnection, batch_size: int = DEFAULT_BATCH_SIZE):
        self.conn = conn
        self.batch_size = batch_size
        self.catalog = CatalogRepository(conn)
        self.segments = SegmentRepository(conn)
        self.sizes = DatabaseSizeRepository(conn)

    def require_persistent(self, database_name: Optional[str] = None) -> DatabaseRef:
        """Resolve a database and check it is a native database file.

        Raises:
            InvalidInputError: If the database is unknown, in-memory or not
                stored in DuckDB's own format.
        """
        database = self.catalog.find_database(database_name)
        if not database.is_persistent:
            raise InvalidInputError(
                PERSISTENT_DATABASE_HELP.format(
                    analysis=self.analysis_name, command=self.command_name
                )
            )
        if not database.is_native:
            raise InvalidInputError(
                f"{self.analysis_name} only supports native DuckDB databases; "
                f"'{database.name}' is a {database.type} database"
            )
        return database

    def _run(self, build: Callable[[], RowCursor]) -> Result[RowCursor]:
        logger.info("running %s", self.analysis_name)
        try:
            cursor = build()
        except InvalidInputError as exc:
            logger.info("%s rejected input: %s", self.analysis_name, exc)
            return Err(ErrorKind.INVALID_INPUT, str(exc))
        logger.info("%s produced %d rows", self.analysis_name, len(cursor))
        return Ok(cursor)


__all__ = ["AnalysisUseCase", "PERSISTENT_DATABASE_HELP"]
