"""DuckDB connection handling for inspection sessions.

Rules:
- MAY import shared (for config)
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import duckdb

from shared.config import InspectorConfig
from shared.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class DatabaseHelper:
    """Opens the DuckDB connection that every repository of a session shares.

    The connection is the explicit inspection context: the repositories never
    look up a process-wide "current" database.

    Example:
        >>> with DatabaseHelper(config).connect() as conn:
        ...     CatalogRepository(conn).list_databases()
    """

    def __init__(self, config: InspectorConfig):
        self.config = config

    @property
    def _database(self) -> str:
        return self.config.database_path or IN_MEMORY

    def open(self) -> duckdb.DuckDBPyConnection:
        read_only = self.config.read_only and self._database != IN_MEMORY
        try:
            conn = duckdb.connect(database=self._database, read_only=read_only)
        except duckdb.Error as exc:
            raise InvalidInputError(f"cannot open database '{self._database}': {exc}") from exc
        try:
            self.attach_all(conn, self.config.attach)
        except InvalidInputError:
            conn.close()
            raise
        logger.info(
            "opened %s (read_only=%s, attached=%d)",
            self._database,
            read_only,
            len(self.config.attach),
        )
        return conn

    def attach_all(self, conn: duckdb.DuckDBPyConnection, attach: Dict[str, str]) -> None:
        for alias, path in attach.items():
            self.attach(conn, path, alias)

    def attach(
        self,
        conn: duckdb.DuckDBPyConnection,
        path: str,
        alias: Optional[str] = None,
    ) -> None:
        """Attach ``path`` under ``alias`` (read-only when the session is)."""
        sql = f"ATTACH {quote_literal(path)}"
        if alias:
            sql += f" AS {quote_identifier(alias)}"
        if self.config.read_only:
            sql += " (READ_ONLY)"
        try:
            conn.execute(sql)
        except duckdb.Error as exc:
            raise InvalidInputError(f"cannot attach '{path}': {exc}") from exc

    @contextmanager
    def connect(self) -> Iterator[duckdb.DuckDBPyConnection]:
        conn = self.open()
        try:
            yield conn
        finally:
            conn.close()


__all__ = ["DatabaseHelper", "quote_identifier", "quote_literal", "IN_MEMORY"]
