"""Catalog repository implementation.

Enumerates attached databases, schemas, tables and columns.

Rules:
- MAY import domain, shared
- MUST NOT compute sizes (that's the accounting layer's job)
"""

import logging
from typing import List, Optional, Tuple

import duckdb

from domain import INTERNAL_SCHEMAS, NATIVE_DATABASE_TYPE, ColumnRef, DatabaseRef, TableRef
from shared.exceptions import InvalidInputError

from .base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "main"
TEMP_DATABASE = "temp"


def parse_qualified_name(name: str) -> Tuple[Optional[str], Optional[str], str]:
    """Split ``[catalog.][schema.]table`` into its parts.

    Double-quoted parts may contain dots; ``""`` inside quotes is a literal quote.

    Raises:
        InvalidInputError: On empty parts, unbalanced quotes or more than three parts.
    """
    parts: List[str] = []
    current: List[str] = []
    in_quotes = False
    quoted_part = False
    i = 0
    while i < len(name):
        ch = name[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < len(name) and name[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        elif ch == '"':
            in_quotes = True
            quoted_part = True
        elif ch == ".":
            parts.append("".join(current) if quoted_part else "".join(current).strip())
            current = []
            quoted_part = False
        else:
            current.append(ch)
        i += 1
    if in_quotes:
        raise InvalidInputError(f"unterminated quote in table name '{name}'")
    parts.append("".join(current) if quoted_part else "".join(current).strip())

    if any(part == "" for part in parts):
        raise InvalidInputError(f"invalid table name '{name}'")
    if len(parts) == 1:
        return None, None, parts[0]
    if len(parts) == 2:
        return None, parts[0], parts[1]
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    raise InvalidInputError(f"too many name parts in table name '{name}'")


class CatalogRepository(BaseRepository):
    """Read-only access to DuckDB's catalog views."""

    def current_database(self) -> str:
        return self._fetch_scalar("SELECT current_database()")

    def list_databases(self) -> List[DatabaseRef]:
        """Every attached database, system and temporary ones included."""
        rows = self._fetch_dicts(
            """
            SELECT *
            FROM duckdb_databases()
            ORDER BY database_name
            """
        )
        return [
            DatabaseRef(
                name=row["database_name"],
                path=row["path"],
                type=row.get("type") or NATIVE_DATABASE_TYPE,
                internal=bool(row.get("internal")),
                temporary=row["database_name"] == TEMP_DATABASE,
            )
            for row in rows
        ]

    def find_database(self, name: Optional[str] = None) -> DatabaseRef:
        """Look up ``name``, or the current database when ``name`` is None.

        Raises:
            InvalidInputError: If no attached database has that name.
        """
        target = name or self.current_database()
        for database in self.list_databases():
            if database.name.lower() == target.lower():
                return database
        raise InvalidInputError(f"Database '{target}' is not attached")

    def list_tables(self, database: str) -> List[TableRef]:
        """Tables in non-internal schemas, ordered by schema then table."""
        placeholders = ", ".join("?" for _ in INTERNAL_SCHEMAS)
        rows = self._fetch_dicts(
            f"""
            SELECT schema_name, table_name
            FROM duckdb_tables()
            WHERE database_name = ?
              AND schema_name NOT IN ({placeholders})
            ORDER BY schema_name, table_name
            """,
            [database, *INTERNAL_SCHEMAS],
        )
        tables = [TableRef(database, row["schema_name"], row["table_name"]) for row in rows]
        logger.debug("found %d tables in %s", len(tables), database)
        return tables

    def resolve_table(self, database: str, table_name: str) -> TableRef:
        """Resolve an optionally schema-qualified table name.

        Raises:
            InvalidInputError: If the name is malformed, names another
                database, or the table does not exist.
        """
        catalog, schema, name = parse_qualified_name(table_name)
        if catalog is not None and catalog.lower() != database.lower():
            raise InvalidInputError(
                f"Table '{table_name}' belongs to database '{catalog}', not '{database}'"
            )
        schema = schema or DEFAULT_SCHEMA
        try:
            rows = self._fetch_dicts(
                """
                SELECT schema_name, table_name
                FROM duckdb_tables()
                WHERE database_name = ?
                  AND lower(schema_name) = lower(?)
                  AND lower(table_name) = lower(?)
                """,
                [database, schema, name],
            )
        except duckdb.Error as exc:
            raise InvalidInputError(f"Cannot look up table '{table_name}': {exc}") from exc
        if not rows:
            raise InvalidInputError(f"Table '{schema}.{name}' not found in database '{database}'")
        return TableRef(database, rows[0]["schema_name"], rows[0]["table_name"])

    def list_columns(self, table: TableRef) -> List[ColumnRef]:
        rows = self._fetch_dicts(
            """
            SELECT column_name, column_index, data_type
            FROM duckdb_columns()
            WHERE database_name = ? AND schema_name = ? AND table_name = ?
            ORDER BY column_index
            """,
            [table.database, table.schema, table.name],
        )
        # column_index is the 1-based catalog position, generated columns included.
        # SegmentRepository.resolve_physical_column maps it to the stored id.
        return [
            ColumnRef(row["column_name"], int(row["column_index"]) - 1, row["data_type"])
            for row in rows
        ]

    def resolve_column(self, table: TableRef, column_name: str) -> ColumnRef:
        """Resolve a column name case-insensitively.

        Raises:
            InvalidInputError: If the table has no such column.
        """
        for column in self.list_columns(table):
            if column.name.lower() == column_name.lower():
                return column
        raise InvalidInputError(f"Column '{column_name}' not found in table '{table.name}'")


__all__ = ["CatalogRepository", "parse_qualified_name", "DEFAULT_SCHEMA"]
