"""Base class for read-only catalog and storage repositories."""

from typing import Any, Dict, List, Optional, Sequence

import duckdb


class BaseRepository:
    """Read-only repository bound to one inspection connection.

    Repositories never write: every query they issue is a catalog or
    storage pragma lookup.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def _fetch_dicts(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Run ``sql`` and return rows keyed by column name."""
        cur = self.conn.execute(sql, params) if params is not None else self.conn.execute(sql)
        names = [desc[0] for desc in cur.description]
        return [dict(zip(names, row)) for row in cur.fetchall()]

    def _fetch_scalar(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        cur = self.conn.execute(sql, params) if params is not None else self.conn.execute(sql)
        row = cur.fetchone()
        return row[0] if row else None


__all__ = ["BaseRepository"]
