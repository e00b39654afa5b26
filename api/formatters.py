"""Response formatting for the CLI."""

import json
from typing import List

from tabulate import tabulate

from shared.result import Err

from .cursor import Row, RowCursor


class ResponseFormatter:
    """Renders analysis results as text tables or JSON."""

    TABLE_FORMAT = "github"

    @staticmethod
    def drain(cursor: RowCursor) -> List[Row]:
        """Pull every remaining batch from ``cursor``."""
        rows: List[Row] = []
        while True:
            batch = cursor.next_batch()
            if not batch:
                break
            rows.extend(batch)
        return rows

    @classmethod
    def format_text(cls, cursor: RowCursor) -> str:
        rows = cls.drain(cursor)
        if not rows:
            return "(no rows)"
        return tabulate(rows, headers=cursor.columns, tablefmt=cls.TABLE_FORMAT)

    @classmethod
    def format_json(cls, cursor: RowCursor) -> str:
        rows = cls.drain(cursor)
        payload = [dict(zip(cursor.columns, row)) for row in rows]
        return json.dumps(payload, ensure_ascii=False, indent=2)

    @staticmethod
    def format_error(error: Err) -> str:
        return f"[error] {error.message}"


__all__ = ["ResponseFormatter"]
