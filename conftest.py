"""Shared fixtures: small DuckDB database files built per test."""

from pathlib import Path
from typing import Iterable, Optional

import duckdb
import pytest

from domain import Segment, main_data_path


def build_database(path: Path, statements: Iterable[str]) -> Path:
    """Create a database file, run ``statements`` and checkpoint it."""
    con = duckdb.connect(str(path))
    try:
        con.execute("SET threads = 1")
        for sql in statements:
            con.execute(sql)
        con.execute("CHECKPOINT")
    finally:
        con.close()
    return path


def make_segment(
    block_id: int,
    block_offset: int,
    column_id: int = 0,
    row_group_index: int = 0,
    persistent: bool = True,
    path: Optional[str] = None,
    additional=(),
    row_count: int = 1024,
    compression: str = "BitPacking",
) -> Segment:
    return Segment(
        row_group_index=row_group_index,
        column_id=column_id,
        column_path=path if path is not None else main_data_path(column_id),
        is_persistent=persistent,
        block_id=block_id,
        block_offset=block_offset,
        compression_kind=compression,
        row_count=row_count,
        additional_block_ids=tuple(additional),
    )


@pytest.fixture
def numbers_db(tmp_path: Path) -> Path:
    """500000 small integers: four full row groups plus one of 8480 rows."""
    return build_database(
        tmp_path / "numbers.duckdb",
        [
            "CREATE TABLE numbers AS SELECT (range % 100)::INTEGER AS n, "
            "'name_' || (range % 7)::VARCHAR AS label FROM range(500000)",
        ],
    )


@pytest.fixture
def shop_db(tmp_path: Path) -> Path:
    """Two schemas, a few tables and an index."""
    return build_database(
        tmp_path / "shop.duckdb",
        [
            "CREATE SCHEMA sales",
            "CREATE TABLE customers (id BIGINT, name VARCHAR)",
            "INSERT INTO customers SELECT range, 'c' || range::VARCHAR FROM range(20000)",
            "CREATE TABLE sales.orders (id BIGINT, customer_id BIGINT, amount DECIMAL(10, 2))",
            "INSERT INTO sales.orders SELECT range, range % 20000, (range % 997) / 10 "
            "FROM range(60000)",
            "CREATE INDEX orders_customer_idx ON sales.orders (customer_id)",
            "CREATE TABLE empty_table (x INTEGER)",
        ],
    )


@pytest.fixture
def generated_db(tmp_path: Path) -> Path:
    """A virtual column between two stored ones."""
    return build_database(
        tmp_path / "generated.duckdb",
        [
            "CREATE TABLE t (a INTEGER, g INTEGER GENERATED ALWAYS AS (a + 1) VIRTUAL, c VARCHAR)",
            "INSERT INTO t (a, c) SELECT range::INTEGER, 'v' || (range % 50)::VARCHAR "
            "FROM range(200000)",
        ],
    )
